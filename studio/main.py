from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging
from studio.core.config import LOG_LEVEL
from studio.core.database import connect_to_mongo, close_mongo_connection
from studio.modules.plans.router import plan_router
from studio.modules.schedule.router import schedule_router
from studio.modules.enrolment.router import enrolment_router
from studio.modules.classes.router import class_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_mongo()
    yield
    # Shutdown
    await close_mongo_connection()


app = FastAPI(lifespan=lifespan)


@app.get("/")
async def root():
    return {"message": "Studio admin API"}


app.include_router(plan_router, prefix="/api")
app.include_router(schedule_router, prefix="/api")
app.include_router(enrolment_router, prefix="/api")
app.include_router(class_router, prefix="/api")
