from pathlib import Path
from dotenv import load_dotenv
import os


ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(ROOT_DIR / ".env")

MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "studio_db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Open-ended enrolments are checked for overload this many weeks ahead.
CAPACITY_HORIZON_WEEKS = int(os.getenv("CAPACITY_HORIZON_WEEKS", "8"))
