from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import uuid


class Student(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    family_id: Optional[str] = None
    level_id: Optional[str] = None
