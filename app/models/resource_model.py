# /app/models/resource_model.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from enum import Enum


class ResourceType(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    VIDEO = "video"
    LINK = "link"
    TEMPLATE = "template"
    LESSON_PLAN = "lesson-plan"
    SONG = "song"
    GAME = "game"
    STORY = "story"
    SIMULATION = "simulation"
    WORKSHEET = "worksheet"
    CERTIFICATE = "certificate"


class LessonPlanMeta(BaseModel):
    """The subject/grade part of a lesson plan; every other key is kept as-is."""
    model_config = ConfigDict(extra="allow")

    subject: str = ""
    grade: str = ""


class ResourceCreate(BaseModel):
    title: str
    type: ResourceType
    url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    classId: Optional[str] = None
    data: Optional[LessonPlanMeta] = None


class Resource(ResourceCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    createdAt: str
