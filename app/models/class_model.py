# /app/models/class_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Union
from enum import Enum

from .student_model import Student, GradeCategory
from .sync_model import PropagationReport


class AnnouncementType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CELEBRATION = "celebration"


class Announcement(BaseModel):
    id: str
    text: str
    date: str
    type: AnnouncementType = AnnouncementType.INFO


class AnnouncementCreate(BaseModel):
    text: str
    type: AnnouncementType = AnnouncementType.INFO


# --- Assessment Models ---

class ClassAssessment(BaseModel):
    """A class-wide gradable event, stored inside its class record."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    date: str
    type: GradeCategory = GradeCategory.EXAM
    maxScore: float = Field(default=100, gt=0)
    relatedCalendarEventId: Optional[str] = None


class AssessmentCreate(BaseModel):
    title: str
    date: Optional[str] = Field(default=None, description="ISO date; defaults to today.")
    type: GradeCategory = GradeCategory.EXAM
    maxScore: float = Field(default=100, gt=0)
    addToCalendar: Optional[bool] = Field(default=None, description="Falls back to the configured default.")


class AssessmentGrades(BaseModel):
    """
    Scores keyed by student id. Values arrive straight from a grading form, so
    blank and non-numeric entries are accepted here and skipped by the service.
    """
    scores: Dict[str, Optional[Union[float, str]]]


# --- Class Models ---

class ClassCreate(BaseModel):
    name: str
    gradeLevel: str = ""
    subject: Optional[str] = None
    color: Optional[str] = None


class ClassUpdate(BaseModel):
    name: Optional[str] = None
    gradeLevel: Optional[str] = None
    subject: Optional[str] = None
    color: Optional[str] = None


class ClassRoom(BaseModel):
    """The full representation of a class, including its enrolled students."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    gradeLevel: str = ""
    subject: Optional[str] = None
    classCode: Optional[str] = None
    color: Optional[str] = None
    announcements: List[Announcement] = Field(default_factory=list)
    assessments: List[ClassAssessment] = Field(default_factory=list)
    students: List[Student] = Field(default_factory=list)


class ClassSummary(BaseModel):
    id: str
    name: str
    gradeLevel: str = ""
    subject: Optional[str] = None
    color: Optional[str] = None
    studentCount: int = 0
    classAverage: int = 0


class StudentSpotlight(BaseModel):
    id: str
    name: str
    average: int


class ClassAnalytics(BaseModel):
    studentCount: int = 0
    classAverage: int = 0
    totalParticipation: int = 0
    totalGrades: int = 0
    topStudents: List[StudentSpotlight] = Field(default_factory=list)
    atRiskStudents: List[StudentSpotlight] = Field(default_factory=list)


class ClassDetails(ClassRoom):
    analytics: ClassAnalytics


class CopyRosterRequest(BaseModel):
    sourceClassId: str


class AssessmentDeletion(BaseModel):
    assessmentId: str
    report: PropagationReport


class RosterImportResponse(BaseModel):
    message: str
    importedCount: int
