# /app/models/student_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from enum import Enum

from .sync_model import PropagationReport


# --- Core Enumerations ---
class LearningStyle(str, Enum):
    VISUAL = "visual"
    AUDITORY = "auditory"
    KINESTHETIC = "kinesthetic"
    UNSET = ""


class GradeCategory(str, Enum):
    EXAM = "exam"
    MIDTERM = "midterm"
    FINAL = "final"
    HOMEWORK = "homework"
    PARTICIPATION = "participation"
    GAME = "game"


# Display labels used in calendar notes and exports.
GRADE_CATEGORY_LABELS = {
    GradeCategory.EXAM: "اختبار",
    GradeCategory.MIDTERM: "اختبار شهري",
    GradeCategory.FINAL: "اختبار فصلي",
    GradeCategory.HOMEWORK: "واجب",
    GradeCategory.PARTICIPATION: "مشاركة",
    GradeCategory.GAME: "لعبة تعليمية",
}


# --- Grade Models ---

class StudentGrade(BaseModel):
    """
    One grade entry inside an enrollment. Entries carrying an `assessmentId`
    are the per-student result of a class-wide assessment; entries without one
    were typed in manually.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    score: float
    maxScore: float = Field(default=100, gt=0)
    date: str
    type: GradeCategory = GradeCategory.EXAM
    assessmentId: Optional[str] = None


class GradeCreate(BaseModel):
    """Payload for a free-standing, manually entered grade."""
    title: str
    score: float = 0
    maxScore: float = Field(default=100, gt=0)
    date: Optional[str] = None
    type: GradeCategory = GradeCategory.EXAM


# --- Student Models ---

class StudentCreate(BaseModel):
    """
    Payload for adding a student to a class. Only `name` is required; it is
    checked for blankness by the enrollment service rather than here, so that
    an empty name surfaces as a domain validation error.
    """
    name: str = Field(default="", description="The full name of the student.")
    registrationCode: Optional[str] = Field(default=None, description="Unique code; generated when omitted.")
    dob: Optional[str] = None
    learningStyle: LearningStyle = LearningStyle.UNSET
    parentContact: Optional[str] = None
    behaviorNotes: Optional[str] = None


class StudentProfile(BaseModel):
    """The durable, cross-subject identity of a student."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    registrationCode: Optional[str] = None
    dob: Optional[str] = None
    learningStyle: LearningStyle = LearningStyle.UNSET
    parentContact: Optional[str] = None
    avatar: Optional[str] = None


class Student(StudentProfile):
    """A student as seen inside one class: the profile plus that enrollment's data."""
    behaviorNotes: str = ""
    participationCount: int = 0
    grades: List[StudentGrade] = Field(default_factory=list)


class EnrollmentUpdate(BaseModel):
    """Partial update of the class-scoped part of a student."""
    behaviorNotes: Optional[str] = None
    participationCount: Optional[int] = Field(default=None, ge=0)


class AddStudentResult(BaseModel):
    profile: StudentProfile
    classCount: int = Field(..., description="Number of classes the student belongs to after the call.")
    report: PropagationReport
