# /app/services/class_helpers/roster_ingestion.py

import io
import logging
from typing import Iterable, List, Optional

import pandas as pd

from ...core.exceptions import RosterSyncError, ValidationError, PartialPropagationFailure
from ...models import class_model, student_model
from ..assessment_helpers.grade_aggregator import student_average
from ..database_service import DatabaseService
from . import enrollment

logger = logging.getLogger(__name__)

EXCEL_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
}
CSV_CONTENT_TYPES = {"text/csv", "application/csv"}

NAME_HEADERS = ("اسم", "Name")
DOB_HEADERS = ("مواليد", "تاريخ", "DOB")
STYLE_HEADERS = ("نمط", "Style")
CONTACT_HEADERS = ("ولي", "Contact", "Parent")

LEARNING_STYLE_LABELS = {
    student_model.LearningStyle.VISUAL: "بصري",
    student_model.LearningStyle.AUDITORY: "سمعي",
    student_model.LearningStyle.KINESTHETIC: "حركي",
}

EXPORT_COLUMNS = ["Name", "Date of Birth", "Learning Style", "Parent Contact", "Grade Count", "Average", "Participation"]


# --- Parsing ---

def _find_column(header: List[str], needles: Iterable[str]) -> Optional[int]:
    for index, cell in enumerate(header):
        if cell and any(n in cell for n in needles):
            return index
    return None


def _clean(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def parse_learning_style(value: Optional[str]) -> student_model.LearningStyle:
    if not value:
        return student_model.LearningStyle.UNSET
    for style, label in LEARNING_STYLE_LABELS.items():
        if value in (style.value, label):
            return style
    return student_model.LearningStyle.UNSET


def extract_students_from_tabular(file_bytes: bytes, is_excel: bool) -> List[student_model.StudentCreate]:
    """
    Reads a roster sheet whose first row is a header. The name and birth-date
    columns are found by header text and fall back to columns 0 and 1.
    Rows without a name are skipped.
    """
    buffer = io.BytesIO(file_bytes)
    if is_excel:
        df = pd.read_excel(buffer, header=None, dtype=str)
    else:
        df = pd.read_csv(buffer, header=None, dtype=str, encoding="utf-8-sig", skip_blank_lines=True)
    if len(df.index) < 2:
        raise ValidationError("The roster file is empty or has no data rows.")

    header = [_clean(h) or "" for h in df.iloc[0].tolist()]
    name_idx = _find_column(header, NAME_HEADERS)
    dob_idx = _find_column(header, DOB_HEADERS)
    name_idx = 0 if name_idx is None else name_idx
    dob_idx = 1 if dob_idx is None else dob_idx
    style_idx = _find_column(header, STYLE_HEADERS)
    contact_idx = _find_column(header, CONTACT_HEADERS)

    def cell(row: list, idx: Optional[int]) -> Optional[str]:
        if idx is None or idx >= len(row):
            return None
        return _clean(row[idx])

    students = []
    for row in df.iloc[1:].values.tolist():
        name = cell(row, name_idx)
        if not name:
            continue
        students.append(student_model.StudentCreate(
            name=name,
            dob=cell(row, dob_idx),
            learningStyle=parse_learning_style(cell(row, style_idx)),
            parentContact=cell(row, contact_idx),
        ))
    return students


def import_roster(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    all_classes: List[class_model.ClassRoom],
    file_bytes: bytes,
    content_type: str,
) -> int:
    """
    Adds every student of an uploaded CSV/Excel roster through the regular
    enrollment path, so each one is propagated to sibling classes as well.
    Returns the number of students added.
    """
    if content_type in EXCEL_CONTENT_TYPES:
        students = extract_students_from_tabular(file_bytes, is_excel=True)
    elif content_type in CSV_CONTENT_TYPES:
        students = extract_students_from_tabular(file_bytes, is_excel=False)
    else:
        raise ValidationError(f"Unsupported file type: {content_type}")

    if not students:
        raise ValidationError("No valid students were found in the file.")

    for index, student_data in enumerate(students):
        try:
            enrollment.add_student(db, class_room, all_classes, student_data)
        except RosterSyncError as e:
            logger.error("Roster import into %s stopped at row %d (%s): %s", class_room.id, index + 1, student_data.name, e)
            raise PartialPropagationFailure(
                f"Imported {index} of {len(students)} students.",
                completed=index, total=len(students), subject_id=class_room.id,
            ) from e
    logger.info("Imported %d students into class %s.", len(students), class_room.id)
    return len(students)


# --- Export ---

def export_roster_as_csv(class_room: class_model.ClassRoom) -> str:
    """Roster CSV with a UTF-8 BOM so that spreadsheet apps read Arabic names correctly."""
    export_data = [
        {
            "Name": s.name,
            "Date of Birth": s.dob or "",
            "Learning Style": LEARNING_STYLE_LABELS.get(s.learningStyle, ""),
            "Parent Contact": s.parentContact or "",
            "Grade Count": len(s.grades),
            "Average": f"{student_average(s)}%",
            "Participation": s.participationCount,
        }
        for s in class_room.students
    ]
    df = pd.DataFrame(export_data, columns=EXPORT_COLUMNS)
    return "\ufeff" + df.to_csv(index=False)
