# /app/services/class_helpers/crud.py

import datetime
import logging
import random
import string
import uuid
from typing import List

from ...core.exceptions import ValidationError, NotFoundError
from ...models import class_model
from ..database_service import DatabaseService

logger = logging.getLogger(__name__)

CLASS_COLORS = [
    "from-blue-500 to-cyan-500",
    "from-purple-500 to-pink-500",
    "from-emerald-500 to-teal-500",
    "from-amber-500 to-orange-500",
    "from-rose-500 to-red-500",
    "from-indigo-500 to-violet-500",
]


def generate_class_code(length: int = 6) -> str:
    alphabet = string.ascii_uppercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(length))


# --- CLASS-RELATED CORE BUSINESS LOGIC ---

def create_class(
    class_data: class_model.ClassCreate,
    db: DatabaseService,
    owner_id: str,
    existing_classes: List[class_model.ClassRoom],
) -> class_model.ClassRoom:
    """Creates a new class record; the color cycles through the palette when none is given."""
    name = (class_data.name or "").strip()
    if not name:
        raise ValidationError("Class name is required.")

    new_class_record = {
        "id": f"cls_{uuid.uuid4().hex[:12]}",
        "owner_id": owner_id,
        "name": name,
        "grade_level": (class_data.gradeLevel or "").strip(),
        "subject": (class_data.subject or "").strip() or None,
        "class_code": generate_class_code(),
        "color": class_data.color or CLASS_COLORS[len(existing_classes) % len(CLASS_COLORS)],
        "announcements": [],
        "assessments": [],
    }
    return db.create_class(new_class_record)


def update_class(class_room: class_model.ClassRoom, class_update: class_model.ClassUpdate, db: DatabaseService) -> class_model.ClassRoom:
    update_data = class_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided.")
    if "name" in update_data and not (update_data["name"] or "").strip():
        raise ValidationError("Class name cannot be empty.")

    columns = {"name": "name", "gradeLevel": "grade_level", "subject": "subject", "color": "color"}
    fields = {columns[k]: (v.strip() if isinstance(v, str) else v) for k, v in update_data.items()}
    if "subject" in fields:
        fields["subject"] = fields["subject"] or None
    if "grade_level" in fields:
        fields["grade_level"] = fields["grade_level"] or ""

    if fields.get("name", class_room.name) != class_room.name:
        # Siblings are matched by name, so a rename moves the class to another roster group.
        logger.warning("Class %s renamed from %r to %r.", class_room.id, class_room.name, fields["name"])

    if not db.update_class(class_room.id, fields):
        raise NotFoundError(f"Class with ID {class_room.id} not found")
    reverse = {v: k for k, v in columns.items()}
    return class_room.model_copy(update={reverse[k]: v for k, v in fields.items()})


def delete_class(class_room: class_model.ClassRoom, db: DatabaseService) -> None:
    """Deletes a class. Raises ConflictError while students are still enrolled."""
    if not db.delete_class(class_room.id):
        raise NotFoundError(f"Class with ID {class_room.id} not found")


def add_announcement(
    class_room: class_model.ClassRoom,
    announcement_data: class_model.AnnouncementCreate,
    db: DatabaseService,
) -> class_model.Announcement:
    """Prepends an announcement so that the list stays newest-first."""
    text = (announcement_data.text or "").strip()
    if not text:
        raise ValidationError("Announcement text is required.")

    announcement = class_model.Announcement(
        id=f"ann_{uuid.uuid4().hex[:12]}",
        text=text,
        date=datetime.date.today().isoformat(),
        type=announcement_data.type,
    )
    announcements = [announcement] + class_room.announcements
    db.update_class(class_room.id, {"announcements": [a.model_dump(mode="json") for a in announcements]})
    return announcement
