# /app/services/resource_service.py

"""
Shared resources and their visibility inside classes.

A resource is visible in a class through one of three rules, checked in this
order:
1. an explicit `classId` link, which is final either way;
2. the class has no subject, or a "general" subject, and sees every
   unlinked resource;
3. fuzzy matching: case-sensitive substring containment in either direction
   between the resource's subject/grade text and the class's subject and
   grade level.
Swapping the first two rules would show a resource linked to another class
in every general class.
"""

import datetime
import logging
import uuid
from typing import Iterable, List, Optional

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..models import class_model, resource_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def is_visible_in(
    resource: resource_model.Resource,
    class_room: class_model.ClassRoom,
    general_subjects: Optional[Iterable[str]] = None,
) -> bool:
    if resource.classId:
        return resource.classId == class_room.id

    subject = class_room.subject
    general = settings.GENERAL_SUBJECTS if general_subjects is None else general_subjects
    if not subject or subject in general:
        return True

    grade_level = class_room.gradeLevel

    # Lesson plans carry structured metadata: both axes must match.
    if resource.type == resource_model.ResourceType.LESSON_PLAN and resource.data is not None:
        subject_match = _contains_either(resource.data.subject, subject)
        grade_match = not grade_level or _contains_either(resource.data.grade, grade_level)
        return subject_match and grade_match

    tags = [t for t in resource.tags if t]
    if tags:
        return any(
            _contains_either(t, subject) or (bool(grade_level) and _contains_either(t, grade_level))
            for t in tags
        )

    return True


def visible_resources(
    resources: Iterable[resource_model.Resource],
    class_room: class_model.ClassRoom,
) -> List[resource_model.Resource]:
    return [r for r in resources if is_visible_in(r, class_room)]


# --- Persistence ---

def create_resource(resource_data: resource_model.ResourceCreate, db: DatabaseService, owner_id: str) -> resource_model.Resource:
    title = (resource_data.title or "").strip()
    if not title:
        raise ValidationError("Resource title is required.")
    record = {
        "id": f"res_{uuid.uuid4().hex[:12]}",
        "owner_id": owner_id,
        "title": title,
        "type": resource_data.type.value,
        "url": resource_data.url or None,
        "tags": [t.strip() for t in resource_data.tags if t and t.strip()],
        "class_id": resource_data.classId or None,
        "data": resource_data.data.model_dump() if resource_data.data else None,
        "created_at": datetime.date.today().isoformat(),
    }
    return db.add_resource(record)


def list_resources(db: DatabaseService, owner_id: str) -> List[resource_model.Resource]:
    return db.get_resources_for_owner(owner_id)


def get_resources_for_class(class_room: class_model.ClassRoom, db: DatabaseService, owner_id: str) -> List[resource_model.Resource]:
    return visible_resources(db.get_resources_for_owner(owner_id), class_room)
