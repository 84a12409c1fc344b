# /app/services/class_helpers/identity.py

"""
Sibling resolution. Class records sharing a display name are the same
physical group of students taught under different subjects. The relation is
derived from names on every call; nothing stores it.
"""

from typing import List, Iterable

from ...models import class_model


def siblings_of(class_room: class_model.ClassRoom, all_classes: Iterable[class_model.ClassRoom]) -> List[class_model.ClassRoom]:
    """Returns every other class whose name equals `class_room.name` exactly."""
    return [c for c in all_classes if c.id != class_room.id and c.name == class_room.name]
