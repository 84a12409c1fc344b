# /app/db/models/resource_models.py

from sqlalchemy import Column, String, JSON

from ..base_class import Base


class Resource(Base):
    """
    A shared instructional resource (worksheet, lesson plan, link, ...).

    `class_id` is a soft link: it is not a foreign key because resources may
    outlive the classes they were created in.
    """
    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    type = Column(String, nullable=False)
    url = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    class_id = Column(String, nullable=True, index=True)
    # Lesson-plan metadata, e.g. {"subject": "...", "grade": "..."}.
    data = Column(JSON, nullable=True)
    created_at = Column(String, nullable=False)
