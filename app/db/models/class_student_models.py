# /app/db/models/class_student_models.py

"""
This module defines the SQLAlchemy ORM models for the roster: the `ClassRoom`
a teacher owns, the durable `StudentProfile` of each physical student, and the
`Enrollment` that binds one profile to one class.

Grades are not normalized into their own table. They live as a JSON list on
each enrollment, so no database-level cascade exists between a class's
assessments and the grades that reference them; the assessment lifecycle
service performs that cleanup itself.
"""

from sqlalchemy import Column, String, Integer, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base


class ClassRoom(Base):
    """
    A subject-scoped class record. Several records sharing the same `name`
    represent one physical group of students taught under different subjects.
    """
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, index=True, nullable=False)
    grade_level = Column(String, nullable=False, default="")
    subject = Column(String, nullable=True)
    class_code = Column(String, nullable=True)
    color = Column(String, nullable=True)

    # Ordered newest-first.
    announcements = Column(JSON, nullable=False, default=list)
    assessments = Column(JSON, nullable=False, default=list)

    # No cascade: deleting a class with enrollments must fail loudly.
    enrollments = relationship("Enrollment", back_populates="class_room")


class StudentProfile(Base):
    """
    The cross-subject identity of one student. A single profile is shared by
    every enrollment of that student across sibling classes.
    """
    __tablename__ = "student_profiles"

    id = Column(String, primary_key=True, index=True)
    full_name = Column(String, index=True, nullable=False)
    registration_code = Column(String, unique=True, index=True, nullable=True)
    dob = Column(String, nullable=True)
    learning_style = Column(String, nullable=True)
    parent_contact = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    enrollments = relationship("Enrollment", back_populates="profile")


class Enrollment(Base):
    """
    Binds one `StudentProfile` to one `ClassRoom`. Grades, behavior notes and
    participation are scoped to this pair and never shared with siblings.
    """
    __tablename__ = "class_enrollments"

    class_id = Column(String, ForeignKey("classes.id"), primary_key=True)
    student_id = Column(String, ForeignKey("student_profiles.id"), primary_key=True)
    behavior_notes = Column(Text, nullable=False, default="")
    participation_count = Column(Integer, nullable=False, default=0)
    grades = Column(JSON, nullable=False, default=list)

    class_room = relationship("ClassRoom", back_populates="enrollments")
    profile = relationship("StudentProfile", back_populates="enrollments", lazy="joined")
