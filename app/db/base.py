# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that `Base.metadata` knows every table before `create_all` runs.

from .base_class import Base

from .models.class_student_models import ClassRoom, StudentProfile, Enrollment
from .models.resource_models import Resource
from .models.calendar_models import CalendarEvent
