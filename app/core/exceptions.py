# /app/core/exceptions.py

"""
Domain errors raised by the roster and grading services.

Routers never inspect gateway failures directly; every failure the services
surface is one of the classes below, and `app.main` maps each of them onto an
HTTP status code.
"""

from typing import Optional


class RosterSyncError(Exception):
    """Base class for every error raised by the roster and grading services."""


class ValidationError(RosterSyncError):
    """Required input is missing or malformed. Raised before any gateway call."""


class NotFoundError(RosterSyncError):
    """A referenced class, student, enrollment or assessment does not exist."""


class ConflictError(RosterSyncError):
    """The gateway rejected a write because of a uniqueness or dependency constraint."""


class PartialPropagationFailure(RosterSyncError):
    """
    A multi-step fan-out stopped partway.

    Writes issued before the failing step stay persisted; nothing is rolled
    back. `completed` and `total` count sub-operations, `subject_id` names the
    record the fan-out was about (a profile id or an assessment id) so that the
    caller can retry through the idempotent path.
    """

    def __init__(self, message: str, completed: int, total: int, subject_id: Optional[str] = None):
        super().__init__(message)
        self.completed = completed
        self.total = total
        self.subject_id = subject_id

    def to_dict(self) -> dict:
        return {
            "detail": str(self),
            "completed": self.completed,
            "total": self.total,
            "subjectId": self.subject_id,
        }
