# /app/models/sync_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PropagationOutcome(str, Enum):
    FULLY_APPLIED = "fully_applied"
    PARTIALLY_APPLIED = "partially_applied"
    REJECTED = "rejected"


class PropagationReport(BaseModel):
    """
    Outcome of a fan-out of single-row writes (enrollment propagation,
    assessment cleanup, roster copy). Nothing is rolled back, so a partial
    outcome means `completed` writes of `total` are persisted.
    """
    outcome: PropagationOutcome
    completed: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    detail: Optional[str] = None

    @classmethod
    def applied(cls, total: int) -> "PropagationReport":
        return cls(outcome=PropagationOutcome.FULLY_APPLIED, completed=total, total=total)

    @classmethod
    def partial(cls, completed: int, total: int, detail: str) -> "PropagationReport":
        outcome = PropagationOutcome.PARTIALLY_APPLIED if completed else PropagationOutcome.REJECTED
        return cls(outcome=outcome, completed=completed, total=total, detail=detail)
