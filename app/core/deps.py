# /app/core/deps.py

from typing import Optional

from fastapi import Header

from .config import settings


def get_owner_id(x_owner_id: Optional[str] = Header(default=None)) -> str:
    """
    The id of the teacher the request acts for. Authentication happens in
    front of this service, which forwards the id in the `X-Owner-Id` header.
    """
    return (x_owner_id or "").strip() or settings.DEFAULT_OWNER_ID
