"""Follow-up tasks and contact logs recorded against a customer."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from models.customer import CamelModel


def _new_id(prefix: str) -> str:
    """Ids look like ``task_1718000000000_3f9a1c2b7``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContactType(str, Enum):
    """Channel used to reach the customer."""

    EMAIL = "email"
    CALL = "call"
    MEETING = "meeting"


class TaskCreate(CamelModel):
    """Inbound payload for POST /customers/{id}/tasks."""

    title: str
    description: str = ""
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("title must be provided")
        return cleaned


class Task(CamelModel):
    """Follow-up task owned by an account manager."""

    id: str = Field(default_factory=lambda: _new_id("task"))
    customer_id: str
    title: str
    description: str = ""
    created_at: datetime = Field(default_factory=_utc_now)
    due_date: Optional[datetime] = None
    completed: bool = False


class ContactLogCreate(CamelModel):
    """Inbound payload for POST /customers/{id}/mark-contacted."""

    notes: Optional[str] = None
    csm_name: Optional[str] = None


class ContactLog(CamelModel):
    """A single touchpoint with the customer."""

    id: str = Field(default_factory=lambda: _new_id("log"))
    customer_id: str
    contact_date: datetime = Field(default_factory=_utc_now)
    type: ContactType = ContactType.EMAIL
    subject: str = "Customer check-in"
    notes: str = "Marked as contacted from dashboard"
    csm_name: str = "CSM Team"
