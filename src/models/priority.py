"""Outreach queue models."""

from enum import Enum
from typing import List

from pydantic import Field

from models.customer import CamelModel, EnrichedCustomer


class PriorityLevel(str, Enum):
    """Urgency of an outreach item."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class PriorityItem(CamelModel):
    """One row of the outreach queue."""

    rank: int = Field(ge=1)
    customer: EnrichedCustomer
    reason: str
    action: str
    time_estimate: str
    priority: PriorityLevel

    @property
    def estimated_minutes(self) -> int:
        """Minutes parsed from labels such as ``15 min``."""
        return int(self.time_estimate.split()[0])


class PriorityQueue(CamelModel):
    """Ranked outreach list for the account-manager priority view."""

    items: List[PriorityItem] = Field(default_factory=list)
    total_estimated_minutes: int = 0
