"""
Customer Service.

Reads raw records from the injected repository and enriches them on every
call. Scores are never cached: a record changed by update_customer is scored
fresh on the next read.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from models.customer import CustomerUpdate, EnrichedCustomer
from models.priority import PriorityQueue
from repositories.base import CustomerRepository
from services import ranking, scoring
from services.enrichment import enrich, enrich_all
from utils.error_handling import NotFoundError, ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)

FILTERS = {
    "at-risk": lambda customers: ranking.filter_at_risk(customers, 0.5),
    "expansion": lambda customers: ranking.filter_expansion_opportunities(customers, 0.3),
    "healthy": ranking.filter_healthy,
}
SORTS = {
    "risk": ranking.sort_by_churn_risk,
    "expansion": ranking.sort_by_expansion,
}


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"]) or "payload"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class CustomerService:
    """Fetch, update and rank customers."""

    def __init__(
        self,
        repository: Optional[CustomerRepository] = None,
        clock: Callable[[], datetime] = scoring.utc_now,
    ):
        if repository is None:
            from repositories.provider import get_customer_repository

            repository = get_customer_repository()
        self.repository = repository
        self.clock = clock

    def list_customers(
        self, filter_name: Optional[str] = None, sort: Optional[str] = None
    ) -> List[EnrichedCustomer]:
        """
        All customers, optionally filtered (at-risk/expansion/healthy) and sorted
        (risk/expansion). Unrecognised filter or sort values are ignored.
        """
        customers = enrich_all(self.repository.list_all(), self.clock())
        if filter_name in FILTERS:
            customers = FILTERS[filter_name](customers)
        if sort in SORTS:
            customers = SORTS[sort](customers)
        return customers

    def get_customer(self, customer_id: str) -> EnrichedCustomer:
        customer = self.repository.get(customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return enrich(customer, self.clock())

    def update_customer(self, customer_id: str, payload: Dict[str, Any]) -> EnrichedCustomer:
        """
        Merge a partial payload into the stored record and return it re-scored.

        The whole payload is validated before anything is written; a single bad
        field rejects the update.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Update payload must be a JSON object")
        try:
            changes = CustomerUpdate.model_validate(payload).changes()
            updated = self.repository.update(customer_id, changes)
        except PydanticValidationError as exc:
            raise ValidationError(describe_validation_error(exc)) from exc

        if updated is None:
            raise NotFoundError("Customer not found")

        logger.info(
            "Customer updated",
            extra={"customer_id": customer_id, "fields": sorted(changes)},
        )
        return enrich(updated, self.clock())

    def touch_contact(self, customer_id: str, contacted_at: datetime) -> EnrichedCustomer:
        """Record that an account manager reached the customer."""
        updated = self.repository.update(
            customer_id, {"last_csm_contact_date": contacted_at}
        )
        if updated is None:
            raise NotFoundError("Customer not found")
        return enrich(updated, self.clock())

    def ensure_exists(self, customer_id: str) -> None:
        if self.repository.get(customer_id) is None:
            raise NotFoundError("Customer not found")

    def priority_list(self, limit: int = ranking.PRIORITY_LIST_LIMIT) -> PriorityQueue:
        customers = enrich_all(self.repository.list_all(), self.clock())
        return ranking.build_priority_list(customers, limit=limit)
