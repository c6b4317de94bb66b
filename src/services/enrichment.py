"""Attach derived scores to raw customer records."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from models.customer import Customer, EnrichedCustomer
from services import scoring


def enrich(customer: Customer, now: Optional[datetime] = None) -> EnrichedCustomer:
    """
    Build the read view of a customer.

    Derived fields are always recomputed from the base record, so passing an
    already enriched customer yields the same result for the same ``now``.
    """
    now = now or scoring.utc_now()
    if isinstance(customer, EnrichedCustomer):
        customer = customer.to_base()

    churn = scoring.churn_risk_score(customer, now)
    base = customer.model_dump()
    return EnrichedCustomer(
        **base,
        churn_risk_score=churn,
        expansion_score=scoring.expansion_score(customer),
        account_health=scoring.account_health(churn),
        total_mrr_from_this_customer=customer.monthly_recurring_revenue,
        potential_mrr_if_upgraded=scoring.potential_mrr(customer),
        days_since_login=scoring.days_since(customer.last_login_date, now),
        days_since_last_contact=scoring.days_since(customer.last_csm_contact_date, now),
        usage_percentage=scoring.usage_percentage(customer),
    )


def enrich_all(
    customers: Iterable[Customer], now: Optional[datetime] = None
) -> List[EnrichedCustomer]:
    """Enrich a batch against one shared clock reading."""
    now = now or scoring.utc_now()
    return [enrich(customer, now) for customer in customers]
