"""
Sorting, filtering and outreach prioritization over enriched customers.

The priority queue is a fixed-order concatenation of rule-defined buckets
(critical churn, high churn, high-value expansion, medium expansion), each
sorted on its own key. It is not a single global sort.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Set

from models.customer import AccountHealth, CustomerSentiment, EnrichedCustomer
from models.priority import PriorityItem, PriorityLevel, PriorityQueue

AT_RISK_DEFAULT_THRESHOLD = 0.5
EXPANSION_DEFAULT_THRESHOLD = 0.3

CRITICAL_INACTIVE_DAYS = 45
HIGH_INACTIVE_DAYS = 30
HIGH_VALUE_UPLIFT = 100
HIGH_VALUE_EXPANSION = 0.5
BUCKET_CAP = 5
PRIORITY_LIST_LIMIT = 20


def sort_by_churn_risk(customers: Sequence[EnrichedCustomer]) -> List[EnrichedCustomer]:
    """Highest churn risk first."""
    return sorted(customers, key=lambda c: c.churn_risk_score, reverse=True)


def sort_by_expansion(customers: Sequence[EnrichedCustomer]) -> List[EnrichedCustomer]:
    """Best expansion opportunity first."""
    return sorted(customers, key=lambda c: c.expansion_score, reverse=True)


def filter_at_risk(
    customers: Sequence[EnrichedCustomer],
    threshold: float = AT_RISK_DEFAULT_THRESHOLD,
) -> List[EnrichedCustomer]:
    return [c for c in customers if c.churn_risk_score >= threshold]


def filter_expansion_opportunities(
    customers: Sequence[EnrichedCustomer],
    threshold: float = EXPANSION_DEFAULT_THRESHOLD,
) -> List[EnrichedCustomer]:
    return [c for c in customers if c.expansion_score >= threshold]


def filter_healthy(customers: Sequence[EnrichedCustomer]) -> List[EnrichedCustomer]:
    return [c for c in customers if c.account_health == AccountHealth.HEALTHY]


def top_churn_risks(
    customers: Sequence[EnrichedCustomer], count: int = 10
) -> List[EnrichedCustomer]:
    return sort_by_churn_risk(customers)[:count]


def top_expansion_opportunities(
    customers: Sequence[EnrichedCustomer], count: int = 10
) -> List[EnrichedCustomer]:
    return sort_by_expansion(customers)[:count]


def total_mrr(customers: Sequence[EnrichedCustomer]) -> float:
    return sum(c.monthly_recurring_revenue for c in customers)


def average_usage(customers: Sequence[EnrichedCustomer]) -> float:
    if not customers:
        return 0.0
    return sum(c.usage_percentage for c in customers) / len(customers)


def format_amount(value: float) -> str:
    """Render dollar amounts without a trailing ``.0``."""
    rounded = round(value, 2)
    if float(rounded).is_integer():
        return str(int(rounded))
    return str(rounded)


def whole_percent(value: float) -> int:
    """Round half up, as dashboards display percentages."""
    return int(math.floor(value + 0.5))


def churn_reason(customer: EnrichedCustomer) -> str:
    """Short explanation shown in the churn-risk column."""
    if customer.days_since_login >= CRITICAL_INACTIVE_DAYS:
        return f"Inactive {customer.days_since_login} days"
    if customer.days_since_login >= HIGH_INACTIVE_DAYS:
        return f"Not logged in for {customer.days_since_login} days"
    if customer.customer_sentiment == CustomerSentiment.NEGATIVE:
        return "Negative sentiment in recent tickets"
    if customer.usage_percentage < 30:
        return f"Low usage ({whole_percent(customer.usage_percentage)}%)"
    return "Multiple churn risk factors"


def expansion_reason(customer: EnrichedCustomer) -> str:
    """Short explanation shown in the expansion column."""
    if customer.usage_percentage >= 80:
        return f"Using {whole_percent(customer.usage_percentage)}% of monthly limit"
    if len(customer.features_not_used) >= 3:
        return f"{len(customer.features_not_used)} unused features available"
    if customer.uplift >= HIGH_VALUE_UPLIFT:
        return f"+${format_amount(customer.uplift)}/mo revenue potential"
    return "Ready for tier upgrade"


def _medium_reason(customer: EnrichedCustomer) -> str:
    if customer.features_not_used:
        return f"{len(customer.features_not_used)} unused features"
    return f"{whole_percent(customer.usage_percentage)}% usage"


@dataclass(frozen=True)
class _Bucket:
    """One rule of the outreach queue."""

    predicate: Callable[[EnrichedCustomer], bool]
    sort_key: Callable[[EnrichedCustomer], float]
    cap: Optional[int]
    reason: Callable[[EnrichedCustomer], str]
    action: str
    time_estimate: str
    priority: PriorityLevel

    def select(
        self, customers: Sequence[EnrichedCustomer], queued: Set[str]
    ) -> List[EnrichedCustomer]:
        matches = [
            c for c in customers if c.customer_id not in queued and self.predicate(c)
        ]
        matches.sort(key=self.sort_key, reverse=True)
        return matches if self.cap is None else matches[: self.cap]


BUCKETS = (
    _Bucket(
        predicate=lambda c: c.days_since_login >= CRITICAL_INACTIVE_DAYS,
        sort_key=lambda c: c.days_since_login,
        cap=None,
        reason=lambda c: f"Critical: Inactive {c.days_since_login} days",
        action="Check-in call",
        time_estimate="15 min",
        priority=PriorityLevel.CRITICAL,
    ),
    _Bucket(
        predicate=lambda c: HIGH_INACTIVE_DAYS <= c.days_since_login < CRITICAL_INACTIVE_DAYS,
        sort_key=lambda c: c.churn_risk_score,
        cap=BUCKET_CAP,
        reason=lambda c: f"High risk: Inactive {c.days_since_login} days",
        action="Check-in call",
        time_estimate="15 min",
        priority=PriorityLevel.HIGH,
    ),
    _Bucket(
        predicate=lambda c: (
            c.uplift >= HIGH_VALUE_UPLIFT and c.expansion_score >= HIGH_VALUE_EXPANSION
        ),
        sort_key=lambda c: c.uplift,
        cap=BUCKET_CAP,
        reason=lambda c: f"High value: +${format_amount(c.uplift)}/mo potential",
        action="Upgrade call",
        time_estimate="30 min",
        priority=PriorityLevel.HIGH,
    ),
    _Bucket(
        predicate=lambda c: (
            EXPANSION_DEFAULT_THRESHOLD <= c.expansion_score < HIGH_VALUE_EXPANSION
            and c.uplift < HIGH_VALUE_UPLIFT
        ),
        sort_key=lambda c: c.expansion_score,
        cap=BUCKET_CAP,
        reason=_medium_reason,
        action="Feature demo",
        time_estimate="10 min",
        priority=PriorityLevel.MEDIUM,
    ),
)


def build_priority_list(
    customers: Sequence[EnrichedCustomer], limit: int = PRIORITY_LIST_LIMIT
) -> PriorityQueue:
    """
    Build the ranked outreach queue.

    Churn buckets are keyed on login recency and expansion buckets on score
    and uplift, so a long-inactive account could also qualify for expansion;
    a customer already queued is skipped by later buckets.
    """
    items: List[PriorityItem] = []
    queued: Set[str] = set()
    for bucket in BUCKETS:
        for customer in bucket.select(customers, queued):
            queued.add(customer.customer_id)
            items.append(
                PriorityItem(
                    rank=len(items) + 1,
                    customer=customer,
                    reason=bucket.reason(customer),
                    action=bucket.action,
                    time_estimate=bucket.time_estimate,
                    priority=bucket.priority,
                )
            )

    items = items[:limit]
    return PriorityQueue(
        items=items,
        total_estimated_minutes=sum(item.estimated_minutes for item in items),
    )
