"""
Customer scoring functions.

Pure functions over a raw Customer record: churn risk, expansion readiness,
upgrade pricing and the account-health bucket. Nothing here touches storage
or caches; callers recompute on every read.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from models.customer import AccountHealth, Customer, CustomerSentiment, CustomerTier

# Account-health cut-offs on the churn-risk score.
CRITICAL_THRESHOLD = 0.65
AT_RISK_THRESHOLD = 0.4

# Price of the next plan up, per current plan.
UPGRADE_PRICES = {
    CustomerTier.STARTUP: 55.0,
    CustomerTier.GROWTH: 119.0,
    CustomerTier.SCALE: 319.0,
}
ENTERPRISE_UPLIFT_MULTIPLIER = 1.5
DEFAULT_UPLIFT_MULTIPLIER = 2.0

FEATURE_VOCABULARY_SIZE = 5


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_since(moment: datetime, now: Optional[datetime] = None) -> int:
    """Whole days between ``moment`` and ``now``, truncated toward zero."""
    now = now or utc_now()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = (now - moment).total_seconds()
    return int(seconds / 86400)


def usage_percentage(customer: Customer) -> float:
    """Share of the monthly conversation limit consumed, 0 when there is no limit."""
    if customer.monthly_conversation_limit <= 0:
        return 0.0
    return (
        customer.conversations_used_this_month
        / customer.monthly_conversation_limit
        * 100
    )


def potential_mrr(customer: Customer) -> float:
    """MRR the customer would pay after moving up one plan."""
    current = customer.monthly_recurring_revenue
    if customer.current_tier in UPGRADE_PRICES:
        return UPGRADE_PRICES[customer.current_tier]
    if customer.current_tier == CustomerTier.ENTERPRISE:
        return current * ENTERPRISE_UPLIFT_MULTIPLIER
    return current * DEFAULT_UPLIFT_MULTIPLIER


def churn_risk_score(customer: Customer, now: Optional[datetime] = None) -> float:
    """
    Likelihood of disengagement on a 0-1 scale.

    Login recency carries up to 0.4 (saturating at 60 days). Support tickets
    carry up to 0.3 when sentiment is negative, or a flat 0.15 for more than
    three tickets otherwise. The usage shortfall fills the last 0.3.
    """
    login_days = days_since(customer.last_login_date, now)
    recency_factor = min(login_days / 60, 1) * 0.4

    tickets = customer.support_tickets_last_month
    if customer.customer_sentiment == CustomerSentiment.NEGATIVE:
        ticket_factor = min(tickets / 5, 1) * 0.3
    elif tickets > 3:
        ticket_factor = 0.15
    else:
        ticket_factor = 0.0

    shortfall = max(0.0, 100 - usage_percentage(customer)) / 100
    usage_factor = shortfall * 0.3

    return _clamp(recency_factor + ticket_factor + usage_factor)


def expansion_score(customer: Customer) -> float:
    """
    Upsell readiness on a 0-1 scale.

    Usage above half the limit carries up to 0.4, revenue uplift up to 0.4
    (saturating at $300/mo, negative when the customer already pays more than
    the next plan) and unused features the remaining 0.2.
    """
    usage = usage_percentage(customer)
    usage_factor = min(max(usage - 50, 0) / 50, 1) * 0.4

    uplift = potential_mrr(customer) - customer.monthly_recurring_revenue
    revenue_factor = min(uplift / 300, 1) * 0.4

    unused_factor = (
        len(customer.features_not_used) / FEATURE_VOCABULARY_SIZE
    ) * 0.2

    return _clamp(usage_factor + revenue_factor + unused_factor)


def account_health(score: float) -> AccountHealth:
    """Bucket a churn-risk score."""
    if score >= CRITICAL_THRESHOLD:
        return AccountHealth.CRITICAL
    if score >= AT_RISK_THRESHOLD:
        return AccountHealth.AT_RISK
    return AccountHealth.HEALTHY
