"""Portfolio analytics computed from freshly enriched customers."""

from __future__ import annotations

import math
from datetime import timedelta

from models.analytics import Analytics, HealthDistribution
from models.customer import AccountHealth
from services import ranking
from services.activity_service import ActivityService
from services.customer_service import CustomerService
from utils.logging_config import get_logger

logger = get_logger(__name__)

CONTACT_WINDOW = timedelta(days=7)


class AnalyticsService:
    """Aggregates churn and expansion metrics across all customers."""

    def __init__(self, customers: CustomerService, activity: ActivityService):
        self.customers = customers
        self.activity = activity

    def summary(self) -> Analytics:
        enriched = self.customers.list_customers()
        total = len(enriched)

        distribution = HealthDistribution(
            healthy=sum(1 for c in enriched if c.account_health == AccountHealth.HEALTHY),
            at_risk=sum(1 for c in enriched if c.account_health == AccountHealth.AT_RISK),
            critical=sum(1 for c in enriched if c.account_health == AccountHealth.CRITICAL),
        )
        at_risk = distribution.at_risk + distribution.critical
        churn_rate = round(at_risk / total * 100, 1) if total else 0.0

        opportunities = ranking.filter_expansion_opportunities(enriched)
        # Half-dollar totals round up.
        expansion_revenue = int(math.floor(sum(c.uplift for c in opportunities) + 0.5))

        since = self.customers.clock() - CONTACT_WINDOW
        contacted = {log.customer_id for log in self.activity.contact_logs_since(since)}

        avg_days = (
            round(sum(c.days_since_last_contact for c in enriched) / total, 1)
            if total
            else 0.0
        )

        analytics = Analytics(
            total_customers=total,
            customers_at_risk=at_risk,
            churn_rate=churn_rate,
            expansion_opportunities=len(opportunities),
            expansion_revenue_this_month=expansion_revenue,
            customers_contacted_this_week=len(contacted),
            average_days_since_contact=avg_days,
            total_mrr=ranking.total_mrr(enriched),
            average_usage=round(ranking.average_usage(enriched), 1),
            health_distribution=distribution,
        )
        logger.info(
            "Analytics computed",
            extra={"total_customers": total, "churn_rate": churn_rate},
        )
        return analytics
