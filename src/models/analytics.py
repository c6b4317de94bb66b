"""Portfolio-level analytics."""

from pydantic import Field

from models.customer import CamelModel


class HealthDistribution(CamelModel):
    """Customer counts per account-health bucket."""

    healthy: int = 0
    at_risk: int = 0
    critical: int = 0


class Analytics(CamelModel):
    """Aggregate metrics for the analytics page."""

    total_customers: int
    customers_at_risk: int
    churn_rate: float = Field(description="percentage, one decimal")
    expansion_opportunities: int
    expansion_revenue_this_month: int
    customers_contacted_this_week: int
    average_days_since_contact: float
    total_mrr: float
    average_usage: float
    health_distribution: HealthDistribution
