"""Handler for GET /analytics."""

from typing import Optional

from handlers.proxy import dump, json_response
from utils.logging_config import get_logger

logger = get_logger(__name__)

_analytics_service: Optional["AnalyticsService"] = None


def _get_analytics_service():
    """Lazy-load AnalyticsService."""
    global _analytics_service
    if _analytics_service is None:
        from services.activity_service import ActivityService
        from services.analytics_service import AnalyticsService
        from services.customer_service import CustomerService
        customers = CustomerService()
        _analytics_service = AnalyticsService(customers, ActivityService(customers))
    return _analytics_service


def lambda_handler(event, context):
    """Return portfolio churn and expansion metrics."""
    analytics = _get_analytics_service().summary()
    return json_response(200, {"success": True, "analytics": dump(analytics)})
