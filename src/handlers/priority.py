"""Handler for GET /priority: the ranked outreach queue."""

from typing import Optional

from handlers.proxy import dump, json_response, query_params
from utils.logging_config import get_logger
from utils.validators import parse_positive_int

logger = get_logger(__name__)

_customer_service: Optional["CustomerService"] = None


def _get_customer_service():
    """Lazy-load CustomerService."""
    global _customer_service
    if _customer_service is None:
        from services.customer_service import CustomerService
        _customer_service = CustomerService()
    return _customer_service


def lambda_handler(event, context):
    """Return up to ``limit`` (default 20) prioritized outreach items."""
    limit = parse_positive_int(query_params(event).get("limit"), "limit", 20)
    queue = _get_customer_service().priority_list(limit=limit)

    logger.info(
        "Priority list built",
        extra={"items": len(queue.items), "minutes": queue.total_estimated_minutes},
    )
    return json_response(200, {"success": True, **dump(queue)})
