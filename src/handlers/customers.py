"""
Customer handlers: GET /customers, GET /customers/{id}, PATCH /customers/{id}.

Every response is scored on the fly; nothing derived is read back from storage.
"""

from typing import Optional

from handlers.proxy import dump, json_response, parse_body, path_param, query_params
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded service to avoid import-time DB connections
_customer_service: Optional["CustomerService"] = None


def _get_customer_service():
    """Lazy-load CustomerService."""
    global _customer_service
    if _customer_service is None:
        from services.customer_service import CustomerService
        _customer_service = CustomerService()
    return _customer_service


def list_handler(event, context):
    """Return enriched customers, optionally filtered and sorted."""
    params = query_params(event)
    filter_name = params.get("filter")
    sort = params.get("sort")

    customers = _get_customer_service().list_customers(filter_name, sort)

    logger.info(
        "Customers listed",
        extra={"filter": filter_name, "sort": sort, "count": len(customers)},
    )
    return json_response(
        200,
        {
            "success": True,
            "count": len(customers),
            "customers": [dump(c) for c in customers],
        },
    )


def get_handler(event, context):
    """Return one enriched customer or 404."""
    customer_id = path_param(event, "id")
    customer = _get_customer_service().get_customer(customer_id)
    return json_response(200, {"success": True, "customer": dump(customer)})


def update_handler(event, context):
    """Merge a partial update and return the re-scored customer."""
    customer_id = path_param(event, "id")
    payload = parse_body(event)
    customer = _get_customer_service().update_customer(customer_id, payload)
    return json_response(200, {"success": True, "customer": dump(customer)})
