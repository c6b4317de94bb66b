"""Handlers for customer tasks and contact logging."""

from typing import Optional

from handlers.proxy import dump, json_response, parse_body, path_param
from utils.logging_config import get_logger

logger = get_logger(__name__)

_activity_service: Optional["ActivityService"] = None


def _get_activity_service():
    """Lazy-load ActivityService."""
    global _activity_service
    if _activity_service is None:
        from services.activity_service import ActivityService
        from services.customer_service import CustomerService
        _activity_service = ActivityService(CustomerService())
    return _activity_service


def mark_contacted_handler(event, context):
    """Handle POST /customers/{id}/mark-contacted."""
    customer_id = path_param(event, "id")
    log = _get_activity_service().mark_contacted(customer_id, parse_body(event))
    return json_response(
        200,
        {
            "success": True,
            "message": "Customer marked as contacted",
            "log": dump(log),
        },
    )


def create_task_handler(event, context):
    """Handle POST /customers/{id}/tasks."""
    customer_id = path_param(event, "id")
    task = _get_activity_service().create_task(customer_id, parse_body(event))
    return json_response(
        200,
        {
            "success": True,
            "message": "Task created successfully",
            "task": dump(task),
        },
    )


def list_tasks_handler(event, context):
    """Handle GET /customers/{id}/tasks."""
    customer_id = path_param(event, "id")
    tasks = _get_activity_service().list_tasks(customer_id)
    return json_response(200, {"success": True, "tasks": [dump(t) for t in tasks]})
