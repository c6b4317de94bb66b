"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Why one Lambda?
- Keeps the seeded store and pooled DB connections warm across routes.
- Simpler to deploy while still keeping code organized by delegating to modules.
"""

from typing import Callable, Dict, Pattern, Tuple
import re
import uuid

from . import activity, analytics, customers, email_templates, health_check, priority
from .proxy import json_response
from utils.error_handling import AppError, to_response
from utils.logging_config import get_logger

logger = get_logger(__name__)

_ID = r"(?P<id>[^/]+)"


def _route(method: str, path: str, handler: Callable) -> Tuple[str, Pattern, Callable]:
    return method, re.compile(f"^{path}/?$"), handler


def _route_table() -> Tuple[Tuple[str, Pattern, Callable], ...]:
    # Resolved per request so tests can monkeypatch handler functions.
    return (
        _route("GET", "/health", health_check.lambda_handler),
        _route("GET", "/customers", customers.list_handler),
        _route("GET", f"/customers/{_ID}", customers.get_handler),
        _route("PATCH", f"/customers/{_ID}", customers.update_handler),
        _route("POST", f"/customers/{_ID}/mark-contacted", activity.mark_contacted_handler),
        _route("GET", f"/customers/{_ID}/tasks", activity.list_tasks_handler),
        _route("POST", f"/customers/{_ID}/tasks", activity.create_task_handler),
        _route("GET", "/analytics", analytics.lambda_handler),
        _route("GET", "/priority", priority.lambda_handler),
        _route("GET", "/email-templates", email_templates.lambda_handler),
    )


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler while keeping shared setup (logging, error handling) centralized.
    """
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method", "").upper()
    path = http.get("path", "")
    route_key = f"{method} {path}"

    for route_method, pattern, handler in _route_table():
        match = pattern.match(path)
        if route_method != method or not match:
            continue
        if match.groupdict():
            params: Dict[str, str] = dict(event.get("pathParameters") or {})
            params.update(match.groupdict())
            event = {**event, "pathParameters": params}
        return _dispatch(handler, event, context, route_key)

    return json_response(404, {"success": False, "message": "Route not found", "route": route_key})


def _dispatch(handler: Callable, event, context, route_key: str):
    correlation_id = str(uuid.uuid4())
    try:
        return handler(event, context)
    except AppError as exc:
        logger.info(
            "Request rejected",
            extra={
                "route": route_key,
                "status": exc.status_code,
                "error": str(exc),
                "correlation_id": correlation_id,
            },
        )
        return to_response(exc)
    except Exception:
        logger.exception(
            "Request failed", extra={"route": route_key, "correlation_id": correlation_id}
        )
        return json_response(
            500,
            {
                "success": False,
                "error": "Internal server error",
                "correlation_id": correlation_id,
            },
        )
