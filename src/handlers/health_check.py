"""Liveness probe for GET /health."""

from datetime import datetime, timezone

from handlers.proxy import json_response
from utils.settings import AppSettings


def lambda_handler(event, context):
    """Report the environment and configured stores without touching them."""
    settings = AppSettings.from_environment()
    return json_response(
        200,
        {
            "success": True,
            "status": "ok",
            "environment": settings.environment,
            "customerStore": settings.customer_store,
            "activityStore": "dynamodb" if settings.activity_table else "memory",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
