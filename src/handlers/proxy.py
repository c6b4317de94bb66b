"""Helpers shared by the API Gateway proxy handlers."""

import json
from typing import Any, Dict

from utils.error_handling import BadRequestError


def json_response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def parse_body(event: Dict[str, Any]) -> Any:
    """Decode the JSON body; an absent body reads as an empty object."""
    raw = event.get("body")
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise BadRequestError(f"Request body is not valid JSON: {exc.msg}") from exc


def path_param(event: Dict[str, Any], name: str) -> str:
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        raise BadRequestError(f"{name} is required")
    return value


def query_params(event: Dict[str, Any]) -> Dict[str, str]:
    return event.get("queryStringParameters") or {}


def dump(model) -> Dict[str, Any]:
    """Serialize a pydantic model with the dashboard's camelCase keys."""
    return model.model_dump(mode="json", by_alias=True)
