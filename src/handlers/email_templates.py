"""Handler for GET /email-templates?customerId=&type=&csmName=."""

from typing import Optional

from handlers.proxy import dump, json_response, query_params
from utils.error_handling import BadRequestError
from utils.logging_config import get_logger
from utils.settings import AppSettings
from utils.validators import ensure_present

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
    """Render all templates for a customer, or just the requested type."""
    from services import email_templates

    params = query_params(event)
    customer_id = params.get("customerId")
    ensure_present(customer_id, "customerId")
    csm_name = params.get("csmName") or "Your CSM"

    template_key = params.get("type")
    template_type = None
    if template_key:
        template_type = email_templates.resolve_template_type(template_key)
        if template_type is None:
            raise BadRequestError("Invalid template type")

    customer = _get_customer_service().get_customer(customer_id)
    templates = email_templates.render_templates(
        customer, csm_name, product=AppSettings.from_environment().product_name
    )

    logger.info(
        "Email templates rendered",
        extra={"customer_id": customer_id, "type": template_key or "all"},
    )
    if template_type:
        return json_response(200, {"success": True, "template": dump(templates[template_type])})
    return json_response(
        200,
        {
            "success": True,
            "templates": {
                email_templates.RESPONSE_KEYS[kind]: dump(t)
                for kind, t in templates.items()
            },
        },
    )
