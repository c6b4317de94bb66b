"""Outreach email templates."""

from enum import Enum

from models.customer import CamelModel


class EmailTemplateType(str, Enum):
    """Template kinds offered to account managers."""

    CHECK_IN = "check-in"
    UPGRADE = "upgrade"
    FEATURE_DEMO = "feature-demo"


class EmailTemplate(CamelModel):
    """Rendered subject and body ready to paste into a mail client."""

    type: EmailTemplateType
    subject: str
    body: str
