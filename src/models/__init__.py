"""Pydantic models for API payloads."""

from models.activity import (  # noqa: F401
    ContactLog,
    ContactLogCreate,
    ContactType,
    Task,
    TaskCreate,
)
from models.analytics import Analytics, HealthDistribution  # noqa: F401
from models.customer import (  # noqa: F401
    AccountHealth,
    Customer,
    CustomerFeature,
    CustomerSentiment,
    CustomerTier,
    CustomerUpdate,
    EnrichedCustomer,
)
from models.email import EmailTemplate, EmailTemplateType  # noqa: F401
from models.priority import PriorityItem, PriorityLevel, PriorityQueue  # noqa: F401
