"""Customer account models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CustomerTier(str, Enum):
    """Subscription plans, declared in upgrade order."""

    FREE = "Free"
    STARTUP = "Startup"
    GROWTH = "Growth"
    SCALE = "Scale"
    ENTERPRISE = "Enterprise"

    def next_tier(self) -> "CustomerTier":
        """Return the plan above this one; Enterprise has nowhere to go."""
        order = list(CustomerTier)
        index = order.index(self)
        if index == len(order) - 1:
            return CustomerTier.ENTERPRISE
        return order[index + 1]


class CustomerSentiment(str, Enum):
    """Sentiment of the customer's recent support conversations."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class AccountHealth(str, Enum):
    """Health buckets derived from churn risk."""

    HEALTHY = "healthy"
    AT_RISK = "at-risk"
    CRITICAL = "critical"


class CustomerFeature(str, Enum):
    """Product features a customer can adopt."""

    SUPPORT_AI = "Support AI"
    SALES_AI = "Sales AI"
    LEAD_GEN = "Lead Gen"
    PERSONALIZATION = "Personalization"
    NINJA = "Ninja"


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so day arithmetic never mixes kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Customer(CamelModel):
    """Raw account record as stored."""

    customer_id: str
    company_name: str
    current_tier: CustomerTier
    signup_date: datetime
    last_login_date: datetime
    monthly_conversation_limit: int = Field(ge=0)
    conversations_used_this_month: int = Field(ge=0)
    conversation_trend: List[int] = Field(default_factory=list)
    monthly_recurring_revenue: float = Field(ge=0)
    features_used: List[CustomerFeature] = Field(default_factory=list)
    features_not_used: List[CustomerFeature] = Field(default_factory=list)
    support_tickets_last_month: int = Field(default=0, ge=0)
    language: str = "en"
    number_of_team_members: int = Field(default=1, ge=0)
    industry: str = ""
    country: str = ""
    last_csm_contact_date: datetime = Field(alias="lastCSMContactDate")
    customer_sentiment: CustomerSentiment = CustomerSentiment.NEUTRAL

    @field_validator("customer_id", "company_name")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Identity fields must not be blank."""
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("customer_id and company_name must be provided")
        return cleaned

    @field_validator("signup_date", "last_login_date", "last_csm_contact_date")
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("features_used", "features_not_used")
    @classmethod
    def drop_duplicate_features(cls, value: List[CustomerFeature]) -> List[CustomerFeature]:
        return list(dict.fromkeys(value))

    def merged(self, changes: Dict[str, Any]) -> "Customer":
        """Return a validated copy with ``changes`` (snake_case keys) applied."""
        data = self.model_dump()
        data.update(changes)
        return Customer.model_validate(data)


class CustomerUpdate(CamelModel):
    """Partial update payload; omitted fields are left untouched."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    company_name: Optional[str] = None
    current_tier: Optional[CustomerTier] = None
    signup_date: Optional[datetime] = None
    last_login_date: Optional[datetime] = None
    monthly_conversation_limit: Optional[int] = Field(default=None, ge=0)
    conversations_used_this_month: Optional[int] = Field(default=None, ge=0)
    conversation_trend: Optional[List[int]] = None
    monthly_recurring_revenue: Optional[float] = Field(default=None, ge=0)
    features_used: Optional[List[CustomerFeature]] = None
    features_not_used: Optional[List[CustomerFeature]] = None
    support_tickets_last_month: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = None
    number_of_team_members: Optional[int] = Field(default=None, ge=0)
    industry: Optional[str] = None
    country: Optional[str] = None
    last_csm_contact_date: Optional[datetime] = Field(
        default=None, alias="lastCSMContactDate"
    )
    customer_sentiment: Optional[CustomerSentiment] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class EnrichedCustomer(Customer):
    """Customer plus scores derived on every read. Never persisted."""

    churn_risk_score: float = Field(ge=0, le=1)
    expansion_score: float = Field(ge=0, le=1)
    account_health: AccountHealth
    total_mrr_from_this_customer: float = Field(alias="totalMRRFromThisCustomer")
    potential_mrr_if_upgraded: float = Field(alias="potentialMRRIfUpgraded")
    days_since_login: int
    days_since_last_contact: int
    usage_percentage: float

    @property
    def uplift(self) -> float:
        """Extra monthly revenue if the customer moved up a tier."""
        return self.potential_mrr_if_upgraded - self.monthly_recurring_revenue

    def to_base(self) -> Customer:
        """Strip derived fields back to the stored record."""
        return Customer.model_validate(
            self.model_dump(include=set(Customer.model_fields))
        )
