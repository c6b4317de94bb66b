"""
Pydantic model validation tests.

Ensures models validate correctly and reject invalid data.
No AWS connection required.

Run with: pytest tests/unit/test_models.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import make_customer


class TestCustomer:
    """Test Customer model validation."""

    def test_accepts_camel_case_payload(self):
        from models.customer import Customer, CustomerTier

        customer = Customer.model_validate(
            {
                "customerId": "cust_9",
                "companyName": "Fjord Analytics",
                "currentTier": "Scale",
                "signupDate": "2024-01-01T00:00:00Z",
                "lastLoginDate": "2025-01-10T08:30:00Z",
                "monthlyConversationLimit": 1250,
                "conversationsUsedThisMonth": 900,
                "monthlyRecurringRevenue": 119,
                "lastCSMContactDate": "2024-12-20T00:00:00Z",
            }
        )
        assert customer.current_tier == CustomerTier.SCALE
        assert customer.last_csm_contact_date.tzinfo is not None
        assert customer.features_not_used == []

    def test_naive_dates_become_utc(self):
        customer = make_customer(last_login_date=datetime(2025, 1, 1, 9, 0))
        assert customer.last_login_date == datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_rejects_unknown_tier(self):
        with pytest.raises(ValidationError):
            make_customer(current_tier="Platinum")

    def test_rejects_negative_usage(self):
        with pytest.raises(ValidationError):
            make_customer(conversations_used_this_month=-1)

    def test_rejects_unknown_feature(self):
        with pytest.raises(ValidationError):
            make_customer(features_not_used=["Teleportation"])

    def test_rejects_blank_company(self):
        with pytest.raises(ValidationError):
            make_customer(company_name="   ")

    def test_duplicate_features_are_dropped(self):
        customer = make_customer(features_not_used=["Ninja", "Ninja", "Lead Gen"])
        assert [f.value for f in customer.features_not_used] == ["Ninja", "Lead Gen"]

    def test_merged_validates_changes(self):
        customer = make_customer()
        updated = customer.merged({"monthly_conversation_limit": 1000})
        assert updated.monthly_conversation_limit == 1000
        assert customer.monthly_conversation_limit == 500
        with pytest.raises(ValidationError):
            customer.merged({"monthly_conversation_limit": None})


class TestCustomerTier:
    """Tier ordering drives upgrade templates."""

    def test_next_tier(self):
        from models.customer import CustomerTier

        assert CustomerTier.FREE.next_tier() == CustomerTier.STARTUP
        assert CustomerTier.SCALE.next_tier() == CustomerTier.ENTERPRISE
        assert CustomerTier.ENTERPRISE.next_tier() == CustomerTier.ENTERPRISE


class TestCustomerUpdate:
    """Partial update payloads."""

    def test_only_sent_fields_are_changes(self):
        from models.customer import CustomerUpdate

        update = CustomerUpdate.model_validate(
            {"conversationsUsedThisMonth": 10, "monthly_conversation_limit": 20}
        )
        assert update.changes() == {
            "conversations_used_this_month": 10,
            "monthly_conversation_limit": 20,
        }

    def test_rejects_unknown_fields(self):
        from models.customer import CustomerUpdate

        with pytest.raises(ValidationError):
            CustomerUpdate.model_validate({"churnRiskScore": 0.1})

    def test_customer_id_is_not_updatable(self):
        from models.customer import CustomerUpdate

        with pytest.raises(ValidationError):
            CustomerUpdate.model_validate({"customerId": "other"})


class TestActivityModels:
    """Tasks and contact logs."""

    def test_task_create_requires_title(self):
        from models.activity import TaskCreate

        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"title": " "})

    def test_task_defaults(self):
        from models.activity import Task

        task = Task(customer_id="cust_1", title="Send QBR deck")
        assert task.id.startswith("task_")
        assert len(task.id.split("_")[-1]) == 9
        assert task.completed is False
        assert task.description == ""

    def test_contact_log_defaults(self):
        from models.activity import ContactLog, ContactType

        log = ContactLog(customer_id="cust_1")
        assert log.id.startswith("log_")
        assert log.type == ContactType.EMAIL
        assert log.subject == "Customer check-in"
        assert log.notes == "Marked as contacted from dashboard"
        assert log.csm_name == "CSM Team"


class TestPriorityItem:
    """Queue row helpers."""

    def test_estimated_minutes(self):
        from conftest import NOW
        from models.priority import PriorityItem, PriorityLevel
        from services.enrichment import enrich

        item = PriorityItem(
            rank=1,
            customer=enrich(make_customer(), NOW),
            reason="Critical: Inactive 50 days",
            action="Check-in call",
            time_estimate="15 min",
            priority=PriorityLevel.CRITICAL,
        )
        assert item.estimated_minutes == 15
        assert item.model_dump(mode="json", by_alias=True)["timeEstimate"] == "15 min"

    def test_rank_is_one_based(self):
        from models.priority import PriorityItem

        with pytest.raises(ValidationError):
            PriorityItem.model_validate({"rank": 0})
