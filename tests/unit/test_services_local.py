"""
Service-layer tests against in-memory repositories.

A fixed clock keeps every score deterministic.

Run with: pytest tests/unit/test_services_local.py -v
"""

import pytest

from conftest import NOW, days_ago, make_customer
from repositories.memory_repo import InMemoryActivityRepository, InMemoryCustomerRepository
from services.activity_service import ActivityService
from services.analytics_service import AnalyticsService
from services.customer_service import CustomerService
from utils.error_handling import NotFoundError, ValidationError


def _clock():
    return NOW


def _portfolio():
    return [
        # churn 0.97: critical
        make_customer(
            customer_id="a",
            last_login_date=days_ago(60),
            conversations_used_this_month=50,
            customer_sentiment="negative",
            support_tickets_last_month=5,
        ),
        # churn 0.44: at-risk
        make_customer(
            customer_id="b",
            last_login_date=days_ago(30),
            conversations_used_this_month=100,
        ),
        # churn 0.04, expansion 0.67: healthy upsell candidate
        make_customer(
            customer_id="c",
            current_tier="Scale",
            monthly_conversation_limit=1250,
            conversations_used_this_month=1125,
            monthly_recurring_revenue=119.0,
            features_not_used=["Ninja", "Lead Gen"],
        ),
    ]


@pytest.fixture
def customer_service():
    return CustomerService(InMemoryCustomerRepository(_portfolio()), clock=_clock)


@pytest.fixture
def activity_service(customer_service):
    return ActivityService(customer_service, InMemoryActivityRepository(), clock=_clock)


class TestCustomerService:
    """Listing, filtering and partial updates."""

    def test_list_customers_enriches_everything(self, customer_service):
        customers = customer_service.list_customers()
        assert {c.customer_id for c in customers} == {"a", "b", "c"}
        assert all(0 <= c.churn_risk_score <= 1 for c in customers)

    def test_at_risk_filter_uses_half_threshold(self, customer_service):
        customers = customer_service.list_customers("at-risk")
        assert [c.customer_id for c in customers] == ["a"]

    def test_expansion_filter(self, customer_service):
        customers = customer_service.list_customers("expansion")
        assert [c.customer_id for c in customers] == ["c"]

    def test_healthy_filter(self, customer_service):
        customers = customer_service.list_customers("healthy")
        assert [c.customer_id for c in customers] == ["c"]

    def test_sort_by_risk(self, customer_service):
        customers = customer_service.list_customers(sort="risk")
        assert [c.customer_id for c in customers] == ["a", "b", "c"]

    def test_sort_by_expansion(self, customer_service):
        customers = customer_service.list_customers(sort="expansion")
        assert customers[0].customer_id == "c"

    def test_unknown_filter_is_ignored(self, customer_service):
        customers = customer_service.list_customers("vip")
        assert [c.customer_id for c in customers] == ["a", "b", "c"]

    def test_unknown_sort_keeps_store_order(self, customer_service):
        customers = customer_service.list_customers("healthy", sort="name")
        assert [c.customer_id for c in customers] == ["c"]
        customers = customer_service.list_customers(sort="name")
        assert [c.customer_id for c in customers] == ["a", "b", "c"]

    def test_get_unknown_customer(self, customer_service):
        with pytest.raises(NotFoundError):
            customer_service.get_customer("nope")

    def test_update_rescores_immediately(self, customer_service):
        before = customer_service.get_customer("c")
        assert before.account_health.value == "healthy"

        updated = customer_service.update_customer(
            "c",
            {
                "lastLoginDate": days_ago(60).isoformat(),
                "conversationsUsedThisMonth": 0,
                "customerSentiment": "negative",
                "supportTicketsLastMonth": 5,
            },
        )

        assert updated.churn_risk_score == pytest.approx(1.0)
        assert updated.account_health.value == "critical"
        assert customer_service.get_customer("c").churn_risk_score == pytest.approx(1.0)

    def test_update_with_bad_type_changes_nothing(self, customer_service):
        with pytest.raises(ValidationError):
            customer_service.update_customer(
                "c", {"monthlyConversationLimit": "lots", "industry": "Media"}
            )
        assert customer_service.get_customer("c").industry == "Retail"

    def test_update_rejects_unknown_fields(self, customer_service):
        with pytest.raises(ValidationError):
            customer_service.update_customer("c", {"churnRiskScore": 0})

    def test_update_rejects_non_object(self, customer_service):
        with pytest.raises(ValidationError):
            customer_service.update_customer("c", ["industry"])

    def test_update_unknown_customer(self, customer_service):
        with pytest.raises(NotFoundError):
            customer_service.update_customer("nope", {"industry": "Media"})

    def test_priority_list(self, customer_service):
        queue = customer_service.priority_list()
        assert queue.items[0].customer.customer_id == "a"
        assert queue.items[0].priority.value == "critical"
        assert [item.rank for item in queue.items] == list(range(1, len(queue.items) + 1))


class TestActivityService:
    """Tasks and contact logs."""

    def test_create_and_list_tasks(self, activity_service):
        task = activity_service.create_task(
            "a", {"title": "  Schedule QBR ", "dueDate": "2025-01-20T09:00:00Z"}
        )
        assert task.title == "Schedule QBR"
        assert task.created_at == NOW
        assert [t.id for t in activity_service.list_tasks("a")] == [task.id]
        assert activity_service.list_tasks("b") == []

    def test_task_requires_title(self, activity_service):
        with pytest.raises(ValidationError):
            activity_service.create_task("a", {"description": "no title"})

    def test_task_for_unknown_customer(self, activity_service):
        with pytest.raises(NotFoundError):
            activity_service.create_task("nope", {"title": "x"})

    def test_mark_contacted_updates_customer(self, activity_service, customer_service):
        assert customer_service.get_customer("b").days_since_last_contact == 10

        log = activity_service.mark_contacted("b", {"csmName": "Dana", "notes": "Left voicemail"})

        assert log.csm_name == "Dana"
        assert log.notes == "Left voicemail"
        assert log.contact_date == NOW
        assert customer_service.get_customer("b").days_since_last_contact == 0

    def test_mark_contacted_defaults(self, activity_service):
        log = activity_service.mark_contacted("b")
        assert log.csm_name == "CSM Team"
        assert log.subject == "Customer check-in"

    def test_mark_contacted_unknown_customer(self, activity_service):
        with pytest.raises(NotFoundError):
            activity_service.mark_contacted("nope")


class TestAnalyticsService:
    """Portfolio summary."""

    def test_summary(self, customer_service, activity_service):
        activity_service.mark_contacted("a")

        analytics = AnalyticsService(customer_service, activity_service).summary()

        assert analytics.total_customers == 3
        assert analytics.customers_at_risk == 2
        assert analytics.churn_rate == 66.7
        assert analytics.expansion_opportunities == 1
        assert analytics.expansion_revenue_this_month == 200
        assert analytics.customers_contacted_this_week == 1
        assert analytics.average_days_since_contact == 6.7
        assert analytics.total_mrr == 217.0
        assert analytics.average_usage == 40.0
        assert analytics.health_distribution.model_dump() == {
            "healthy": 1,
            "at_risk": 1,
            "critical": 1,
        }

    def test_empty_portfolio(self):
        customers = CustomerService(InMemoryCustomerRepository(), clock=_clock)
        activity = ActivityService(customers, InMemoryActivityRepository(), clock=_clock)

        analytics = AnalyticsService(customers, activity).summary()

        assert analytics.total_customers == 0
        assert analytics.churn_rate == 0.0
        assert analytics.average_days_since_contact == 0.0
        assert analytics.expansion_revenue_this_month == 0

    def test_old_contacts_do_not_count(self, customer_service, activity_service):
        from models.activity import ContactLog

        activity_service.repository.add_contact_log(
            ContactLog(customer_id="a", contact_date=days_ago(8))
        )
        analytics = AnalyticsService(customer_service, activity_service).summary()
        assert analytics.customers_contacted_this_week == 0

    def test_half_dollar_expansion_revenue_rounds_up(self):
        enterprise = make_customer(
            customer_id="ent",
            current_tier="Enterprise",
            monthly_conversation_limit=1000,
            conversations_used_this_month=950,
            monthly_recurring_revenue=997.0,
        )
        customers = CustomerService(InMemoryCustomerRepository([enterprise]), clock=_clock)
        activity = ActivityService(customers, InMemoryActivityRepository(), clock=_clock)

        analytics = AnalyticsService(customers, activity).summary()

        assert analytics.expansion_opportunities == 1
        assert analytics.expansion_revenue_this_month == 499
