"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work when running
tests, simulating the Lambda environment where code is deployed from the src/
directory.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    # Add repo root first (for imports like infrastructure.*)
    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Local stores only: seeded customers, in-memory activity.
os.environ["CUSTOMER_STORE"] = "memory"
os.environ.pop("ACTIVITY_TABLE", None)
os.environ.pop("DATABASE_URL", None)

boto3.setup_default_session(region_name="eu-west-2")

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_customer(**overrides):
    """A healthy Growth-tier account; override any field by attribute name."""
    from models.customer import Customer

    data = dict(
        customer_id="cust_test",
        company_name="Acme Widgets",
        current_tier="Growth",
        signup_date=NOW - timedelta(days=365),
        last_login_date=NOW - timedelta(days=1),
        monthly_conversation_limit=500,
        conversations_used_this_month=250,
        conversation_trend=[200, 230, 250],
        monthly_recurring_revenue=49.0,
        features_used=["Support AI"],
        features_not_used=[],
        support_tickets_last_month=0,
        language="en",
        number_of_team_members=5,
        industry="Retail",
        country="US",
        last_csm_contact_date=NOW - timedelta(days=10),
        customer_sentiment="neutral",
    )
    data.update(overrides)
    return Customer(**data)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture(autouse=True)
def fresh_state():
    """Rebuild repositories and lazy-loaded services for every test."""
    from handlers import activity, analytics, customers, email_templates, priority
    from repositories import provider

    provider.reset()
    for module in (customers, priority, email_templates):
        module._customer_service = None
    activity._activity_service = None
    analytics._analytics_service = None
    yield
    provider.reset()
