"""
Runtime settings read from the Lambda environment.

Deploy-time sizing lives in infrastructure/config/settings.py; this module only
covers what the running code needs to pick its storage backends.
"""

from dataclasses import dataclass
from typing import Optional
import os


@dataclass
class AppSettings:
    """Application settings with local-friendly defaults."""

    environment: str = "dev"

    # "memory" serves the seeded in-process records, "postgres" uses SQLAlchemy.
    customer_store: str = "memory"
    database_url: Optional[str] = None
    db_secret_arn: Optional[str] = None

    # Tasks and contact logs stay in memory unless a DynamoDB table is set.
    activity_table: Optional[str] = None

    product_name: str = "Molin"

    @classmethod
    def from_environment(cls) -> "AppSettings":
        """Load settings from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            customer_store=os.environ.get("CUSTOMER_STORE", "memory").lower(),
            database_url=os.environ.get("DATABASE_URL") or None,
            db_secret_arn=os.environ.get("DB_SECRET_ARN") or None,
            activity_table=os.environ.get("ACTIVITY_TABLE") or None,
            product_name=os.environ.get("PRODUCT_NAME", "Molin"),
        )
