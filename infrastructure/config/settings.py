"""
Environment-specific deployment settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Deployment settings with cost-optimized defaults."""

    environment: str = "dev"
    aws_region: str = "eu-west-2"

    # "postgres" provisions RDS; "memory" deploys with the seeded sample accounts.
    customer_store: str = "postgres"

    # Database Configuration (Cost-optimized)
    db_instance_class: str = "t3.micro"  # Free tier eligible
    db_allocated_storage: int = 20  # Minimum GB

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 15

    product_name: str = "Molin"
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        customer_store = os.environ.get("CUSTOMER_STORE", "postgres").lower()
        region = os.environ.get("AWS_REGION", "eu-west-2")
        product_name = os.environ.get("PRODUCT_NAME", "Molin")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                aws_region=region,
                customer_store=customer_store,
                db_instance_class="t3.small",  # Upgrade for prod
                db_allocated_storage=50,
                lambda_memory_mb=512,
                lambda_timeout_seconds=30,
                product_name=product_name,
                log_level=log_level,
            )

        return cls(
            environment=env,
            aws_region=region,
            customer_store=customer_store,
            product_name=product_name,
            log_level=log_level,
        )
