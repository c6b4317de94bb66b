"""
Process-wide repository wiring.

Repositories are built lazily on first use and reused across warm Lambda
invocations, so the seeded in-memory store is created once per process.
"""

from __future__ import annotations

import json
from typing import Optional

import boto3
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from repositories.base import ActivityRepository, CustomerRepository
from repositories.dynamodb_repo import DynamoDbActivityRepository
from repositories.memory_repo import InMemoryActivityRepository, InMemoryCustomerRepository
from repositories.postgres_repo import PostgresCustomerRepository
from repositories.seed import seed_customers
from utils.logging_config import get_logger
from utils.settings import AppSettings

logger = get_logger(__name__)

_engine = None
_customer_repository: Optional[CustomerRepository] = None
_activity_repository: Optional[ActivityRepository] = None


def get_db_engine(settings: AppSettings):
    """Get or create SQLAlchemy engine with connection pooling."""
    global _engine
    if _engine is None:
        db_url = settings.database_url
        if not db_url and settings.db_secret_arn:
            db_url = _secret_to_db_url(settings.db_secret_arn)
        if not db_url:
            raise RuntimeError(
                "CUSTOMER_STORE=postgres needs DATABASE_URL or DB_SECRET_ARN"
            )
        _engine = create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=1,
            max_overflow=2,
            pool_pre_ping=True,
            pool_recycle=300,
        )
    return _engine


def _secret_to_db_url(secret_arn: str) -> Optional[str]:
    """Build a SQLAlchemy URL from an RDS secret."""
    sm = boto3.client("secretsmanager")
    secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    host = secret.get("host")
    port = secret.get("port", 5432)
    username = secret.get("username")
    password = secret.get("password")
    dbname = secret.get("dbname", "postgres")
    if not (host and username and password):
        logger.warning("DB secret is missing connection fields")
        return None
    return f"postgresql+psycopg2://{username}:{password}@{host}:{port}/{dbname}"


def get_customer_repository(settings: Optional[AppSettings] = None) -> CustomerRepository:
    """Return the configured customer store, building it on first call."""
    global _customer_repository
    if _customer_repository is None:
        settings = settings or AppSettings.from_environment()
        if settings.customer_store == "postgres":
            repo = PostgresCustomerRepository(get_db_engine(settings))
            repo.create_schema()
            _customer_repository = repo
        elif settings.customer_store == "memory":
            _customer_repository = InMemoryCustomerRepository(seed_customers())
        else:
            raise ValueError(f"Unknown CUSTOMER_STORE: {settings.customer_store}")
        logger.info("Customer store ready", extra={"backend": settings.customer_store})
    return _customer_repository


def get_activity_repository(settings: Optional[AppSettings] = None) -> ActivityRepository:
    """Return the task/contact-log store, DynamoDB when a table is configured."""
    global _activity_repository
    if _activity_repository is None:
        settings = settings or AppSettings.from_environment()
        if settings.activity_table:
            _activity_repository = DynamoDbActivityRepository(settings.activity_table)
            backend = "dynamodb"
        else:
            _activity_repository = InMemoryActivityRepository()
            backend = "memory"
        logger.info("Activity store ready", extra={"backend": backend})
    return _activity_repository


def reset() -> None:
    """Forget cached repositories (tests and settings reloads)."""
    global _engine, _customer_repository, _activity_repository
    _engine = None
    _customer_repository = None
    _activity_repository = None
