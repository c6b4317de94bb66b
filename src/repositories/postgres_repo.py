"""PostgreSQL customer repository using SQLAlchemy Core."""

import json
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from models.customer import Customer
from utils.logging_config import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "customer_id",
    "company_name",
    "current_tier",
    "signup_date",
    "last_login_date",
    "monthly_conversation_limit",
    "conversations_used_this_month",
    "conversation_trend",
    "monthly_recurring_revenue",
    "features_used",
    "features_not_used",
    "support_tickets_last_month",
    "language",
    "number_of_team_members",
    "industry",
    "country",
    "last_csm_contact_date",
    "customer_sentiment",
)
_JSON_COLUMNS = ("conversation_trend", "features_used", "features_not_used")
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM customers"

# Dates are stored as ISO-8601 text and lists as JSON text so the same schema
# runs on PostgreSQL and on SQLite in tests.
_SCHEMA = """
    CREATE TABLE IF NOT EXISTS customers (
        customer_id TEXT PRIMARY KEY,
        company_name TEXT NOT NULL,
        current_tier TEXT NOT NULL,
        signup_date TEXT NOT NULL,
        last_login_date TEXT NOT NULL,
        monthly_conversation_limit INTEGER NOT NULL,
        conversations_used_this_month INTEGER NOT NULL,
        conversation_trend TEXT NOT NULL,
        monthly_recurring_revenue DOUBLE PRECISION NOT NULL,
        features_used TEXT NOT NULL,
        features_not_used TEXT NOT NULL,
        support_tickets_last_month INTEGER NOT NULL,
        language TEXT NOT NULL,
        number_of_team_members INTEGER NOT NULL,
        industry TEXT NOT NULL,
        country TEXT NOT NULL,
        last_csm_contact_date TEXT NOT NULL,
        customer_sentiment TEXT NOT NULL
    )
"""


def _to_row(customer: Customer) -> Dict[str, Any]:
    row = customer.model_dump(mode="json")
    for column in _JSON_COLUMNS:
        row[column] = json.dumps(row[column])
    return row


def _from_row(row: Dict[str, Any]) -> Customer:
    data = dict(row)
    for column in _JSON_COLUMNS:
        data[column] = json.loads(data[column])
    return Customer.model_validate(data)


class PostgresCustomerRepository:
    """Thin wrapper to keep SQL organized and parameterized."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self) -> None:
        """Create the customers table if it does not exist."""
        with self.engine.begin() as conn:
            conn.execute(text(_SCHEMA))

    def list_all(self) -> List[Customer]:
        with self.engine.connect() as conn:
            rows = conn.execute(text(f"{_SELECT} ORDER BY customer_id")).fetchall()
            return [_from_row(row._mapping) for row in rows]

    def get(self, customer_id: str) -> Optional[Customer]:
        with self.engine.connect() as conn:
            return self._fetch(conn, customer_id)

    def add(self, customer: Customer) -> None:
        with self.engine.begin() as conn:
            self._upsert(conn, customer)

    def update(self, customer_id: str, changes: Dict[str, Any]) -> Optional[Customer]:
        """Read-modify-write inside one transaction, row-locked on PostgreSQL."""
        with self.engine.begin() as conn:
            current = self._fetch(conn, customer_id, for_update=True)
            if current is None:
                return None
            updated = current.merged(changes)
            self._upsert(conn, updated)
            logger.info(
                "Customer row updated",
                extra={"customer_id": customer_id, "fields": sorted(changes)},
            )
            return updated

    def _fetch(
        self, conn: Connection, customer_id: str, for_update: bool = False
    ) -> Optional[Customer]:
        query = f"{_SELECT} WHERE customer_id = :customer_id"
        if for_update and conn.dialect.name == "postgresql":
            query += " FOR UPDATE"
        row = conn.execute(text(query), {"customer_id": customer_id}).fetchone()
        return _from_row(row._mapping) if row else None

    def _upsert(self, conn: Connection, customer: Customer) -> None:
        assignments = ", ".join(
            f"{column} = excluded.{column}" for column in _COLUMNS[1:]
        )
        stmt = text(
            f"INSERT INTO customers ({', '.join(_COLUMNS)}) "
            f"VALUES ({', '.join(':' + c for c in _COLUMNS)}) "
            f"ON CONFLICT (customer_id) DO UPDATE SET {assignments}"
        )
        conn.execute(stmt, _to_row(customer))
