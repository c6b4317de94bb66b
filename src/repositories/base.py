"""Storage interfaces the services depend on."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from models.activity import ContactLog, Task
from models.customer import Customer


class CustomerRepository(Protocol):
    """Raw customer records. Derived scores are never stored."""

    def list_all(self) -> List[Customer]:
        ...

    def get(self, customer_id: str) -> Optional[Customer]:
        ...

    def add(self, customer: Customer) -> None:
        ...

    def update(self, customer_id: str, changes: Dict[str, Any]) -> Optional[Customer]:
        """Merge ``changes`` into the record; None when the id is unknown."""
        ...


class ActivityRepository(Protocol):
    """Tasks and contact logs."""

    def add_task(self, task: Task) -> None:
        ...

    def list_tasks(self, customer_id: str) -> List[Task]:
        ...

    def add_contact_log(self, log: ContactLog) -> None:
        ...

    def list_contact_logs_since(self, since: datetime) -> List[ContactLog]:
        ...
