"""In-process repositories backing local runs and tests."""

from datetime import datetime
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from models.activity import ContactLog, Task
from models.customer import Customer


class InMemoryCustomerRepository:
    """Dict-backed customer store; updates are serialized by a lock."""

    def __init__(self, customers: Iterable[Customer] = ()):
        self._customers: Dict[str, Customer] = {}
        self._lock = Lock()
        for customer in customers:
            self.add(customer)

    def list_all(self) -> List[Customer]:
        with self._lock:
            return list(self._customers.values())

    def get(self, customer_id: str) -> Optional[Customer]:
        with self._lock:
            return self._customers.get(customer_id)

    def add(self, customer: Customer) -> None:
        with self._lock:
            self._customers[customer.customer_id] = customer

    def update(self, customer_id: str, changes: Dict[str, Any]) -> Optional[Customer]:
        with self._lock:
            current = self._customers.get(customer_id)
            if current is None:
                return None
            updated = current.merged(changes)
            self._customers[customer_id] = updated
            return updated


class InMemoryActivityRepository:
    """List-backed task and contact log store."""

    def __init__(self):
        self._tasks: List[Task] = []
        self._contact_logs: List[ContactLog] = []
        self._lock = Lock()

    def add_task(self, task: Task) -> None:
        with self._lock:
            self._tasks.append(task)

    def list_tasks(self, customer_id: str) -> List[Task]:
        with self._lock:
            return [t for t in self._tasks if t.customer_id == customer_id]

    def add_contact_log(self, log: ContactLog) -> None:
        with self._lock:
            self._contact_logs.append(log)

    def list_contact_logs_since(self, since: datetime) -> List[ContactLog]:
        with self._lock:
            return [log for log in self._contact_logs if log.contact_date >= since]
