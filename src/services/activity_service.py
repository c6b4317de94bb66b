"""Tasks and contact logging for account managers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from models.activity import ContactLog, ContactLogCreate, Task, TaskCreate
from repositories.base import ActivityRepository
from services import scoring
from services.customer_service import CustomerService, describe_validation_error
from utils.error_handling import ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class ActivityService:
    """Records follow-ups against existing customers."""

    def __init__(
        self,
        customers: CustomerService,
        repository: Optional[ActivityRepository] = None,
        clock: Callable[[], datetime] = scoring.utc_now,
    ):
        if repository is None:
            from repositories.provider import get_activity_repository

            repository = get_activity_repository()
        self.customers = customers
        self.repository = repository
        self.clock = clock

    def create_task(self, customer_id: str, payload: Dict[str, Any]) -> Task:
        self.customers.ensure_exists(customer_id)
        try:
            request = TaskCreate.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(describe_validation_error(exc)) from exc

        task = Task(
            customer_id=customer_id,
            title=request.title,
            description=request.description,
            created_at=self.clock(),
            due_date=request.due_date,
        )
        self.repository.add_task(task)
        logger.info("Task created", extra={"customer_id": customer_id, "task_id": task.id})
        return task

    def list_tasks(self, customer_id: str) -> List[Task]:
        self.customers.ensure_exists(customer_id)
        return self.repository.list_tasks(customer_id)

    def mark_contacted(self, customer_id: str, payload: Optional[Dict[str, Any]] = None) -> ContactLog:
        """Log an email touchpoint and move the customer's last-contact date to now."""
        self.customers.ensure_exists(customer_id)
        try:
            request = ContactLogCreate.model_validate(payload or {})
        except PydanticValidationError as exc:
            raise ValidationError(describe_validation_error(exc)) from exc

        fields = {"customer_id": customer_id, "contact_date": self.clock()}
        if request.notes:
            fields["notes"] = request.notes
        if request.csm_name:
            fields["csm_name"] = request.csm_name
        log = ContactLog(**fields)

        self.repository.add_contact_log(log)
        self.customers.touch_contact(customer_id, log.contact_date)
        logger.info(
            "Customer marked as contacted",
            extra={"customer_id": customer_id, "log_id": log.id, "csm": log.csm_name},
        )
        return log

    def contact_logs_since(self, since: datetime) -> List[ContactLog]:
        return self.repository.list_contact_logs_since(since)
