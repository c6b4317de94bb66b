"""DynamoDB repository for tasks and contact logs."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

import boto3
from boto3.dynamodb.conditions import Attr, Key

from models.activity import ContactLog, Task

TASK_PREFIX = "TASK#"
CONTACT_PREFIX = "CONTACT#"


def _timestamp(value: datetime) -> str:
    """Fixed-width UTC timestamps so string comparison matches time order."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _to_item(model, sort_key: str) -> Dict[str, Any]:
    item = {k: v for k, v in model.model_dump(mode="json").items() if v is not None}
    item["sk"] = sort_key
    return item


def _strip(item: Dict[str, Any]) -> Dict[str, Any]:
    # The resource layer returns numbers as Decimal.
    return {
        k: int(v) if isinstance(v, Decimal) else v
        for k, v in item.items()
        if k != "sk"
    }


class DynamoDbActivityRepository:
    """Single-table layout: partition ``customer_id``, sort key ``sk``."""

    def __init__(self, table_name: str, table=None):
        self.table = table or boto3.resource("dynamodb").Table(table_name)

    def add_task(self, task: Task) -> None:
        sort_key = f"{TASK_PREFIX}{_timestamp(task.created_at)}#{task.id}"
        item = _to_item(task, sort_key)
        item["created_at"] = _timestamp(task.created_at)
        self.table.put_item(Item=item)

    def list_tasks(self, customer_id: str) -> List[Task]:
        resp = self.table.query(
            KeyConditionExpression=Key("customer_id").eq(customer_id)
            & Key("sk").begins_with(TASK_PREFIX),
        )
        return [Task.model_validate(_strip(i)) for i in resp.get("Items", [])]

    def add_contact_log(self, log: ContactLog) -> None:
        sort_key = f"{CONTACT_PREFIX}{_timestamp(log.contact_date)}#{log.id}"
        item = _to_item(log, sort_key)
        item["contact_date"] = _timestamp(log.contact_date)
        self.table.put_item(Item=item)

    def list_contact_logs_since(self, since: datetime) -> List[ContactLog]:
        """Scan across customers; contact volume per week is small."""
        scan_kwargs = {
            "FilterExpression": Attr("sk").begins_with(CONTACT_PREFIX)
            & Attr("contact_date").gte(_timestamp(since)),
        }
        logs: List[ContactLog] = []
        while True:
            resp = self.table.scan(**scan_kwargs)
            logs.extend(ContactLog.model_validate(_strip(i)) for i in resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return logs
            scan_kwargs["ExclusiveStartKey"] = last_key
