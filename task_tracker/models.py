"""Core models for task-tracker.

This module defines the core data structures for task tracking:
- Status: Enum for the state of a task
- Task: A dataclass representing a tracked work item
- next_id / format_task: helpers operating on tasks
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Ids are unsigned 32-bit integers
MAX_ID = 2**32 - 1

_LABELS = {
    "Todo": "todo",
    "InProgress": "in progress",
    "Done": "done",
}


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


class Status(Enum):
    """Task status. Values are the tokens written to the store."""

    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"

    @property
    def label(self) -> str:
        """Lowercase display word, e.g. ``in progress``."""
        return _LABELS[self.value]

    def __str__(self) -> str:
        return self.label


@dataclass
class Task:
    """Task model representing a single tracked item.

    Attributes:
        id: Identifier, unique within the collection
        description: Free-form task text
        status: Current status of the task
        created_at: Timestamp when the task was created
        updated_at: Timestamp of the last change, None until the first one
    """

    id: int
    description: str
    status: Status = Status.TODO
    created_at: datetime = field(default_factory=_now)
    updated_at: Optional[datetime] = None

    def update_status(self, status: Status) -> None:
        """Set a new status and stamp the update time."""
        self.status = status
        self.updated_at = _now()

    def update_description(self, description: str) -> None:
        """Set a new description and stamp the update time."""
        self.description = description
        self.updated_at = _now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the task to its JSON record."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "created_at": self.created_at.strftime(TIMESTAMP_FORMAT),
            "updated_at": (
                self.updated_at.strftime(TIMESTAMP_FORMAT)
                if self.updated_at is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Build a task from its JSON record.

        Raises:
            ValueError: If the record is not a well-formed task
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        missing = [key for key in ("id", "description", "status", "created_at", "updated_at") if key not in data]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        task_id = data["id"]
        # bool is an int subclass
        if isinstance(task_id, bool) or not isinstance(task_id, int) or not 0 <= task_id <= MAX_ID:
            raise ValueError(f"invalid id: {task_id!r}")

        description = data["description"]
        if not isinstance(description, str):
            raise ValueError(f"invalid description: {description!r}")

        try:
            status = Status(data["status"])
        except ValueError:
            raise ValueError(f"invalid status: {data['status']!r}") from None

        return cls(
            id=task_id,
            description=description,
            status=status,
            created_at=_parse_timestamp(data["created_at"]),
            updated_at=(
                _parse_timestamp(data["updated_at"])
                if data["updated_at"] is not None
                else None
            ),
        )


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp: {value!r}")
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def next_id(tasks: Sequence[Task]) -> int:
    """Return the id for a new task appended to ``tasks``.

    This is the last task's id plus one (0 for an empty collection), not
    the maximum id in the collection.
    """
    if not tasks:
        return 0
    return tasks[-1].id + 1


def format_task(task: Task) -> str:
    """Render a task as the multi-line block shown by ``list``."""
    updated_at = (
        task.updated_at.strftime(TIMESTAMP_FORMAT)
        if task.updated_at is not None
        else "-"
    )
    return (
        "------------\n"
        f"id: {task.id} [{task.status.label}]\n"
        f"Task: {task.description}\n"
        f"Created at: {task.created_at.strftime(TIMESTAMP_FORMAT)}\n"
        f"Last Update: {updated_at}"
    )
