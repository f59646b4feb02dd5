"""Task repository for managing task operations.

This module provides a TaskRepository class that holds the task collection
in memory for the duration of one command and writes it back through the
storage layer after each mutation.
"""

import logging
from typing import List, Optional

from task_tracker.models import Status, Task, next_id
from task_tracker.storage import JsonStorage

logger = logging.getLogger(__name__)


class TaskRepository:
    """In-memory task collection bound to a storage handle.

    Every mutating method changes at most one task and then persists the
    whole collection. Methods that look a task up by id return None (or
    False) when it is missing instead of raising.

    Attributes:
        storage: Storage backend for persisting tasks
        tasks: The task collection, in stored order
    """

    def __init__(self, storage: JsonStorage, tasks: Optional[List[Task]] = None):
        self.storage = storage
        self.tasks = tasks if tasks is not None else []

    @classmethod
    def open(cls, storage: JsonStorage) -> "TaskRepository":
        """Create the store if needed and load its collection.

        Raises:
            StoreError: If the store cannot be created or loaded
        """
        storage.ensure()
        return cls(storage, storage.load())

    def save(self) -> None:
        """Write the full collection back to storage."""
        self.storage.save(self.tasks)

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get the first task with the given ID, or None."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def get_all_tasks(self, status: Optional[Status] = None) -> List[Task]:
        """Get all tasks in collection order, optionally filtered by status."""
        if status is None:
            return list(self.tasks)
        return [task for task in self.tasks if task.status == status]

    def create_task(self, description: str) -> Task:
        """Append a new task and persist the collection.

        Returns:
            The created Task object with its assigned ID
        """
        task = Task(id=next_id(self.tasks), description=description)
        self.tasks.append(task)
        self.save()

        logger.debug("Added task %d", task.id)
        return task

    def update_description(self, task_id: int, description: str) -> Optional[Task]:
        """Change a task's description.

        Returns:
            Updated Task object if found, None if task doesn't exist
        """
        task = self.get_task(task_id)
        if task is None:
            logger.info("Update: no task with id %d", task_id)
            return None

        task.update_description(description)
        self.save()

        logger.debug("Updated description of task %d", task_id)
        return task

    def update_status(self, task_id: int, status: Status) -> Optional[Task]:
        """Change a task's status.

        Returns:
            Updated Task object if found, None if task doesn't exist
        """
        task = self.get_task(task_id)
        if task is None:
            logger.info("Mark: no task with id %d", task_id)
            return None

        task.update_status(status)
        self.save()

        logger.debug("Marked task %d as %s", task_id, status.label)
        return task

    def delete_task(self, task_id: int) -> bool:
        """Delete a task by ID, keeping the order of the remaining tasks.

        Returns:
            True if task was deleted, False if task didn't exist
        """
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                del self.tasks[index]
                self.save()
                logger.debug("Deleted task %d", task_id)
                return True

        logger.info("Delete: no task with id %d", task_id)
        return False
