"""Storage layer for task-tracker.

The whole task collection lives in one JSON file holding an array of task
records. ``JsonStorage`` is the handle for that file: callers create the
store, load the full collection, and write it back in one piece after a
mutation. There is no locking, so concurrent invocations against the same
file can lose updates.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from task_tracker.errors import StoreError
from task_tracker.models import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class JsonStorage:
    """JSON file-based storage for the task collection.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: PathLike):
        self.file_path = Path(file_path)

    def ensure(self) -> None:
        """Create the store holding an empty array if it does not exist.

        Raises:
            StoreError: If the file cannot be created
        """
        if self.file_path.exists():
            return

        logger.debug("Creating empty task store at %s", self.file_path)
        try:
            with open(self.file_path, "x", encoding="utf-8") as f:
                f.write("[]")
        except FileExistsError:
            pass
        except OSError as exc:
            raise StoreError(f"Cannot create {self.file_path}: {exc.strerror or exc}") from exc

    def load(self) -> List[Task]:
        """Load every task from the JSON file, in stored order.

        Returns:
            List of Task objects

        Raises:
            StoreError: If the file is missing or unreadable, or its contents
                        are not an array of well-formed task records
        """
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as exc:
            raise StoreError(f"Cannot read {self.file_path}: {exc.strerror or exc}") from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid JSON in {self.file_path}: {exc}") from exc

        if not isinstance(data, list):
            raise StoreError(f"Invalid task store {self.file_path}: expected a JSON array")

        tasks = []
        for index, record in enumerate(data):
            try:
                tasks.append(Task.from_dict(record))
            except ValueError as exc:
                raise StoreError(
                    f"Invalid task record at index {index} in {self.file_path}: {exc}"
                ) from exc

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.file_path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Overwrite the JSON file with the full collection, pretty-printed.

        The existing file is truncated and rewritten in place, so a crash
        mid-write can leave it truncated.

        Args:
            tasks: Every task in the collection, in order

        Raises:
            StoreError: If the file does not exist or cannot be written
        """
        payload = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)

        try:
            # r+ refuses to create the file; the store must already exist
            with open(self.file_path, "r+", encoding="utf-8") as f:
                f.truncate(0)
                f.write(payload)
        except OSError as exc:
            raise StoreError(f"Cannot write {self.file_path}: {exc.strerror or exc}") from exc

        logger.debug("Saved %d task(s) to %s", len(tasks), self.file_path)


def ensure_store(path: PathLike) -> None:
    """Create an empty store at ``path`` unless one already exists."""
    JsonStorage(path).ensure()


def load(path: PathLike) -> List[Task]:
    """Load the task collection stored at ``path``."""
    return JsonStorage(path).load()


def save(path: PathLike, tasks: Sequence[Task]) -> None:
    """Overwrite the store at ``path`` with ``tasks``."""
    JsonStorage(path).save(tasks)
