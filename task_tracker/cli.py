"""Command-line interface for task-tracker.

Each invocation runs one command against the task store:
- add <description>: Create a new task
- update <id> <description>: Change a task's description
- delete <id>: Delete a task
- mark-todo | mark-in-progress | mark-done <id>: Change a task's status
- list [todo | in-progress | done]: List all tasks or those with a status
"""

import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence, Type

from task_tracker.commands import (
    PROG,
    AddCommand,
    Command,
    DeleteCommand,
    ListCommand,
    MarkCommand,
    UpdateCommand,
    parse_args,
)
from task_tracker.config import get_settings
from task_tracker.errors import TaskTrackerError
from task_tracker.logging_setup import setup_logging
from task_tracker.models import format_task
from task_tracker.repository import TaskRepository
from task_tracker.storage import JsonStorage

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Error: ID not found."


def cmd_add(command: AddCommand, repo: TaskRepository) -> int:
    """Handle the 'add' command.

    Args:
        command: Parsed add command
        repo: TaskRepository instance

    Returns:
        Exit code (0 for success)
    """
    repo.create_task(command.description)
    print("Successfully added task.")
    return 0


def cmd_update(command: UpdateCommand, repo: TaskRepository) -> int:
    """Handle the 'update' command.

    A missing ID is reported on stdout but is not a failure.
    """
    task = repo.update_description(command.id, command.description)

    if task is None:
        print(NOT_FOUND_MESSAGE)
        return 0

    print(f"Successfully updated task {command.id}.")
    return 0


def cmd_delete(command: DeleteCommand, repo: TaskRepository) -> int:
    """Handle the 'delete' command.

    Deleting a missing ID prints nothing.
    """
    if repo.delete_task(command.id):
        print(f"Successfully deleted task {command.id}.")
    return 0


def cmd_mark(command: MarkCommand, repo: TaskRepository) -> int:
    """Handle the mark-todo / mark-in-progress / mark-done commands."""
    task = repo.update_status(command.id, command.status)

    if task is None:
        print(NOT_FOUND_MESSAGE)
        return 0

    print(f"Successfully updated task {command.id}.")
    return 0


def cmd_list(command: ListCommand, repo: TaskRepository) -> int:
    """Handle the 'list' command."""
    tasks = repo.get_all_tasks(status=command.status)

    if command.status is not None and not tasks:
        print(f"No tasks with the status {command.status.label}")
        return 0

    for task in tasks:
        print(format_task(task))

    return 0


HANDLERS: Dict[Type, Callable[..., int]] = {
    AddCommand: cmd_add,
    UpdateCommand: cmd_update,
    DeleteCommand: cmd_delete,
    MarkCommand: cmd_mark,
    ListCommand: cmd_list,
}


def run(args: Sequence[str], storage: JsonStorage) -> int:
    """Run one command against a store.

    The store is created if missing and loaded before the arguments are
    parsed, so a broken store is reported even for a bad command line.

    Args:
        args: Command-line arguments, including the program name
        storage: Handle for the task store

    Returns:
        Exit code of the command handler

    Raises:
        TaskTrackerError: On argument, I/O or store parse errors
    """
    repo = TaskRepository.open(storage)
    command: Command = parse_args(args)
    logger.debug("Running %r against %s", command, storage.file_path)
    return HANDLERS[type(command)](command, repo)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments without the program name. If None,
              uses sys.argv

    Returns:
        Exit code (0 for success, 1 for an application error)
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    args = list(sys.argv) if argv is None else [PROG, *argv]

    try:
        return run(args, JsonStorage(settings.db_path))
    except TaskTrackerError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Application error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
