"""Parsed commands and the argument parser that produces them.

A command line is turned into exactly one of the command types below.
Parsing never exits the process: every failure raises ParseError with a
short message that ``main`` reports as an application error.
"""

import argparse
from dataclasses import dataclass
from typing import NoReturn, Optional, Sequence, Union

from task_tracker.errors import ParseError
from task_tracker.models import MAX_ID, Status

PROG = "task-tracker"

MIN_TOKENS = 2
MAX_TOKENS = 4

# argv entries cannot contain NUL, so no token is ever read as an option
_NO_OPTIONS = "\0"

# argparse drops a literal "--" whatever prefix_chars is, so it is swapped
# for a placeholder before parsing and restored afterwards
_DOUBLE_DASH = "--"
_DOUBLE_DASH_PLACEHOLDER = "--\0"

MARK_COMMANDS = {
    "mark-todo": Status.TODO,
    "mark-in-progress": Status.IN_PROGRESS,
    "mark-done": Status.DONE,
}

LIST_FILTERS = {
    "todo": Status.TODO,
    "in-progress": Status.IN_PROGRESS,
    "done": Status.DONE,
}

COMMAND_WORDS = ("add", "update", "delete", *MARK_COMMANDS, "list")


@dataclass(frozen=True)
class AddCommand:
    description: str


@dataclass(frozen=True)
class UpdateCommand:
    description: str
    id: int


@dataclass(frozen=True)
class DeleteCommand:
    id: int


@dataclass(frozen=True)
class MarkCommand:
    status: Status
    id: int


@dataclass(frozen=True)
class ListCommand:
    status: Optional[Status] = None


Command = Union[AddCommand, UpdateCommand, DeleteCommand, MarkCommand, ListCommand]


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ParseError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        if message.startswith("the following arguments are required"):
            raise ParseError("Not enough arguments")
        raise ParseError(message)


def _restore(value: str) -> str:
    return _DOUBLE_DASH if value == _DOUBLE_DASH_PLACEHOLDER else value


def _parse_id(value: str) -> int:
    value = _restore(value)
    if not (value.isascii() and value.isdigit()) or int(value) > MAX_ID:
        raise ParseError(f"Invalid ID: {value!r}")
    return int(value)


def _parse_status_filter(value: str) -> Status:
    try:
        return LIST_FILTERS[_restore(value)]
    except KeyError:
        raise ParseError("Invalid option") from None


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for the tokens after the program name."""
    parser = _ArgumentParser(
        prog=PROG,
        description="Track tasks in a local JSON file",
        prefix_chars=_NO_OPTIONS,
        add_help=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_subparser(name: str, help_text: str) -> argparse.ArgumentParser:
        return subparsers.add_parser(name, help=help_text, prefix_chars=_NO_OPTIONS, add_help=False)

    add_parser = add_subparser("add", "Add a new task")
    add_parser.add_argument("description", help="Task description")

    update_parser = add_subparser("update", "Change a task's description")
    update_parser.add_argument("id", type=_parse_id, help="Task ID")
    update_parser.add_argument("description", help="New task description")

    delete_parser = add_subparser("delete", "Delete a task")
    delete_parser.add_argument("id", type=_parse_id, help="Task ID")

    for name, status in MARK_COMMANDS.items():
        mark_parser = add_subparser(name, f"Mark a task as {status.label}")
        mark_parser.add_argument("id", type=_parse_id, help="Task ID")
        mark_parser.set_defaults(status=status)

    list_parser = add_subparser("list", "List tasks")
    list_parser.add_argument(
        "status",
        nargs="?",
        type=_parse_status_filter,
        help="Only show tasks with this status (todo, in-progress, done)",
    )

    return parser


def parse_args(args: Sequence[str]) -> Command:
    """Turn a full argument list into a command.

    Args:
        args: Command-line arguments, including the program name at index 0

    Returns:
        The parsed command

    Raises:
        ParseError: If the arguments do not describe a valid command
    """
    if len(args) < MIN_TOKENS:
        raise ParseError("Not enough arguments")
    if len(args) > MAX_TOKENS:
        raise ParseError("Too many arguments")
    if args[1] not in COMMAND_WORDS:
        raise ParseError("Invalid argument")

    # Trailing tokens a command does not use are ignored
    tokens = [_DOUBLE_DASH_PLACEHOLDER if token == _DOUBLE_DASH else token for token in args[1:]]
    namespace, _ = create_parser().parse_known_args(tokens)

    if namespace.command == "add":
        return AddCommand(_restore(namespace.description))
    if namespace.command == "update":
        return UpdateCommand(_restore(namespace.description), namespace.id)
    if namespace.command == "delete":
        return DeleteCommand(namespace.id)
    if namespace.command in MARK_COMMANDS:
        return MarkCommand(namespace.status, namespace.id)
    return ListCommand(namespace.status)
