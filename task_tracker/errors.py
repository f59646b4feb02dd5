"""Exception hierarchy for task-tracker."""


class TaskTrackerError(Exception):
    """Base class for errors reported to the user as ``Application error``."""


class ParseError(TaskTrackerError):
    """Raised when command-line arguments cannot be turned into a command."""


class StoreError(TaskTrackerError):
    """Raised when the task store cannot be created, read, parsed or written."""
