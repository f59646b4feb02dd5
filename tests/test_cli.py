"""Comprehensive tests for CLI module."""

import logging
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest

from task_tracker.cli import (
    cmd_add,
    cmd_delete,
    cmd_list,
    cmd_mark,
    cmd_update,
    main,
    run,
)
from task_tracker.commands import (
    PROG,
    AddCommand,
    DeleteCommand,
    ListCommand,
    MarkCommand,
    UpdateCommand,
)
from task_tracker.errors import ParseError, StoreError
from task_tracker.models import Status
from task_tracker.repository import TaskRepository
from task_tracker.storage import JsonStorage


class TestCommandHandlers:
    """Test suite for the per-command handlers."""

    @pytest.fixture
    def temp_storage(self):
        """Create a temporary storage file for testing."""
        with tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".json") as f:
            temp_path = f.name
        # Delete the file immediately - we just need the path
        Path(temp_path).unlink()
        yield temp_path
        # Cleanup
        path = Path(temp_path)
        if path.exists():
            path.unlink()

    @pytest.fixture
    def repo(self, temp_storage):
        """Create a TaskRepository with temporary storage."""
        return TaskRepository.open(JsonStorage(temp_storage))

    def test_cmd_add(self, repo):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_add(AddCommand("Test task"), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Successfully added task.\n"
        assert repo.get_task(0).description == "Test task"

    def test_cmd_update(self, repo):
        repo.create_task("Old")

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_update(UpdateCommand("New", 0), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Successfully updated task 0.\n"
        assert repo.get_task(0).description == "New"

    def test_cmd_update_not_found(self, repo):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_update(UpdateCommand("New", 9), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Error: ID not found.\n"

    def test_cmd_mark(self, repo):
        repo.create_task("Task")

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_mark(MarkCommand(Status.DONE, 0), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Successfully updated task 0.\n"
        assert repo.get_task(0).status == Status.DONE

    def test_cmd_mark_not_found(self, repo):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_mark(MarkCommand(Status.DONE, 9), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Error: ID not found.\n"

    def test_cmd_delete(self, repo):
        repo.create_task("Task")

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_delete(DeleteCommand(0), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "Successfully deleted task 0.\n"
        assert repo.tasks == []

    def test_cmd_delete_not_found_is_silent(self, repo):
        """Deleting a missing ID prints nothing, unlike update and mark."""
        repo.create_task("Task")

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_delete(DeleteCommand(9), repo)

        assert result == 0
        assert mock_stdout.getvalue() == ""
        assert len(repo.tasks) == 1

    def test_cmd_list_all(self, repo):
        repo.create_task("Task 0")
        repo.create_task("Task 1")
        repo.update_status(1, Status.IN_PROGRESS)

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_list(ListCommand(None), repo)

        assert result == 0
        output = mock_stdout.getvalue()
        assert output.count("------------") == 2
        assert "id: 0 [todo]\nTask: Task 0" in output
        assert "id: 1 [in progress]\nTask: Task 1" in output
        assert output.index("Task 0") < output.index("Task 1")

    def test_cmd_list_empty_collection_prints_nothing(self, repo):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_list(ListCommand(None), repo)

        assert result == 0
        assert mock_stdout.getvalue() == ""

    def test_cmd_list_filter_by_status(self, repo):
        repo.create_task("Task 0")
        repo.create_task("Task 1")
        repo.update_status(0, Status.DONE)

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cmd_list(ListCommand(Status.DONE), repo)

        output = mock_stdout.getvalue()
        assert "Task 0" in output
        assert "Task 1" not in output

    def test_cmd_list_filter_no_match(self, repo):
        repo.create_task("Task 0")

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            result = cmd_list(ListCommand(Status.IN_PROGRESS), repo)

        assert result == 0
        assert mock_stdout.getvalue() == "No tasks with the status in progress\n"


class TestRun:
    """Tests for the full ensure-load-parse-dispatch sequence."""

    def test_run_creates_store_and_adds(self, tmp_path, capsys):
        storage = JsonStorage(tmp_path / "tasks.json")

        assert run([PROG, "add", "Buy milk"], storage) == 0

        assert capsys.readouterr().out == "Successfully added task.\n"
        assert [t.description for t in storage.load()] == ["Buy milk"]

    def test_run_parse_error_still_creates_store(self, tmp_path):
        storage = JsonStorage(tmp_path / "tasks.json")

        with pytest.raises(ParseError):
            run([PROG], storage)
        assert storage.load() == []

    def test_run_corrupt_store(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("not json")

        with pytest.raises(StoreError):
            run([PROG, "list"], JsonStorage(path))

    def test_run_not_found_does_not_save(self, tmp_path, capsys):
        path = tmp_path / "tasks.json"
        storage = JsonStorage(path)
        run([PROG, "add", "Task"], storage)
        before = path.read_text()

        assert run([PROG, "mark-done", "4"], storage) == 0

        assert capsys.readouterr().out.endswith("Error: ID not found.\n")
        assert path.read_text() == before


class TestMain:
    """Tests for main() with settings from the environment."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Drop the handler main() installs so it does not outlive the test."""
        yield
        logger = logging.getLogger("task_tracker")
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)

    @pytest.fixture
    def db_path(self, tmp_path, monkeypatch):
        path = tmp_path / "tasks.json"
        monkeypatch.setenv("TASK_TRACKER_DB_PATH", str(path))
        monkeypatch.delenv("TASK_TRACKER_LOG_LEVEL", raising=False)
        return path

    def test_main_add_and_list(self, db_path, capsys):
        assert main(["add", "Write tests"]) == 0
        assert main(["list"]) == 0

        output = capsys.readouterr().out
        assert "Successfully added task." in output
        assert "id: 0 [todo]" in output
        assert "Task: Write tests" in output
        assert db_path.exists()

    def test_main_parse_error(self, db_path, capsys):
        assert main([]) == 1
        assert capsys.readouterr().out == "Application error: Not enough arguments\n"

    def test_main_invalid_argument(self, db_path, capsys):
        assert main(["remove", "1"]) == 1
        assert capsys.readouterr().out == "Application error: Invalid argument\n"

    def test_main_store_error(self, db_path, capsys):
        db_path.write_text("[{}]")

        assert main(["list"]) == 1
        assert capsys.readouterr().out.startswith("Application error: Invalid task record")

    def test_main_uses_sys_argv(self, db_path, capsys):
        with patch("sys.argv", ["task-tracker", "list", "done"]):
            assert main() == 0

        assert capsys.readouterr().out == "No tasks with the status done\n"

    def test_main_debug_logging(self, db_path, monkeypatch, caplog):
        monkeypatch.setenv("TASK_TRACKER_LOG_LEVEL", "debug")

        with caplog.at_level(logging.DEBUG, logger="task_tracker"):
            assert main(["add", "Logged"]) == 0

        assert any("Added task 0" in record.getMessage() for record in caplog.records)
