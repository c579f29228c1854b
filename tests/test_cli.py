"""
Tests for the one-shot CLI commands.

Commands run in-process through Typer's CliRunner against a temporary
database; the REPL entry point is exercised as a subprocess.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from taskboard import __version__
from taskboard.cli.main import app
from taskboard.core import repository

runner = CliRunner()


def invoke(*args):
    return runner.invoke(app, list(args))


def test_version(temp_db):
    result = invoke("version")
    assert result.exit_code == 0
    assert f"taskboard v{__version__}" in result.output


class TestAdd:
    def test_add(self, temp_db):
        result = invoke("add", "Write docs")

        assert result.exit_code == 0
        assert "Created task" in result.output
        assert repository.get_task(1).title == "Write docs"

    def test_add_with_options_json(self, temp_db):
        result = invoke("add", "Fix bug", "--status", "In Progress", "-p", "high", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "In Progress"
        assert data["priority"] == "high"

    def test_add_empty_title(self, temp_db):
        result = invoke("add", "  ")
        assert result.exit_code == 1
        assert "cannot be empty" in result.output


class TestBoard:
    def test_board_json(self, temp_db):
        repository.create_task("a", status="Pending")
        repository.create_task("b", status="done")
        repository.create_task("c", status="Blocked")

        result = invoke("board", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["title"] for t in data["ToDo"]] == ["a", "c"]
        assert data["InProgress"] == []
        assert [t["title"] for t in data["Completed"]] == ["b"]

    def test_board_table(self, temp_db):
        repository.create_task("visible task")
        result = invoke("board")
        assert result.exit_code == 0
        assert "visible task" in result.output
        assert "To Do" in result.output


class TestMove:
    def test_move_to_other_column(self, temp_db):
        repository.create_task("a")

        result = invoke("mv", "1", "in progress")

        assert result.exit_code == 0
        assert "Moved 'a' to In Progress" in result.output
        assert repository.get_task(1).status == "In Progress"

    def test_reorder_in_same_column(self, temp_db):
        repository.create_task("a")
        repository.create_task("b")

        result = invoke("mv", "2", "todo", "--onto", "1")

        assert result.exit_code == 0
        assert "position 1" in result.output
        assert repository.get_task(2).status == "Not Started"

    def test_unknown_column(self, temp_db):
        repository.create_task("a")
        result = invoke("mv", "1", "blocked")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unknown_task(self, temp_db):
        result = invoke("mv", "9", "done")
        assert result.exit_code == 1
        assert "Task 9 not found" in result.output

    def test_onto_card_in_other_column(self, temp_db):
        repository.create_task("a")
        repository.create_task("b", status="done")
        result = invoke("mv", "1", "in progress", "--onto", "2")
        assert result.exit_code == 1

    def test_wip_limit_from_config(self, temp_db, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("wip_limits:\n  done: 1\n")
        repository.create_task("a")
        repository.create_task("b", status="done")

        result = runner.invoke(app, ["--config", str(config), "mv", "1", "done"])

        assert result.exit_code == 1
        assert "limit" in result.output
        assert repository.get_task(1).status == "Not Started"


def test_bad_config_exits(temp_db, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("wip_limits:\n  someday: 2\n")
    result = runner.invoke(app, ["--config", str(config), "board"])
    assert result.exit_code == 1


@pytest.mark.parametrize("body", [
    "wip_limits:\n  done: many\n",
    "wip_limits: [done]\n",
    "layout: wide\n",
])
def test_malformed_config_reports_error(temp_db, tmp_path, body):
    config = tmp_path / "config.yaml"
    config.write_text(body)

    result = runner.invoke(app, ["--config", str(config), "stats"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Error:" in result.output


def test_stats_json(temp_db, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("wip_limits:\n  in progress: 1\n")
    repository.create_task("a", status="doing")
    repository.create_task("b", status="working")

    result = runner.invoke(app, ["--config", str(config), "stats", "--json"])

    assert result.exit_code == 0
    data = {row["column"]: row for row in json.loads(result.output)}
    assert data["InProgress"]["count"] == 2
    assert data["InProgress"]["limit"] == 1
    assert data["InProgress"]["over_capacity"] is True
    assert data["ToDo"]["limit"] is None


class TestImport:
    def test_import(self, temp_db, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"title": "x"}, {"title": "y", "status": "done"}]))

        result = invoke("import", str(path))

        assert result.exit_code == 0
        assert "Imported 2 task(s)" in result.output
        assert len(repository.list_tasks()) == 2

    def test_import_not_a_list(self, temp_db, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"title": "x"}))
        assert invoke("import", str(path)).exit_code == 1

    def test_import_missing_file(self, temp_db, tmp_path):
        assert invoke("import", str(tmp_path / "nope.json")).exit_code == 1


def test_default_launches_repl(tmp_path):
    """Running with no command starts the REPL, which reads 'exit' and quits."""
    env = dict(os.environ, HOME=str(tmp_path), USERPROFILE=str(tmp_path))
    result = subprocess.run(
        [sys.executable, "-m", "taskboard"],
        input="exit\n",
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        env=env,
        cwd=Path(__file__).parent.parent,
    )

    assert result.returncode == 0, result.stderr
    assert "taskboard" in result.stdout
    assert "Goodbye!" in result.stdout
