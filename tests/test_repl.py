"""Tests for the REPL: parsing, completion and command dispatch."""

import pytest
from prompt_toolkit.document import Document

from taskboard.config import BoardConfig
from taskboard.core.models import Column
from taskboard.core.service import BoardSession
from taskboard.repl.completer import create_completer
from taskboard.core.exceptions import InvalidInputError
from taskboard.repl.main import execute_command, plain_prompt, run_line
from taskboard.repl.parser import parse_command

from conftest import FakeSource, make_tasks


@pytest.fixture
def session(notifier):
    source = FakeSource(make_tasks((1, "todo"), (2, "todo"), (3, "working")))
    board = BoardSession(notifier, source=source, config=BoardConfig())
    board.store.load(source.tasks)
    return board


def run(session, line):
    return run_line(session, line)


class TestParser:
    def test_simple(self):
        result = parse_command("pick 3")
        assert result.command == "pick"
        assert result.args == ["3"]
        assert result.flags == {}

    def test_quoted_column_and_flag(self):
        result = parse_command('MV 3 "In Progress" --onto 7')
        assert result.command == "mv"
        assert result.args == ["3", "In Progress"]
        assert result.flags == {"onto": "7"}

    def test_boolean_flag(self):
        assert parse_command("board --all").flags == {"all": True}

    def test_empty(self):
        assert parse_command("   ").command == ""

    def test_unclosed_quote(self):
        assert parse_command('mv 1 "done').args == ["1", '"done']

    @pytest.mark.parametrize("line", ["mv 3 done -o 7", "mv 3 done --onto=7", "mv 3 -o 7 done"])
    def test_onto_spellings(self, line):
        result = parse_command(line)
        assert result.args == ["3", "done"]
        assert result.flags == {"onto": "7"}
        assert result.value("onto") == "7"

    @pytest.mark.parametrize("line", ["mv 3 done --onto", "mv 3 done -o", "mv 3 done --onto --all", "mv 3 done --onto="])
    def test_onto_without_value(self, line):
        with pytest.raises(InvalidInputError, match="needs a task id"):
            parse_command(line)

    def test_unknown_short_flag(self):
        with pytest.raises(InvalidInputError, match="Unknown flag '-x'"):
            parse_command("mv 3 done -x")

    def test_negative_number_is_an_argument(self):
        assert parse_command("mv -3 done").args == ["-3", "done"]

    def test_switch_has_no_value(self):
        assert parse_command("board --all").value("all") is None


class TestCompleter:
    def complete(self, session, text):
        completer = create_completer(session)
        return [c.text for c in completer.get_completions(Document(text), None)]

    def test_commands(self, session):
        assert self.complete(session, "d") == ["down", "drop"]

    def test_task_ids(self, session):
        assert self.complete(session, "pick ") == ["1", "2", "3"]

    def test_columns(self, session):
        assert self.complete(session, "mv 1 in") == ["in-progress"]

    def test_onto_flag(self, session):
        assert self.complete(session, "mv 1 done --") == ["--onto"]

    def test_without_session(self):
        assert self.complete(None, "pick ") == []


class TestExecute:
    @pytest.mark.asyncio
    async def test_exit(self, session):
        assert await execute_command(session, parse_command("exit")) is False
        assert await run(session, "quit") is False

    @pytest.mark.asyncio
    async def test_empty_and_unknown(self, session, capsys):
        assert await run(session, "") is True
        assert await run(session, "frobnicate") is True
        assert "Unknown command" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_keyboard_drag_flow(self, session):
        await run(session, "pick 1")
        assert session.controller.is_dragging
        assert plain_prompt(session) == "board:[dragging #1]> "

        await run(session, "right")
        await run(session, "drop")

        assert not session.controller.is_dragging
        assert session.store.board[Column.IN_PROGRESS] == [1, 3]
        assert session.source.updates == [(1, "In Progress")]
        assert plain_prompt(session) == "board> "

    @pytest.mark.asyncio
    async def test_cancel(self, session):
        await run(session, "pick 2")
        await run(session, "down")
        await run(session, "cancel")
        assert not session.controller.is_dragging
        assert session.store.board[Column.TODO] == [1, 2]

    @pytest.mark.asyncio
    async def test_mv(self, session, notifier):
        await run(session, 'mv 2 "done"')
        assert session.store.board[Column.COMPLETED] == [2]
        assert notifier.kinds == ["success"]

    @pytest.mark.asyncio
    async def test_mv_reorder_onto(self, session):
        await run(session, "mv 2 todo --onto 1")
        assert session.store.board[Column.TODO] == [2, 1]
        assert session.source.updates == []

    @pytest.mark.asyncio
    async def test_mv_short_onto_flag(self, session):
        await run(session, "mv 2 todo -o 1")
        assert session.store.board[Column.TODO] == [2, 1]

    @pytest.mark.asyncio
    async def test_mv_cross_column_onto(self, session):
        await run(session, "mv 1 in-progress -o 3")
        assert session.store.board[Column.IN_PROGRESS] == [1, 3]

    @pytest.mark.asyncio
    async def test_mv_onto_without_value_moves_nothing(self, session, capsys):
        assert await run(session, "mv 2 done --onto") is True
        assert "--onto needs a task id" in capsys.readouterr().out
        assert session.store.board[Column.TODO] == [1, 2]
        assert session.source.updates == []

    @pytest.mark.asyncio
    async def test_mv_onto_not_a_number(self, session, capsys):
        await run(session, "mv 2 done --onto seven")
        assert "Invalid task ID 'seven'" in capsys.readouterr().out
        assert session.source.updates == []

    @pytest.mark.asyncio
    async def test_mv_errors_are_printed(self, session, capsys):
        assert await run(session, "mv 9 done") is True
        assert await run(session, "mv 1 blocked") is True
        assert await run(session, "mv x done") is True
        out = capsys.readouterr().out
        assert "Task 9 not found" in out
        assert "Invalid task ID" in out

    @pytest.mark.asyncio
    async def test_step_without_pick(self, session, capsys):
        await run(session, "left")
        assert "Nothing picked up" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_refresh(self, session):
        session.source.tasks = make_tasks((5, "done"))
        await run(session, "refresh")
        assert session.store.board.as_dict() == {"ToDo": [], "InProgress": [], "Completed": [5]}

    @pytest.mark.asyncio
    async def test_board_and_stats_render(self, session, capsys):
        await run(session, "board")
        await run(session, "stats")
        await run(session, "help")
        out = capsys.readouterr().out
        assert "To Do" in out
        assert "Columns" in out
        assert "pick <id>" in out
