"""CLI tests for the interactive browse session."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from taskapp_cli.main import app

runner = CliRunner()


def _titles() -> list[str]:
    result = runner.invoke(app, ["list", "--json"])
    return [row["title"] for row in json.loads(result.output)]


def _browse(*lines: str):
    return runner.invoke(app, ["browse"], input="".join(f"{line}\n" for line in lines))


@pytest.fixture()
def seeded():
    runner.invoke(app, ["add", "Buy milk", "-c", "home", "-d", "2024-03-01 09:00"])
    runner.invoke(app, ["add", "Standup", "-c", "work", "-d", "2024-03-02 09:00"])


def test_quit(seeded):
    result = _browse("q")
    assert result.exit_code == 0
    assert "Standup" in result.output
    assert "Bye." in result.output


def test_end_of_input_exits_cleanly(seeded):
    result = _browse()
    assert result.exit_code == 0
    assert "Bye." in result.output


def test_search_and_cancel(seeded):
    result = _browse("s home", "c", "q")
    assert "Tasks in 'home*'" in result.output
    assert "Search cleared" in result.output
    assert result.output.count("Tasks in 'home*'") == 1
    after_cancel = result.output.split("Search cleared", 1)[1]
    assert "Tasks in" not in after_cancel
    assert "Standup" in after_cancel


def test_search_with_brackets(seeded):
    runner.invoke(app, ["add", "fix [/x] bug", "-c", "[/x]", "-d", "2024-03-03 09:00"])
    result = _browse("s [/x]", "d 1", "y", "q")
    assert result.exit_code == 0, result.output
    assert "Tasks in '[/x]*'" in result.output
    assert "Removed row 1: fix [/x] bug" in result.output
    assert _titles() == ["Standup", "Buy milk"]


def test_delete_confirmed(seeded):
    result = _browse("d 1", "y", "q")
    assert "Removed row 1: Standup" in result.output
    assert _titles() == ["Buy milk"]


def test_delete_declined(seeded):
    _browse("d 1", "n", "q")
    assert _titles() == ["Standup", "Buy milk"]


def test_delete_bad_row(seeded):
    result = _browse("d 7", "q")
    assert "No row '7'" in result.output
    assert len(_titles()) == 2


def test_new_task(seeded):
    # title, category, date (accept default), no reminder
    result = _browse("n", "Walk dog", "pets", "", "n", "q")
    assert "Saved task 3" in result.output
    assert _titles()[0] == "Walk dog"


def test_edit_task(seeded):
    result = _browse("e 2", "Buy oat milk", "", "", "n", "q")
    assert "Saved task 1" in result.output
    assert _titles() == ["Standup", "Buy oat milk"]


def test_edit_with_bad_date_saves_nothing(seeded):
    result = _browse("e 1", "Renamed", "", "someday", "q")
    assert "Unrecognised date" in result.output
    assert _titles() == ["Standup", "Buy milk"]


def test_unknown_command(seeded):
    result = _browse("x", "q")
    assert "Unknown command 'x'" in result.output
