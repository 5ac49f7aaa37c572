"""Tests for notebook_cells.cli."""

import click
import pytest
from click.testing import CliRunner

from notebook_cells.cli import main, parse_chord


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("NOTEBOOK_CELLS_PLATFORM", raising=False)
    return CliRunner()


class TestParseChord:
    def test_shift_enter(self):
        event = parse_chord("shift+enter")
        assert event.key == "Enter"
        assert event.shift_pressed is True
        assert event.ctrl_pressed is False

    def test_cmd_alias(self):
        event = parse_chord("Cmd+Ctrl+Enter")
        assert event.meta_pressed is True
        assert event.ctrl_pressed is True

    def test_plain_key(self):
        assert parse_chord("a").key == "a"

    def test_unknown_modifier(self):
        with pytest.raises(click.BadParameter):
            parse_chord("hyper+enter")


class TestGestureCommand:
    def test_shift_enter(self, runner):
        result = runner.invoke(main, ["gesture", "--shift", "--platform", "other"])
        assert result.exit_code == 0
        assert "ExecuteFocusedCell" in result.output
        assert "FocusNextCell(" in result.output
        assert "FocusNextCellEditor" in result.output

    def test_ctrl_enter(self, runner):
        result = runner.invoke(main, ["gesture", "--ctrl", "--platform", "other"])
        assert result.exit_code == 0
        assert "ExecuteFocusedCell" in result.output
        assert "FocusNextCell" not in result.output

    def test_mac_cancelled_alias(self, runner):
        result = runner.invoke(main, ["gesture", "--ctrl", "--meta", "--platform", "mac"])
        assert result.exit_code == 0
        assert "Not consumed" in result.output

    def test_other_key(self, runner):
        result = runner.invoke(main, ["gesture", "--shift", "--key", "Tab"])
        assert "Not consumed" in result.output


class TestMoveCommand:
    def test_move_above(self, runner):
        result = runner.invoke(main, ["move", "A", "B", "C", "--id", "C", "--dest", "A", "--above"])
        assert result.exit_code == 0
        assert "C A B" in result.output

    def test_move_below(self, runner):
        result = runner.invoke(main, ["move", "A", "B", "C", "--id", "A", "--dest", "C", "--below"])
        assert result.exit_code == 0
        assert "B C A" in result.output

    def test_invalid_move(self, runner):
        result = runner.invoke(main, ["move", "A", "B", "C", "--id", "A", "--dest", "A"])
        assert result.exit_code == 1
        assert "same_cell" in result.output


class TestInspectCommand:
    def test_code_cell_without_outputs(self, runner):
        result = runner.invoke(main, ["inspect", "--type", "code", "--meta", "inputHidden=true"])
        assert result.exit_code == 0
        assert "source_hidden" in result.output
        assert result.output.count("True") == 2

    def test_markdown_with_tags(self, runner):
        result = runner.invoke(main, [
            "inspect", "--type", "markdown", "--meta", "hide_input=true",
            "--tag", "parameters", "--tag", "default parameters",
        ])
        assert result.exit_code == 0
        assert "True" not in result.output
        assert "Papermill - Parametrized" in result.output
        assert "Papermill - Default Parameters" in result.output

    def test_bad_meta(self, runner):
        result = runner.invoke(main, ["inspect", "--meta", "inputHidden"])
        assert result.exit_code != 0


class TestReplayCommand:
    def test_shift_enter_advances(self, runner):
        result = runner.invoke(main, ["replay", "shift+enter", "--cells", "2", "--platform", "other"])
        assert result.exit_code == 0
        assert "consumed" in result.output
        assert "Executed: cell_1" in result.output

    def test_shift_enter_past_end_creates_cell(self, runner):
        result = runner.invoke(main, [
            "replay", "shift+enter", "shift+enter", "shift+enter", "--cells", "2", "--platform", "other",
        ])
        assert result.exit_code == 0
        assert "Executed: cell_1, cell_2" in result.output

    def test_plain_enter_ignored(self, runner):
        result = runner.invoke(main, ["replay", "enter", "--platform", "other"])
        assert result.exit_code == 0
        assert "ignored" in result.output
        assert "Executed: -" in result.output
