"""Tests for the structai CLI."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from structai import cli
from structai.errors import AIError, ErrorKind
from structai.orchestration import AIResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch) -> None:
    """Leave logging handlers untouched during CLI runs."""
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)


class TestRenderCommand:
    def test_renders_packaged_prompt(self) -> None:
        result = runner.invoke(
            cli.app,
            ["render", "structured_json_v1", "--var", "instructions=List three colors", "--var", "schema={}"],
        )

        assert result.exit_code == 0
        assert "List three colors" in result.output

    def test_accepts_prompt_name(self) -> None:
        result = runner.invoke(cli.app, ["render", "FORMAT_REPAIR_V1", "--var", "raw_output=oops"])

        assert result.exit_code == 0
        assert "oops" in result.output

    def test_unknown_prompt_fails(self) -> None:
        result = runner.invoke(cli.app, ["render", "nope"])

        assert result.exit_code != 0

    def test_bad_variable_format_fails(self) -> None:
        result = runner.invoke(cli.app, ["render", "structured_json_v1", "--var", "novalue"])

        assert result.exit_code != 0


class TestExtractCommand:
    def test_extracts_from_file(self, tmp_path: Path) -> None:
        source = tmp_path / "raw.txt"
        source.write_text('Here you go:\n```json\n{"a":1}\n```\nThanks!')

        result = runner.invoke(cli.app, ["extract", str(source)])

        assert result.exit_code == 0
        assert result.output.strip() == '{"a":1}'

    def test_extracts_from_stdin(self) -> None:
        result = runner.invoke(cli.app, ["extract"], input='prefix {"b": 2} suffix')

        assert result.exit_code == 0
        assert result.output.strip() == '{"b": 2}'

    def test_no_object_exits_1(self) -> None:
        result = runner.invoke(cli.app, ["extract"], input="no braces here")

        assert result.exit_code == 1


class TestCallCommand:
    @pytest.fixture
    def settings(self, monkeypatch) -> Mock:
        settings = Mock()
        monkeypatch.setattr(cli, "get_settings", lambda: settings)
        return settings

    def test_prints_json_value(self, monkeypatch, settings: Mock) -> None:
        orchestrator = Mock()
        orchestrator.call_for_json.return_value = AIResult(
            value={"colors": ["red"]},
            raw_text='{"colors": ["red"]}',
            input_tokens=5,
            output_tokens=3,
            stop_reason="end_turn",
        )
        monkeypatch.setattr(cli, "create_orchestrator", lambda settings: orchestrator)

        result = runner.invoke(
            cli.app,
            ["call", "structured_json_v1", "--var", "instructions=colors", "--json"],
        )

        assert result.exit_code == 0
        assert '"colors"' in result.output
        args = orchestrator.call_for_json.call_args.args
        assert args[1] == {"instructions": "colors"}
        assert args[2] is dict
        assert args[3] is settings.call_options.return_value

    def test_ai_error_exits_1(self, monkeypatch, settings: Mock) -> None:
        orchestrator = Mock()
        orchestrator.call_for_json.side_effect = AIError(
            ErrorKind.BAD_OUTPUT, "still broken", repair_attempted=True
        )
        monkeypatch.setattr(cli, "create_orchestrator", lambda settings: orchestrator)

        result = runner.invoke(cli.app, ["call", "structured_json_v1"])

        assert result.exit_code == 1
