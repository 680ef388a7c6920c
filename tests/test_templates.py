"""Tests for file-backed prompt templates."""

from pathlib import Path

import pytest

from structai.errors import TemplateNotFoundError
from structai.prompting import REPAIR_PROMPT, REPAIR_VARIABLE, FileTemplateSource, PromptId


class TestPackagedTemplates:
    """Tests for the templates shipped with the package."""

    @pytest.mark.parametrize("prompt_id", list(PromptId))
    def test_every_prompt_id_resolves(self, prompt_id: PromptId) -> None:
        """Each prompt id has a non-empty system and user template."""
        system, user = FileTemplateSource().resolve(prompt_id)

        assert system.strip()
        assert user.strip()

    def test_repair_template_takes_raw_output(self) -> None:
        """The repair user template has exactly the raw output placeholder."""
        _, user = FileTemplateSource().resolve(REPAIR_PROMPT)

        assert "{{" + REPAIR_VARIABLE + "}}" in user


class TestFileTemplateSource:
    """Tests for loading templates from a directory."""

    def _write_pair(self, directory: Path, base: str) -> None:
        (directory / f"{base}.system.txt").write_text("system {{x}}", encoding="utf-8")
        (directory / f"{base}.user.txt").write_text("user {{x}}", encoding="utf-8")

    def test_loads_from_custom_dir(self, tmp_path: Path) -> None:
        self._write_pair(tmp_path, PromptId.STRUCTURED_JSON_V1.value)

        pair = FileTemplateSource(tmp_path).resolve(PromptId.STRUCTURED_JSON_V1)

        assert pair == ("system {{x}}", "user {{x}}")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing template is a configuration error naming the file."""
        (tmp_path / "format_repair_v1.system.txt").write_text("only system")

        with pytest.raises(TemplateNotFoundError, match="format_repair_v1.user.txt"):
            FileTemplateSource(tmp_path).resolve(PromptId.FORMAT_REPAIR_V1)

    def test_caches_loaded_templates(self, tmp_path: Path) -> None:
        """Templates are read once; later file changes are not picked up."""
        self._write_pair(tmp_path, PromptId.STRUCTURED_JSON_V1.value)
        source = FileTemplateSource(tmp_path)

        first = source.resolve(PromptId.STRUCTURED_JSON_V1)
        (tmp_path / "structured_json_v1.user.txt").write_text("changed")
        second = source.resolve(PromptId.STRUCTURED_JSON_V1)

        assert first == second
