"""Prompt template loading."""

import threading
from pathlib import Path
from typing import Protocol

from structai.errors import TemplateNotFoundError
from structai.logging_config import get_logger

from .ids import PromptId

logger = get_logger("templates")

PACKAGED_TEMPLATES_DIR = Path(__file__).parent / "templates"


class TemplateSource(Protocol):
    """Resolves a prompt id to its (system, user) template text."""

    def resolve(self, prompt_id: PromptId) -> tuple[str, str]:
        ...


class FileTemplateSource:
    """
    Loads templates from ``<base>.system.txt`` and ``<base>.user.txt`` files.

    Loaded text is cached per prompt id; the cache is safe to share across
    threads.
    """

    def __init__(self, templates_dir: Path | None = None):
        self.templates_dir = templates_dir or PACKAGED_TEMPLATES_DIR
        self._cache: dict[PromptId, tuple[str, str]] = {}
        self._lock = threading.Lock()

    def resolve(self, prompt_id: PromptId) -> tuple[str, str]:
        """Return (system, user) templates, loading them on first use."""
        with self._lock:
            cached = self._cache.get(prompt_id)
            if cached is not None:
                return cached

            pair = (
                self._load(f"{prompt_id.base_name}.system.txt"),
                self._load(f"{prompt_id.base_name}.user.txt"),
            )
            self._cache[prompt_id] = pair
            logger.debug(f"Loaded templates for {prompt_id.name}")
            return pair

    def _load(self, filename: str) -> str:
        path = self.templates_dir / filename
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateNotFoundError(f"Missing prompt template: {path}") from exc
