"""AI orchestration: call a prompt, get validated JSON back."""

from typing import TYPE_CHECKING

from structai.prompting.templates import FileTemplateSource, TemplateSource

from .extract import extract_json_object, extract_text
from .orchestrator import AIOrchestrator
from .result import AIResult, CallOptions
from .validation import (
    FunctionValidator,
    NoopValidator,
    OutputValidator,
    ValidatorRegistry,
    require_not_blank,
    require_range,
    require_size,
)

if TYPE_CHECKING:
    from structai.config import Settings
    from structai.llm.base import ProviderClient


def create_orchestrator(
    settings: "Settings | None" = None,
    client: "ProviderClient | None" = None,
    templates: TemplateSource | None = None,
    validators: ValidatorRegistry | None = None,
) -> AIOrchestrator:
    """Create an orchestrator with collaborators built from settings."""
    if (client is None or templates is None) and settings is None:
        from structai.config import get_settings

        settings = get_settings()

    if client is None:
        from structai.llm import create_client

        client = create_client(
            api_key=settings.anthropic_api_key,
            base_url=settings.anthropic_base_url,
            timeout_seconds=settings.llm_timeout_seconds,
        )

    if templates is None:
        templates = FileTemplateSource(settings.prompts_dir)

    return AIOrchestrator(client=client, templates=templates, validators=validators)


__all__ = [
    "AIOrchestrator",
    "AIResult",
    "CallOptions",
    "FunctionValidator",
    "NoopValidator",
    "OutputValidator",
    "ValidatorRegistry",
    "create_orchestrator",
    "extract_json_object",
    "extract_text",
    "require_not_blank",
    "require_range",
    "require_size",
]
