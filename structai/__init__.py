"""Structured JSON answers from an LLM, with one bounded repair round."""

from structai.errors import AIError, ErrorKind, OutputValidationError, TemplateNotFoundError
from structai.observability import RequestContext
from structai.orchestration import (
    AIOrchestrator,
    AIResult,
    CallOptions,
    OutputValidator,
    ValidatorRegistry,
    create_orchestrator,
)
from structai.prompting import PromptId

__version__ = "0.1.0"

__all__ = [
    "AIError",
    "AIOrchestrator",
    "AIResult",
    "CallOptions",
    "ErrorKind",
    "OutputValidationError",
    "OutputValidator",
    "PromptId",
    "RequestContext",
    "TemplateNotFoundError",
    "ValidatorRegistry",
    "create_orchestrator",
]
