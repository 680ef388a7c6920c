"""Prompt identifiers, rendering and template loading."""

from .ids import REPAIR_PROMPT, REPAIR_VARIABLE, PromptId
from .renderer import render
from .templates import FileTemplateSource, TemplateSource

__all__ = [
    "FileTemplateSource",
    "PromptId",
    "REPAIR_PROMPT",
    "REPAIR_VARIABLE",
    "TemplateSource",
    "render",
]
