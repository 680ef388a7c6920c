"""Failure taxonomy for AI calls."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of an AI call failure."""

    PROVIDER_ERROR = "provider_error"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    BAD_OUTPUT = "bad_output"

    @property
    def repairable(self) -> bool:
        """Only content-shape failures are eligible for the repair round."""
        return self is ErrorKind.BAD_OUTPUT


class AIError(Exception):
    """Raised when an AI call fails.

    ``raw_text`` holds the first raw model output when one exists, so a
    failure can be debugged even after a repair round replaced it.
    ``original_error`` keeps the first-round failure when the repair round
    also failed.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        raw_text: str | None = None,
        repair_attempted: bool = False,
        original_error: "AIError | None" = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.raw_text = raw_text
        self.repair_attempted = repair_attempted
        self.original_error = original_error

    def __repr__(self) -> str:
        return (
            f"AIError(kind={self.kind.name}, message={self.message!r}, "
            f"repair_attempted={self.repair_attempted})"
        )


class TemplateNotFoundError(LookupError):
    """Raised when a prompt template resource is missing."""


class OutputValidationError(ValueError):
    """Raised by output validators when parsed output violates a constraint."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason
