"""Output validator contract and helpers."""

from collections.abc import Callable, Sized
from typing import Any, Generic, Protocol, TypeVar

from structai.errors import OutputValidationError

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class OutputValidator(Protocol[T_contra]):
    """Validates parsed AI output before it is returned to the caller.

    Implementations raise (typically ``OutputValidationError``) when the value
    is incomplete, out of range, or violates a cross-field constraint.
    """

    def validate(self, value: T_contra) -> None:
        ...


class NoopValidator:
    """Accepts every value."""

    def validate(self, value: Any) -> None:
        return None


class FunctionValidator(Generic[T]):
    """Adapts a plain callable to the OutputValidator protocol."""

    def __init__(self, func: Callable[[T], object]):
        self.func = func

    def validate(self, value: T) -> None:
        self.func(value)


class ValidatorRegistry:
    """Maps target types to their output validators."""

    def __init__(self) -> None:
        self._validators: dict[type, OutputValidator[Any]] = {}

    def register(self, target_type: type[T], validator: OutputValidator[T]) -> None:
        """Register the validator for a target type, replacing any previous one."""
        self._validators[target_type] = validator

    def get(self, target_type: type[T]) -> OutputValidator[T]:
        """Get the validator for a target type, or a no-op validator."""
        return self._validators.get(target_type, NoopValidator())

    def __contains__(self, target_type: object) -> bool:
        return target_type in self._validators


def require_not_blank(value: str | None, field: str) -> None:
    """Require a non-empty, non-whitespace string."""
    if value is None or not str(value).strip():
        raise OutputValidationError(field, "must not be blank")


def require_range(
    value: float | None,
    field: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> None:
    """Require a number within inclusive bounds."""
    if value is None:
        raise OutputValidationError(field, "is required")
    if minimum is not None and value < minimum:
        raise OutputValidationError(field, f"must be >= {minimum} (got {value})")
    if maximum is not None and value > maximum:
        raise OutputValidationError(field, f"must be <= {maximum} (got {value})")


def require_size(
    value: Sized | None,
    field: str,
    minimum: int = 0,
    maximum: int | None = None,
) -> None:
    """Require a collection size within inclusive bounds."""
    if value is None:
        raise OutputValidationError(field, "is required")
    size = len(value)
    if size < minimum:
        raise OutputValidationError(field, f"must have at least {minimum} entries (got {size})")
    if maximum is not None and size > maximum:
        raise OutputValidationError(field, f"must have at most {maximum} entries (got {size})")
