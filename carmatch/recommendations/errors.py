from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound=Enum)


class CarMatchError(Exception):
    """Base class for errors raised by the recommendation engine."""


class InvalidPreferenceError(CarMatchError, ValueError):
    """A preference value the engine cannot interpret."""

    def __init__(self, field: str, value: Any, allowed: list[str] | None = None):
        self.field = field
        self.value = value
        self.allowed = allowed
        message = f"Invalid value for {field!r}: {value!r}"
        if allowed:
            message += f" (expected one of: {', '.join(allowed)})"
        super().__init__(message)


def coerce_enum(enum_cls: type[E], field: str, value: Any) -> E:
    """Return ``value`` as a member of ``enum_cls`` or raise InvalidPreferenceError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidPreferenceError(
            field, value, [member.value for member in enum_cls]
        ) from None
