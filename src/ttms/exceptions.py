"""Custom exception hierarchy for ttms."""

from __future__ import annotations

from typing import Any


class TtmsError(Exception):
    """Base exception for all ttms errors."""


class TtmsConfigError(TtmsError):
    """Invalid or missing configuration."""


class ScheduleValidationError(TtmsError):
    """A raw schedule payload could not be parsed into schedule models."""


class InvalidIntentError(TtmsError, ValueError):
    """A store intent is missing a field its type requires."""


class TtmsOperationError(TtmsError):
    """A tracked remote operation failed.

    The original exception is available as ``__cause__``; ``key`` is the
    entity key the operation was dispatched for.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Any = None,
    ) -> None:
        self.key = key
        super().__init__(message)


class FetchError(TtmsOperationError):
    """Fetching an entity failed (recorded via ``fail_fetch``)."""


class SecondaryOperationError(TtmsOperationError):
    """A secondary mutating operation failed (recorded via ``fail_secondary``).

    Example: resetting an agent's password.
    """
