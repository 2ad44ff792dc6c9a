"""Store intents.

The UI/data-fetch layer expresses every change it wants as a
:class:`StoreIntent`. Only :mod:`ttms.state.store` is allowed to apply them.
"""

from __future__ import annotations

from collections.abc import Hashable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

EntityKey = Hashable
"""Opaque entity identifier (e.g. an agent id).

Any hashable value; keys are stored exactly as dispatched, never coerced.
"""


class OperationChannel(StrEnum):
    FETCH = "fetch"
    SECONDARY = "secondary"


class OperationStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class IntentType(StrEnum):
    """Intent names, matching the front-end's action types."""

    FETCH = "fetch"
    FETCH_SUCCESS = "fetchSuccess"
    FETCH_FAILURE = "fetchFailure"
    RESET_SECONDARY = "resetSecondary"
    RESET_SECONDARY_SUCCESS = "resetSecondarySuccess"
    RESET_SECONDARY_FAILURE = "resetSecondaryFailure"


BEGIN_INTENTS: frozenset[IntentType] = frozenset({IntentType.FETCH, IntentType.RESET_SECONDARY})


class StoreIntent(BaseModel):
    """A single transition request for :class:`ttms.state.store.KeyedEntityStore`.

    ``key`` is required for the ``fetch`` and ``resetSecondary`` intents and
    optional on ``fetchSuccess``, where it addresses the completion
    explicitly instead of relying on the store's active key.
    """

    model_config = ConfigDict(frozen=True)

    type: IntentType
    key: EntityKey | None = None
    value: Any = None
    result: str | None = Field(default=None, description="Secondary operation result (e.g. a new password)")
    error: Any = None

    @classmethod
    def fetch(cls, key: EntityKey) -> StoreIntent:
        return cls(type=IntentType.FETCH, key=key)

    @classmethod
    def fetch_success(cls, value: Any, *, key: EntityKey | None = None) -> StoreIntent:
        return cls(type=IntentType.FETCH_SUCCESS, value=value, key=key)

    @classmethod
    def fetch_failure(cls, error: Any) -> StoreIntent:
        return cls(type=IntentType.FETCH_FAILURE, error=error)

    @classmethod
    def reset_secondary(cls, key: EntityKey) -> StoreIntent:
        return cls(type=IntentType.RESET_SECONDARY, key=key)

    @classmethod
    def reset_secondary_success(cls, result: str | None) -> StoreIntent:
        return cls(type=IntentType.RESET_SECONDARY_SUCCESS, result=result)

    @classmethod
    def reset_secondary_failure(cls, error: Any) -> StoreIntent:
        return cls(type=IntentType.RESET_SECONDARY_FAILURE, error=error)
