"""Keyed entity store with per-channel request status.

This is the only component allowed to apply :class:`StoreIntent`s. Every
transition produces a new frozen :class:`EntityState`; earlier snapshots are
never modified.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ttms._redact import redact_for_log
from ttms.config import TtmsConfig
from ttms.exceptions import InvalidIntentError
from ttms.state.events import (
    BEGIN_INTENTS,
    EntityKey,
    IntentType,
    OperationChannel,
    OperationStatus,
    StoreIntent,
)
from ttms.state.policy import channel_for, resolve_completion_key, status_after

_logger = logging.getLogger(__name__)

Listener = Callable[[StoreIntent, "EntityState"], None]


class EntityState(BaseModel):
    """Snapshot of the store.

    The store only hands out deep copies, so entity values must support
    :func:`copy.deepcopy`. Plain data (dicts, lists, pydantic models) does.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_loading: bool = False
    active_key: EntityKey | None = None
    entities: dict[EntityKey, Any] = Field(default_factory=dict)
    secondary_result: str | None = None
    error: Any = None
    fetch_status: OperationStatus = OperationStatus.IDLE
    secondary_status: OperationStatus = OperationStatus.IDLE

    def status(self, channel: OperationChannel) -> OperationStatus:
        if channel is OperationChannel.FETCH:
            return self.fetch_status
        return self.secondary_status


def _transition(state: EntityState, update: dict[str, Any], intent_type: IntentType) -> EntityState:
    field = "fetch_status" if channel_for(intent_type) is OperationChannel.FETCH else "secondary_status"
    update[field] = status_after(intent_type)
    # Each snapshot owns its mapping; none is shared with the previous one.
    update.setdefault("entities", dict(state.entities))
    return state.model_copy(update=update)


def reduce(state: EntityState, intent: StoreIntent) -> EntityState:
    """Apply *intent* to *state* and return the resulting state.

    Pure: *state* is left untouched and the result never shares its
    ``entities`` mapping. Successful fetches shallow-merge one key; no
    transition ever drops unrelated keys.
    """
    kind = intent.type

    if kind in BEGIN_INTENTS:
        if intent.key is None:
            raise InvalidIntentError(f"{kind.value!r} intent requires a key")
        return _transition(state, {"is_loading": True, "active_key": intent.key}, kind)

    if kind is IntentType.FETCH_SUCCESS:
        update: dict[str, Any] = {"is_loading": False}
        target = resolve_completion_key(state.active_key, intent.key)
        if target is None:
            _logger.warning("Fetch completed with no active key; result not stored")
        else:
            entities = dict(state.entities)
            entities[target] = intent.value
            update["entities"] = entities
        return _transition(state, update, kind)

    if kind is IntentType.RESET_SECONDARY_SUCCESS:
        return _transition(state, {"is_loading": False, "secondary_result": intent.result}, kind)

    # Both failure intents: record the error as-is, overwriting the previous one.
    return _transition(state, {"is_loading": False, "error": intent.error}, kind)


class KeyedEntityStore:
    """In-memory store of fetched entities and request status.

    Transitions are synchronous and applied in dispatch order. Without an
    explicit key on ``complete_fetch`` the result is attributed to the most
    recently dispatched key (last dispatch wins); there is no queue and no
    cancellation.

    Every state the store returns, passes to listeners or lists in
    ``snapshots`` is a deep copy; mutating one never reaches the store.
    """

    def __init__(
        self,
        *,
        config: TtmsConfig | None = None,
        initial: EntityState | None = None,
    ) -> None:
        self._config = config or TtmsConfig()
        self._initial = (initial or EntityState()).model_copy(deep=True)
        self._state = self._initial.model_copy(deep=True)
        self._history: list[EntityState] = [self._state] if self._config.keep_history else []
        self._listeners: list[Listener] = []

    @property
    def state(self) -> EntityState:
        """Current snapshot."""
        return self._state.model_copy(deep=True)

    @property
    def snapshots(self) -> list[EntityState]:
        """Every snapshot since construction or the last reset.

        Empty unless ``keep_history`` is enabled in the config.
        """
        return [snapshot.model_copy(deep=True) for snapshot in self._history]

    def get(self, key: EntityKey) -> Any:
        """Return a copy of the entity stored at *key*, or ``None``."""
        if key not in self._state.entities:
            return None
        return copy.deepcopy(self._state.entities[key])

    def dispatch(self, intent: StoreIntent) -> EntityState:
        """Apply an intent and return (a copy of) the new state."""
        new_state = reduce(self._state, intent)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Dispatch %s key=%r payload=%s -> loading=%s active=%r entities=%d",
                intent.type.value,
                intent.key,
                redact_for_log(intent.model_dump(exclude={"type", "key"})),
                new_state.is_loading,
                new_state.active_key,
                len(new_state.entities),
            )
        self._state = new_state
        if self._config.keep_history:
            self._history.append(new_state)
        for listener in list(self._listeners):
            listener(intent, new_state.model_copy(deep=True))
        return new_state.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with ``(intent, new_state)`` after every dispatch.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def reset(self) -> None:
        """Replace the state with a copy of the initial state. Listeners are kept."""
        self._state = self._initial.model_copy(deep=True)
        self._history = [self._state] if self._config.keep_history else []

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def begin_fetch(self, key: EntityKey) -> EntityState:
        return self.dispatch(StoreIntent.fetch(key))

    def complete_fetch(self, value: Any, *, key: EntityKey | None = None) -> EntityState:
        """Store *value* under *key*, or under the active key when omitted.

        With neither an explicit nor an active key only the loading flag is
        cleared.
        """
        return self.dispatch(StoreIntent.fetch_success(value, key=key))

    def fail_fetch(self, error: Any) -> EntityState:
        return self.dispatch(StoreIntent.fetch_failure(error))

    def begin_secondary(self, key: EntityKey) -> EntityState:
        return self.dispatch(StoreIntent.reset_secondary(key))

    def complete_secondary(self, result: str | None) -> EntityState:
        return self.dispatch(StoreIntent.reset_secondary_success(result))

    def fail_secondary(self, error: Any) -> EntityState:
        return self.dispatch(StoreIntent.reset_secondary_failure(error))
