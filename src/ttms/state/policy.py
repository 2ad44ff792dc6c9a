"""Deterministic transition policy.

This module holds the lookup tables and key resolution used by the store's
reducer. It performs no state changes itself.
"""

from __future__ import annotations

from ttms.state.events import EntityKey, IntentType, OperationChannel, OperationStatus

_CHANNELS: dict[IntentType, OperationChannel] = {
    IntentType.FETCH: OperationChannel.FETCH,
    IntentType.FETCH_SUCCESS: OperationChannel.FETCH,
    IntentType.FETCH_FAILURE: OperationChannel.FETCH,
    IntentType.RESET_SECONDARY: OperationChannel.SECONDARY,
    IntentType.RESET_SECONDARY_SUCCESS: OperationChannel.SECONDARY,
    IntentType.RESET_SECONDARY_FAILURE: OperationChannel.SECONDARY,
}

_STATUSES: dict[IntentType, OperationStatus] = {
    IntentType.FETCH: OperationStatus.LOADING,
    IntentType.FETCH_SUCCESS: OperationStatus.SUCCESS,
    IntentType.FETCH_FAILURE: OperationStatus.FAILURE,
    IntentType.RESET_SECONDARY: OperationStatus.LOADING,
    IntentType.RESET_SECONDARY_SUCCESS: OperationStatus.SUCCESS,
    IntentType.RESET_SECONDARY_FAILURE: OperationStatus.FAILURE,
}


def channel_for(intent_type: IntentType) -> OperationChannel:
    return _CHANNELS[intent_type]


def status_after(intent_type: IntentType) -> OperationStatus:
    """Channel status once *intent_type* has been applied."""
    return _STATUSES[intent_type]


def resolve_completion_key(active_key: EntityKey | None, explicit_key: EntityKey | None) -> EntityKey | None:
    """Pick the key a fetch completion is merged under.

    A key carried by the completion itself always wins; otherwise the
    completion is attributed to the most recently dispatched key. ``None``
    means the completion has no addressee.
    """
    if explicit_key is not None:
        return explicit_key
    return active_key
