"""Async helpers that wrap a remote call in store transitions.

The data-fetch layer owns the network call; these helpers only dispatch the
``begin`` intent before awaiting it and the ``complete``/``fail`` intent
after. Fetch completions carry their key explicitly, so overlapping fetches
for different keys are each stored under their own key.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ttms.exceptions import FetchError, SecondaryOperationError
from ttms.state.events import EntityKey
from ttms.state.store import KeyedEntityStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


async def track_fetch(
    store: KeyedEntityStore,
    key: EntityKey,
    fetch: Callable[[], Awaitable[T]],
) -> T:
    """Fetch the entity at *key* and merge it into *store*.

    Raises
    ------
    FetchError
        When *fetch* raises; the original exception is recorded in the store
        and chained as ``__cause__``.
    """
    store.begin_fetch(key)
    try:
        value = await fetch()
    except Exception as exc:
        _logger.debug("Fetch for %r failed: %s", key, exc)
        store.fail_fetch(exc)
        raise FetchError(f"Fetching {key!r} failed: {exc}", key=key) from exc
    store.complete_fetch(value, key=key)
    return value


async def track_secondary(
    store: KeyedEntityStore,
    key: EntityKey,
    operation: Callable[[], Awaitable[str | None]],
) -> str | None:
    """Run a secondary operation (e.g. a password reset) for *key*.

    The operation's string result is stored as the store's
    ``secondary_result``.

    Raises
    ------
    SecondaryOperationError
        When *operation* raises.
    """
    store.begin_secondary(key)
    try:
        result = await operation()
    except Exception as exc:
        _logger.debug("Secondary operation for %r failed: %s", key, exc)
        store.fail_secondary(exc)
        raise SecondaryOperationError(f"Secondary operation for {key!r} failed: {exc}", key=key) from exc
    store.complete_secondary(result)
    return result
