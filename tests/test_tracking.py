"""Tests for the async begin/complete/fail wrappers."""

from __future__ import annotations

import asyncio

import pytest

from ttms.exceptions import FetchError, SecondaryOperationError
from ttms.state.events import OperationStatus
from ttms.state.store import KeyedEntityStore
from ttms.state.tracking import track_fetch, track_secondary


@pytest.mark.asyncio
async def test_track_fetch_stores_value_under_key() -> None:
    store = KeyedEntityStore()
    seen_loading: list[bool] = []

    async def _fetch() -> dict[str, str]:
        seen_loading.append(store.state.is_loading)
        return {"name": "Kim"}

    value = await track_fetch(store, 7, _fetch)

    assert value == {"name": "Kim"}
    assert seen_loading == [True]
    assert store.state.entities == {7: {"name": "Kim"}}
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_overlapping_fetches_keep_their_own_keys() -> None:
    store = KeyedEntityStore()
    release_slow = asyncio.Event()

    async def _slow() -> str:
        await release_slow.wait()
        return "slow"

    async def _fast() -> str:
        return "fast"

    slow_task = asyncio.create_task(track_fetch(store, "slow", _slow))
    await asyncio.sleep(0)
    await track_fetch(store, "fast", _fast)
    release_slow.set()
    await slow_task

    assert store.state.entities == {"slow": "slow", "fast": "fast"}


@pytest.mark.asyncio
async def test_track_fetch_failure_is_recorded_and_raised() -> None:
    store = KeyedEntityStore()
    original = ConnectionError("refused")

    async def _fetch() -> None:
        raise original

    with pytest.raises(FetchError) as excinfo:
        await track_fetch(store, "a", _fetch)

    assert excinfo.value.key == "a"
    assert excinfo.value.__cause__ is original
    state = store.state
    assert state.is_loading is False
    assert isinstance(state.error, ConnectionError)
    assert state.fetch_status is OperationStatus.FAILURE


@pytest.mark.asyncio
async def test_track_secondary_records_result() -> None:
    store = KeyedEntityStore()

    async def _reset() -> str:
        return "temp-pass"

    result = await track_secondary(store, 3, _reset)

    assert result == "temp-pass"
    assert store.state.secondary_result == "temp-pass"
    assert store.state.active_key == 3
    assert store.state.entities == {}


@pytest.mark.asyncio
async def test_track_secondary_failure() -> None:
    store = KeyedEntityStore()

    async def _reset() -> str:
        raise PermissionError("forbidden")

    with pytest.raises(SecondaryOperationError):
        await track_secondary(store, 3, _reset)

    assert store.state.secondary_status is OperationStatus.FAILURE
    assert store.state.is_loading is False
