from __future__ import annotations

import logging
import uuid

import pytest

from ttms.config import TtmsConfig
from ttms.exceptions import InvalidIntentError
from ttms.state.events import IntentType, OperationChannel, OperationStatus, StoreIntent
from ttms.state.store import EntityState, KeyedEntityStore, reduce


def _store_with(entities: dict) -> KeyedEntityStore:
    return KeyedEntityStore(initial=EntityState(entities=entities))


def test_initial_state_is_idle() -> None:
    state = KeyedEntityStore().state

    assert state.is_loading is False
    assert state.active_key is None
    assert state.entities == {}
    assert state.secondary_result is None
    assert state.error is None
    assert state.fetch_status is OperationStatus.IDLE
    assert state.secondary_status is OperationStatus.IDLE


def test_begin_fetch_marks_loading_without_touching_entities_or_error() -> None:
    store = _store_with({"a": 1})
    store.fail_fetch("earlier")

    state = store.begin_fetch("b")

    assert state.is_loading is True
    assert state.active_key == "b"
    assert state.entities == {"a": 1}
    assert state.error == "earlier"
    assert state.fetch_status is OperationStatus.LOADING


def test_complete_fetch_merges_only_active_key() -> None:
    store = _store_with({"a": 1, "b": 2})

    store.begin_fetch("b")
    state = store.complete_fetch(99)

    assert state.entities == {"a": 1, "b": 99}
    assert state.is_loading is False
    assert state.fetch_status is OperationStatus.SUCCESS


def test_complete_fetch_adds_new_key_among_many() -> None:
    store = _store_with({f"agent-{i}": i for i in range(50)})

    store.begin_fetch("agent-new")
    state = store.complete_fetch({"name": "Kim"})

    assert len(state.entities) == 51
    assert state.entities["agent-new"] == {"name": "Kim"}
    assert state.entities["agent-0"] == 0


def test_complete_fetch_without_active_key_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    store = _store_with({"a": 1})

    with caplog.at_level(logging.WARNING, logger="ttms.state.store"):
        state = store.complete_fetch(5)

    assert state.entities == {"a": 1}
    assert state.is_loading is False
    assert "no active key" in caplog.text


def test_explicit_key_completion_wins_over_active_key() -> None:
    store = KeyedEntityStore()

    store.begin_fetch(1)
    store.begin_fetch(2)
    store.complete_fetch("first", key=1)
    state = store.complete_fetch("second", key=2)

    assert state.entities == {1: "first", 2: "second"}


def test_last_dispatch_wins_for_implicit_completion() -> None:
    store = KeyedEntityStore()

    store.begin_fetch(1)
    store.begin_fetch(2)
    state = store.complete_fetch("stale result for 1")

    assert state.active_key == 2
    assert state.entities == {2: "stale result for 1"}


@pytest.mark.parametrize("finish", ["complete", "fail"])
def test_loading_flag_clears_regardless_of_key(finish: str) -> None:
    store = KeyedEntityStore()

    assert store.begin_fetch("x").is_loading is True
    if finish == "complete":
        state = store.complete_fetch(1, key="other")
    else:
        state = store.fail_fetch(RuntimeError("down"))

    assert state.is_loading is False


def test_fail_fetch_records_error_and_keeps_entities() -> None:
    store = _store_with({"a": 1})
    error = RuntimeError("503")

    store.begin_fetch("a")
    state = store.fail_fetch(error)

    assert state.entities == {"a": 1}
    assert isinstance(state.error, RuntimeError)
    assert str(state.error) == "503"
    assert state.fetch_status is OperationStatus.FAILURE


def test_latest_error_overwrites_previous() -> None:
    store = KeyedEntityStore()

    store.fail_fetch("first")
    state = store.fail_secondary("second")

    assert state.error == "second"


def test_store_usable_after_failure() -> None:
    store = KeyedEntityStore()

    store.begin_fetch("a")
    store.fail_fetch("boom")
    store.begin_fetch("a")
    state = store.complete_fetch({"ok": True})

    assert state.entities == {"a": {"ok": True}}
    assert state.fetch_status is OperationStatus.SUCCESS


def test_secondary_channel() -> None:
    store = _store_with({"a": 1})

    state = store.begin_secondary("a")
    assert state.is_loading is True
    assert state.active_key == "a"
    assert state.secondary_status is OperationStatus.LOADING
    assert state.fetch_status is OperationStatus.IDLE

    state = store.complete_secondary("new-password")
    assert state.is_loading is False
    assert state.secondary_result == "new-password"
    assert state.entities == {"a": 1}
    assert state.status(OperationChannel.SECONDARY) is OperationStatus.SUCCESS


def test_secondary_failure() -> None:
    store = KeyedEntityStore()

    store.begin_secondary(4)
    state = store.fail_secondary("locked")

    assert state.is_loading is False
    assert state.error == "locked"
    assert state.secondary_status is OperationStatus.FAILURE


def test_begin_secondary_shares_active_key_with_fetch() -> None:
    store = KeyedEntityStore()

    store.begin_fetch("a")
    store.begin_secondary("b")
    state = store.complete_fetch(1)

    assert state.entities == {"b": 1}


def test_begin_intent_without_key_is_rejected() -> None:
    with pytest.raises(InvalidIntentError):
        reduce(EntityState(), StoreIntent(type=IntentType.FETCH))


def test_reduce_does_not_mutate_previous_state() -> None:
    before = EntityState(entities={"a": 1})
    loading = reduce(before, StoreIntent.fetch("a"))
    after = reduce(loading, StoreIntent.fetch_success(2))

    assert before.entities == {"a": 1}
    assert loading.entities == {"a": 1}
    assert after.entities == {"a": 2}


def test_state_reads_are_copies() -> None:
    store = _store_with({"a": {"nested": 1}})

    store.state.entities["a"]["nested"] = 99
    fetched = store.get("a")
    fetched["nested"] = 42

    assert store.get("a") == {"nested": 1}
    assert store.get("missing") is None


def test_dispatch_accepts_wire_intents() -> None:
    store = KeyedEntityStore()

    store.dispatch(StoreIntent.model_validate({"type": "fetch", "key": "a"}))
    state = store.dispatch(StoreIntent.model_validate({"type": "fetchSuccess", "value": [1, 2]}))

    assert state.entities == {"a": [1, 2]}


def test_subscribe_and_unsubscribe() -> None:
    store = KeyedEntityStore()
    seen: list[tuple[IntentType, bool]] = []

    unsubscribe = store.subscribe(lambda intent, state: seen.append((intent.type, state.is_loading)))
    store.begin_fetch("a")
    unsubscribe()
    store.complete_fetch(1)

    assert seen == [(IntentType.FETCH, True)]


def test_history_and_reset() -> None:
    store = KeyedEntityStore(config=TtmsConfig(keep_history=True))

    store.begin_fetch("a")
    store.complete_fetch(1)

    history = store.snapshots
    assert len(history) == 3
    assert history[0].entities == {}
    assert history[-1].entities == {"a": 1}

    store.reset()
    assert store.state == EntityState()
    assert len(store.snapshots) == 1


def test_history_disabled_by_default() -> None:
    store = KeyedEntityStore()
    store.begin_fetch("a")
    assert store.snapshots == []


def test_debug_log_redacts_secondary_result(caplog: pytest.LogCaptureFixture) -> None:
    store = KeyedEntityStore()

    with caplog.at_level(logging.DEBUG, logger="ttms.state.store"):
        store.begin_secondary("a")
        store.complete_secondary("hunter2")

    assert "resetSecondarySuccess" in caplog.text
    assert "hunter2" not in caplog.text


def test_returned_states_are_detached_from_store() -> None:
    store = _store_with({"a": 1})

    store.begin_fetch("b").entities["zzz"] = 666
    store.complete_fetch(2).entities["yyy"] = 777

    assert store.state.entities == {"a": 1, "b": 2}


def test_listener_state_is_detached_from_store() -> None:
    store = _store_with({"a": 1})
    store.subscribe(lambda intent, state: state.entities.clear())

    store.begin_fetch("a")

    assert store.state.entities == {"a": 1}


def test_history_is_not_rewritten_by_later_mutation() -> None:
    store = KeyedEntityStore(config=TtmsConfig(keep_history=True))

    store.begin_fetch("a")
    store.complete_fetch(1)
    store.begin_fetch("b").entities["x"] = 2
    store.snapshots[0].entities["y"] = 3

    assert [snapshot.entities for snapshot in store.snapshots] == [{}, {}, {"a": 1}, {"a": 1}]


def test_reset_restores_untouched_initial_state() -> None:
    initial = EntityState(entities={"a": 1})
    store = KeyedEntityStore(initial=initial)

    store.begin_fetch("a").entities["b"] = 2
    initial.entities["c"] = 3
    store.reset()

    assert store.state.entities == {"a": 1}


def test_reduce_never_shares_entities_mapping() -> None:
    before = EntityState(entities={"a": 1})

    for intent in (
        StoreIntent.fetch("a"),
        StoreIntent.fetch_failure("x"),
        StoreIntent.reset_secondary("a"),
        StoreIntent.reset_secondary_success("p"),
    ):
        assert reduce(before, intent).entities is not before.entities


@pytest.mark.parametrize("key", [uuid.UUID("12345678-1234-5678-1234-567812345678"), ("agency", 7), 2.5])
def test_opaque_keys_stored_as_dispatched(key: object) -> None:
    store = KeyedEntityStore()

    store.begin_fetch(key)
    state = store.complete_fetch("value")

    assert state.active_key == key
    assert type(state.active_key) is type(key)
    assert state.entities == {key: "value"}
    assert store.get(key) == "value"


def test_numeric_looking_key_is_not_coerced() -> None:
    store = KeyedEntityStore()

    store.begin_fetch("7")
    state = store.complete_fetch("v")

    assert state.active_key == "7"
    assert list(state.entities) == ["7"]
