# tests/unit/test_registry.py
import threading

import pytest

from core.errors import InvalidArgumentError
from core.timing.stopwatch import Stopwatch
from sdk import registry as registry_mod
from sdk.registry import StopwatchRegistry


def test_create_returns_registered_stopwatch(registry):
    sw = registry.create("A")
    assert isinstance(sw, Stopwatch)
    assert sw.id == "A"
    assert "A" in registry
    assert registry.get("A") is sw
    assert len(registry) == 1


def test_duplicate_id_rejected(registry):
    first = registry.create("A")
    with pytest.raises(InvalidArgumentError):
        registry.create("A")
    assert registry.list_all() == [first]


@pytest.mark.parametrize("bad", ["", None])
def test_empty_or_missing_id_rejected(registry, bad):
    with pytest.raises(InvalidArgumentError):
        registry.create(bad)  # type: ignore[arg-type]
    assert registry.list_all() == []


def test_invalid_argument_is_a_value_error(registry):
    with pytest.raises(ValueError):
        registry.create("")


def test_list_all_is_a_snapshot(registry):
    assert registry.list_all() == []
    a = registry.create("A")
    b = registry.create("B")
    listed = registry.list_all()
    assert listed == [a, b]

    listed.clear()
    assert registry.list_all() == [a, b]
    assert registry.get("missing") is None


def test_registry_passes_clock_to_stopwatches(registry, clock):
    sw = registry.create("A")
    sw.start()
    clock.advance(42)
    assert sw.stop() == 42


def test_registries_are_isolated():
    r1, r2 = StopwatchRegistry(), StopwatchRegistry()
    r1.create("same")
    r2.create("same")
    assert r1.get("same") is not r2.get("same")


def test_concurrent_create_same_id_has_one_winner():
    registry = StopwatchRegistry()
    n_threads = 10
    barrier = threading.Barrier(n_threads)
    lock = threading.Lock()
    created, rejected = [], []

    def _contend():
        barrier.wait()
        try:
            sw = registry.create("dup")
        except InvalidArgumentError as exc:
            with lock:
                rejected.append(exc)
            return
        with lock:
            created.append(sw)

    pool = [threading.Thread(target=_contend) for _ in range(n_threads)]
    for t in pool:
        t.start()
    for t in pool:
        t.join()

    assert len(created) == 1
    assert len(rejected) == n_threads - 1
    assert [sw.id for sw in registry.list_all()] == ["dup"]
    assert registry.list_all()[0] is created[0]


def test_concurrent_create_distinct_ids():
    registry = StopwatchRegistry()
    barrier = threading.Barrier(16)

    def _create(i):
        barrier.wait()
        registry.create(f"sw-{i}")

    pool = [threading.Thread(target=_create, args=(i,)) for i in range(16)]
    for t in pool:
        t.start()
    for t in pool:
        t.join()

    assert sorted(sw.id for sw in registry.list_all()) == sorted(f"sw-{i}" for i in range(16))


def test_module_level_helpers_use_default_registry(monkeypatch):
    monkeypatch.setattr(registry_mod, "REGISTRY", StopwatchRegistry())
    sw = registry_mod.get_stopwatch("global")
    assert registry_mod.get_stopwatches() == [sw]
    with pytest.raises(InvalidArgumentError):
        registry_mod.get_stopwatch("global")
