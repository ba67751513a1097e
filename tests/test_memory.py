import logging

import numpy as np
import pytest

from bandpulse.memory_manager import ColorCache, MemoryManager
from bandpulse.object_pool import ObjectPool, Particle


def test_pool_reuses_released_objects():
    pool = ObjectPool(Particle, initial_size=2, max_size=10)
    a = pool.acquire()
    a.init(1, 2, 0, 0, 1.0, 4, (1, 2, 3, 255))
    pool.release(a)

    assert not a.active
    assert a.x == 0.0
    assert pool.acquire() is a


def test_pool_grows_when_exhausted():
    pool = ObjectPool(Particle, initial_size=1, max_size=10)
    pool.acquire()
    extra = pool.acquire()
    assert isinstance(extra, Particle)
    assert pool.get_stats() == {"available": 0, "active": 2, "max_size": 10}


def test_pool_drops_beyond_max_size():
    pool = ObjectPool(Particle, initial_size=0, max_size=2)
    objects = [pool.acquire() for _ in range(4)]
    pool.release_all(objects)
    assert pool.get_stats()["available"] == 2
    assert pool.get_stats()["active"] == 0


def test_particle_lifecycle():
    p = Particle()
    p.init(0.0, 0.0, 2.0, -1.0, 1.0, 5.0, (255, 255, 255, 255))
    assert p.update(1.0)
    assert (p.x, p.y) == (2.0, -1.0)
    assert p.life == pytest.approx(0.984)
    assert p.fade == pytest.approx(0.984)

    p.life = 0.01
    assert not p.update(1.0)
    assert not p.active


def test_color_cache_evicts_least_recently_used():
    cache = ColorCache(2)
    cache.get(1, 1, 1)
    cache.get(2, 2, 2)
    cache.get(1, 1, 1)
    cache.get(3, 3, 3)

    assert (1, 1, 1, 255) in cache
    assert (2, 2, 2, 255) not in cache
    assert len(cache) == 2


def test_color_cache_returns_shared_tuple():
    cache = ColorCache()
    assert cache.get(10, 20, 30, 40) is cache.get(10, 20, 30, 40)


def test_failing_cleanup_does_not_stop_others(caplog):
    manager = MemoryManager()
    calls = []

    def broken():
        raise RuntimeError("boom")

    manager.on_cleanup(broken)
    manager.on_cleanup(lambda: calls.append("ok"))

    with caplog.at_level(logging.WARNING):
        manager.perform_cleanup()

    assert calls == ["ok"]
    assert "boom" in caplog.text


def test_periodic_cleanup():
    manager = MemoryManager(cleanup_interval=30.0)
    calls = []
    manager.on_cleanup(lambda: calls.append(1))

    manager.update(100.0)
    manager.update(110.0)
    manager.update(131.0)
    assert len(calls) == 2


def test_critical_memory_forces_cleanup(monkeypatch):
    manager = MemoryManager(cleanup_interval=30.0)
    monkeypatch.setattr(manager, "memory_usage", lambda: 0.95)
    calls = []
    manager.on_cleanup(lambda: calls.append(1))
    manager.get_temp_array(256).fill(1.0)

    manager.last_cleanup = 100.0
    manager.start_monitoring(interval=5.0)
    manager.update(101.0)

    assert calls == [1]
    assert not manager.get_temp_array(256).any()

    manager.update(102.0)
    assert calls == [1]


def test_no_check_when_not_monitoring(monkeypatch):
    manager = MemoryManager()
    monkeypatch.setattr(manager, "memory_usage", lambda: 0.95)
    calls = []
    manager.on_cleanup(lambda: calls.append(1))
    manager.last_cleanup = 100.0
    manager.update(101.0)
    assert calls == []


def test_temp_arrays_are_reused():
    manager = MemoryManager()
    assert manager.get_temp_array(512) is manager.get_temp_array(512)
    assert manager.get_temp_array(2048).dtype == np.float32


def test_memory_usage_is_a_fraction():
    assert 0.0 < MemoryManager().memory_usage() < 1.0


def test_stats_and_dispose():
    manager = MemoryManager()
    pool = ObjectPool(Particle, initial_size=3)
    manager.register_pool("particles", pool)
    manager.get_color(1, 2, 3)

    stats = manager.get_stats()
    assert stats["pools"]["particles"]["available"] == 3
    assert stats["color_cache_size"] == 1

    manager.dispose()
    assert manager.pools == {}
    assert pool.get_stats()["available"] == 0
    assert len(manager.color_cache) == 0
    assert not manager.is_monitoring
