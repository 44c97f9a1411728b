"""
Monitor: one tick end to end, bus messages, timer loop.
"""

import asyncio
import json

from sentinel.assets import AssetRegistry
from sentinel.bus import K_UPDATES, UpdateBus
from sentinel.models import AssetCreateRequest, Position
from sentinel.monitor import Monitor

from .helpers import BrokenRedis, make_asset, square


def _monitor(motion, r=None, tick_interval=0.1):
    reg = AssetRegistry(motion)
    return Monitor(assets=reg, bus=UpdateBus(r), tick_interval=tick_interval)


def _messages(r):
    return [json.loads(x) for x in r.lists.get(K_UPDATES, [])]


def test_step_raises_alert_and_updates_status(motion):
    m = _monitor(motion)
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    m.assets.add_asset(make_asset("a2", 5.0, 5.0, speed=0.0))
    zone = m.create_zone(square(0, 0))

    new = m.step()

    assert len(new) == 1
    assert m.alerts.all() == new
    assert new[0].zone_id == zone.id
    assert new[0].risk_level == "low"
    assert m.assets.get("a1").status == "intruding"
    assert m.assets.get("a2").status == "safe"
    assert m.tick_count == 1


def test_consecutive_ticks_inside_zone_alert_once(motion):
    m = _monitor(motion)
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    m.create_zone(square(0, 0))

    for _ in range(5):
        m.step()

    assert len(m.alerts) == 1
    assert m.summary() == {
        "assets": 1, "safe": 0, "intruding": 1,
        "zones": 1, "alerts": 1, "active_intrusions": 1,
    }


def test_moving_asset_enters_and_leaves(motion):
    m = _monitor(motion)
    # heading north at 111 km/h -> 0.1 deg per second of simulated time
    m.assets.add_asset(make_asset("a1", -0.15, 0.15, heading=0.0, speed=111.0))
    m.create_zone(square(0, 0, 0.3))

    statuses = []
    for _ in range(6):
        m.step(dt=1.0)
        statuses.append(m.assets.get("a1").status)

    # lat: -0.05, 0.05, 0.15, 0.25, 0.35, 0.45
    assert statuses == ["safe", "intruding", "intruding", "intruding", "safe", "safe"]
    assert len(m.alerts) == 1


def test_bus_receives_updates(motion, recording_redis):
    m = _monitor(motion, recording_redis)
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    m.create_zone(square(0, 0))
    m.step()
    m.step()

    kinds = [msg["type"] for msg in _messages(recording_redis)]
    assert kinds == ["zone_created", "intrusion_detected", "asset_status", "tick", "tick"]

    status_msg = _messages(recording_redis)[2]["data"]
    assert status_msg == {"asset_id": "a1", "status": "intruding"}

    tick_msg = _messages(recording_redis)[-1]["data"]
    assert tick_msg["tick"] == 2
    assert tick_msg["assets"][0]["status"] == "intruding"


def test_redis_outage_does_not_stop_detection(motion):
    m = _monitor(motion, BrokenRedis())
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    m.create_zone(square(0, 0))

    assert len(m.step()) == 1
    assert m.assets.get("a1").status == "intruding"


def test_zone_added_between_ticks_is_seen_next_tick(motion):
    m = _monitor(motion)
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    assert m.step() == []
    m.create_zone(square(0, 0))
    assert len(m.step()) == 1


def test_add_asset_dynamically(motion, recording_redis):
    m = _monitor(motion, recording_redis)
    m.assets.bootstrap(2)
    asset = m.add_asset(AssetCreateRequest(position=Position(lat=0.5, lng=0.5), speed=0.0))

    assert asset.label == "VH-003"
    assert len(m.assets) == 3
    assert _messages(recording_redis)[-1]["type"] == "asset_added"


def test_timer_loop_start_stop(motion):
    m = _monitor(motion, tick_interval=0.01)
    m.assets.add_asset(make_asset("a1", 0.5, 0.5, speed=0.0))
    m.create_zone(square(0, 0))

    async def scenario():
        assert m.start() is True
        assert m.start() is False
        assert m.running
        await asyncio.sleep(0.1)
        assert await m.stop() is True
        assert await m.stop() is False

    asyncio.run(scenario())

    assert not m.running
    assert m.tick_count >= 1
    assert len(m.alerts) == 1


def test_loop_survives_failing_step(motion, monkeypatch):
    m = _monitor(motion, tick_interval=0.01)
    calls = []

    def bad_step(dt=None):
        calls.append(dt)
        raise RuntimeError("boom")

    monkeypatch.setattr(m, "step", bad_step)

    async def scenario():
        m.start()
        await asyncio.sleep(0.1)
        await m.stop()

    asyncio.run(scenario())
    assert len(calls) >= 2


def test_running_reflects_directly_awaited_loop(motion):
    m = _monitor(motion, tick_interval=0.01)

    async def scenario():
        task = asyncio.create_task(m.run())
        await asyncio.sleep(0.05)
        assert m.running
        assert m.start() is False

        assert await m.stop() is True
        await asyncio.wait_for(task, timeout=1.0)

    asyncio.run(scenario())
    assert not m.running
    assert m.tick_count >= 1


def test_stop_before_loop_starts(motion):
    m = _monitor(motion, tick_interval=0.01)

    async def scenario():
        assert m.start() is True
        assert m.running
        assert await m.stop() is True

    asyncio.run(scenario())
    assert not m.running
    assert m.tick_count == 0
