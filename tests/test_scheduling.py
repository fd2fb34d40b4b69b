import asyncio

import pytest

from adaptive_rsvp.scheduling import AsyncioScheduler, ManualScheduler


def test_manual_scheduler_fires_in_due_order():
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.schedule_after(30, lambda: fired.append("late"))
    scheduler.schedule_after(10, lambda: fired.append("early"))
    scheduler.schedule_after(10, lambda: fired.append("early-second"))

    assert scheduler.advance(9) == 0
    assert scheduler.advance(1) == 2
    assert fired == ["early", "early-second"]
    assert scheduler.now() == 10
    scheduler.advance(100)
    assert fired == ["early", "early-second", "late"]
    assert scheduler.now() == 110


def test_manual_scheduler_runs_callbacks_scheduled_during_advance():
    scheduler = ManualScheduler()
    times: list[float] = []

    def tick() -> None:
        times.append(scheduler.now())
        if len(times) < 3:
            scheduler.schedule_after(5, tick)

    scheduler.schedule_after(5, tick)
    scheduler.advance(100)
    assert times == [5, 10, 15]


def test_cancelled_handles_never_fire():
    scheduler = ManualScheduler()
    fired: list[int] = []
    handle = scheduler.schedule_after(10, lambda: fired.append(1))
    scheduler.cancel(handle)

    assert scheduler.pending == 0
    scheduler.advance(1000)
    assert fired == []
    assert not handle.active
    # cancelling twice is harmless
    scheduler.cancel(handle)


def test_run_until_idle_and_negative_time():
    scheduler = ManualScheduler(start_ms=100)
    fired: list[float] = []
    scheduler.schedule_after(50, lambda: fired.append(scheduler.now()))
    scheduler.schedule_after(20, lambda: fired.append(scheduler.now()))

    assert scheduler.next_due() == 120
    assert scheduler.run_until_idle() == 2
    assert fired == [120, 150]
    assert scheduler.next_due() is None

    with pytest.raises(ValueError):
        scheduler.advance(-1)


def test_asyncio_scheduler_fires_and_cancels():
    async def scenario() -> list[str]:
        scheduler = AsyncioScheduler(asyncio.get_running_loop())
        fired: list[str] = []
        keep = scheduler.schedule_after(5, lambda: fired.append("kept"))
        dropped = scheduler.schedule_after(5, lambda: fired.append("dropped"))
        scheduler.cancel(dropped)
        await asyncio.sleep(0.05)
        assert keep.fired and not keep.active
        assert dropped.cancelled
        return fired

    assert asyncio.run(scenario()) == ["kept"]
