import asyncio

from app.services.scheduler import SchedulerService


class SlowGuestPool:
    """Sweep that blocks until released."""

    def __init__(self):
        self.calls = 0
        self.finished = 0
        self.release = asyncio.Event()

    async def run_maintenance_sweep_once(self):
        self.calls += 1
        await self.release.wait()
        self.finished += 1
        return True


class BrokenGuestPool:
    def __init__(self):
        self.calls = 0

    async def run_maintenance_sweep_once(self):
        self.calls += 1
        raise RuntimeError("database unavailable")


async def test_first_sweep_runs_immediately():
    pool = SlowGuestPool()
    pool.release.set()
    scheduler = SchedulerService(guest_pool=pool, sweep_interval=3600)

    await scheduler.start()
    await asyncio.sleep(0.05)

    assert pool.calls == 1
    assert scheduler.running
    await scheduler.stop()


async def test_ticks_are_skipped_while_a_sweep_is_running():
    pool = SlowGuestPool()
    scheduler = SchedulerService(guest_pool=pool, sweep_interval=0.01)

    await scheduler.start()
    await asyncio.sleep(0.2)

    assert pool.calls == 1
    assert scheduler.tick_count > 1
    assert scheduler.skipped_ticks == scheduler.tick_count - 1

    pool.release.set()
    await asyncio.sleep(0.1)
    assert pool.calls > 1

    await scheduler.stop()


async def test_stop_waits_for_in_flight_sweep():
    pool = SlowGuestPool()
    scheduler = SchedulerService(guest_pool=pool, sweep_interval=3600)

    await scheduler.start()
    await asyncio.sleep(0.05)
    assert pool.calls == 1

    stopping = asyncio.create_task(scheduler.stop())
    await asyncio.sleep(0.05)
    assert not stopping.done()
    assert pool.finished == 0

    pool.release.set()
    await stopping

    assert pool.finished == 1
    assert not scheduler.running


async def test_failing_sweep_does_not_stop_the_schedule():
    pool = BrokenGuestPool()
    scheduler = SchedulerService(guest_pool=pool, sweep_interval=0.01)

    await scheduler.start()
    await asyncio.sleep(0.1)
    await scheduler.stop()

    assert pool.calls > 1
    assert scheduler.skipped_ticks < scheduler.tick_count


async def test_stop_without_start_is_a_no_op():
    scheduler = SchedulerService(guest_pool=SlowGuestPool(), sweep_interval=1)

    await scheduler.stop()

    assert not scheduler.running
    assert scheduler.tick_count == 0
