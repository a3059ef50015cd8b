import pytest

import app.services.guest_pool as guest_pool_package
from app.services.guest_pool import GuestPoolService
from scripts import run_guest_maintenance


@pytest.fixture
async def script_pool(session_factory, clock, monkeypatch):
    service = GuestPoolService(session_factory=session_factory, clock=clock, pool_target_size=2)
    monkeypatch.setattr(guest_pool_package, "guest_pool_service", service)
    yield service
    await service.wait_for_background_tasks()


async def test_run_sweep_goes_through_the_guarded_sweep(script_pool, capsys):
    await run_guest_maintenance.run_sweep()

    output = capsys.readouterr().out
    assert "Sweep completed" in output
    assert "Pooled guest accounts: 2/2" in output
    assert script_pool.sweep_count == 1


async def test_run_sweep_reports_skip_while_a_sweep_is_running(script_pool, capsys):
    script_pool.maintenance_running = True

    await run_guest_maintenance.run_sweep()

    output = capsys.readouterr().out
    assert "Sweep skipped" in output
    assert "Pooled guest accounts: 0/2" in output
    assert script_pool.sweep_count == 0
