"""Tests for the visit rollover triggers."""
import asyncio
from datetime import date, datetime, timedelta

import pytest

import run_visit_worker as runner
from app import worker
from app.services import visit_automation
from app.workers import visit_worker
from app.workers.visit_worker import run_visit_worker, should_run_rollover


class TestShouldRunRollover:

    def test_fires_after_midnight_when_not_run_today(self):
        assert should_run_rollover(datetime(2024, 3, 15, 0, 0), date(2024, 3, 14), hour=0, minute=0)

    def test_fires_once_per_day(self):
        assert not should_run_rollover(datetime(2024, 3, 15, 0, 1), date(2024, 3, 15), hour=0, minute=0)

    def test_fires_on_first_start(self):
        assert should_run_rollover(datetime(2024, 3, 15, 13, 45), None, hour=0, minute=0)

    def test_waits_for_configured_time(self):
        assert not should_run_rollover(datetime(2024, 3, 15, 2, 59), date(2024, 3, 14), hour=3, minute=0)
        assert should_run_rollover(datetime(2024, 3, 15, 3, 0), date(2024, 3, 14), hour=3, minute=0)


def test_worker_loop_runs_rollover_once_per_day(monkeypatch):
    calls = []

    def fake_manage(now=None):
        calls.append(now)
        return {"cancelled": 0, "completed": 0, "created": 0, "failed": 0}

    async def run_several_ticks():
        task = asyncio.create_task(run_visit_worker(interval_seconds=0.01))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    monkeypatch.setattr(visit_worker, "manage_automatic_visits", fake_manage)
    monkeypatch.setattr(
        visit_worker, "should_run_rollover", lambda now, last_run_date: last_run_date != now.date()
    )

    asyncio.run(run_several_ticks())

    assert len(calls) == 1


class TestArqRolloverTask:

    def test_returns_summary(self, session_factory, make_customer, make_visit, monkeypatch):
        today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        customer = make_customer(visit_frequency=7)
        make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
        )
        monkeypatch.setattr(worker, "SessionLocal", session_factory)

        summary = asyncio.run(worker.visit_rollover_task({}))

        assert summary == {"cancelled": 0, "completed": 1, "created": 1, "failed": 0}

    def test_failure_is_logged_not_raised(self, session_factory, monkeypatch):
        def broken(session, now=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(worker, "SessionLocal", session_factory)
        monkeypatch.setattr(visit_automation, "run_visit_rollover", broken)

        assert asyncio.run(worker.visit_rollover_task({})) is None


class TestStandaloneRunner:

    def test_once_runs_a_single_rollover(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            runner,
            "manage_automatic_visits",
            lambda: calls.append(1) or {"cancelled": 0, "completed": 0, "created": 0, "failed": 0},
        )

        assert runner.main(["--once"]) == 0
        assert calls == [1]

    def test_once_exits_non_zero_on_failure(self, monkeypatch):
        monkeypatch.setattr(runner, "manage_automatic_visits", lambda: None)

        assert runner.main(["--once"]) == 1
