"""Tests for the automated visit rollover."""
from datetime import datetime, timedelta

import pytest

from app.models_visit import VISIT_CANCELLED, VISIT_COMPLETED, VISIT_SCHEDULED, Visit
from app.services import visit_automation
from app.services.visit_automation import (
    compute_next_visit_date,
    manage_automatic_visits,
    run_visit_rollover,
    start_of_day,
)


def all_visits(db):
    db.expire_all()
    return db.query(Visit).order_by(Visit.id).all()


class TestNextVisitDate:

    def test_adds_frequency_in_days(self):
        visit_date = datetime(2024, 1, 28, 10, 0, 0)
        assert compute_next_visit_date(visit_date, 7) == datetime(2024, 2, 4, 10, 0, 0)

    def test_crosses_month_and_leap_day(self):
        assert compute_next_visit_date(datetime(2024, 2, 25), 5) == datetime(2024, 3, 1)

    def test_start_of_day(self, now, today):
        assert start_of_day(now) == today


class TestRollover:

    def test_due_visit_is_completed_and_next_visit_created(self, db, make_customer, make_visit, now, today):
        customer = make_customer(visit_frequency=7)
        visit_a = make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
        )

        summary = run_visit_rollover(db, now)

        assert summary == {"cancelled": 0, "completed": 1, "created": 1, "failed": 0}
        visits = all_visits(db)
        assert len(visits) == 2

        a, b = visits
        assert a.id == visit_a.id
        assert a.status == VISIT_COMPLETED
        assert b.customer_id == customer.id
        assert b.visit_date == today - timedelta(days=3)
        assert b.next_visit_date == today + timedelta(days=4)
        assert b.status == VISIT_SCHEDULED
        assert b.is_auto_generated is True
        assert b.is_active is True

    def test_missed_visit_is_cancelled_without_successor(self, db, make_customer, make_visit, now, today):
        customer = make_customer(visit_frequency=7)
        make_visit(customer, visit_date=today - timedelta(days=1))

        summary = run_visit_rollover(db, now)

        assert summary["cancelled"] == 1
        assert summary["created"] == 0
        visits = all_visits(db)
        assert len(visits) == 1
        assert visits[0].status == VISIT_CANCELLED

    def test_second_run_changes_nothing(self, db, make_customer, make_visit, now, today):
        customer = make_customer(visit_frequency=7)
        make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
        )
        make_visit(customer, visit_date=today - timedelta(days=2))

        run_visit_rollover(db, now)
        snapshot = [(v.id, v.status, v.visit_date, v.next_visit_date) for v in all_visits(db)]

        summary = run_visit_rollover(db, now + timedelta(hours=5))

        assert summary == {"cancelled": 0, "completed": 0, "created": 0, "failed": 0}
        assert [(v.id, v.status, v.visit_date, v.next_visit_date) for v in all_visits(db)] == snapshot

    def test_visit_several_intervals_behind_is_caught_up(self, db, make_customer, make_visit, now, today):
        customer = make_customer(visit_frequency=7)
        make_visit(
            customer,
            visit_date=today - timedelta(days=30),
            next_visit_date=today - timedelta(days=23),
        )

        summary = run_visit_rollover(db, now)

        assert summary["completed"] == 4
        assert summary["created"] == 4
        visits = all_visits(db)
        scheduled = [v for v in visits if v.status == VISIT_SCHEDULED]
        assert len(scheduled) == 1
        assert scheduled[0].visit_date == today - timedelta(days=2)
        assert scheduled[0].next_visit_date == today + timedelta(days=5)
        assert all(v.status == VISIT_COMPLETED for v in visits if v is not scheduled[0])

        # Nothing left to do on the same day
        assert run_visit_rollover(db, now)["created"] == 0

    def test_next_visit_uses_current_customer_frequency(self, db, make_customer, make_visit, now, today):
        customer = make_customer(visit_frequency=7)
        make_visit(
            customer,
            visit_date=today - timedelta(days=7),
            next_visit_date=today,
        )
        customer.visit_frequency = 14
        db.commit()

        run_visit_rollover(db, now)

        new_visit = all_visits(db)[-1]
        assert new_visit.visit_date == today
        assert new_visit.next_visit_date == today + timedelta(days=14)

    def test_visit_later_today_is_left_alone(self, db, make_customer, make_visit, now, today):
        customer = make_customer()
        visit = make_visit(customer, visit_date=today + timedelta(hours=15))

        summary = run_visit_rollover(db, now)

        assert summary == {"cancelled": 0, "completed": 0, "created": 0, "failed": 0}
        db.refresh(visit)
        assert visit.status == VISIT_SCHEDULED

    @pytest.mark.parametrize("overrides", [
        {"status": VISIT_COMPLETED},
        {"status": VISIT_CANCELLED},
        {"is_active": False},
    ])
    def test_closed_and_deleted_visits_are_ignored(self, db, make_customer, make_visit, now, today, overrides):
        customer = make_customer()
        visit = make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
            **overrides,
        )

        summary = run_visit_rollover(db, now)

        assert summary["completed"] == 0
        assert summary["created"] == 0
        assert len(all_visits(db)) == 1
        assert visit.status == overrides.get("status", VISIT_SCHEDULED)

    def test_visit_without_customer_is_skipped(self, db, make_customer, make_visit, now, today):
        customer = make_customer()
        orphan = Visit(
            customer_id=customer.id + 100,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
            status=VISIT_SCHEDULED,
        )
        db.add(orphan)
        db.commit()

        summary = run_visit_rollover(db, now)

        assert summary["completed"] == 0
        assert summary["failed"] == 0
        db.refresh(orphan)
        assert orphan.status == VISIT_SCHEDULED

    def test_failed_visit_does_not_stop_the_run(self, db, make_customer, make_visit, now, today, monkeypatch):
        customer = make_customer()
        first = make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
        )
        second = make_visit(
            customer,
            visit_date=today - timedelta(days=9),
            next_visit_date=today - timedelta(days=2),
        )
        first_id = first.id
        original = visit_automation.roll_over_visit

        def flaky_roll_over(session, visit):
            if visit.id == first_id:
                raise RuntimeError("boom")
            return original(session, visit)

        monkeypatch.setattr(visit_automation, "roll_over_visit", flaky_roll_over)

        summary = run_visit_rollover(db, now)

        assert summary["failed"] == 1
        assert summary["completed"] == 1
        db.refresh(first)
        db.refresh(second)
        assert first.status == VISIT_SCHEDULED
        assert second.status == VISIT_COMPLETED


class TestManageAutomaticVisits:

    def test_runs_with_its_own_session(self, session_factory, make_customer, make_visit, now, today, monkeypatch):
        customer = make_customer()
        make_visit(
            customer,
            visit_date=today - timedelta(days=10),
            next_visit_date=today - timedelta(days=3),
        )
        monkeypatch.setattr(visit_automation, "SessionLocal", session_factory)

        summary = manage_automatic_visits(now)

        assert summary["completed"] == 1

    def test_never_raises(self, session_factory, monkeypatch):
        def broken(session, now=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(visit_automation, "SessionLocal", session_factory)
        monkeypatch.setattr(visit_automation, "run_visit_rollover", broken)

        assert manage_automatic_visits() is None
