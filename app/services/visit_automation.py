"""
Automated visit rollover
Cancels missed visits, completes visits whose next date has arrived and
schedules the following visit for the same customer.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..models import Customer
from ..models_visit import VISIT_CANCELLED, VISIT_COMPLETED, VISIT_SCHEDULED, Visit

logger = logging.getLogger(__name__)


def compute_next_visit_date(visit_date: datetime, visit_frequency: int) -> datetime:
    """The next visit falls `visit_frequency` days after `visit_date`"""
    return visit_date + timedelta(days=visit_frequency)


def start_of_day(now: Optional[datetime] = None) -> datetime:
    """Local midnight of the given moment (defaults to now)"""
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def cancel_missed_visits(db: Session, today: datetime) -> int:
    """
    Cancel visits whose date passed without being completed.

    Visits already due for rollover and visits spawned by the rollover are
    left for the rollover pass. A spawned visit's date is the day its
    predecessor was due, usually already in the past, so it cannot be
    "missed": it is completed once its own next visit date arrives.
    """
    cancelled = (
        db.query(Visit)
        .filter(
            Visit.is_active.is_(True),
            Visit.visit_date < today,
            Visit.status.notin_([VISIT_COMPLETED, VISIT_CANCELLED]),
            Visit.next_visit_date > today,
            Visit.is_auto_generated.is_(False),
        )
        .update({Visit.status: VISIT_CANCELLED}, synchronize_session=False)
    )
    db.commit()

    if cancelled:
        logger.info(f"🚫 Cancelled {cancelled} missed visits")
    return cancelled


def roll_over_visit(db: Session, visit: Visit) -> Optional[Visit]:
    """
    Complete a due visit and schedule the next one.

    The old visit is committed as completed before the new visit is inserted.
    Returns None when the visit's customer no longer exists.
    """
    customer = db.get(Customer, visit.customer_id)
    if not customer:
        logger.warning(f"⚠️ Customer {visit.customer_id} not found, skipping visit {visit.id}")
        return None

    visit.status = VISIT_COMPLETED
    db.commit()

    next_visit = Visit(
        customer_id=customer.id,
        visit_date=visit.next_visit_date,
        next_visit_date=compute_next_visit_date(visit.next_visit_date, customer.visit_frequency),
        status=VISIT_SCHEDULED,
        is_auto_generated=True,
        is_active=True,
    )
    db.add(next_visit)
    db.commit()

    logger.info(
        f"✅ Visit {visit.id} completed, visit {next_visit.id} scheduled for "
        f"{next_visit.visit_date:%Y-%m-%d}"
    )
    return next_visit


def run_visit_rollover(db: Session, now: Optional[datetime] = None) -> dict:
    """
    Run one rollover over the visit table.

    Cancel pass first, then the rollover pass. A customer whose visits fell
    several intervals behind is caught up to the first visit whose next date
    is after today, so running it again on the same day is a no-op.

    Returns:
        dict: Summary of the changes made
    """
    today = start_of_day(now)
    summary = {"cancelled": 0, "completed": 0, "created": 0, "failed": 0}

    try:
        summary["cancelled"] = cancel_missed_visits(db, today)
    except Exception as e:
        logger.error(f"❌ Error cancelling missed visits: {str(e)}")
        db.rollback()
        raise

    due_visits = (
        db.query(Visit)
        .filter(
            Visit.is_active.is_(True),
            Visit.status == VISIT_SCHEDULED,
            Visit.next_visit_date <= today,
        )
        .order_by(Visit.next_visit_date.asc(), Visit.id.asc())
        .all()
    )

    # Spawned visits that are already due are rolled over in the same run
    while due_visits:
        visit = due_visits.pop(0)
        visit_id = visit.id
        try:
            next_visit = roll_over_visit(db, visit)
            if next_visit is not None:
                summary["completed"] += 1
                summary["created"] += 1
                if next_visit.visit_date < next_visit.next_visit_date <= today:
                    due_visits.append(next_visit)
        except Exception as e:
            logger.error(f"❌ Failed to roll over visit {visit_id}: {str(e)}")
            db.rollback()
            summary["failed"] += 1
            continue

    logger.info(f"📊 Visit rollover summary: {summary}")
    return summary


def manage_automatic_visits(now: Optional[datetime] = None) -> Optional[dict]:
    """
    Entry point for periodic triggers.

    Opens its own session and never raises: failures are logged so the
    trigger keeps running.
    """
    logger.info("🔄 Starting automatic visit management")

    db = SessionLocal()
    try:
        return run_visit_rollover(db, now)
    except Exception as e:
        logger.error(f"❌ Automatic visit management failed: {str(e)}")
        return None
    finally:
        db.close()
