"""Visit repository - Database operations for visits"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models_visit import VISIT_CANCELLED, Visit


class VisitRepository:
    """Repository for visit database operations"""

    @staticmethod
    def get_visits(
        db: Session,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        customer_id: Optional[int] = None,
    ) -> list[Visit]:
        """Get active visits, newest visit date first"""
        query = (
            db.query(Visit)
            .options(joinedload(Visit.customer))
            .filter(Visit.is_active.is_(True))
        )

        if status:
            query = query.filter(Visit.status == status)
        if customer_id is not None:
            query = query.filter(Visit.customer_id == customer_id)
        if start_date is not None:
            query = query.filter(Visit.visit_date >= start_date)
        if end_date is not None:
            query = query.filter(Visit.visit_date <= end_date)

        return query.order_by(Visit.visit_date.desc(), Visit.id.desc()).all()

    @staticmethod
    def get_overdue_visits(db: Session, now: datetime) -> list[Visit]:
        """Active, non-cancelled visits whose next visit date has passed"""
        return (
            db.query(Visit)
            .options(joinedload(Visit.customer))
            .filter(
                Visit.is_active.is_(True),
                Visit.next_visit_date < now,
                Visit.status != VISIT_CANCELLED,
            )
            .order_by(Visit.next_visit_date.asc(), Visit.id.asc())
            .all()
        )

    @staticmethod
    def get_visit_by_id(db: Session, visit_id: int) -> Optional[Visit]:
        """Get an active visit by ID"""
        return (
            db.query(Visit)
            .options(joinedload(Visit.customer))
            .filter(Visit.id == visit_id, Visit.is_active.is_(True))
            .first()
        )

    @staticmethod
    def find_visit(db: Session, visit_id: int) -> Optional[Visit]:
        """Get a visit by ID regardless of its active flag"""
        return db.get(Visit, visit_id)

    @staticmethod
    def create_visit(db: Session, **visit_data) -> Visit:
        visit = Visit(**visit_data)
        db.add(visit)
        db.commit()
        db.refresh(visit)
        return visit

    @staticmethod
    def update_visit(db: Session, visit: Visit, **updates) -> Visit:
        """Update a visit with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(visit, key):
                setattr(visit, key, value)

        db.commit()
        db.refresh(visit)
        return visit

    @staticmethod
    def deactivate_visit(db: Session, visit: Visit) -> None:
        """Soft delete a visit; status is left as is"""
        visit.is_active = False
        db.commit()
