"""Visit service - Scheduling logic for customer visits"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import InvalidArgumentError, NotFoundError, store_errors
from ...models_visit import VISIT_SCHEDULED, VISIT_STATUSES, Visit
from ...services.visit_automation import compute_next_visit_date
from ..customers.repository import CustomerRepository
from ..customers.service import CUSTOMER_NOT_FOUND
from .repository import VisitRepository
from .schemas import VisitCreate, VisitUpdate

logger = logging.getLogger(__name__)

VISIT_NOT_FOUND = "Ziyaret kaydı bulunamadı"


class VisitService:
    """Service layer for visit business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VisitRepository()
        self.customers = CustomerRepository()

    def get_visits(
        self,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        customer_id: Optional[int] = None,
    ) -> list[Visit]:
        return self.repo.get_visits(self.db, status, start_date, end_date, customer_id)

    def get_overdue_visits(self, now: Optional[datetime] = None) -> list[Visit]:
        """Visits whose next visit date has already passed"""
        return self.repo.get_overdue_visits(self.db, now or datetime.now())

    def get_visit(self, visit_id: int) -> Visit:
        visit = self.repo.get_visit_by_id(self.db, visit_id)
        if not visit:
            raise NotFoundError(VISIT_NOT_FOUND)
        return visit

    def create_visit(self, data: VisitCreate) -> Visit:
        """
        Schedule a visit for a customer.

        Only the customer's existence is checked, not its active flag.
        """
        customer = self.customers.find_customer(self.db, data.customerId)
        if not customer:
            raise NotFoundError(CUSTOMER_NOT_FOUND)

        with store_errors(self.db, "Ziyaret kaydı oluşturulurken bir hata oluştu"):
            visit = self.repo.create_visit(
                self.db,
                customer_id=customer.id,
                visit_date=data.visitDate,
                next_visit_date=compute_next_visit_date(data.visitDate, customer.visit_frequency),
                notes=data.notes,
                status=VISIT_SCHEDULED,
            )

        logger.info(
            f"📅 Visit {visit.id} scheduled for customer {customer.id} "
            f"on {visit.visit_date:%Y-%m-%d} (next: {visit.next_visit_date:%Y-%m-%d})"
        )
        return visit

    def update_visit(self, visit_id: int, data: VisitUpdate) -> Visit:
        """
        Update a visit.

        A changed visit date re-derives the next visit date from the customer's
        frequency; if the customer can no longer be found the next visit date
        is left untouched.
        """
        visit = self.repo.find_visit(self.db, visit_id)
        if not visit:
            raise NotFoundError(VISIT_NOT_FOUND)

        if data.status is not None and data.status not in VISIT_STATUSES:
            raise InvalidArgumentError(
                "Geçersiz durum. Sadece \"scheduled\", \"completed\" veya \"cancelled\" olabilir."
            )

        updates = {"status": data.status, "notes": data.notes}

        if data.visitDate is not None and data.visitDate != visit.visit_date:
            updates["visit_date"] = data.visitDate
            customer = self.customers.find_customer(self.db, visit.customer_id)
            if customer:
                updates["next_visit_date"] = compute_next_visit_date(
                    data.visitDate, customer.visit_frequency
                )
            else:
                logger.warning(
                    f"⚠️ Customer {visit.customer_id} not found, keeping next visit date of visit {visit.id}"
                )

        with store_errors(self.db, "Ziyaret kaydı güncellenirken bir hata oluştu"):
            return self.repo.update_visit(self.db, visit, **updates)

    def delete_visit(self, visit_id: int) -> dict:
        visit = self.repo.find_visit(self.db, visit_id)
        if not visit:
            raise NotFoundError(VISIT_NOT_FOUND)

        with store_errors(self.db, "Ziyaret kaydı silinirken bir hata oluştu"):
            self.repo.deactivate_visit(self.db, visit)

        logger.info(f"🗑️ Visit {visit_id} deactivated")
        return {"message": "Ziyaret kaydı başarıyla silindi"}
