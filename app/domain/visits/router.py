"""Visit router - FastAPI endpoints for visit scheduling"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...errors import InternalError
from ...models_visit import Visit
from ...services.visit_automation import run_visit_rollover
from ...shared.validators import to_local_naive
from ..customers.router import to_customer_summary
from .schemas import RolloverResult, VisitCreate, VisitResponse, VisitUpdate
from .service import VisitService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visits", tags=["Visits"])


def get_visit_service(db: Session = Depends(get_db)) -> VisitService:
    """Dependency injection for VisitService"""
    return VisitService(db)


def to_visit_response(v: Visit) -> VisitResponse:
    return VisitResponse(
        id=v.id,
        customerId=v.customer_id,
        customer=to_customer_summary(v.customer) if v.customer else None,
        visitDate=v.visit_date,
        nextVisitDate=v.next_visit_date,
        status=v.status,
        notes=v.notes,
        autoGenerated=v.is_auto_generated,
        isActive=v.is_active,
        createdAt=v.created_at,
        updatedAt=v.updated_at,
    )


@router.get("", response_model=list[VisitResponse])
def get_visits(
    status: Optional[str] = Query(None, description="Filter by visit status"),
    startDate: Optional[datetime] = Query(None, description="Earliest visit date (inclusive)"),
    endDate: Optional[datetime] = Query(None, description="Latest visit date (inclusive)"),
    customerId: Optional[int] = Query(None),
    service: VisitService = Depends(get_visit_service),
):
    """Get active visits, most recent visit date first"""
    visits = service.get_visits(
        status=status,
        start_date=to_local_naive(startDate),
        end_date=to_local_naive(endDate),
        customer_id=customerId,
    )
    return [to_visit_response(v) for v in visits]


@router.post("", response_model=VisitResponse, status_code=201)
def create_visit(
    data: VisitCreate,
    service: VisitService = Depends(get_visit_service),
):
    """Schedule a visit; the next visit date comes from the customer's frequency"""
    return to_visit_response(service.create_visit(data))


@router.get("/overdue", response_model=list[VisitResponse])
def get_overdue_visits(service: VisitService = Depends(get_visit_service)):
    """Visits whose next visit date has passed and that are not cancelled"""
    return [to_visit_response(v) for v in service.get_overdue_visits()]


@router.post("/test-automatic", response_model=RolloverResult)
def test_automatic_visits(db: Session = Depends(get_db)):
    """
    Manually trigger the visit rollover
    (In production this runs daily from the scheduler)
    """
    try:
        summary = run_visit_rollover(db)
    except Exception as e:
        logger.error(f"❌ Manual visit rollover failed: {str(e)}")
        raise InternalError("Otomatik ziyaret yönetimi sırasında hata oluştu") from e

    return RolloverResult(
        message="Otomatik ziyaret yönetimi başarıyla çalıştırıldı",
        summary=summary,
    )


@router.get("/{visit_id}", response_model=VisitResponse)
def get_visit(
    visit_id: int,
    service: VisitService = Depends(get_visit_service),
):
    return to_visit_response(service.get_visit(visit_id))


@router.put("/{visit_id}", response_model=VisitResponse)
def update_visit(
    visit_id: int,
    data: VisitUpdate,
    service: VisitService = Depends(get_visit_service),
):
    """Update a visit's date, status or notes"""
    return to_visit_response(service.update_visit(visit_id, data))


@router.delete("/{visit_id}")
def delete_visit(
    visit_id: int,
    service: VisitService = Depends(get_visit_service),
):
    """Soft delete a visit"""
    return service.delete_visit(visit_id)
