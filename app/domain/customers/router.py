"""Customer router - FastAPI endpoints for customer operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Customer
from .schemas import CustomerCreate, CustomerResponse, CustomerSummary, CustomerUpdate
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


def to_customer_response(c: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=c.id,
        storeName=c.store_name,
        authorizedPersons=c.authorized_persons or [],
        phone=c.phone,
        address=c.address,
        city=c.city,
        district=c.district,
        locationLink=c.location_link,
        routineName=c.routine_name,
        initialPoints=c.initial_points,
        visitFrequency=c.visit_frequency,
        isActive=c.is_active,
        createdAt=c.created_at,
        updatedAt=c.updated_at,
    )


def to_customer_summary(c: Customer) -> CustomerSummary:
    return CustomerSummary(
        id=c.id,
        storeName=c.store_name,
        phone=c.phone,
        city=c.city,
        district=c.district,
        visitFrequency=c.visit_frequency,
    )


@router.get("", response_model=list[CustomerResponse])
def get_customers(service: CustomerService = Depends(get_customer_service)):
    """Get all active customers"""
    return [to_customer_response(c) for c in service.get_customers()]


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer"""
    return to_customer_response(service.create_customer(data))


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    return to_customer_response(service.get_customer(customer_id))


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Update a customer"""
    return to_customer_response(service.update_customer(customer_id, data))


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    """Soft delete a customer"""
    return service.delete_customer(customer_id)
