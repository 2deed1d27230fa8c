"""Product router - FastAPI endpoints for product operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Product
from .schemas import AssignProductRequest, ProductCreate, ProductResponse, ProductUpdate
from .service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency injection for ProductService"""
    return ProductService(db)


def to_product_response(p: Product) -> ProductResponse:
    return ProductResponse(
        id=p.id,
        name=p.name,
        description=p.description,
        price=p.price,
        stock=p.stock,
        category=p.category,
        assignedTo=p.assigned_to,
        isActive=p.is_active,
        createdAt=p.created_at,
        updatedAt=p.updated_at,
    )


@router.get("", response_model=list[ProductResponse])
def get_products(service: ProductService = Depends(get_product_service)):
    """Get all active products"""
    return [to_product_response(p) for p in service.get_products()]


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    data: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    """Create a new product"""
    return to_product_response(service.create_product(data))


# Declared before /{product_id} so the static segment wins
@router.get("/customer/{customer_id}", response_model=list[ProductResponse])
def get_customer_products(
    customer_id: int,
    service: ProductService = Depends(get_product_service),
):
    """Get the products assigned to a customer"""
    return [to_product_response(p) for p in service.get_customer_products(customer_id)]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    return to_product_response(service.get_product(product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    data: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    """Update a product"""
    return to_product_response(service.update_product(product_id, data))


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    """Soft delete a product"""
    return service.delete_product(product_id)


@router.post("/{product_id}/assign", response_model=ProductResponse)
def assign_product(
    product_id: int,
    data: AssignProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Assign a product to a customer"""
    return to_product_response(service.assign_product(product_id, data.customerId))


@router.post("/{product_id}/unassign", response_model=ProductResponse)
def unassign_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    """Remove a product's customer assignment"""
    return to_product_response(service.unassign_product(product_id))
