"""Suggestion router - FastAPI endpoints for customer⇄product suggestions"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    ResolveSuggestionRequest,
    SuggestCustomersRequest,
    SuggestionResponse,
    SuggestProductsRequest,
)
from .service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])


def get_suggestion_service(db: Session = Depends(get_db)) -> SuggestionService:
    """Dependency injection for SuggestionService"""
    return SuggestionService(db)


@router.post(
    "/customer/{customer_id}/products",
    response_model=list[SuggestionResponse],
    status_code=201,
)
def suggest_products_to_customer(
    customer_id: int,
    data: SuggestProductsRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Suggest one or more products to a customer"""
    return service.suggest_products_to_customer(customer_id, data.productIds, data.note)


@router.post(
    "/product/{product_id}/customers",
    response_model=list[SuggestionResponse],
    status_code=201,
)
def suggest_customers_to_product(
    product_id: int,
    data: SuggestCustomersRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Suggest one or more customers to a product"""
    return service.suggest_customers_to_product(product_id, data.customerIds, data.note)


@router.get("/customer/{customer_id}", response_model=list[SuggestionResponse])
def get_customer_suggestions(
    customer_id: int,
    status: Optional[str] = Query(None, description="Filter by suggestion status"),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return service.get_customer_suggestions(customer_id, status)


@router.get("/product/{product_id}", response_model=list[SuggestionResponse])
def get_product_suggestions(
    product_id: int,
    status: Optional[str] = Query(None, description="Filter by suggestion status"),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return service.get_product_suggestions(product_id, status)


@router.put("/{suggestion_id}/status", response_model=list[SuggestionResponse])
def resolve_suggestion(
    suggestion_id: int,
    data: ResolveSuggestionRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Accept or reject a suggestion (both directions are updated)"""
    return service.resolve_suggestion(suggestion_id, data.status, data.responseNote)


@router.delete("/{suggestion_id}")
def delete_suggestion(
    suggestion_id: int,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Soft delete a suggestion and its mirror"""
    return service.delete_suggestion(suggestion_id)
