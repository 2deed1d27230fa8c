"""Suggestion domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_optional_text


class SuggestProductsRequest(BaseModel):
    """Products suggested to one customer"""

    productIds: list[int]
    note: Optional[str] = None

    @field_validator("productIds")
    @classmethod
    def validate_product_ids(cls, v):
        if not v:
            raise ValueError("En az bir ürün seçilmelidir")
        return v

    @field_validator("note")
    @classmethod
    def validate_note(cls, v):
        return validate_optional_text(v)


class SuggestCustomersRequest(BaseModel):
    """Customers suggested to one product"""

    customerIds: list[int]
    note: Optional[str] = None

    @field_validator("customerIds")
    @classmethod
    def validate_customer_ids(cls, v):
        if not v:
            raise ValueError("En az bir müşteri seçilmelidir")
        return v

    @field_validator("note")
    @classmethod
    def validate_note(cls, v):
        return validate_optional_text(v)


class ResolveSuggestionRequest(BaseModel):
    # Checked by the service so an unknown value is reported as an invalid status
    status: str
    responseNote: Optional[str] = None

    @field_validator("responseNote")
    @classmethod
    def validate_response_note(cls, v):
        return validate_optional_text(v)


class SuggestionParty(BaseModel):
    """Display fields of the customer or product on one end of a suggestion"""

    id: int
    type: str
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    storeName: Optional[str] = None
    phone: Optional[str] = None


class SuggestionResponse(BaseModel):
    id: int
    direction: str
    sourceId: int
    sourceType: str
    targetId: int
    targetType: str
    source: Optional[SuggestionParty] = None
    target: Optional[SuggestionParty] = None
    status: str
    suggestionNote: Optional[str]
    responseNote: Optional[str]
    respondedAt: Optional[datetime]
    suggestedAt: Optional[datetime] = None
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
