"""Product domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_min, validate_optional_text, validate_required_text


class _ProductValidators(BaseModel):
    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "Ürün adı zorunludur")

    @field_validator("description", "category", check_fields=False)
    @classmethod
    def validate_optional(cls, v):
        return validate_optional_text(v)

    @field_validator("price", check_fields=False)
    @classmethod
    def validate_price(cls, v):
        return validate_min(v, 0, "Fiyat 0'dan küçük olamaz")

    @field_validator("stock", check_fields=False)
    @classmethod
    def validate_stock(cls, v):
        return validate_min(v, 0, "Stok 0'dan küçük olamaz")


class ProductCreate(_ProductValidators):
    """Schema for creating a new product"""

    name: str
    description: Optional[str] = None
    price: float
    stock: int
    category: Optional[str] = None


class ProductUpdate(_ProductValidators):
    """Schema for updating an existing product (omitted fields are kept)"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class AssignProductRequest(BaseModel):
    customerId: int


class ProductResponse(BaseModel):
    """Schema for product response"""

    id: int
    name: str
    description: Optional[str]
    price: float
    stock: int
    category: Optional[str]
    assignedTo: Optional[int]
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
