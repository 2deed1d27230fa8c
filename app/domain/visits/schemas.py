"""Visit domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import to_local_naive, validate_optional_text
from ..customers.schemas import CustomerSummary


class VisitCreate(BaseModel):
    """Schema for scheduling a visit; nextVisitDate is always derived"""

    customerId: int
    visitDate: datetime
    notes: Optional[str] = None

    @field_validator("visitDate")
    @classmethod
    def normalize_visit_date(cls, v):
        return to_local_naive(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return validate_optional_text(v)


class VisitUpdate(BaseModel):
    """Schema for updating a visit (omitted fields are kept)"""

    visitDate: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("visitDate")
    @classmethod
    def normalize_visit_date(cls, v):
        return to_local_naive(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return validate_optional_text(v)


class VisitResponse(BaseModel):
    """Schema for visit response"""

    id: int
    customerId: int
    customer: Optional[CustomerSummary] = None
    visitDate: datetime
    nextVisitDate: datetime
    status: str
    notes: Optional[str]
    autoGenerated: bool
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RolloverSummary(BaseModel):
    cancelled: int
    completed: int
    created: int
    failed: int


class RolloverResult(BaseModel):
    message: str
    summary: RolloverSummary
