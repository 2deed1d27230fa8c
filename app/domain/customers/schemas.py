"""Customer domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...config import DEFAULT_VISIT_FREQUENCY
from ...shared.validators import (
    validate_location_link,
    validate_min,
    validate_name_list,
    validate_required_text,
)

REQUIRED_TEXT_MESSAGES = {
    "storeName": "Mağaza adı zorunludur",
    "phone": "Telefon numarası zorunludur",
    "address": "Adres zorunludur",
    "city": "İl zorunludur",
    "district": "İlçe zorunludur",
    "routineName": "Rutin ismi zorunludur",
}


class _CustomerValidators(BaseModel):
    @field_validator("storeName", "phone", "address", "city", "district", "routineName", check_fields=False)
    @classmethod
    def validate_required(cls, v, info):
        return validate_required_text(v, REQUIRED_TEXT_MESSAGES[info.field_name])

    @field_validator("authorizedPersons", check_fields=False)
    @classmethod
    def validate_authorized_persons(cls, v):
        return validate_name_list(v)

    @field_validator("locationLink", check_fields=False)
    @classmethod
    def validate_link(cls, v):
        return validate_location_link(v)

    @field_validator("initialPoints", check_fields=False)
    @classmethod
    def validate_initial_points(cls, v):
        return validate_min(v, 0, "Başlangıç puanı 0'dan küçük olamaz")

    @field_validator("visitFrequency", check_fields=False)
    @classmethod
    def validate_visit_frequency(cls, v):
        return validate_min(v, 1, "Ziyaret sıklığı en az 1 gün olmalıdır")


class CustomerCreate(_CustomerValidators):
    """Schema for creating a new customer"""

    storeName: str
    authorizedPersons: list[str] = []
    phone: str
    address: str
    city: str
    district: str
    locationLink: Optional[str] = None
    routineName: str
    initialPoints: float
    visitFrequency: int = DEFAULT_VISIT_FREQUENCY


class CustomerUpdate(_CustomerValidators):
    """Schema for updating an existing customer (omitted fields are kept)"""

    storeName: Optional[str] = None
    authorizedPersons: Optional[list[str]] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    locationLink: Optional[str] = None
    routineName: Optional[str] = None
    initialPoints: Optional[float] = None
    visitFrequency: Optional[int] = None


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    id: int
    storeName: str
    authorizedPersons: list[str]
    phone: str
    address: str
    city: str
    district: str
    locationLink: Optional[str]
    routineName: str
    initialPoints: float
    visitFrequency: int
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class CustomerSummary(BaseModel):
    """Customer fields embedded in visit responses"""

    id: int
    storeName: str
    phone: str
    city: str
    district: str
    visitFrequency: int
