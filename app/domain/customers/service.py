"""Customer service - Business logic for customer operations"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, store_errors
from ...models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

CUSTOMER_NOT_FOUND = "Müşteri bulunamadı"

# Request field -> column
FIELD_MAP = {
    "storeName": "store_name",
    "authorizedPersons": "authorized_persons",
    "phone": "phone",
    "address": "address",
    "city": "city",
    "district": "district",
    "locationLink": "location_link",
    "routineName": "routine_name",
    "initialPoints": "initial_points",
    "visitFrequency": "visit_frequency",
}


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self) -> list[Customer]:
        """Get all active customers"""
        return self.repo.get_customers(self.db)

    def get_customer(self, customer_id: int) -> Customer:
        """Get an active customer"""
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        return customer

    def create_customer(self, data: CustomerCreate) -> Customer:
        """Create a new customer"""
        customer_data = {FIELD_MAP[k]: v for k, v in data.model_dump().items()}

        with store_errors(self.db, "Müşteri oluşturulurken bir hata oluştu"):
            customer = self.repo.create_customer(self.db, **customer_data)

        logger.info(f"✅ Customer {customer.id} created ({customer.store_name})")
        return customer

    def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        """Update an active customer; omitted fields keep their values"""
        customer = self.get_customer(customer_id)
        updates = {FIELD_MAP[k]: v for k, v in data.model_dump(exclude_unset=True).items()}

        with store_errors(self.db, "Müşteri güncellenirken bir hata oluştu"):
            return self.repo.update_customer(self.db, customer, **updates)

    def delete_customer(self, customer_id: int) -> dict:
        """Soft delete an active customer"""
        customer = self.get_customer(customer_id)

        with store_errors(self.db, "Müşteri silinirken bir hata oluştu"):
            self.repo.deactivate_customer(self.db, customer)

        logger.info(f"🗑️ Customer {customer_id} deactivated")
        return {"message": "Müşteri başarıyla silindi"}
