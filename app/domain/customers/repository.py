"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session) -> list[Customer]:
        """Get all active customers"""
        return db.query(Customer).filter(Customer.is_active.is_(True)).order_by(Customer.id).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        """Get an active customer by ID"""
        return (
            db.query(Customer)
            .filter(Customer.id == customer_id, Customer.is_active.is_(True))
            .first()
        )

    @staticmethod
    def find_customer(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a customer by ID regardless of its active flag"""
        return db.get(Customer, customer_id)

    @staticmethod
    def count_existing(db: Session, customer_ids: list[int]) -> int:
        """Count how many of the given IDs exist"""
        return db.query(Customer).filter(Customer.id.in_(customer_ids)).count()

    @staticmethod
    def get_customers_by_ids(db: Session, customer_ids: set[int]) -> dict[int, Customer]:
        """Map of id -> customer for the given IDs"""
        if not customer_ids:
            return {}
        rows = db.query(Customer).filter(Customer.id.in_(customer_ids)).all()
        return {c.id: c for c in rows}

    @staticmethod
    def create_customer(db: Session, **customer_data) -> Customer:
        """Create a new customer"""
        customer = Customer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def deactivate_customer(db: Session, customer: Customer) -> None:
        """Soft delete a customer"""
        customer.is_active = False
        db.commit()
