from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .config import DEFAULT_VISIT_FREQUENCY
from .database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    store_name = Column(String(255), nullable=False)
    authorized_persons = Column(JSON, nullable=False, default=list)  # List of contact names
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    district = Column(String(100), nullable=False)
    location_link = Column(String(1000), nullable=True)
    routine_name = Column(String(255), nullable=False)
    initial_points = Column(Float, nullable=False, default=0)
    visit_frequency = Column(
        Integer, nullable=False, default=DEFAULT_VISIT_FREQUENCY
    )  # Days between visits
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    visits = relationship("Visit", back_populates="customer")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String(100), nullable=True)
    # Weak reference to customers.id - no FK, absence means unassigned
    assigned_to = Column(Integer, nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
