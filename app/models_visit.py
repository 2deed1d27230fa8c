"""
Visit Models for periodic customer visits
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

VISIT_SCHEDULED = "scheduled"
VISIT_COMPLETED = "completed"
VISIT_CANCELLED = "cancelled"
VISIT_STATUSES = (VISIT_SCHEDULED, VISIT_COMPLETED, VISIT_CANCELLED)


class Visit(Base):
    """A single visit to a customer; the rollover job spawns the next one"""

    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    visit_date = Column(DateTime, nullable=False, index=True)
    # Always visit_date + customer.visit_frequency days
    next_visit_date = Column(DateTime, nullable=False, index=True)

    # Status workflow: scheduled → completed (rollover) | cancelled (missed)
    status = Column(String(20), default=VISIT_SCHEDULED, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Set on visits created by the rollover job rather than by a request
    is_auto_generated = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="visits")

    __table_args__ = (Index("ix_visits_customer_visit_date", "customer_id", "visit_date"),)
