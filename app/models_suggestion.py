"""
Suggestion Models - mirrored customer/product suggestion links
"""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base

CUSTOMER_TO_PRODUCT = "customer_to_product"
PRODUCT_TO_CUSTOMER = "product_to_customer"

PARTY_CUSTOMER = "Customer"
PARTY_PRODUCT = "Product"

SUGGESTION_PENDING = "pending"
SUGGESTION_ACCEPTED = "accepted"
SUGGESTION_REJECTED = "rejected"
RESPONSE_STATUSES = (SUGGESTION_ACCEPTED, SUGGESTION_REJECTED)


class Suggestion(Base):
    """
    One direction of a customer⇄product suggestion.

    Every suggestion is stored twice (once per direction) so each party can
    query its own rows. Both rows of a pair always share status, responded_at
    and response_note and are deactivated together.
    """

    __tablename__ = "suggestions"

    id = Column(Integer, primary_key=True, index=True)
    direction = Column(String(30), nullable=False)

    # Tagged references: (id, "Customer" | "Product")
    source_id = Column(Integer, nullable=False)
    source_type = Column(String(20), nullable=False)
    target_id = Column(Integer, nullable=False)
    target_type = Column(String(20), nullable=False)

    status = Column(String(20), default=SUGGESTION_PENDING, nullable=False)
    responded_at = Column(DateTime, nullable=True)
    response_note = Column(Text, nullable=True)
    suggestion_note = Column(Text, nullable=True)
    suggested_at = Column(DateTime, server_default=func.now(), index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_suggestions_source_target_active", "source_id", "target_id", "is_active"),
        Index("ix_suggestions_direction_active", "direction", "is_active"),
    )
