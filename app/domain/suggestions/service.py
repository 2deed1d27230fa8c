"""Suggestion service - Mirrored customer⇄product suggestion links"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import ConflictError, InvalidArgumentError, NotFoundError, store_errors
from ...models_suggestion import (
    CUSTOMER_TO_PRODUCT,
    PARTY_CUSTOMER,
    PARTY_PRODUCT,
    PRODUCT_TO_CUSTOMER,
    RESPONSE_STATUSES,
    SUGGESTION_PENDING,
    Suggestion,
)
from ..customers.repository import CustomerRepository
from ..customers.service import CUSTOMER_NOT_FOUND
from ..products.repository import ProductRepository
from ..products.service import PRODUCT_NOT_FOUND
from .repository import SuggestionRepository
from .schemas import SuggestionParty, SuggestionResponse

logger = logging.getLogger(__name__)

SUGGESTION_NOT_FOUND = "Öneri bulunamadı"


def mirrored_rows(
    customer_id: int, product_id: int, note: Optional[str], suggested_at: datetime
) -> list[dict]:
    """
    The two rows that make up one customer⇄product suggestion.

    Both rows carry the same suggested_at, which tells this link apart from
    earlier suggestions of the same pair.
    """
    return [
        {
            "direction": PRODUCT_TO_CUSTOMER,
            "source_id": product_id,
            "source_type": PARTY_PRODUCT,
            "target_id": customer_id,
            "target_type": PARTY_CUSTOMER,
            "status": SUGGESTION_PENDING,
            "suggestion_note": note,
            "suggested_at": suggested_at,
        },
        {
            "direction": CUSTOMER_TO_PRODUCT,
            "source_id": customer_id,
            "source_type": PARTY_CUSTOMER,
            "target_id": product_id,
            "target_type": PARTY_PRODUCT,
            "status": SUGGESTION_PENDING,
            "suggestion_note": note,
            "suggested_at": suggested_at,
        },
    ]


class SuggestionService:
    """Service layer for suggestion business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SuggestionRepository()
        self.customers = CustomerRepository()
        self.products = ProductRepository()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def suggest_products_to_customer(
        self, customer_id: int, product_ids: list[int], note: Optional[str] = None
    ) -> list[SuggestionResponse]:
        """
        Suggest products to a customer.

        Every product ID must exist, otherwise nothing is written. Returns all
        active suggestions of the customer.
        """
        if not self.customers.find_customer(self.db, customer_id):
            raise NotFoundError(CUSTOMER_NOT_FOUND)

        if self.products.count_existing(self.db, product_ids) != len(product_ids):
            raise NotFoundError("Bazı ürünler bulunamadı")

        suggested_at = datetime.now()
        rows = [
            row
            for pid in product_ids
            for row in mirrored_rows(customer_id, pid, note, suggested_at)
        ]
        with store_errors(self.db, "Öneriler oluşturulurken bir hata oluştu"):
            self.repo.create_suggestions(self.db, rows)

        logger.info(f"💡 {len(product_ids)} products suggested to customer {customer_id}")
        return self.describe(self.repo.get_for_party(self.db, customer_id, PARTY_CUSTOMER))

    def suggest_customers_to_product(
        self, product_id: int, customer_ids: list[int], note: Optional[str] = None
    ) -> list[SuggestionResponse]:
        """Suggest customers to a product (mirror of suggest_products_to_customer)"""
        if not self.products.find_product(self.db, product_id):
            raise NotFoundError(PRODUCT_NOT_FOUND)

        if self.customers.count_existing(self.db, customer_ids) != len(customer_ids):
            raise NotFoundError("Bazı müşteriler bulunamadı")

        suggested_at = datetime.now()
        rows = [
            row
            for cid in customer_ids
            for row in mirrored_rows(cid, product_id, note, suggested_at)
        ]
        with store_errors(self.db, "Öneriler oluşturulurken bir hata oluştu"):
            self.repo.create_suggestions(self.db, rows)

        logger.info(f"💡 {len(customer_ids)} customers suggested to product {product_id}")
        return self.describe(self.repo.get_for_party(self.db, product_id, PARTY_PRODUCT))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer_suggestions(
        self, customer_id: int, status: Optional[str] = None
    ) -> list[SuggestionResponse]:
        return self._get_party_suggestions(customer_id, PARTY_CUSTOMER, status)

    def get_product_suggestions(
        self, product_id: int, status: Optional[str] = None
    ) -> list[SuggestionResponse]:
        return self._get_party_suggestions(product_id, PARTY_PRODUCT, status)

    def _get_party_suggestions(
        self, party_id: int, party_type: str, status: Optional[str]
    ) -> list[SuggestionResponse]:
        # An empty result is reported as not found, unknown party or not
        suggestions = self.repo.get_for_party(self.db, party_id, party_type, status)
        if not suggestions:
            raise NotFoundError(SUGGESTION_NOT_FOUND)
        return self.describe(suggestions)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_suggestion(
        self, suggestion_id: int, status: str, response_note: Optional[str] = None
    ) -> list[SuggestionResponse]:
        """
        Accept or reject a pending suggestion.

        Both rows of the link are updated in one statement; a suggestion can be
        resolved only once, so a resolve that finds nothing left to update
        is a conflict as well.
        """
        if status not in RESPONSE_STATUSES:
            raise InvalidArgumentError(
                'Geçersiz durum. Sadece "accepted" veya "rejected" olabilir.'
            )

        suggestion = self.repo.get_active_by_id(self.db, suggestion_id)
        if not suggestion:
            raise NotFoundError(SUGGESTION_NOT_FOUND)

        if suggestion.status != SUGGESTION_PENDING:
            raise ConflictError("Bu öneri zaten yanıtlanmış")

        with store_errors(self.db):
            updated = self.repo.resolve_pair(
                self.db,
                suggestion,
                status=status,
                responded_at=datetime.now(),
                response_note=response_note,
            )

        # Another request resolved the pair after the pending check above
        if not updated:
            raise ConflictError("Bu öneri zaten yanıtlanmış")

        logger.info(f"✅ Suggestion {suggestion_id} {status} ({updated} rows updated)")
        return self.describe(self.repo.get_pair(self.db, suggestion))

    def delete_suggestion(self, suggestion_id: int) -> dict:
        """Soft delete a suggestion together with its mirror"""
        suggestion = self.repo.get_active_by_id(self.db, suggestion_id)
        if not suggestion:
            raise NotFoundError(SUGGESTION_NOT_FOUND)

        with store_errors(self.db):
            deleted = self.repo.deactivate_pair(self.db, suggestion)

        logger.info(f"🗑️ Suggestion {suggestion_id} deactivated ({deleted} rows)")
        return {"message": "Öneri başarıyla silindi"}

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def describe(self, suggestions: list[Suggestion]) -> list[SuggestionResponse]:
        """Attach the display fields of both parties to each suggestion"""
        customer_ids, product_ids = set(), set()
        for s in suggestions:
            for party_id, party_type in ((s.source_id, s.source_type), (s.target_id, s.target_type)):
                (customer_ids if party_type == PARTY_CUSTOMER else product_ids).add(party_id)

        customers = self.customers.get_customers_by_ids(self.db, customer_ids)
        products = self.products.get_products_by_ids(self.db, product_ids)

        def party(party_id: int, party_type: str) -> Optional[SuggestionParty]:
            if party_type == PARTY_CUSTOMER:
                c = customers.get(party_id)
                if c is None:
                    return None
                return SuggestionParty(
                    id=c.id, type=PARTY_CUSTOMER, storeName=c.store_name, phone=c.phone
                )
            p = products.get(party_id)
            if p is None:
                return None
            return SuggestionParty(
                id=p.id, type=PARTY_PRODUCT, name=p.name, price=p.price, description=p.description
            )

        return [
            SuggestionResponse(
                id=s.id,
                direction=s.direction,
                sourceId=s.source_id,
                sourceType=s.source_type,
                targetId=s.target_id,
                targetType=s.target_type,
                source=party(s.source_id, s.source_type),
                target=party(s.target_id, s.target_type),
                status=s.status,
                suggestionNote=s.suggestion_note,
                responseNote=s.response_note,
                respondedAt=s.responded_at,
                suggestedAt=s.suggested_at,
                isActive=s.is_active,
                createdAt=s.created_at,
                updatedAt=s.updated_at,
            )
            for s in suggestions
        ]
