"""Suggestion repository - Database operations for mirrored suggestion pairs"""

from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from ...models_suggestion import SUGGESTION_PENDING, Suggestion


def pair_filter(suggestion: Suggestion):
    """
    Match a suggestion and its mirror: same (source, target) or the transpose,
    from the same suggest act. Earlier links between the same customer and
    product have a different suggested_at and are left alone.
    """
    return and_(
        or_(
            and_(
                Suggestion.source_id == suggestion.source_id,
                Suggestion.source_type == suggestion.source_type,
                Suggestion.target_id == suggestion.target_id,
                Suggestion.target_type == suggestion.target_type,
            ),
            and_(
                Suggestion.source_id == suggestion.target_id,
                Suggestion.source_type == suggestion.target_type,
                Suggestion.target_id == suggestion.source_id,
                Suggestion.target_type == suggestion.source_type,
            ),
        ),
        Suggestion.suggested_at == suggestion.suggested_at,
    )


class SuggestionRepository:
    """Repository for suggestion database operations"""

    @staticmethod
    def create_suggestions(db: Session, rows: list[dict]) -> list[Suggestion]:
        """Insert all rows in a single transaction"""
        suggestions = [Suggestion(**row) for row in rows]
        db.add_all(suggestions)
        db.commit()
        return suggestions

    @staticmethod
    def get_for_party(
        db: Session, party_id: int, party_type: str, status: Optional[str] = None
    ) -> list[Suggestion]:
        """Active suggestions where the party is the source or the target"""
        query = db.query(Suggestion).filter(
            or_(
                and_(Suggestion.source_id == party_id, Suggestion.source_type == party_type),
                and_(Suggestion.target_id == party_id, Suggestion.target_type == party_type),
            ),
            Suggestion.is_active.is_(True),
        )
        if status:
            query = query.filter(Suggestion.status == status)
        return query.order_by(Suggestion.id).all()

    @staticmethod
    def get_active_by_id(db: Session, suggestion_id: int) -> Optional[Suggestion]:
        return (
            db.query(Suggestion)
            .filter(Suggestion.id == suggestion_id, Suggestion.is_active.is_(True))
            .first()
        )

    @staticmethod
    def get_pair(db: Session, suggestion: Suggestion) -> list[Suggestion]:
        """Active rows of the suggestion's pair"""
        return (
            db.query(Suggestion)
            .filter(pair_filter(suggestion), Suggestion.is_active.is_(True))
            .order_by(Suggestion.id)
            .all()
        )

    @staticmethod
    def resolve_pair(db: Session, suggestion: Suggestion, **values) -> int:
        """
        Resolve both pending rows of a pair with one UPDATE statement.

        Returns the number of rows changed.
        """
        updated = (
            db.query(Suggestion)
            .filter(
                pair_filter(suggestion),
                Suggestion.is_active.is_(True),
                Suggestion.status == SUGGESTION_PENDING,
            )
            .update(values, synchronize_session=False)
        )
        db.commit()
        return updated

    @staticmethod
    def deactivate_pair(db: Session, suggestion: Suggestion) -> int:
        """Soft delete both rows of a pair with one UPDATE statement"""
        updated = (
            db.query(Suggestion)
            .filter(pair_filter(suggestion), Suggestion.is_active.is_(True))
            .update({Suggestion.is_active: False}, synchronize_session=False)
        )
        db.commit()
        return updated
