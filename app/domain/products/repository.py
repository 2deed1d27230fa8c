"""Product repository - Database operations for products"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Product


class ProductRepository:
    """Repository for product database operations"""

    @staticmethod
    def get_products(db: Session) -> list[Product]:
        """Get all active products"""
        return db.query(Product).filter(Product.is_active.is_(True)).order_by(Product.id).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
        """Get an active product by ID"""
        return (
            db.query(Product)
            .filter(Product.id == product_id, Product.is_active.is_(True))
            .first()
        )

    @staticmethod
    def find_product(db: Session, product_id: int) -> Optional[Product]:
        """Get a product by ID regardless of its active flag"""
        return db.get(Product, product_id)

    @staticmethod
    def count_existing(db: Session, product_ids: list[int]) -> int:
        """Count how many of the given IDs exist"""
        return db.query(Product).filter(Product.id.in_(product_ids)).count()

    @staticmethod
    def get_products_by_ids(db: Session, product_ids: set[int]) -> dict[int, Product]:
        """Map of id -> product for the given IDs"""
        if not product_ids:
            return {}
        rows = db.query(Product).filter(Product.id.in_(product_ids)).all()
        return {p.id: p for p in rows}

    @staticmethod
    def get_products_assigned_to(db: Session, customer_id: int) -> list[Product]:
        """Get active products currently assigned to a customer"""
        return (
            db.query(Product)
            .filter(Product.assigned_to == customer_id, Product.is_active.is_(True))
            .order_by(Product.id)
            .all()
        )

    @staticmethod
    def create_product(db: Session, **product_data) -> Product:
        """Create a new product"""
        product = Product(**product_data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        """Update a product with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(product, key):
                setattr(product, key, value)

        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def set_assignment(db: Session, product: Product, customer_id: Optional[int]) -> Product:
        """Assign a product to a customer, or clear the assignment with None"""
        product.assigned_to = customer_id
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def deactivate_product(db: Session, product: Product) -> None:
        """Soft delete a product"""
        product.is_active = False
        db.commit()
