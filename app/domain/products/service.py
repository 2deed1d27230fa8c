"""Product service - Business logic for product operations"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, store_errors
from ...models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Ürün bulunamadı"


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository()

    def get_products(self) -> list[Product]:
        return self.repo.get_products(self.db)

    def get_product(self, product_id: int) -> Product:
        """Get an active product"""
        product = self.repo.get_product_by_id(self.db, product_id)
        if not product:
            raise NotFoundError(PRODUCT_NOT_FOUND)
        return product

    def create_product(self, data: ProductCreate) -> Product:
        """Create a new, unassigned product"""
        with store_errors(self.db, "Ürün oluşturulurken bir hata oluştu"):
            product = self.repo.create_product(self.db, **data.model_dump())

        logger.info(f"✅ Product {product.id} created ({product.name})")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)

        with store_errors(self.db, "Ürün güncellenirken bir hata oluştu"):
            return self.repo.update_product(
                self.db, product, **data.model_dump(exclude_unset=True)
            )

    def delete_product(self, product_id: int) -> dict:
        """Soft delete an active product"""
        product = self.get_product(product_id)

        with store_errors(self.db):
            self.repo.deactivate_product(self.db, product)

        logger.info(f"🗑️ Product {product_id} deactivated")
        return {"message": "Ürün başarıyla silindi"}

    def assign_product(self, product_id: int, customer_id: int) -> Product:
        """
        Mark a product as assigned to a customer.

        The customer ID is stored as a plain reference; it is not resolved here.
        """
        product = self.get_product(product_id)

        with store_errors(self.db):
            product = self.repo.set_assignment(self.db, product, customer_id)

        logger.info(f"🔗 Product {product_id} assigned to customer {customer_id}")
        return product

    def unassign_product(self, product_id: int) -> Product:
        """Clear a product's assignment"""
        product = self.get_product(product_id)

        with store_errors(self.db):
            product = self.repo.set_assignment(self.db, product, None)

        logger.info(f"🔓 Product {product_id} unassigned")
        return product

    def get_customer_products(self, customer_id: int) -> list[Product]:
        """Active products assigned to a customer (empty list when none)"""
        return self.repo.get_products_assigned_to(self.db, customer_id)
