"""Business logic services used by HTTP controllers.

`ProductService` is a forwarding layer over `ProductRepository`. It adds
no rules of its own; it is the seam where call logging attaches and where
future business rules belong.
"""

from typing import List, Optional
from . import models
from .repositories import ProductRepository
from .utils.call_logging import logged


class ProductService:
    """Product operations, one per repository call."""
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    @logged
    def find_all(self) -> List[models.Product]:
        """Return every stored product."""
        return self.repository.find_all()

    @logged
    def find_by_id(self, product_id: int) -> Optional[models.Product]:
        """Return the product or `None`; callers must handle absence."""
        return self.repository.find_by_id(product_id)

    @logged
    def save(self, product: models.Product) -> models.Product:
        """Insert `product` or fully replace the row sharing its id."""
        return self.repository.save(product)

    @logged
    def delete_by_id(self, product_id: int) -> None:
        """Delete a product by id; unknown ids are ignored."""
        self.repository.delete_by_id(product_id)
