"""Repository classes encapsulating database operations.

`ProductRepository` is a direct pass-through to the SQLModel session:
no custom queries and no business rules. "Not found" is always reported
as `None` or a silent no-op, never as an exception. Database failures
roll the session back and surface as `StoreError`.
"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from . import models


class StoreError(RuntimeError):
    """Raised when the underlying database operation fails."""


class ProductRepository:
    """CRUD operations for `Product` objects."""
    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[models.Product]:
        """Return every product ordered by id."""
        stmt = select(models.Product).order_by(models.Product.id)
        try:
            return list(self.session.exec(stmt).all())
        except SQLAlchemyError as e:
            self._fail("find_all", e)

    def find_by_id(self, product_id: int) -> Optional[models.Product]:
        """Return a `Product` by primary key or `None` if not found."""
        try:
            return self.session.get(models.Product, product_id)
        except SQLAlchemyError as e:
            self._fail("find_by_id", e)

    def save(self, product: models.Product) -> models.Product:
        """Insert `product`, or fully overwrite the row sharing its id.

        When `product.id` matches an existing row every data column is
        replaced with the submitted value, `None` included. Otherwise a new
        row is inserted and the database assigns the id.
        """
        try:
            existing = self.session.get(models.Product, product.id) if product.id is not None else None
            if existing is not None:
                for field in models.PRODUCT_DATA_FIELDS:
                    setattr(existing, field, getattr(product, field))
                target = existing
            else:
                target = models.Product(**{f: getattr(product, f) for f in models.PRODUCT_DATA_FIELDS})
            self.session.add(target)
            self.session.commit()
            self.session.refresh(target)
            return target
        except SQLAlchemyError as e:
            self._fail("save", e)

    def delete_by_id(self, product_id: int) -> None:
        """Delete the product with `product_id`; missing ids are ignored."""
        try:
            existing = self.session.get(models.Product, product_id)
            if existing is None:
                return
            self.session.delete(existing)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("delete_by_id", e)

    def _fail(self, operation: str, error: SQLAlchemyError):
        self.session.rollback()
        raise StoreError(f"{operation} failed: {error}") from error
