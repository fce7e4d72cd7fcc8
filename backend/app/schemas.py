"""Pydantic request schemas used by the HTTP layer.

Form posts are bound through `ProductForm` instead of being copied onto
the table model field by field, so type mismatches surface as a single
`FormBindingError` at the boundary.
"""

from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import List, Optional
from .models import Product


def format_errors(errors) -> List[str]:
    """Flatten pydantic/FastAPI error dicts into `loc: msg` lines."""
    return [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors]


class FormBindingError(ValueError):
    """Submitted form fields could not be bound to a `Product`."""
    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class ProductForm(BaseModel):
    """Editable product fields as submitted by the new/edit forms.

    Any `id` sent with the form is dropped: ids come from the database on
    create and from the URL path on update.
    """
    name: str
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)

    @field_validator("description", "price", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @classmethod
    def bind(cls, data: dict) -> "ProductForm":
        """Validate raw form `data` or raise `FormBindingError`."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise FormBindingError(format_errors(e.errors())) from e

    def to_product(self, product_id: Optional[int] = None) -> Product:
        return Product(id=product_id, **self.model_dump())
