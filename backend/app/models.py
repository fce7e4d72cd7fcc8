"""SQLModel data models.

This module defines the application's database tables using SQLModel.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """A catalog product.

    Fields:
    - `id`: primary key assigned by the database on insert
    - `name`: display name
    - `description`: free text, optional
    - `price`: unit price, optional
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="", index=True)
    description: Optional[str] = None
    price: Optional[float] = None


# Columns copied on a full-record overwrite.
PRODUCT_DATA_FIELDS = ("name", "description", "price")
