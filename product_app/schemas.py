# product_app/schemas.py

"""
Pydantic schemas for the Product Manager.
These define the validation rule for submitted products, the partial
updates the form sends while typing, and the rendered state returned
to the browser.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Draft


# Rule a draft must pass before it becomes a product.
# Text fields are trimmed; price may arrive as text or as a number.
class ProductInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Name of the product.")
    price: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Price of the product. Must be greater than 0."
    )
    image: str = Field("", description="Optional image URL.")
    desc: str = Field("", description="Optional description.")

    @field_validator("price", mode="before")
    @classmethod
    def parse_price_text(cls, value):
        if isinstance(value, bool):
            raise ValueError("price must be a number")
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("image", "desc", mode="before")
    @classmethod
    def blank_when_missing(cls, value):
        return "" if value is None else value


# Keystroke-level edits to the active draft.
# All fields are Optional; only the ones sent are applied.
class DraftUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None
    desc: Optional[str] = None

    # A number input may send 12 rather than "12"; the draft keeps text.
    @field_validator("price", mode="before")
    @classmethod
    def price_as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


# One product as the list renders it.
class ProductView(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str
    price: float
    price_display: str = Field(..., description="Price formatted for display, e.g. 'Rp 12.500,00'.")
    image: Optional[str] = Field(None, description="Image URL, None when the product has none.")
    show_placeholder: bool = Field(..., description="True when the placeholder glyph replaces the image.")
    desc: str = ""
    created_at: datetime
    created_display: str


# Everything the page needs to draw itself.
class StateView(BaseModel):
    title: str
    submit_label: str
    secondary_action: Literal["cancel", "reset"]
    editing: bool
    error: Optional[str] = None
    draft: Draft
    count: int
    empty_message: Optional[str] = None
    products: List[ProductView]
