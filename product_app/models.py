# product_app/models.py

"""
In-memory records for the Product Manager.
Nothing here is persisted; both records live only as long as the session.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    """
    A stored product.
    Frozen so that callers holding a listed product cannot change the collection.
    """

    model_config = ConfigDict(frozen=True)

    # Assigned at creation time and never reassigned.
    id: int

    name: str
    price: float
    image: str = ""
    desc: str = ""

    # Captured at creation, untouched by edits.
    created_at: datetime

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class Draft(BaseModel):
    """
    Working copy behind the form.
    `price` stays raw text so half-typed values can be held until submit.
    """

    name: str = ""
    price: str = ""
    image: str = ""
    desc: str = ""

    # None while composing a new product, the product's id while editing.
    target_id: Optional[int] = None

    @property
    def editing(self) -> bool:
        return self.target_id is not None

    @classmethod
    def for_edit(cls, product: Product) -> "Draft":
        return cls(
            name=product.name,
            price=_price_text(product.price),
            image=product.image,
            desc=product.desc,
            target_id=product.id,
        )


def _price_text(price: float) -> str:
    # 12.0 shows as "12" in the form, like a number input would
    if price.is_integer():
        return str(int(price))
    return repr(price)
