# product_app/view.py

"""
Projection of a ProductStore into what the page draws.
Pure: reads the store, never changes it.
"""

from .config import Settings
from .formatting import format_currency, format_timestamp
from .models import Product
from .schemas import ProductView, StateView
from .store import ProductStore

EMPTY_MESSAGE = "No products yet. Add one using the form."


def render_product(product: Product, settings: Settings) -> ProductView:
    image = product.image or None
    return ProductView(
        id=product.id,
        name=product.name,
        price=product.price,
        price_display=format_currency(
            product.price,
            prefix=settings.currency_prefix,
            fraction_digits=settings.price_fraction_digits,
        ),
        image=image,
        show_placeholder=image is None,
        desc=product.desc,
        created_at=product.created_at,
        created_display=format_timestamp(product.created_at),
    )


def render_state(store: ProductStore, settings: Settings) -> StateView:
    editing = store.editing
    products = [render_product(p, settings) for p in store.list()]
    return StateView(
        title="Edit Product" if editing else "Add New Product",
        submit_label="Save Changes" if editing else "Add Product",
        secondary_action="cancel" if editing else "reset",
        editing=editing,
        error=store.error,
        draft=store.draft,
        count=len(products),
        empty_message=None if products else EMPTY_MESSAGE,
        products=products,
    )
