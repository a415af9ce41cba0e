# product_app/session.py

"""
Session ownership of the product store.
One store lives on the application for the lifetime of the process;
endpoints receive it through the `get_store` dependency.
"""
from fastapi import Request

from .store import ProductStore


def create_store() -> ProductStore:
    """
    Build the store for a new session.
    Deletion confirmation is supplied per request by the API, so no
    default gate is installed here.
    """
    return ProductStore()


def get_store(request: Request) -> ProductStore:
    """
    Dependency to provide the session's store to FastAPI endpoints.
    The store is created lazily if the app started without its lifespan.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = request.app.state.store = create_store()
    return store
