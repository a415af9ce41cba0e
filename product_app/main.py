# product_app/main.py

"""
FastAPI Product Manager API.
Serves the product form and list backed by an in-memory store: nothing is
persisted, and restarting the process clears every product. Each endpoint
is a callback from the page into the store and answers with the state the
page should render next.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .schemas import DraftUpdate, ProductView, StateView
from .session import create_store, get_store
from .store import ProductStore
from .view import render_product, render_state

# -----------------------------
# Configure Logging
# -----------------------------
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Creates the session's product store on startup.
    The store is dropped with the process; there is nothing to flush.
    """
    settings = get_settings()
    app.state.store = create_store()
    logger.info(
        f"Product Manager started (price fraction digits: {settings.price_fraction_digits}). "
        "Products are kept in memory only."
    )
    yield
    logger.info(f"Product Manager stopping; discarding {len(app.state.store)} product(s).")


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(
    title="Product Manager API",
    description="Manages a temporary, in-memory list of products",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS (for frontend dev/testing)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    """
    Returns a welcome message for the Product Manager.
    """
    return {"message": "Welcome to the Product Manager!"}


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    return {"status": "ok", "service": "product-app"}


# -----------------------------
# Read Endpoints
# -----------------------------


@app.get("/state", response_model=StateView, summary="Current form, error and product list")
def read_state(
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return render_state(store, settings)


@app.get("/products/", response_model=List[ProductView], summary="List all products, newest first")
def list_products(
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    products = store.list()
    logger.info(f"Retrieved {len(products)} products.")
    return [render_product(p, settings) for p in products]


@app.get("/products/{product_id}", response_model=ProductView, summary="Retrieve a product by ID")
def get_product(
    product_id: int,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Raises a 404 HTTP exception if the product does not exist.
    """
    product = store.get(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise HTTPException(status_code=404, detail="Product not found")
    return render_product(product, settings)


# -----------------------------
# Form Endpoints
# -----------------------------


@app.patch("/draft", response_model=StateView, summary="Change fields of the form draft")
def update_draft(
    changes: DraftUpdate,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Applies typed values to the active draft. Values are not validated
    until the draft is submitted, so half-typed prices are accepted.
    """
    store.update_draft(**changes.model_dump(exclude_unset=True))
    return render_state(store, settings)


@app.post("/draft/reset", response_model=StateView, summary="Clear the form for a new product")
def reset_draft(
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    store.start_create()
    return render_state(store, settings)


@app.post("/draft/cancel", response_model=StateView, summary="Abandon the current edit")
def cancel_edit(
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    store.cancel_edit()
    return render_state(store, settings)


@app.post("/draft/submit", response_model=StateView, summary="Add or save the form draft")
def submit_draft(
    response: Response,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Submits the active draft.

    - 201 when a new product was added.
    - 200 when an edited product was saved.
    - 422 when the draft was rejected; the body carries the error message
      and the unchanged draft.
    """
    was_editing = store.editing
    product = store.submit()
    if product is None:
        response.status_code = 422
    elif not was_editing:
        response.status_code = status.HTTP_201_CREATED
    return render_state(store, settings)


@app.post("/products/{product_id}/edit", response_model=StateView, summary="Load a product into the form")
def start_edit(
    product_id: int,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    product = store.get(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found for editing.")
        raise HTTPException(status_code=404, detail="Product not found")
    store.start_edit(product)
    return render_state(store, settings)


@app.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product by ID",
)
def delete_product(
    product_id: int,
    confirm: bool = Query(False, description="Must be true; the client's answer to the delete prompt."),
    store: ProductStore = Depends(get_store),
):
    """
    Deletes a product once the user has confirmed.

    - Returns 204 on deletion, and also when the product is already gone.
    - Raises a 409 HTTP exception when the deletion was not confirmed.
    """
    logger.info(f"Attempting to delete product with ID: {product_id}")
    removed = store.delete_product(product_id, confirm=lambda product: confirm)
    if not removed and store.get(product_id) is not None:
        raise HTTPException(status_code=409, detail="Deletion not confirmed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
