# product_app/store.py

"""
In-memory product store.
Holds the ordered product collection (newest first), the single active
draft behind the form and the current error message. Every operation
runs to completion under the store's lock before the next one starts,
so callers on FastAPI's threadpool see one action at a time.
"""
import logging
import threading
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from .models import Draft, Product
from .schemas import DraftUpdate, ProductInput

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "name and price must be correctly filled, price greater than 0"
MISSING_TARGET_MESSAGE = "The product being edited no longer exists."

Clock = Callable[[], datetime]
Confirm = Callable[[Product], bool]

_INPUT_FIELDS = ("name", "price", "image", "desc")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MonotonicIdGenerator:
    """
    Millisecond timestamps as ids, bumped past the previous id whenever the
    clock has not moved, so two creations in the same millisecond still differ.
    """

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        with self._lock:
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
        return candidate


def _input_fields(candidate) -> dict:
    if isinstance(candidate, Mapping):
        return {key: candidate.get(key) for key in _INPUT_FIELDS}
    return {key: getattr(candidate, key, None) for key in _INPUT_FIELDS}


class ProductStore:
    """
    Owner of the product list and the form draft.

    `confirm` is asked before a product is deleted; when it returns False the
    product stays. `clock` supplies creation timestamps and ids.
    """

    def __init__(self, confirm: Optional[Confirm] = None, clock: Clock = utc_now):
        self._products: List[Product] = []
        self._draft = Draft()
        self._error: Optional[str] = None
        self._confirm = confirm
        self._clock = clock
        self._ids = MonotonicIdGenerator()
        # Reentrant: reset_form and submit call back into locked methods.
        self._lock = threading.RLock()

    def __len__(self):
        with self._lock:
            return len(self._products)

    @property
    def draft(self) -> Draft:
        with self._lock:
            return self._draft.model_copy()

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def editing(self) -> bool:
        with self._lock:
            return self._draft.editing

    # -----------------------------
    # Reads
    # -----------------------------

    def list(self) -> Tuple[Product, ...]:
        with self._lock:
            return tuple(self._products)

    def get(self, product_id: int) -> Optional[Product]:
        with self._lock:
            index = self._index_of(product_id)
            return None if index is None else self._products[index]

    # -----------------------------
    # Validation
    # -----------------------------

    def validate(self, candidate) -> bool:
        """
        True when `name` is non-blank and `price` is a finite number above 0.
        Clears the error on success, records the single form error otherwise.
        """
        with self._lock:
            return self._checked(candidate) is not None

    def _checked(self, candidate) -> Optional[ProductInput]:
        try:
            data = ProductInput(**_input_fields(candidate))
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            logger.warning(f"Validation failed for field(s): {fields}")
            self._error = VALIDATION_MESSAGE
            return None
        self._error = None
        return data

    # -----------------------------
    # Draft transitions
    # -----------------------------

    def start_create(self) -> None:
        with self._lock:
            self._draft = Draft()
            self._error = None

    # The form's Reset button.
    reset_form = start_create

    def start_edit(self, product: Product) -> None:
        logger.info(f"Editing product '{product.name}' (ID: {product.id}).")
        with self._lock:
            self._draft = Draft.for_edit(product)
            self._error = None

    def cancel_edit(self) -> None:
        with self._lock:
            if not self._draft.editing:
                return
            logger.info(f"Edit of product ID: {self._draft.target_id} cancelled.")
            self._draft = Draft()
            self._error = None

    def update_draft(self, **fields) -> None:
        """
        Apply typed values to the active draft without validating them.
        Raises pydantic's ValidationError for fields the draft does not have.
        """
        changes = DraftUpdate(**fields).model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            for field, value in changes.items():
                setattr(self._draft, field, value)

    # -----------------------------
    # Mutations
    # -----------------------------

    def submit(self) -> Optional[Product]:
        """
        Validate the active draft and apply it.

        - Creating: the new product is prepended and the form is cleared.
        - Editing: the target's name, price, image and desc are replaced;
          its id, creation time and position are kept.

        Returns the created or updated product, or None when nothing changed.
        A rejected draft is kept as it is so the user can correct it.
        """
        with self._lock:
            draft = self._draft
            data = self._checked(draft)
            if data is None:
                logger.warning("Submission rejected; draft kept for correction.")
                return None
            if draft.editing:
                return self._apply_edit(draft.target_id, data)
            return self._create(data)

    def _create(self, data: ProductInput) -> Product:
        now = self._clock()
        product = Product(id=self._ids.next_id(now), created_at=now, **data.model_dump())
        self._products.insert(0, product)
        self._draft = Draft()
        logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
        return product

    def _apply_edit(self, product_id: int, data: ProductInput) -> Optional[Product]:
        index = self._index_of(product_id)
        if index is None:
            logger.warning(f"Product with ID: {product_id} not found for update.")
            self._error = MISSING_TARGET_MESSAGE
            self._draft = Draft()
            return None
        updated = self._products[index].model_copy(update=data.model_dump())
        self._products[index] = updated
        self._draft = Draft()
        logger.info(f"Product '{updated.name}' (ID: {product_id}) updated successfully.")
        return updated

    def delete_product(self, product_id: int, confirm: Optional[Confirm] = None) -> bool:
        """
        Remove a product after the confirmation gate agrees.
        `confirm` overrides the store's gate for this call. Unknown ids are a
        no-op. Returns True when a product was removed.
        """
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                logger.info(f"Product with ID: {product_id} not found for deletion.")
                return False
            gate = confirm if confirm is not None else self._confirm
            if gate is not None and not gate(self._products[index]):
                logger.info(f"Deletion of product ID: {product_id} declined.")
                return False
            del self._products[index]
            if self._draft.target_id == product_id:
                self._draft = Draft()
            logger.info(f"Product (ID: {product_id}) deleted successfully.")
            return True

    def _index_of(self, product_id: int) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None
