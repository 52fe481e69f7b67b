import json
import logging
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from storefront.schemas.cart import CartLineItem, CartSnapshot

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart-storage"


class CartResult(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    CLEARED = "cleared"
    UNCHANGED = "unchanged"
    # Requested quantity was above stock; the line holds ``stock`` (or was not inserted)
    STOCK_EXCEEDED = "stock_exceeded"


Listener = Callable[["CartStore"], None]


class CartStore:
    """Single source of truth for the contents of one browsing session's cart.

    Every state-changing mutation is persisted to ``storage`` under ``key`` and
    then announced to subscribers. Quantities always stay within ``[1, stock]``;
    requests above stock are clamped and reported as ``STOCK_EXCEEDED``.
    """

    def __init__(self, storage, key: str = CART_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._items: Dict[int, CartLineItem] = {}
        self._listeners: List[Listener] = []
        self._load()

    # ----- persistence -----

    def _load(self) -> None:
        try:
            raw = self._storage.get_item(self._key)
        except (OSError, ValueError) as e:
            # ValueError covers undecodable bytes (UnicodeDecodeError)
            logger.warning("Could not read cart from storage key=%s: %s", self._key, e)
            return
        if raw is None:
            return
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding corrupt cart data under key=%s", self._key)
            return
        rows = data.get("items") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            logger.warning("Discarding cart data without an items list under key=%s", self._key)
            return

        for row in rows:
            try:
                item = CartLineItem.model_validate(row)
            except ValidationError as e:
                logger.warning("Dropping invalid cart row %r: %s", row, e.errors())
                continue
            if item.stock < 1 or item.productId in self._items:
                continue
            if item.quantity > item.stock:
                item = item.model_copy(update={"quantity": item.stock})
            self._items[item.productId] = item

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, self.snapshot().model_dump_json())
        except OSError as e:
            logger.error("Failed to persist cart under key=%s: %s", self._key, e)

    def _commit(self) -> None:
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener %r failed", listener)

    # ----- observers -----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ----- reads -----

    def items(self) -> List[CartLineItem]:
        return [i.model_copy() for i in self._items.values()]

    def get(self, product_id: int) -> Optional[CartLineItem]:
        item = self._items.get(product_id)
        return item.model_copy() if item else None

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(items=self.items())

    def get_total_items(self) -> int:
        return sum(i.quantity for i in self._items.values())

    def get_total_price(self) -> float:
        return sum(i.price * i.quantity for i in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._items

    # ----- mutations -----

    def add_to_cart(self, item: Union[CartLineItem, Mapping]) -> CartResult:
        if not isinstance(item, CartLineItem):
            data = dict(item)
            data["quantity"] = max(1, int(data.get("quantity") or 1))
            item = CartLineItem.model_validate(data)

        existing = self._items.get(item.productId)
        if existing is None:
            if item.stock < 1:
                return CartResult.STOCK_EXCEEDED
            quantity = min(item.quantity, item.stock)
            self._items[item.productId] = item.model_copy(update={"quantity": quantity})
            self._commit()
            return CartResult.STOCK_EXCEEDED if item.quantity > item.stock else CartResult.ADDED

        requested = existing.quantity + item.quantity
        quantity = min(requested, existing.stock)
        exceeded = requested > existing.stock
        if quantity == existing.quantity:
            return CartResult.STOCK_EXCEEDED if exceeded else CartResult.UNCHANGED
        self._items[item.productId] = existing.model_copy(update={"quantity": quantity})
        self._commit()
        return CartResult.STOCK_EXCEEDED if exceeded else CartResult.UPDATED

    def remove_from_cart(self, product_id: int) -> CartResult:
        if product_id not in self._items:
            return CartResult.UNCHANGED
        del self._items[product_id]
        self._commit()
        return CartResult.REMOVED

    def update_quantity(self, product_id: int, quantity: int) -> CartResult:
        existing = self._items.get(product_id)
        if existing is None:
            return CartResult.UNCHANGED
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric quantity %r for product %s", quantity, product_id)
            return CartResult.UNCHANGED
        if quantity < 1:
            return self.remove_from_cart(product_id)

        exceeded = quantity > existing.stock
        new_quantity = min(quantity, existing.stock)
        if new_quantity == existing.quantity:
            return CartResult.STOCK_EXCEEDED if exceeded else CartResult.UNCHANGED
        self._items[product_id] = existing.model_copy(update={"quantity": new_quantity})
        self._commit()
        return CartResult.STOCK_EXCEEDED if exceeded else CartResult.UPDATED

    def discard_ordered(self, ordered: List[CartLineItem]) -> CartResult:
        """Take ordered quantities out of the cart, keeping anything added since."""
        changed = False
        for line in ordered:
            existing = self._items.get(line.productId)
            if existing is None:
                continue
            remaining = existing.quantity - line.quantity
            if remaining < 1:
                del self._items[line.productId]
            else:
                self._items[line.productId] = existing.model_copy(update={"quantity": remaining})
            changed = True
        if not changed:
            return CartResult.UNCHANGED
        self._commit()
        return CartResult.CLEARED if not self._items else CartResult.UPDATED

    def clear_cart(self) -> CartResult:
        self._items.clear()
        self._commit()
        return CartResult.CLEARED
