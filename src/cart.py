"""
Cart Aggregator + CartContext.

CartAggregator : état local du panier, clé (productId, variantId), total dérivé.
CartContext    : agrégateur + synchro en arrière-plan vers le Cart Store.
                 Une synchro ratée est journalisée, jamais remontée à l'acheteur.
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from .errors import BuilderError, NotFoundError
from .models import CartItem

log = logging.getLogger(__name__)


class CartAggregator:
    def __init__(self, items=None):
        self._items: List[CartItem] = []
        for item in items or []:
            self.add_item(item)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def add_item(self, item) -> None:
        """Fusionne par (productId, variantId) en sommant les quantités, sinon ajoute."""
        if not isinstance(item, CartItem):
            item = CartItem(**item)
        for i, existing in enumerate(self._items):
            if existing.key == item.key:
                self._items[i] = existing.model_copy(update={"quantity": existing.quantity + item.quantity})
                return
        self._items.append(item)

    def remove_item(self, product_id: str, variant_id: int) -> None:
        self._items = [i for i in self._items if i.key != (product_id, variant_id)]

    def clear(self) -> None:
        self._items = []

    @property
    def total(self) -> int:
        return sum(i.price * i.quantity for i in self._items)

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self._items)

    def to_payload(self) -> dict:
        """Forme envoyée au Cart Store ; total arrondi en centimes."""
        return {
            "items": [i.model_dump() for i in self._items],
            "total": int(round(self.total)),
        }


class CartContext:
    """
    Panier de la session acheteur.

    `client` expose get(id) / create(payload) / update(id, payload)
    (voir src.client.CartClient). Les synchros passent par un worker unique,
    donc elles s'appliquent dans l'ordre des mutations.
    """

    def __init__(self, client, cart_id: Optional[str] = None):
        self.client = client
        self.cart_id = cart_id
        self.cart = CartAggregator()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cart-sync")
        self._last: Optional[Future] = None
        if cart_id:
            self.load(cart_id)

    # ── Lecture ─────────────────────────────────────────────────────────────

    def load(self, cart_id: str) -> None:
        try:
            data = self.client.get(cart_id)
        except BuilderError as e:
            log.warning("Panier %s non chargé (%s), panier vide", cart_id, e.detail or type(e).__name__)
            self.cart_id = None
            self.cart = CartAggregator()
            return
        self.cart_id = data["id"]
        self.cart = CartAggregator(data.get("items", []))

    @property
    def items(self) -> List[CartItem]:
        return self.cart.items

    @property
    def total(self) -> int:
        return self.cart.total

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    # ── Mutations ───────────────────────────────────────────────────────────

    def add_item(self, item) -> None:
        self.cart.add_item(item)
        self._schedule_sync()

    def remove_item(self, product_id: str, variant_id: int) -> None:
        self.cart.remove_item(product_id, variant_id)
        self._schedule_sync()

    def clear(self) -> None:
        self.cart.clear()
        self._schedule_sync()

    # ── Synchro ─────────────────────────────────────────────────────────────

    def _schedule_sync(self) -> None:
        payload = self.cart.to_payload()
        self._last = self._executor.submit(self._sync, payload)

    def _sync(self, payload: dict) -> None:
        try:
            if self.cart_id is None:
                if not payload["items"]:
                    return
                self.cart_id = self.client.create(payload)["id"]
                return
            try:
                self.client.update(self.cart_id, payload)
            except NotFoundError:
                log.info("Panier %s disparu côté serveur, recréé", self.cart_id)
                self.cart_id = self.client.create(payload)["id"]
        except BuilderError as e:
            log.warning("Synchro panier échouée (%s) : %s", type(e).__name__, e.detail)

    def wait_for_sync(self, timeout: Optional[float] = None) -> None:
        if self._last is not None:
            self._last.result(timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
