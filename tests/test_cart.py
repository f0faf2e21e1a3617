"""Tests Cart Aggregator + CartContext (synchro en arrière-plan)."""
from unittest.mock import MagicMock

import pytest

from src.cart import CartAggregator, CartContext
from src.errors import NotFoundError, TransientIOError


def _item(**kw):
    base = {"productId": "p1", "variantId": 1, "productTitle": "Tee", "variantTitle": "M",
            "price": 500, "quantity": 1, "image": ""}
    base.update(kw)
    return base


# ── Agrégateur ──────────────────────────────────────────────────────────

class TestCartAggregator:
    def test_add_merges_matching_key(self):
        cart = CartAggregator()
        cart.add_item(_item(quantity=1))
        cart.add_item(_item(quantity=2))
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.total == 1500

    def test_different_variant_appends(self):
        cart = CartAggregator()
        cart.add_item(_item())
        cart.add_item(_item(variantId=2, price=700))
        assert len(cart.items) == 2
        assert cart.item_count == 2
        assert cart.total == 1200

    def test_remove_absent_is_noop(self):
        cart = CartAggregator([_item()])
        before = cart.items
        cart.remove_item("p1", 99)
        cart.remove_item("other", 1)
        assert cart.items == before

    def test_remove_matching(self):
        cart = CartAggregator([_item(), _item(variantId=2)])
        cart.remove_item("p1", 1)
        assert [i.variantId for i in cart.items] == [2]

    def test_clear(self):
        cart = CartAggregator([_item(quantity=5)])
        cart.clear()
        assert cart.items == []
        assert cart.total == 0
        assert cart.item_count == 0

    def test_total_is_integer_after_sequence(self):
        cart = CartAggregator()
        cart.add_item(_item(price=333, quantity=3))
        cart.add_item(_item(productId="p2", price=1, quantity=7))
        cart.remove_item("p2", 1)
        cart.add_item(_item(price=333, quantity=1))
        assert cart.total == 333 * 4
        assert isinstance(cart.total, int)

    def test_payload(self):
        cart = CartAggregator([_item(quantity=2)])
        payload = cart.to_payload()
        assert payload["total"] == 1000
        assert payload["items"][0]["productId"] == "p1"

    def test_items_returns_copy(self):
        cart = CartAggregator([_item()])
        cart.items.clear()
        assert len(cart.items) == 1


# ── Contexte ────────────────────────────────────────────────────────────

class TestCartContext:
    def test_first_add_creates_cart(self):
        client = MagicMock()
        client.create.return_value = {"id": "c1", "items": [], "total": 500}
        ctx = CartContext(client)
        ctx.add_item(_item())
        ctx.wait_for_sync()
        client.create.assert_called_once()
        assert client.create.call_args.args[0]["total"] == 500
        assert ctx.cart_id == "c1"
        ctx.close()

    def test_following_mutations_update(self):
        client = MagicMock()
        client.create.return_value = {"id": "c1"}
        ctx = CartContext(client)
        ctx.add_item(_item())
        ctx.add_item(_item(quantity=2))
        ctx.wait_for_sync()
        client.create.assert_called_once()
        client.update.assert_called_once()
        cart_id, payload = client.update.call_args.args
        assert cart_id == "c1"
        assert payload["total"] == 1500
        ctx.close()

    def test_sync_failure_keeps_local_state(self):
        client = MagicMock()
        client.create.side_effect = TransientIOError("down")
        ctx = CartContext(client)
        ctx.add_item(_item(quantity=2))
        ctx.wait_for_sync()
        assert ctx.item_count == 2
        assert ctx.total == 1000
        assert ctx.cart_id is None
        ctx.close()

    def test_sync_recreates_missing_cart(self):
        client = MagicMock()
        client.get.return_value = {"id": "old", "items": [_item()], "total": 500}
        client.update.side_effect = NotFoundError("gone")
        client.create.return_value = {"id": "new"}
        ctx = CartContext(client, cart_id="old")
        ctx.add_item(_item())
        ctx.wait_for_sync()
        assert ctx.cart_id == "new"
        assert client.create.call_args.args[0]["total"] == 1000
        ctx.close()

    def test_load_existing_cart(self):
        client = MagicMock()
        client.get.return_value = {"id": "c9", "items": [_item(quantity=3)], "total": 1500}
        ctx = CartContext(client, cart_id="c9")
        assert ctx.item_count == 3
        assert ctx.total == 1500
        ctx.close()

    @pytest.mark.parametrize("error", [NotFoundError("x"), TransientIOError("x")])
    def test_load_failure_falls_back_to_empty(self, error):
        client = MagicMock()
        client.get.side_effect = error
        ctx = CartContext(client, cart_id="c9")
        assert ctx.items == []
        assert ctx.cart_id is None
        ctx.close()

    def test_clear_empty_new_cart_does_not_create(self):
        client = MagicMock()
        ctx = CartContext(client)
        ctx.clear()
        ctx.wait_for_sync()
        client.create.assert_not_called()
        ctx.close()
