"""
Cart accumulator tests
"""

import threading
from decimal import Decimal

import pytest

from brewpos.models.cart import Cart
from brewpos.models.menu import MenuItem


def make_item(item_id, price, name="Item"):
    return MenuItem(id=item_id, name=name, price=Decimal(price))


class TestCart:
    """Cart behaviour"""

    def test_empty_cart_total_is_zero(self):
        cart = Cart()
        assert cart.total() == Decimal("0")
        assert cart.is_empty
        assert len(cart) == 0

    def test_repeated_add_increments_quantity(self):
        cart = Cart()
        item = make_item(1, "5.50")
        for _ in range(3):
            cart.add_item(item)

        line = cart.get(1)
        assert len(cart) == 1
        assert line.quantity == 3
        assert line.subtotal == Decimal("16.50")

    def test_price_captured_at_first_add(self):
        cart = Cart()
        cart.add_item(make_item(1, "5.50"))
        # Menu price changes mid-session
        cart.add_item(make_item(1, "9.99"))

        line = cart.get(1)
        assert line.unit_price == Decimal("5.50")
        assert line.subtotal == Decimal("11.00")

    def test_total_sums_line_subtotals(self):
        cart = Cart()
        macchiato = make_item(1, "5.50")
        cart.add_item(macchiato)
        cart.add_item(macchiato)
        cart.add_item(make_item(2, "4.25"))

        assert cart.total() == Decimal("15.25")
        assert cart.item_count == 3
        assert cart.total() == sum(line.subtotal for line in cart.lines())

    def test_lines_keep_insertion_order(self):
        cart = Cart()
        cart.add_item(make_item(3, "1.00"))
        cart.add_item(make_item(1, "1.00"))
        cart.add_item(make_item(2, "1.00"))
        assert [line.menu_item_id for line in cart.lines()] == [3, 1, 2]

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_set_quantity_non_positive_removes(self, quantity):
        cart = Cart()
        cart.add_item(make_item(1, "2.00"))
        cart.set_quantity(1, quantity)
        assert 1 not in cart
        assert cart.total() == Decimal("0")

    def test_set_quantity_zero_same_as_remove(self):
        a, b = Cart(), Cart()
        for cart in (a, b):
            cart.add_item(make_item(1, "2.00"))
            cart.add_item(make_item(2, "3.00"))
        a.set_quantity(1, 0)
        b.remove_item(1)
        assert [l.menu_item_id for l in a.lines()] == [l.menu_item_id for l in b.lines()]
        assert a.total() == b.total()

    def test_set_quantity_updates_subtotal(self):
        cart = Cart()
        cart.add_item(make_item(1, "4.25"))
        cart.set_quantity(1, 4)
        assert cart.get(1).subtotal == Decimal("17.00")

    def test_unknown_ids_are_ignored(self):
        cart = Cart()
        cart.add_item(make_item(1, "2.00"))
        cart.remove_item(999)
        assert cart.set_quantity(999, 3) is None
        assert 999 not in cart
        assert len(cart) == 1

    def test_snapshot_is_detached(self):
        cart = Cart()
        cart.add_item(make_item(1, "2.00"))
        snapshot = cart.snapshot()
        cart.set_quantity(1, 5)
        cart.clear()

        assert snapshot[0].quantity == 1
        assert cart.is_empty

    def test_discard_removes_only_ordered_quantities(self):
        cart = Cart()
        macchiato, latte = make_item(1, "5.50"), make_item(2, "4.25")
        cart.add_item(macchiato)
        ordered = cart.snapshot()
        cart.add_item(macchiato)
        cart.add_item(latte)

        cart.discard(ordered)

        assert cart.get(1).quantity == 1
        assert cart.get(2).quantity == 1
        assert cart.total() == Decimal("9.75")

    def test_discard_after_line_removed(self):
        cart = Cart()
        cart.add_item(make_item(1, "5.50"))
        ordered = cart.snapshot()
        cart.remove_item(1)
        cart.discard(ordered)
        assert cart.is_empty

    def test_snapshot_while_other_thread_mutates(self):
        cart = Cart()
        stop = threading.Event()
        errors = []

        def mutate():
            item_id = 0
            while not stop.is_set():
                item_id += 1
                cart.add_item(make_item(item_id, "1.00"))
                cart.remove_item(item_id - 1)

        def read():
            try:
                for _ in range(2000):
                    cart.snapshot()
                    cart.total()
            except RuntimeError as e:
                errors.append(e)

        writer = threading.Thread(target=mutate)
        reader = threading.Thread(target=read)
        writer.start()
        reader.start()
        reader.join()
        stop.set()
        writer.join()

        assert errors == []
