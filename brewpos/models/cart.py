"""
Shopping cart
Session-scoped, never persisted. One line per menu item; the unit price is
captured when the item is first added and never re-read from the menu.
Request threads of the same session may touch the cart concurrently, so every
access goes through the cart's own lock.
"""

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .menu import MenuItem


@dataclass
class CartLine:
    menu_item_id: int
    name: str
    emoji: Optional[str]
    unit_price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart:
    """Menu item id -> CartLine, in insertion order."""

    def __init__(self):
        self._lines: Dict[int, CartLine] = {}
        self._lock = threading.RLock()

    def add_item(self, item: MenuItem) -> CartLine:
        """Add one unit; an item already in the cart keeps its original price."""
        with self._lock:
            line = self._lines.get(item.id)
            if line is not None:
                line.quantity += 1
                return line

            line = CartLine(
                menu_item_id=item.id,
                name=item.name,
                emoji=item.emoji,
                unit_price=Decimal(item.price),
            )
            self._lines[item.id] = line
            return line

    def set_quantity(self, item_id: int, quantity: int) -> Optional[CartLine]:
        """Zero or below removes the line. Unknown ids are ignored."""
        with self._lock:
            line = self._lines.get(item_id)
            if line is None:
                return None
            if quantity <= 0:
                del self._lines[item_id]
                return None
            line.quantity = quantity
            return line

    def remove_item(self, item_id: int) -> None:
        with self._lock:
            self._lines.pop(item_id, None)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def discard(self, lines: Iterable[CartLine]) -> None:
        """
        Take already-ordered quantities out of the cart.

        Units added after the snapshot was taken stay in the cart.
        """
        with self._lock:
            for ordered in lines:
                line = self._lines.get(ordered.menu_item_id)
                if line is None:
                    continue
                line.quantity -= ordered.quantity
                if line.quantity <= 0:
                    del self._lines[ordered.menu_item_id]

    def get(self, item_id: int) -> Optional[CartLine]:
        with self._lock:
            return self._lines.get(item_id)

    def lines(self) -> List[CartLine]:
        with self._lock:
            return list(self._lines.values())

    def total(self) -> Decimal:
        with self._lock:
            return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def snapshot(self) -> Tuple[CartLine, ...]:
        """Frozen copy of the lines, safe to use while the cart keeps changing"""
        with self._lock:
            return tuple(
                CartLine(line.menu_item_id, line.name, line.emoji, line.unit_price, line.quantity)
                for line in self._lines.values()
            )

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._lines

    @property
    def item_count(self) -> int:
        with self._lock:
            return sum(line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def __contains__(self, item_id: int) -> bool:
        with self._lock:
            return item_id in self._lines
