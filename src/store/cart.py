# last-in-first-out cart and the add / undo workflow around it
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Deque, List, Optional, Tuple

from utils.logger import get_logger

if TYPE_CHECKING:
    from store.models import CartItem, Customer
    from store.repository import Repository

_logger = get_logger(__name__)


class Cart:
    """
    A customer's cart. Items only enter and leave at the top.
    """

    def __init__(self) -> None:
        self._items: List[CartItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, item: CartItem) -> None:
        self._items.append(item)

    def peek_top(self) -> Optional[CartItem]:
        return self._items[-1] if self._items else None

    def pop_top(self) -> Optional[CartItem]:
        if not self._items:
            return None
        return self._items.pop()

    def is_empty(self) -> bool:
        return not self._items

    def snapshot_in_order(self) -> List[CartItem]:
        """Items from top to bottom. The cart is left untouched."""
        return self._items[::-1]

    def drain(self) -> Deque[CartItem]:
        """
        Pop everything into a queue. The item pushed first ends up at the
        front, the same order the customer added them in.
        """
        queue: Deque[CartItem] = deque()
        while self._items:
            queue.appendleft(self._items.pop())
        return queue

    def total_estimate(self) -> float:
        return sum(item.line_total for item in self._items)


class CartOutcome(Enum):
    ADDED = "added"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"


def add_to_cart(
    repo: Repository, customer: Customer, pid: int, quantity: int
) -> Tuple[CartOutcome, Optional[CartItem]]:
    """
    Push a snapshot of product `pid` onto the customer's cart.

    Stock is checked against the live product but not reserved; checkout
    checks it again.
    """
    product = repo.find_product_by_id(pid)
    if product is None:
        _logger.info(f"Customer {customer.cid} tried to add unknown product {pid}")
        return CartOutcome.NOT_FOUND, None

    if quantity > product.quantity:
        _logger.info(
            f"Customer {customer.cid} asked for {quantity} x {pid}, only {product.quantity} in stock"
        )
        return CartOutcome.INSUFFICIENT_STOCK, None

    item = product.cart_item(quantity)
    customer.cart.push(item)
    _logger.debug(f"Customer {customer.cid} pushed {quantity} x {pid}")
    repo.persist()
    return CartOutcome.ADDED, item


def undo_last_add(repo: Repository, customer: Customer) -> Optional[CartItem]:
    """Remove the most recently added item. None if the cart was empty."""
    item = customer.cart.pop_top()
    if item is None:
        return None
    _logger.debug(f"Customer {customer.cid} undid {item.quantity} x {item.snapshot.pid}")
    repo.persist()
    return item
