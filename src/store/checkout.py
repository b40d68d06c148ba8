# turns a customer's cart into stock decrements, ratings and a receipt
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from store.errors import StoreError
from store.models import Customer, Product
from store.repository import Repository
from utils.logger import get_logger

_logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5

# (live product, attempt number starting at 0) -> raw answer typed by the user
RatingPrompt = Callable[[Product, int], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    unit_price: float  # price when the item was added to the cart
    rating: int

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class StockShortfall:
    name: str
    requested: int
    available: int


@dataclass
class Receipt:
    customer_id: int
    issued_at: datetime
    lines: List[ReceiptLine] = field(default_factory=list)
    shortfalls: List[StockShortfall] = field(default_factory=list)
    total: float = 0.0
    # set when the final save failed, the purchase still happened in memory
    save_error: Optional[StoreError] = None


def parse_rating(raw) -> Optional[int]:
    """Return the rating as int if `raw` is a whole number in 1..5, else None."""
    if raw is None:
        return None
    try:
        score = int(str(raw).strip())
    except ValueError:
        return None
    if MIN_RATING <= score <= MAX_RATING:
        return score
    return None


async def _collect_rating(product: Product, prompt_rating: RatingPrompt) -> int:
    attempt = 0
    while True:
        score = parse_rating(await prompt_rating(product, attempt))
        if score is not None:
            return score
        attempt += 1
        _logger.debug(f"Invalid rating for product {product.pid}, asking again")


async def run_checkout(
    repo: Repository,
    customer: Customer,
    prompt_rating: RatingPrompt,
    when: Optional[datetime] = None,
) -> Optional[Receipt]:
    """
    Check out the customer's whole cart.

    Returns None, and changes nothing, when the cart is empty. Otherwise the
    cart is drained and items are handled oldest first: an item whose live
    product lacks stock is reported in `Receipt.shortfalls` and skipped;
    every other item decrements the live stock, is charged at the price it
    had when added, and gets a rating from `prompt_rating`. Items already
    handled are never rolled back. The repository is persisted at the end;
    if that fails the receipt is still returned, with `save_error` set.
    """
    if customer.cart.is_empty():
        _logger.info(f"Customer {customer.cid} tried to check out an empty cart")
        return None

    queue = customer.cart.drain()
    receipt = Receipt(customer_id=customer.cid, issued_at=when or datetime.now())
    _logger.info(f"Checkout for customer {customer.cid}: {len(queue)} item(s)")

    while queue:
        item = queue.popleft()
        snap = item.snapshot
        product = repo.find_product_by_id(snap.pid)
        available = product.quantity if product is not None else 0

        if product is None or available < item.quantity:
            _logger.warning(
                f"Insufficient stock for product {snap.pid}: wanted {item.quantity}, have {available}"
            )
            receipt.shortfalls.append(
                StockShortfall(name=snap.name, requested=item.quantity, available=available)
            )
            continue

        product.quantity -= item.quantity
        receipt.total += item.line_total

        score = await _collect_rating(product, prompt_rating)
        product.add_rating(score)
        receipt.lines.append(
            ReceiptLine(
                name=snap.name,
                quantity=item.quantity,
                unit_price=snap.price_at_add,
                rating=score,
            )
        )

    try:
        repo.persist()
    except StoreError as e:
        _logger.error(f"Checkout for customer {customer.cid} not saved: {e}")
        receipt.save_error = e
    _logger.info(
        f"Checkout for customer {customer.cid} done, total {receipt.total:.2f}, "
        f"{len(receipt.shortfalls)} item(s) short"
    )
    return receipt
