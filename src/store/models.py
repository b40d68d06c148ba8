# provide dataclass models

from __future__ import annotations

from dataclasses import dataclass, field

from store.cart import Cart


@dataclass
class Product:
    pid: int
    name: str
    price: float
    category: str
    quantity: int  # live stock
    seller_id: int
    rating_sum: float = 0.0
    rating_count: int = 0

    def average_rating(self) -> float:
        if self.rating_count == 0:
            return 0.0
        return self.rating_sum / self.rating_count

    def add_rating(self, score: float) -> None:
        """Caller guarantees 1 <= score <= 5."""
        self.rating_sum, self.rating_count = (
            self.rating_sum + score,
            self.rating_count + 1,
        )

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            pid=self.pid,
            name=self.name,
            category=self.category,
            seller_id=self.seller_id,
            price_at_add=self.price,
            rating_at_add=self.average_rating(),
        )

    def cart_item(self, quantity: int) -> CartItem:
        return CartItem(snapshot=self.snapshot(), quantity=quantity)


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Copy of a product taken when it was put in a cart.
    Later price or rating changes on the live product do not reach it.
    """

    pid: int
    name: str
    category: str
    seller_id: int
    price_at_add: float
    rating_at_add: float


@dataclass(frozen=True)
class CartItem:
    snapshot: ProductSnapshot
    quantity: int

    @property
    def line_total(self) -> float:
        return self.snapshot.price_at_add * self.quantity


@dataclass(frozen=True)
class Seller:
    sid: int
    name: str
    email: str


@dataclass(frozen=True)
class Customer:
    cid: int
    name: str
    address: str
    phone: str
    email: str
    cart: Cart = field(default_factory=Cart, compare=False, repr=False)
