from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from store.models import Customer, Seller


@dataclass
class SessionContext:
    """
    Who is logged in right now. At most one seller or one customer.

    Fields:
      - role: "seller" | "customer" | None when nobody is logged in
      - seller: the active Seller (role == "seller")
      - customer: the active Customer (role == "customer")
    """

    role: Optional[Literal["seller", "customer"]] = None
    seller: Optional[Seller] = None
    customer: Optional[Customer] = None

    @property
    def active(self) -> bool:
        return self.role is not None

    @property
    def display_name(self) -> str:
        if self.seller:
            return self.seller.name
        if self.customer:
            return self.customer.name
        return ""

    def start_seller(self, seller: Seller) -> None:
        self.end()
        self.role = "seller"
        self.seller = seller

    def start_customer(self, customer: Customer) -> None:
        self.end()
        self.role = "customer"
        self.customer = customer

    def end(self) -> None:
        self.role = None
        self.seller = None
        self.customer = None
