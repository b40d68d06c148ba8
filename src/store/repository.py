# in-memory collections of sellers, customers and products, mirrored to the data files
from __future__ import annotations

import os.path
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from store import filestore
from store.filestore import convert
from store.models import Customer, Product, Seller
from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)


class Repository:
    """
    Authoritative in-memory state of the marketplace.

    Collections keep insertion order and only grow. Ids come from per-kind
    counters starting at 1 and are never handed out twice, also across
    `load()`. Every mutating method calls `persist()` before returning.
    """

    def __init__(self, data_dir: Optional[str] = None) -> None:
        self.data_dir = data_dir if data_dir is not None else config.DATA_DIR

        self.sellers: List[Seller] = []
        self.customers: List[Customer] = []
        self.products: List[Product] = []

        self.next_sid = 1
        self.next_cid = 1
        self.next_pid = 1

    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    # ---------------------------
    # Registration & catalog
    # ---------------------------

    def register_seller(self, name: str, email: str) -> Seller:
        """Always succeeds. Emails are not checked for uniqueness."""
        seller = Seller(sid=self.next_sid, name=name, email=email)
        self.next_sid += 1
        self.sellers.append(seller)
        _logger.info(f"Registered seller {seller.sid} <{email}>")
        self.persist()
        return seller

    def register_customer(
        self, name: str, address: str, phone: str, email: str
    ) -> Customer:
        """Always succeeds. Emails are not checked for uniqueness."""
        customer = Customer(
            cid=self.next_cid, name=name, address=address, phone=phone, email=email
        )
        self.next_cid += 1
        self.customers.append(customer)
        _logger.info(f"Registered customer {customer.cid} <{email}>")
        self.persist()
        return customer

    def add_product(
        self, name: str, price: float, category: str, quantity: int, seller_id: int
    ) -> Product:
        """Values are stored as given, ratings start empty."""
        product = Product(
            pid=self.next_pid,
            name=name,
            price=price,
            category=category,
            quantity=quantity,
            seller_id=seller_id,
        )
        self.next_pid += 1
        self.products.append(product)
        _logger.info(f"Seller {seller_id} listed product {product.pid} '{name}'")
        self.persist()
        return product

    # ---------------------------
    # Lookups (linear scans, first match wins)
    # ---------------------------

    def find_seller_by_email(self, email: str) -> Optional[Seller]:
        return next((s for s in self.sellers if s.email == email), None)

    def find_customer_by_email(self, email: str) -> Optional[Customer]:
        return next((c for c in self.customers if c.email == email), None)

    def find_customer_by_id(self, cid: int) -> Optional[Customer]:
        return next((c for c in self.customers if c.cid == cid), None)

    def find_product_by_id(self, pid: int) -> Optional[Product]:
        return next((p for p in self.products if p.pid == pid), None)

    def products_by_seller(self, seller_id: int) -> List[Product]:
        return [p for p in self.products if p.seller_id == seller_id]

    # ---------------------------
    # Persistence
    # ---------------------------

    def persist(self) -> None:
        """
        Rewrite all four data files from memory.
        Raises StoreError if a file cannot be written.
        """
        filestore.write_records(
            self._path(filestore.SELLERS_FILE),
            ((s.sid, s.name, s.email) for s in self.sellers),
        )
        filestore.write_records(
            self._path(filestore.CUSTOMERS_FILE),
            ((c.cid, c.name, c.address, c.phone, c.email) for c in self.customers),
        )
        filestore.write_records(
            self._path(filestore.PRODUCTS_FILE),
            (
                (
                    p.pid,
                    p.name,
                    p.price,
                    p.category,
                    p.quantity,
                    p.seller_id,
                    p.rating_sum,
                    p.rating_count,
                )
                for p in self.products
            ),
        )
        # top of each stack first
        filestore.write_records(
            self._path(filestore.CARTS_FILE),
            (
                (c.cid, item.snapshot.pid, item.quantity)
                for c in self.customers
                for item in c.cart.snapshot_in_order()
            ),
        )
        _logger.debug(f"Persisted state to {self.data_dir}")

    def load(self) -> None:
        """
        Replace in-memory state with the contents of the data files.
        Missing files count as empty. Raises StoreError on unreadable files
        or non-numeric id/number fields.
        """
        sellers: List[Seller] = []
        customers: List[Customer] = []
        products: List[Product] = []
        next_sid = next_cid = next_pid = 1

        path = self._path(filestore.SELLERS_FILE)
        for line_no, f in filestore.read_records(path, filestore.SELLER_FIELDS):
            sid = convert(int, f[0], "seller id", path, line_no)
            sellers.append(Seller(sid=sid, name=f[1], email=f[2]))
            next_sid = max(next_sid, sid + 1)

        path = self._path(filestore.CUSTOMERS_FILE)
        for line_no, f in filestore.read_records(path, filestore.CUSTOMER_FIELDS):
            cid = convert(int, f[0], "customer id", path, line_no)
            customers.append(
                Customer(cid=cid, name=f[1], address=f[2], phone=f[3], email=f[4])
            )
            next_cid = max(next_cid, cid + 1)

        path = self._path(filestore.PRODUCTS_FILE)
        for line_no, f in filestore.read_records(path, filestore.PRODUCT_FIELDS):
            pid = convert(int, f[0], "product id", path, line_no)
            products.append(
                Product(
                    pid=pid,
                    name=f[1],
                    price=convert(float, f[2], "price", path, line_no),
                    category=f[3],
                    quantity=convert(int, f[4], "quantity", path, line_no),
                    seller_id=convert(int, f[5], "seller id", path, line_no),
                    rating_sum=convert(float, f[6], "rating sum", path, line_no),
                    rating_count=convert(int, f[7], "rating count", path, line_no),
                )
            )
            next_pid = max(next_pid, pid + 1)

        self.sellers, self.customers, self.products = sellers, customers, products
        self.next_sid, self.next_cid, self.next_pid = next_sid, next_cid, next_pid

        self._load_carts()

        _logger.info(
            f"Loaded {len(sellers)} sellers, {len(customers)} customers, "
            f"{len(products)} products from {self.data_dir}"
        )

    def _load_carts(self) -> None:
        # the file lists each stack top first, so push each customer's lines back to front
        path = self._path(filestore.CARTS_FILE)
        per_customer: Dict[int, List[Tuple[int, int]]] = defaultdict(list)
        for line_no, f in filestore.read_records(path, filestore.CART_FIELDS):
            cid = convert(int, f[0], "customer id", path, line_no)
            pid = convert(int, f[1], "product id", path, line_no)
            qty = convert(int, f[2], "quantity", path, line_no)
            per_customer[cid].append((pid, qty))

        for cid, entries in per_customer.items():
            customer = self.find_customer_by_id(cid)
            if customer is None:
                _logger.warning(f"{path}: cart of unknown customer {cid} dropped")
                continue
            for pid, qty in reversed(entries):
                product = self.find_product_by_id(pid)
                if product is None:
                    _logger.warning(f"{path}: unknown product {pid} in cart of {cid} dropped")
                    continue
                # snapshot taken now, the price at add time is not on disk
                customer.cart.push(product.cart_item(qty))
