from datetime import datetime
from typing import Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.events import ScreenResume
from textual.widgets import Button, Markdown, Rule

from store.cart import undo_last_add
from store.checkout import run_checkout
from store.errors import StoreError
from store.models import Product
from utils.messages import CartChangedMessage, CatalogChangedMessage
from utils.pure import cart_markdown
from views.base_screen import BaseScreen
from views.modal_checkout import RatingModal, ReceiptModal
from views.modal_dialog import DialogModal


class CartScreen(BaseScreen):
    """
    Cart of the logged-in customer, newest item first, with undo and checkout.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with VerticalScroll(id="vertscroll-content"):
            yield Markdown("", id="md-cart")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Undo Last Item", id="btn-undo")
            yield Button("Refresh", id="btn-refresh")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    def on_mount(self):
        self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ScreenResume)
    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True)
    async def handle_cart_change(self):
        customer = self.app.session.customer
        if customer is None:
            return
        items = customer.cart.snapshot_in_order()

        await self.query_one("#md-cart", Markdown).update(cart_markdown(items))
        content = self.query_one("#vertscroll-content")
        if items:
            content.remove_class("no-items")
        else:
            content.add_class("no-items")

    @on(Button.Pressed, "#btn-undo")
    def handle_undo(self) -> None:
        customer = self.app.session.customer
        try:
            item = undo_last_add(self.app.repo, customer)
        except StoreError as e:
            self.app.save_failed(e)
            item = None
        else:
            if item is None:
                self.notify("Cart is already empty.", severity="information")
                return
            self.notify(f"{item.snapshot.name} removed from cart.")
        self.post_message(CartChangedMessage())

    async def _prompt_rating(self, product: Product, attempt: int) -> Optional[str]:
        return await self.app.push_screen_wait(RatingModal(product.name, retry=attempt > 0))

    @on(Button.Pressed, "#btn-checkout")
    @work(exclusive=True, group="checkout")
    async def handle_checkout(self) -> None:
        customer = self.app.session.customer
        if customer.cart.is_empty():
            self.notify("Cart is empty. Add items before checking out.", severity="warning")
            return

        if not await self.app.push_screen_wait(
            DialogModal(
                "Check out all items now? This cannot be undone.",
                primary_text="Yes",
                secondary_text="No",
                tone="positive",
            )
        ):
            return

        receipt = await run_checkout(
            self.app.repo, customer, self._prompt_rating, datetime.now()
        )

        self.post_message(CartChangedMessage())
        self.app.post_message(CatalogChangedMessage())
        if receipt is None:
            return
        if receipt.save_error is not None:
            self.app.save_failed(receipt.save_error)

        for short in receipt.shortfalls:
            self.notify(
                f"Could not process {short.name}. Stock insufficient.",
                severity="error",
            )
        await self.app.push_screen_wait(ReceiptModal(receipt))
