from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.validation import Number
from textual.widgets import Button, Input, Label, MarkdownViewer

from store.cart import CartOutcome, add_to_cart
from store.errors import StoreError
from store.models import Product
from utils.pure import generate_markdown_table, money


class AddToCartModal(ModalScreen[bool]):
    """
    Product detail plus a quantity picker.
    Returns True if an item was pushed onto the cart, False if not.
    """

    order_qty = reactive(1)

    def __init__(self, pid: int) -> None:
        super().__init__()

        self._pid = pid
        self._prod: Product | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="hort-prod-detail"):
            yield MarkdownViewer("", show_table_of_contents=False)
            with Vertical():
                yield Label("Order Quantity")
                with Horizontal():
                    yield Button("-", id="btn-sub-qty")
                    yield Input(
                        value="1",
                        id="input-order-qty",
                        type="integer",
                        validators=[Number(minimum=1)],
                    )
                    yield Button("+", id="btn-add-qty")
                with Horizontal():
                    yield Button("Go Back", id="btn-quit")
                    yield Button("Add to Cart", id="btn-addcart", variant="primary")

    async def on_mount(self):
        self._prod = self.app.repo.find_product_by_id(self._pid)
        if self._prod is None:
            self.notify("Product ID not found.", severity="error")
            self.dismiss(False)
            return

        p = self._prod
        rows = [
            ["ID", p.pid],
            ["Name", p.name],
            ["Category", p.category],
            ["Price", money(p.price)],
            ["In Stock", p.quantity],
            ["Rating", f"{p.average_rating():.2f} ({p.rating_count} ratings)"],
        ]
        md_table = generate_markdown_table(["Attribute", "Value"], rows, ["l", "l"])
        await self.query_one(MarkdownViewer).document.update(
            f"### Product Detail: {p.name}\n\n" + md_table
        )

        if p.quantity < 1:
            order_btn = self.query_one("#btn-addcart", Button)
            order_btn.label = "Out of Stock"
            order_btn.disabled = True
            order_btn.variant = "warning"

        self.query_one("#input-order-qty").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    def on_input_changed(self, message: Input.Changed) -> None:
        if (
            message.input.id == "input-order-qty"
            and message.input.is_valid
            and self.focused == message.input
        ):
            self.order_qty = int(message.value)

    def watch_order_qty(self, qty: int) -> None:
        self.query_one("#btn-sub-qty", Button).disabled = qty <= 1
        self.query_one("#input-order-qty", Input).value = str(qty)

    @on(Button.Pressed, "#btn-add-qty")
    def handle_add_qty(self):
        self.order_qty += 1

    @on(Button.Pressed, "#btn-sub-qty")
    def handle_sub_qty(self):
        self.order_qty = max(1, self.order_qty - 1)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)

    @on(Button.Pressed, "#btn-addcart")
    def handle_addcart(self):
        customer = self.app.session.customer
        try:
            outcome, item = add_to_cart(self.app.repo, customer, self._pid, self.order_qty)
        except StoreError as e:
            # the item is on the cart in memory, only the write failed
            self.app.save_failed(e)
            self.dismiss(True)
            return

        if outcome is CartOutcome.NOT_FOUND:
            self.notify("Product ID not found.", severity="error")
            self.dismiss(False)
        elif outcome is CartOutcome.INSUFFICIENT_STOCK:
            self.notify(
                f"Insufficient Stock! Only {self._prod.quantity} available.",
                severity="error",
            )
        else:
            self.app.notify(f"Added {item.quantity} x {item.snapshot.name} to cart.")
            self.dismiss(True)
