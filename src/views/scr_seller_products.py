from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.validation import Number
from textual.widgets import Button, DataTable, Input, Label

from store.errors import StoreError
from utils.messages import CatalogChangedMessage
from utils.pure import PRODUCT_COLUMNS, product_row
from views.base_screen import BaseScreen


class SellerProductsScreen(BaseScreen):
    """
    Sellers list new products and see their current listings.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Label("My Listings", id="label-listings")
            yield DataTable(id="table-my-products")
            with Horizontal(id="hort-new-product"):
                with Vertical():
                    yield Label("Product Name")
                    yield Input(placeholder="Desk Lamp", id="input-name")
                with Vertical():
                    yield Label("Category")
                    yield Input(placeholder="Home", id="input-category")
                with Vertical():
                    yield Label("Price ($)")
                    yield Input(
                        placeholder="19.99",
                        id="input-price",
                        type="number",
                        validators=[Number(minimum=0.0)],
                    )
                with Vertical():
                    yield Label("Quantity")
                    yield Input(
                        placeholder="10",
                        id="input-qty",
                        type="integer",
                        validators=[Number(minimum=0)],
                    )
                with Horizontal(id="div-button"):
                    yield Button("Add Product", id="btn-add-product", variant="success")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(*PRODUCT_COLUMNS)
        self.render_listings()
        self.query_one("#input-name", Input).focus()

    @on(ScreenResume)
    @on(CatalogChangedMessage)
    def render_listings(self) -> None:
        seller = self.app.session.seller
        table = self.query_one(DataTable)
        if seller is None or not table.columns:
            return

        table.clear()
        for p in self.app.repo.products_by_seller(seller.sid):
            table.add_row(*product_row(p), key=str(p.pid))

    @on(Button.Pressed, "#btn-add-product")
    def handle_add_product(self) -> None:
        name_input = self.query_one("#input-name", Input)
        category_input = self.query_one("#input-category", Input)
        price_input = self.query_one("#input-price", Input)
        qty_input = self.query_one("#input-qty", Input)

        for widget in (name_input, category_input, price_input, qty_input):
            if not widget.value.strip():
                widget.focus()
                widget.add_class("-invalid")
                self.notify("Make sure all inputs are filled.", severity="error")
                return

        try:
            price = float(price_input.value)
            quantity = int(qty_input.value)
        except ValueError:
            self.notify("Please enter valid numeric values.", severity="error")
            return

        seller = self.app.session.seller
        name = name_input.value.strip()
        try:
            self.app.repo.add_product(
                name, price, category_input.value.strip(), quantity, seller.sid
            )
        except StoreError as e:
            self.app.save_failed(e)
        else:
            self.notify(f"Product '{name}' added successfully!")
            for widget in (name_input, category_input, price_input, qty_input):
                widget.value = ""
            name_input.focus()

        self.post_message(CatalogChangedMessage())
