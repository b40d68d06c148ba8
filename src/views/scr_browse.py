from typing import List

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import DataTable, Input, Label, Select

from store import queries
from store.models import Product
from utils.messages import CartChangedMessage, CatalogChangedMessage
from utils.pure import PRODUCT_COLUMNS, product_row
from views.base_screen import BaseScreen
from views.modal_add_to_cart import AddToCartModal

VIEW_OPTIONS = [
    ("Top rated", "ranked"),
    ("Category", "category"),
    ("Name contains", "name"),
]


class BrowseScreen(BaseScreen):
    """
    Product browsing for customers: ranked list, category filter, name search.
    """

    # bindings here are only displayed in the footer
    BINDINGS = [
        Binding("fn+shift+1", "noop", "Add to Cart", show=True, key_display="⏎"),
    ]

    def __init__(self):
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal(id="hort-browse-controls"):
            yield Select(VIEW_OPTIONS, value="ranked", allow_blank=False, id="select-view")
            yield Input(
                id="input-query",
                placeholder="Category, or part of a product name (case-sensitive)",
                disabled=True,
            )
        yield DataTable(id="table-products")
        yield Label("", id="label-browse-info")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(*PRODUCT_COLUMNS)
        self.update_results()

    def action_noop(self) -> None:
        pass

    @on(Select.Changed, "#select-view")
    def handle_view_changed(self, event: Select.Changed) -> None:
        input_query = self.query_one("#input-query", Input)
        input_query.disabled = event.value == "ranked"
        if not input_query.disabled:
            input_query.focus()
        self.update_results()

    @on(Input.Changed, "#input-query")
    def handle_query_changed(self) -> None:
        self.update_results()

    @on(ScreenResume)
    @on(CatalogChangedMessage)
    def handle_catalog_changed(self) -> None:
        self.update_results()

    def _current_results(self) -> tuple[List[Product], str]:
        """Products to show plus an info line for empty results."""
        repo = self.app.repo
        view = self.query_one("#select-view", Select).value
        query = self.query_one("#input-query", Input).value

        if view == "category":
            if not query:
                return [], "Enter a category name."
            found = queries.filter_by_category(repo.products, query)
            return found, "" if found else f"No products found in category '{query}'."
        if view == "name":
            if not query:
                return [], "Enter part of a product name."
            found = queries.search_by_name(repo.products, query)
            return found, "" if found else f"No products found matching '{query}'."

        ranked = queries.rank_by_rating(repo.products)
        return ranked, "" if ranked else "No products listed yet."

    def update_results(self) -> None:
        table = self.query_one(DataTable)
        if not table.columns:  # not mounted yet
            return

        products, info = self._current_results()
        table.clear()
        for p in products:
            table.add_row(*product_row(p), key=str(p.pid))
        self.query_one("#label-browse-info", Label).update(info)

    @on(DataTable.RowSelected, "#table-products")
    @work(exclusive=True)
    async def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        pid = int(event.row_key.value)
        if await self.app.push_screen_wait(AddToCartModal(pid)):
            self.app.post_message(CartChangedMessage())
