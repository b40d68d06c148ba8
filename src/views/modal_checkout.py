from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer

from store.checkout import MAX_RATING, MIN_RATING, Receipt
from utils.pure import receipt_markdown


class RatingModal(ModalScreen[str]):
    """
    Asks for a rating of a product that was just paid for.
    Returns whatever was typed; the checkout pipeline validates it and asks again.
    """

    def __init__(self, product_name: str, retry: bool = False):
        super().__init__()
        self.product_name = product_name
        self.retry = retry

    def compose(self) -> ComposeResult:
        with Vertical(id="div-rating"):
            yield Label(f"Rate {self.product_name} ({MIN_RATING}-{MAX_RATING})", id="caption")
            if self.retry:
                yield Label(
                    f"Invalid. Please enter {MIN_RATING}-{MAX_RATING}.",
                    id="label-rating-invalid",
                )
            yield Input(placeholder=str(MAX_RATING), id="input-rating")
            with Horizontal():
                yield Button("Submit", id="btn-submit-rating", variant="primary")

    def on_mount(self):
        self.query_one("#input-rating").focus()

    @on(Input.Submitted, "#input-rating")
    @on(Button.Pressed, "#btn-submit-rating")
    def handle_submit(self) -> None:
        self.dismiss(self.query_one("#input-rating", Input).value)


class ReceiptModal(ModalScreen[None]):
    """
    Shows the receipt of a finished checkout.
    """

    def __init__(self, receipt: Receipt):
        super().__init__()
        self.receipt = receipt

    def compose(self) -> ComposeResult:
        with Vertical():
            yield MarkdownViewer("", show_table_of_contents=False)
            with Horizontal():
                yield Button("Done", id="btn-done", variant="primary")

    async def on_mount(self):
        await self.query_one(MarkdownViewer).document.update(
            receipt_markdown(self.receipt)
        )
        self.query_one("#btn-done").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(None)

    @on(Button.Pressed, "#btn-done")
    def handle_done(self):
        self.dismiss(None)
