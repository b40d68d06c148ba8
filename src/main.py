from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from store.errors import StoreError
from store.repository import Repository
from utils.logger import get_logger
from utils.messages import ModeSwitchedMessage, QuitRequestedMessage, UserLogoutMessage
from utils.state import SessionContext
from views.scr_browse import BrowseScreen
from views.scr_cart import CartScreen
from views.scr_login import LoginScreen
from views.scr_seller_products import SellerProductsScreen

_logger = get_logger(__name__)


class MarketplaceApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "browse": BrowseScreen,
        "cart": CartScreen,
        "seller_products": SellerProductsScreen,
    }

    SELLER_MODES = {"seller_products": "My Products"}
    CUSTOMER_MODES = {
        "browse": "Browse Products",
        "cart": "Cart",
    }

    CSS_PATH = [
        "styles/index.tcss",
        "styles/login.tcss",
        "styles/browse.tcss",
        "styles/cart.tcss",
        "styles/seller.tcss",
    ]

    session: SessionContext
    repo: Repository

    def __init__(self, repo: Repository | None = None):
        super().__init__()
        self.session = SessionContext()
        self.repo = repo if repo is not None else Repository()

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        try:
            self.repo.load()
        except StoreError as e:
            _logger.error(f"Could not load marketplace data: {e}")
            self.exit(message=f"Could not load marketplace data: {e}", return_code=1)
            return
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    def save_failed(self, err: StoreError) -> None:
        """Surface a failed write, the in-memory state is still intact."""
        _logger.error(f"Persisting failed: {err}")
        self.notify(f"Could not save data: {err}", severity="error", timeout=10)

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        self.session.end()
        self.notify("Logout successful.")
        self.main_flow()

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.session.end()
        self.exit()

    @work
    async def main_flow(self):
        await self.push_screen_wait(LoginScreen())
        if self.session.role == "customer":
            self.app.post_message(ModeSwitchedMessage(self.app.current_mode, "browse"))
            await self.switch_mode("browse")
        elif self.session.role == "seller":
            self.app.post_message(
                ModeSwitchedMessage(self.app.current_mode, "seller_products")
            )
            await self.switch_mode("seller_products")


def run() -> None:
    MarketplaceApp().run()


if __name__ == "__main__":
    run()
