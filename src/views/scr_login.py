from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from store.errors import StoreError
from utils.logger import get_logger
from utils.messages import UserLoginMessage
from views.base_screen import BaseScreen
from views.modal_dialog import QuitDialogModal

_logger = get_logger(__name__)


class LoginScreen(BaseScreen):
    """
    Email login for sellers and customers, plus sign up for both.
    Dismissed once a session has been started on app.session.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-loginscr"):
            with TabPane("Login", id="tab-login"):
                with Vertical(id="div-login"):
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-login-email")
                    with Horizontal(id="div-login-btns"):
                        yield Button("Quit", id="btn-quit")
                        yield Button("Seller Login", id="btn-login-seller")
                        yield Button(
                            "Customer Login", id="btn-login-customer", variant="primary"
                        )

            with TabPane("Customer Sign up", id="tab-signup-customer"):
                with Vertical(id="div-reg-customer"):
                    yield Label("Name")
                    yield Input(placeholder="Jane Doe", id="input-cust-name")
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-cust-email")
                    yield Label("Address")
                    yield Input(placeholder="123 Main St", id="input-cust-address")
                    yield Label("Phone")
                    yield Input(placeholder="555-0100", id="input-cust-phone")
                    with Horizontal(classes="div-reg-btns"):
                        yield Button("Register", id="btn-reg-customer", variant="primary")

            with TabPane("Seller Sign up", id="tab-signup-seller"):
                with Vertical(id="div-reg-seller"):
                    yield Label("Name")
                    yield Input(placeholder="Acme Goods", id="input-seller-name")
                    yield Label("Email")
                    yield Input(placeholder="shop@example.com", id="input-seller-email")
                    with Horizontal(classes="div-reg-btns"):
                        yield Button("Register", id="btn-reg-seller", variant="primary")

    def on_mount(self):
        self.query_one("#input-login-email").focus()

    def on_key(self, event: Key) -> None:
        if event.key != "enter":
            return
        if self.focused == self.query_one("#input-login-email"):
            self.handle_customer_login()
        elif self.focused == self.query_one("#input-cust-phone"):
            self.handle_customer_registration()
        elif self.focused == self.query_one("#input-seller-email"):
            self.handle_seller_registration()

    def _value(self, selector: str) -> str:
        return self.query_one(selector, Input).value.strip()

    def _login_email(self) -> str | None:
        email = self._value("#input-login-email")
        if not email:
            self.notify("Email cannot be empty!", severity="error")
        return email or None

    def _login_failed(self) -> None:
        self.notify("Email not found.", severity="error")
        input_email = self.query_one("#input-login-email", Input)
        input_email.focus()
        input_email.add_class("-invalid")

    @on(Button.Pressed, "#btn-login-customer")
    def handle_customer_login(self) -> None:
        email = self._login_email()
        if email is None:
            return

        customer = self.app.repo.find_customer_by_email(email)
        if customer is None:
            self._login_failed()
            return

        self.app.session.start_customer(customer)
        _logger.info(f"Customer {customer.cid} logged in")
        self.notify(f"Welcome back, {customer.name}!")
        self.app.post_message(UserLoginMessage())
        self.dismiss()

    @on(Button.Pressed, "#btn-login-seller")
    def handle_seller_login(self) -> None:
        email = self._login_email()
        if email is None:
            return

        seller = self.app.repo.find_seller_by_email(email)
        if seller is None:
            self._login_failed()
            return

        self.app.session.start_seller(seller)
        _logger.info(f"Seller {seller.sid} logged in")
        self.notify(f"Welcome back, {seller.name}!")
        self.app.post_message(UserLoginMessage())
        self.dismiss()

    def _prefill_login(self, email: str) -> None:
        self.get_child_by_type(TabbedContent).active = "tab-login"
        input_email = self.query_one("#input-login-email", Input)
        input_email.value = email
        input_email.remove_class("-invalid")
        input_email.focus()

    @on(Button.Pressed, "#btn-reg-customer")
    def handle_customer_registration(self) -> None:
        name = self._value("#input-cust-name")
        email = self._value("#input-cust-email")
        address = self._value("#input-cust-address")
        phone = self._value("#input-cust-phone")

        if not name or not email or not address or not phone:
            self.notify("Make sure all inputs are filled.", severity="error")
            return

        try:
            customer = self.app.repo.register_customer(name, address, phone, email)
        except StoreError as e:
            self.app.save_failed(e)
            return

        self.notify(f"Welcome, {customer.name}! Registration complete.")
        self._prefill_login(email)

    @on(Button.Pressed, "#btn-reg-seller")
    def handle_seller_registration(self) -> None:
        name = self._value("#input-seller-name")
        email = self._value("#input-seller-email")

        if not name or not email:
            self.notify("Make sure all inputs are filled.", severity="error")
            return

        try:
            seller = self.app.repo.register_seller(name, email)
        except StoreError as e:
            self.app.save_failed(e)
            return

        self.notify(f"Welcome, {seller.name}! You have been registered.")
        self._prefill_login(email)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_(self) -> None:
        self.app.push_screen(QuitDialogModal())
