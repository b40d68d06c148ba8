from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    broadcasted when the user logs out
    """

    bubble = True


class UserLoginMessage(Message):
    """
    Fired once a seller or customer logged in, so screens can refresh
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired when an item was pushed onto or popped off the cart, or the cart was checked out.
    Triggers a refresh of the cart screen.

    If posted from outside CartScreen, make sure to post at App level
    """

    bubble = True


class CatalogChangedMessage(Message):
    """
    Fired when a product was listed, or stock / ratings changed after a checkout.
    Listened to by the browse and seller screens.
    """

    bubble = True


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
