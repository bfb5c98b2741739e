"""Client session facade: cart, checkout and success redirect in one place."""
from storefront.cart import CartStore
from storefront.logging import get_logger
from .checkout import CheckoutClient
from .redirect import RedirectResult, ViewState, inspect_landing_url

logger = get_logger(__name__)


class StorefrontSession:
    """One visitor session, created once per page load."""

    def __init__(self, cart: CartStore, checkout: CheckoutClient):
        self.cart = cart
        self.checkout = checkout
        self.view = ViewState.BROWSING

    def on_page_load(self, url: str) -> RedirectResult:
        """
        Handle the landing URL.

        On success=true the cart is cleared, the view switches to
        ORDER_CONFIRMED and the returned URL no longer carries the marker,
        so a reload does not confirm twice.
        """
        result = inspect_landing_url(url)
        self.view = result.view
        if result.confirmed:
            logger.info("Order confirmed by checkout redirect, clearing cart")
            self.cart.clear()
        return result

    async def place_order(self) -> str:
        """Send the cart to checkout and return the URL to navigate to."""
        return await self.checkout.create_session(self.cart.to_checkout_items())
