"""Detect and strip the success marker Stripe redirects back with."""
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from storefront.checkout.constants import SUCCESS_PARAM, SUCCESS_VALUE


class ViewState(str, Enum):
    BROWSING = "browsing"
    ORDER_CONFIRMED = "order_confirmed"


@dataclass(frozen=True)
class RedirectResult:
    """Outcome of inspecting a landing URL."""
    view: ViewState
    url: str  # URL to show in the address bar

    @property
    def confirmed(self) -> bool:
        return self.view is ViewState.ORDER_CONFIRMED


def _is_marker(key: str, value: str) -> bool:
    return key == SUCCESS_PARAM and value == SUCCESS_VALUE


def has_success_marker(url: str) -> bool:
    query = urlsplit(url).query
    return any(_is_marker(k, v) for k, v in parse_qsl(query, keep_blank_values=True))


def strip_success_marker(url: str) -> str:
    """Remove success=true, keeping other query parameters and the fragment."""
    parts = urlsplit(url)
    kept = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if not _is_marker(k, v)]
    return urlunsplit(parts._replace(query=urlencode(kept)))


def inspect_landing_url(url: str) -> RedirectResult:
    """Decide the initial view for a page load."""
    if not has_success_marker(url):
        return RedirectResult(view=ViewState.BROWSING, url=url)
    return RedirectResult(view=ViewState.ORDER_CONFIRMED, url=strip_success_marker(url))
