"""
Common Error Constants

Centralized error messages shared by the checkout endpoint, its tests and the
checkout client.
"""

# Client input errors
ERROR_NO_ITEMS = "No items provided"
ERROR_INVALID_ITEM = "Invalid cart item"

# Configuration errors
ERROR_STRIPE_NOT_CONFIGURED = "STRIPE_SECRET_KEY not configured"

# Upstream errors
ERROR_CHECKOUT_FAILED = "Failed to create checkout session"

# Client-side errors
ERROR_CHECKOUT_BUSY = "Checkout already in progress"
ERROR_CHECKOUT_TIMEOUT = "Checkout request timed out"
ERROR_EMPTY_CART = "Cart is empty"
