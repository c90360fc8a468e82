"""Marketplace bounded context — catalogue, shopping cart, checkout and orders.

Vendors list event services in the catalogue, users collect them in a cart and
check out into orders, and administrators drive orders through fulfillment.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
