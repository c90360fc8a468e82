"""Read-side access to orders, scoped by caller."""

from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.errors import Forbidden
from marketplace.order.lifecycle import OrderStatus
from marketplace.order.order import Order


def order_for_caller(order_id, caller_id, is_admin=False) -> Order:
    order = current_domain.repository_for(Order).load(order_id)
    order.assert_visible_to(caller_id, is_admin)
    return order


def orders_for_user(user_id) -> list[Order]:
    """The user's orders, newest first."""
    return current_domain.repository_for(Order).for_user(user_id)


def all_orders(is_admin, status=None) -> list[Order]:
    """Every order, optionally filtered by status. Administrators only.

    The status filter is matched as given, so a value that is not an order
    status matches nothing.
    """
    if not is_admin:
        raise Forbidden({"orders": ["Only administrators can list all orders"]})
    return current_domain.repository_for(Order).listing(status=status)


def dashboard_stats() -> dict:
    orders = current_domain.repository_for(Order)
    return {
        "total_orders": orders.count(),
        "pending_orders": orders.count(status=OrderStatus.PENDING.value),
        "total_revenue": orders.revenue(),
        "total_products": current_domain.repository_for(Product).count(),
    }
