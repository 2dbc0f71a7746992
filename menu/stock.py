"""Remaining stock derived from order history."""

# Only these order statuses consume stock. Anything else (cancelled,
# refunded, ...) is ignored until product says otherwise.
STOCK_CONSUMING_STATUSES = frozenset({"pending", "completed"})


def consumed_quantity(order_items):
    """
    Sum ``quantity`` over order items whose order is in a consuming status.

    Each order item is a mapping carrying ``quantity`` and an expanded
    ``order`` mapping (or None when the order row is gone).
    """
    total = 0
    for order_item in order_items or []:
        order = order_item.get("order") or {}
        if order.get("status") in STOCK_CONSUMING_STATUSES:
            total += int(order_item.get("quantity") or 0)
    return total


def remaining_quantity(cap, order_items):
    """None when the item has no cap, otherwise what is left, never below zero."""
    if cap is None:
        return None
    return max(0, int(cap) - consumed_quantity(order_items))
