"""Storage keys for orders and the order index."""

ORDER_KEY_PREFIX = "order:"

# Never produced by order_key(): it has no ":" separator.
ORDER_INDEX_KEY = "orders"


def order_key(order_id: int) -> str:
    return f"{ORDER_KEY_PREFIX}{order_id:d}"
