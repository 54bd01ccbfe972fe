"""Checkout pricing rules."""

FREE_SHIPPING_THRESHOLD = 500.0
FLAT_SHIPPING_FEE = 50.0


def shipping_price_for(items_price: float) -> float:
    """Shipping is free strictly above the threshold, flat otherwise."""
    return 0.0 if items_price > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE


def price_lines(lines) -> dict:
    """Price ``(unit_price, quantity)`` pairs into items, shipping and total amounts."""
    items_price = round(sum(unit_price * quantity for unit_price, quantity in lines), 2)
    shipping_price = shipping_price_for(items_price)
    return {
        "items_price": items_price,
        "shipping_price": shipping_price,
        "total_price": round(items_price + shipping_price, 2),
    }
