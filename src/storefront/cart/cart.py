"""Cart aggregate: one per customer, created lazily, emptied after checkout.

Line items hold a weak reference to a product. Prices and display fields are
resolved at read time and re-validated at checkout, never stored in the cart.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityChanged, CartItemRemoved
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_appears_at_most_once(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    @classmethod
    def open(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    @property
    def is_empty(self):
        return not self.items

    def line_for_product(self, product_id):
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    def line(self, item_id):
        return next((item for item in self.items if str(item.id) == str(item_id)), None)

    def add_item(self, product, quantity):
        """Put ``quantity`` units of ``product`` in the cart.

        An existing line for the same product is incremented. The cumulative
        quantity must not exceed the product's current stock.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for_product(product.id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        product.ensure_can_supply(new_quantity)

        if existing:
            existing.quantity = new_quantity
            item = existing
        else:
            item = CartItem(product_id=str(product.id), quantity=quantity, added_at=datetime.now(UTC))
            self.add_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_id=str(item.id),
                product_id=str(product.id),
                quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity, product):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.line(item_id)
        if item is None:
            raise ObjectNotFoundError({"_entity": f"Item {item_id} not found in cart"})

        product.ensure_can_supply(quantity)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        """Drop a line item. Unknown ids are ignored."""
        item = self.line(item_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), customer_id=str(self.customer_id)))
