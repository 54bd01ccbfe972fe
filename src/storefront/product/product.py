"""Product aggregate: a grocery item with a price, a unit and a stock count.

Products are never hard-deleted. Taking one off the shelf flips ``is_active``
so that carts and historical orders can still resolve it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError
from storefront.product.events import (
    ProductActivated,
    ProductAdded,
    ProductDeactivated,
    ProductDetailsUpdated,
    StockAdjusted,
    StockDeducted,
)


class ProductCategory(Enum):
    FRUITS_AND_VEGETABLES = "Fruits & Vegetables"
    DAIRY_AND_EGGS = "Dairy & Eggs"
    MEAT_AND_SEAFOOD = "Meat & Seafood"
    BAKERY = "Bakery"
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    FROZEN_FOODS = "Frozen Foods"
    PANTRY = "Pantry"
    OTHER = "Other"


class ProductUnit(Enum):
    KILOGRAM = "kg"
    GRAM = "g"
    LITRE = "l"
    MILLILITRE = "ml"
    PIECE = "piece"
    PACK = "pack"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(required=True, choices=ProductCategory)
    image = String(max_length=500, default="")
    stock = Integer(min_value=0, default=0)
    unit = String(choices=ProductUnit, default=ProductUnit.PIECE.value)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, name, price, category, stock=0, unit=None, description=None, image=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            image=image or "",
            stock=stock,
            unit=unit or ProductUnit.PIECE.value,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                unit=product.unit,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Catalogue edits
    # -------------------------------------------------------------------
    def update_details(self, name=None, description=None, price=None, category=None, image=None, unit=None):
        """Apply a partial edit; ``None`` leaves a field untouched."""
        changes = {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "image": image,
            "unit": unit,
        }
        changed = []
        for field_name, value in changes.items():
            if value is not None and getattr(self, field_name) != value:
                setattr(self, field_name, value)
                changed.append(field_name)

        if not changed:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                changed_fields=",".join(changed),
                price=self.price,
            )
        )

    def set_stock(self, new_stock):
        """Overwrite the stock count after a physical recount or delivery."""
        if new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        if new_stock == self.stock:
            return

        previous_stock = self.stock
        self.stock = new_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                previous_stock=previous_stock,
                new_stock=new_stock,
            )
        )

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=str(self.id)))

    def activate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})

        self.is_active = True
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductActivated(product_id=str(self.id)))

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def ensure_can_supply(self, quantity):
        """Raise ``InsufficientStockError`` unless ``quantity`` units are on hand."""
        if self.stock < quantity:
            raise InsufficientStockError(self.name, available=self.stock, requested=quantity)

    def deduct_stock(self, quantity, order_id):
        """Take ``quantity`` units out of stock for an order, or fail without touching it."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.ensure_can_supply(quantity)

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDeducted(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining_stock=self.stock,
            )
        )
