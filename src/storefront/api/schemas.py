"""Pydantic request/response models for the storefront API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254, examples=["asha@example.com"])


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Fresh Tomatoes",
                    "description": "Vine-ripened red tomatoes.",
                    "price": 40,
                    "category": "Fruits & Vegetables",
                    "stock": 100,
                    "unit": "kg",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    category: str
    image: str | None = Field(None, max_length=500)
    stock: int = Field(0, ge=0)
    unit: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category: str | None = None
    image: str | None = Field(None, max_length=500)
    stock: int | None = Field(None, ge=0)
    unit: str | None = None


class AddToCartRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class ShippingAddressSchema(BaseModel):
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "zip_code": "560001",
                    },
                    "payment_method": "Cash on Delivery",
                }
            ]
        }
    }

    shipping_address: ShippingAddressSchema
    payment_method: str = Field(..., min_length=1)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., examples=["Processing"])


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class CustomerResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_customer(cls, customer) -> CustomerResponse:
        return cls(
            id=str(customer.id),
            name=customer.name,
            email=customer.email,
            role=customer.role,
            created_at=customer.created_at,
        )


class CustomerIdResponse(BaseModel):
    customer_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category: str
    image: str | None = None
    stock: int
    unit: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            image=product.image,
            stock=product.stock,
            unit=product.unit,
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CartProductResponse(BaseModel):
    id: str
    name: str
    price: float
    image: str | None = None
    stock: int
    unit: str
    is_active: bool


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    added_at: datetime | None = None
    product: CartProductResponse | None = None


class CartResponse(BaseModel):
    id: str
    customer_id: str
    items: list[CartItemResponse] = []
    subtotal: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ClearCartResponse(BaseModel):
    message: str = "Cart cleared"
    cart: CartResponse


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    items: list[OrderItemResponse] = []
    shipping_address: ShippingAddressSchema
    payment_method: str
    items_price: float
    shipping_price: float
    total_price: float
    status: str
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressSchema(
                street=order.shipping_address.street,
                city=order.shipping_address.city,
                state=order.shipping_address.state,
                zip_code=order.shipping_address.zip_code,
            ),
            payment_method=order.payment_method,
            items_price=order.pricing.items_price,
            shipping_price=order.pricing.shipping_price,
            total_price=order.pricing.total_price,
            status=order.status,
            is_paid=order.is_paid,
            paid_at=order.paid_at,
            is_delivered=order.is_delivered,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
