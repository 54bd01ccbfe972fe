"""FastAPI routes for the storefront.

Thin adapters that translate HTTP requests into domain commands and queries.
Static paths are declared before their ``/{id}`` siblings so they win the match.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_customer, require_admin
from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ClearCartResponse,
    CreateProductRequest,
    CustomerIdResponse,
    CustomerResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductResponse,
    RegisterCustomerRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.cart.items import (
    AddToCart,
    ClearCart,
    OpenCart,
    RemoveFromCart,
    UpdateCartItem,
    process_cart_command,
)
from storefront.cart.summary import cart_summary
from storefront.checkout.checkout import place_order
from storefront.customer.customer import Customer
from storefront.customer.registration import RegisterCustomer
from storefront.order.order import Order
from storefront.order.status import ChangeOrderStatus, MarkOrderPaid
from storefront.product.management import (
    ActivateProduct,
    AddProduct,
    DeactivateProduct,
    UpdateProduct,
    process_product_command,
)
from storefront.product.product import Product

customer_router = APIRouter(prefix="/customers", tags=["customers"])
product_router = APIRouter(prefix="/products", tags=["products"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _product_response(product_id) -> ProductResponse:
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


def _order_response(order_id) -> OrderResponse:
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
@customer_router.post("", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(name=body.name, email=body.email)
    customer_id = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=customer_id)


@customer_router.get("/me", response_model=CustomerResponse)
async def me(customer: Customer = Depends(current_customer)) -> CustomerResponse:
    return CustomerResponse.from_customer(customer)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None, search: str | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).search(category=category, term=search)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return current_domain.repository_for(Product).categories()


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(product_id)


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def add_product(body: CreateProductRequest) -> ProductResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image=body.image,
        stock=body.stock,
        unit=body.unit,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product_response(product_id)


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image=body.image,
        stock=body.stock,
        unit=body.unit,
    )
    process_product_command(command)
    return _product_response(product_id)


@product_router.delete("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def deactivate_product(product_id: str) -> ProductResponse:
    process_product_command(DeactivateProduct(product_id=product_id))
    return _product_response(product_id)


@product_router.put(
    "/{product_id}/activate",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
)
async def activate_product(product_id: str) -> ProductResponse:
    process_product_command(ActivateProduct(product_id=product_id))
    return _product_response(product_id)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(customer: Customer = Depends(current_customer)) -> CartResponse:
    process_cart_command(OpenCart(customer_id=str(customer.id)))
    return CartResponse(**cart_summary(customer.id))


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, customer: Customer = Depends(current_customer)) -> CartResponse:
    command = AddToCart(customer_id=str(customer.id), product_id=body.product_id, quantity=body.quantity)
    process_cart_command(command)
    return CartResponse(**cart_summary(customer.id))


@cart_router.delete("", response_model=ClearCartResponse)
async def clear_cart(customer: Customer = Depends(current_customer)) -> ClearCartResponse:
    process_cart_command(ClearCart(customer_id=str(customer.id)))
    return ClearCartResponse(message="Cart cleared", cart=CartResponse(**cart_summary(customer.id)))


@cart_router.put("/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, customer: Customer = Depends(current_customer)
) -> CartResponse:
    command = UpdateCartItem(customer_id=str(customer.id), item_id=item_id, quantity=body.quantity)
    process_cart_command(command)
    return CartResponse(**cart_summary(customer.id))


@cart_router.delete("/{item_id}", response_model=CartResponse)
async def remove_from_cart(item_id: str, customer: Customer = Depends(current_customer)) -> CartResponse:
    process_cart_command(RemoveFromCart(customer_id=str(customer.id), item_id=item_id))
    return CartResponse(**cart_summary(customer.id))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: PlaceOrderRequest, customer: Customer = Depends(current_customer)) -> OrderResponse:
    order_id = place_order(
        customer_id=str(customer.id),
        shipping_address=body.shipping_address.model_dump(),
        payment_method=body.payment_method,
    )
    return _order_response(order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(customer: Customer = Depends(current_customer)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_customer(customer.id)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/admin/all", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
async def list_all_orders() -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in current_domain.repository_for(Order).newest_first()]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer: Customer = Depends(current_customer)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    order.ensure_visible_to(customer)
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(ChangeOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return _order_response(order_id)


@order_router.put("/{order_id}/pay", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def mark_order_paid(order_id: str) -> OrderResponse:
    current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)
    return _order_response(order_id)
