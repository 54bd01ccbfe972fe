"""Catalogue management: admin commands that add, edit and shelve products."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product, ProductCategory, ProductUnit
from storefront.shared.locks import locks, product_key

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    category: String(required=True, choices=ProductCategory)
    image: String(max_length=500)
    stock: Integer(min_value=0, default=0)
    unit: String(choices=ProductUnit)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    category: String(choices=ProductCategory)
    image: String(max_length=500)
    stock: Integer(min_value=0)
    unit: String(choices=ProductUnit)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class ActivateProduct:
    product_id: Identifier(required=True)


def process_product_command(command):
    """Process an edit of an existing product while holding its stock lock."""
    with locks.hold(product_key(command.product_id)):
        return current_domain.process(command, asynchronous=False)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            category=command.category,
            stock=command.stock or 0,
            unit=command.unit,
            description=command.description,
            image=command.image,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_added", product_id=str(product.id), category=product.category, stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            image=command.image,
            unit=command.unit,
        )
        if command.stock is not None:
            product.set_stock(command.stock)
        repo.add(product)

        logger.info("product_updated", product_id=str(product.id))
        return str(product.id)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        # Deleting an already shelved product is a no-op
        if product.is_active:
            product.deactivate()
            repo.add(product)
            logger.info("product_deactivated", product_id=str(product.id))
        return str(product.id)

    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if not product.is_active:
            product.activate()
            repo.add(product)
            logger.info("product_activated", product_id=str(product.id))
        return str(product.id)
