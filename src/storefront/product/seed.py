"""Starter grocery catalogue and administrator account."""

import structlog
from protean.utils.globals import current_domain

from storefront.customer.customer import CustomerRole
from storefront.customer.registration import RegisterCustomer
from storefront.product.management import AddProduct
from storefront.product.product import Product

logger = structlog.get_logger(__name__)

# (name, description, price, category, stock, unit)
SEED_PRODUCTS = [
    ("Fresh Apples", "Red delicious apples, crisp and sweet", 150, "Fruits & Vegetables", 50, "kg"),
    ("Bananas", "Fresh yellow bananas, perfect for breakfast", 60, "Fruits & Vegetables", 80, "kg"),
    ("Tomatoes", "Fresh red tomatoes, perfect for cooking", 80, "Fruits & Vegetables", 40, "kg"),
    ("Milk", "Fresh full cream milk, 1 liter", 60, "Dairy & Eggs", 100, "l"),
    ("Eggs", "Farm fresh eggs, 12 pieces", 90, "Dairy & Eggs", 60, "pack"),
    ("Butter", "Creamy butter, 200g", 120, "Dairy & Eggs", 45, "pack"),
    ("Bread", "Fresh white bread loaf", 40, "Bakery", 30, "piece"),
    ("Cookies", "Sweet chocolate cookies, 200g", 50, "Bakery", 55, "pack"),
    ("Rice", "Basmati rice, premium quality, 1kg", 120, "Pantry", 75, "kg"),
    ("Wheat Flour", "Fine wheat flour, 1kg", 45, "Pantry", 90, "kg"),
    ("Sugar", "White granulated sugar, 1kg", 50, "Pantry", 70, "kg"),
    ("Cooking Oil", "Refined sunflower oil, 1 liter", 140, "Pantry", 50, "l"),
    ("Chicken Breast", "Fresh chicken breast, 500g", 250, "Meat & Seafood", 25, "kg"),
    ("Fish", "Fresh sea fish, 500g", 300, "Meat & Seafood", 20, "kg"),
    ("Mineral Water", "Pure mineral water, 1 liter", 20, "Beverages", 200, "l"),
    ("Orange Juice", "Fresh orange juice, 1 liter", 100, "Beverages", 40, "l"),
    ("Potato Chips", "Crispy potato chips, 150g", 30, "Snacks", 100, "pack"),
    ("Biscuits", "Sweet cream biscuits, 200g", 35, "Snacks", 85, "pack"),
    ("Ice Cream", "Vanilla ice cream, 500ml", 150, "Frozen Foods", 30, "pack"),
    ("Frozen Peas", "Frozen green peas, 500g", 80, "Frozen Foods", 40, "pack"),
]


def seed_catalogue():
    """Add the starter products unless the catalogue already has some.

    Returns the number of products added.
    """
    existing = current_domain.repository_for(Product).search(include_inactive=True)
    if existing:
        logger.info("seed_skipped", existing_products=len(existing))
        return 0

    for name, description, price, category, stock, unit in SEED_PRODUCTS:
        command = AddProduct(
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock,
            unit=unit,
        )
        current_domain.process(command, asynchronous=False)

    logger.info("catalogue_seeded", products=len(SEED_PRODUCTS))
    return len(SEED_PRODUCTS)


def seed_admin(name, email):
    """Register an administrator and return their customer id."""
    command = RegisterCustomer(name=name, email=email, role=CustomerRole.ADMIN.value)
    return current_domain.process(command, asynchronous=False)
