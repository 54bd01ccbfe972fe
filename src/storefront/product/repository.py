from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.paging import fetch_all


@storefront.repository(part_of=Product)
class ProductRepository:
    def search(self, category=None, term=None, include_inactive=False):
        """Products on the shelf, optionally narrowed by category and a name/description term.

        The term match is case-insensitive and applied after the query, so it
        behaves the same on every database provider.
        """
        criteria = {}
        if not include_inactive:
            criteria["is_active"] = True
        if category:
            criteria["category"] = category

        query = self._dao.query.filter(**criteria) if criteria else self._dao.query
        products = fetch_all(query.order_by("name"))

        if term:
            needle = term.strip().lower()
            products = [
                product
                for product in products
                if needle in (product.name or "").lower() or needle in (product.description or "").lower()
            ]
        return products

    def categories(self):
        """Distinct categories of the active catalogue, sorted by name."""
        return sorted({product.category for product in self.search()})
