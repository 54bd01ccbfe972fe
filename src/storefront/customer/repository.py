from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.repository(part_of=Customer)
class CustomerRepository:
    def find_by_email(self, email):
        return self._dao.query.filter(email=email.strip().lower()).all().first
