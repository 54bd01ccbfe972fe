import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean.utils.globals import current_domain
from storefront.api import register_error_handlers, routers
from storefront.customer.registration import RegisterCustomer
from storefront.domain import storefront


@pytest.fixture()
def client():
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    for router in routers:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


def _register(name, email, role):
    return current_domain.process(RegisterCustomer(name=name, email=email, role=role), asynchronous=False)


@pytest.fixture()
def shopper():
    return {"X-Customer-Id": _register("Asha", "asha@example.com", "Customer")}


@pytest.fixture()
def other_shopper():
    return {"X-Customer-Id": _register("Meera", "meera@example.com", "Customer")}


@pytest.fixture()
def admin():
    return {"X-Customer-Id": _register("Ravi", "ravi@example.com", "Admin")}


@pytest.fixture()
def address():
    return {"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "zip_code": "560001"}
