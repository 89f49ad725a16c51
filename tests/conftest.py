import os

# settings czytane przy imporcie, wiec env ustawiamy przed importem storefront
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["PAYMENT_KEY_ID"] = "rzp_test_key"
os.environ["PAYMENT_KEY_SECRET"] = "test_key_secret"
os.environ["PAYMENT_WEBHOOK_SECRET"] = "test_webhook_secret"

from decimal import Decimal

import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_lock_service, get_notifier, get_payment_client
from storefront.data.database import Base, get_db
from storefront.data.models import ProductModel, StoreModel
from storefront.domain.identity import Identity
from storefront.main import create_app
from storefront.services.cart_service import CartService

OWNER_ID = "owner-1"
USER_ID = "user-1"
SESSION_ID = "sess-1"

USER = {"X-User-Id": USER_ID}
GUEST = {"X-Session-Id": SESSION_ID}
OWNER = {"X-User-Id": OWNER_ID}

ADDRESS = {
    "name": "Jan Kowalski",
    "line1": "ul. Prosta 1",
    "city": "Warszawa",
    "postal_code": "00-001",
    "country": "PL",
}


class FakeLockService:
    def __init__(self):
        self.held = {}
        self.acquired = []

    def acquire_checkout_lock(self, cart_id, token, ttl):
        if cart_id in self.held:
            return False
        self.held[cart_id] = token
        self.acquired.append(cart_id)
        return True

    def release_checkout_lock(self, cart_id, token):
        if self.held.get(cart_id) == token:
            del self.held[cart_id]
            return True
        return False


class FakeNotifier:
    def __init__(self):
        self.orders = []
        self.low_stock = []

    def send_order_notification(self, store_id, order_id, order_number, total):
        self.orders.append({"store_id": store_id, "order_id": order_id, "order_number": order_number, "total": total})

    def send_low_stock_alert(self, store_id, product_id, product_name, remaining):
        self.low_stock.append({"product_id": product_id, "remaining": remaining})


class FakePaymentClient:
    def __init__(self):
        self.calls = []
        self.fail = False

    def create_order(self, amount, currency, receipt, notes=None):
        if self.fail:
            raise requests.ConnectionError("gateway down")
        self.calls.append({"amount": amount, "currency": currency, "receipt": receipt})
        return {"id": f"order_gw_{len(self.calls)}", "amount": amount, "currency": currency}


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture()
def lock_service():
    return FakeLockService()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def payment_client():
    return FakePaymentClient()


@pytest.fixture()
def app(db, lock_service, notifier, payment_client):
    app = create_app(lifespan=None)

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_payment_client] = lambda: payment_client
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def store(db):
    store = StoreModel(name="Demo Store", owner_id=OWNER_ID)
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


@pytest.fixture()
def make_product(db, store):
    def _make(**overrides):
        data = {
            "store_id": store.id,
            "name": "Widget",
            "images": ["https://cdn.example.com/widget.png"],
            "price": Decimal("10.00"),
            "status": "active",
            "track_inventory": True,
            "inventory_quantity": 100,
            "low_stock_threshold": 0,
        }
        data.update(overrides)
        product = ProductModel(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture()
def add_to_cart(db, store):
    """Dodaje produkt do koszyka przez CartService (domyslnie jako USER_ID)."""

    def _add(product, quantity=1, identity=None, variant_id=None):
        identity = identity or Identity(user_id=USER_ID)
        item, _ = CartService(db).upsert_item(store.id, identity, product.id, variant_id, quantity)
        return item

    return _add
