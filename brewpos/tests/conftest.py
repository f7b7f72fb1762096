"""
Test configuration
Each test gets its own in-memory database and session registry.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from brewpos.app import create_app
from brewpos.config.environments.testing import TestingSettings
from brewpos.core.database import DatabaseManager
from brewpos.core.session import SessionRegistry
from brewpos.models.menu import MenuItemCreate
from brewpos.models.user import Role
from brewpos.services.menu_service import MenuService

API = "/api/v1"


@pytest.fixture
def test_settings():
    return TestingSettings()


@pytest.fixture
def test_db():
    """In-memory database with the full schema"""
    db = DatabaseManager(":memory:")
    db.init_database()
    yield db
    db.close()


@pytest.fixture
def sessions():
    return SessionRegistry()


@pytest.fixture
def app_instance(test_db, sessions, test_settings):
    return create_app(db=test_db, sessions=sessions, config=test_settings)


@pytest.fixture
def client(app_instance):
    with TestClient(app_instance) as c:
        yield c


@pytest.fixture
def menu_items(test_db):
    """Two active drinks and one inactive pastry"""
    menu = MenuService(test_db)
    macchiato = menu.create_menu_item(MenuItemCreate(name="Caramel Macchiato", emoji="☕", price=Decimal("5.50")))
    latte = menu.create_menu_item(MenuItemCreate(name="Iced Latte", emoji="🧊", price=Decimal("4.25")))
    croissant = menu.create_menu_item(
        MenuItemCreate(name="Croissant", emoji="🥐", price=Decimal("3.00"), is_active=False)
    )
    return {"macchiato": macchiato, "latte": latte, "croissant": croissant}


def sign_up(client, email, role=Role.CUSTOMER, password="secret123", full_name="Test User"):
    """Sign up through the API and return the response body"""
    response = client.post(f"{API}/auth/signup", json={
        "email": email,
        "password": password,
        "full_name": full_name,
        "role": Role(role).value,
    })
    assert response.status_code == 201, response.text
    return response.json()


def bearer(body):
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def admin_headers(client):
    return bearer(sign_up(client, "admin@example.com", Role.ADMIN, full_name="Shop Admin"))


@pytest.fixture
def staff_headers(client):
    return bearer(sign_up(client, "barista@example.com", Role.STAFF, full_name="Barista"))


@pytest.fixture
def customer_headers(client):
    return bearer(sign_up(client, "guest@example.com", Role.CUSTOMER, full_name="Guest"))


@pytest.fixture
def signup(client):
    """Factory: sign up a user and return (body, headers)"""
    def _signup(email, role=Role.CUSTOMER, **kwargs):
        body = sign_up(client, email, role, **kwargs)
        return body, bearer(body)
    return _signup
