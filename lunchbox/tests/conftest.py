"""
Test fixtures.
Every test gets its own in-memory DuckDB and a clock pinned to Sunday 2024-03-10 09:00.
"""

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from lunchbox.app import create_app
from lunchbox.config.settings import Settings
from lunchbox.core.clock import FixedClock
from lunchbox.core.database import DatabaseManager

TODAY = datetime(2024, 3, 10, 9, 0)


@pytest.fixture
def test_settings():
    return Settings(
        database_url="duckdb:///:memory:",
        jwt_secret_key="test-secret-key-0123456789abcdefghij",
        api_title="Lunchbox API (Test)",
        api_version="1.0.0-test",
        admin_usernames="admin",
        log_json=False,
        log_file=None,
    )


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def test_db():
    db = DatabaseManager(":memory:")
    yield db
    db.close()


@pytest.fixture
def app(test_settings, test_db, clock):
    return create_app(settings=test_settings, db=test_db, clock=clock)


@pytest.fixture
def services(app):
    return app.state.services


@pytest.fixture
def repository(services):
    return services.repository


@pytest.fixture
def client(app):
    return TestClient(app)


def _register(services, username, password="secret123"):
    return services.auth.register({
        "username": username,
        "password": password,
        "name": username.title(),
        "email": f"{username}@example.com",
    })


@pytest.fixture
def parent(services):
    return _register(services, "parent")


@pytest.fixture
def other_parent(services):
    return _register(services, "otherparent")


@pytest.fixture
def admin_user(services):
    return _register(services, "admin")


@pytest.fixture
def kid(services, parent):
    return services.kids.create_kid(parent.id, {
        "name": "Meera",
        "grade": "3B",
        "school": "Greenwood Primary",
        "roll_number": "17",
    })


@pytest.fixture
def other_kid(services, other_parent):
    return services.kids.create_kid(other_parent.id, {
        "name": "Arjun",
        "grade": "5A",
        "school": "Greenwood Primary",
        "roll_number": "4",
    })


def _menu_item(repository, name, month, is_vegetarian=True, is_available=True):
    return repository.create_menu_item({
        "name": name,
        "description": f"{name} with salad",
        "is_vegetarian": is_vegetarian,
        "price": 450,
        "month": month,
        "image_url": f"https://img.example.com/{name.lower().replace(' ', '-')}.jpg",
        "is_available": is_available,
    })


@pytest.fixture
def menu(repository):
    """March 2024 menu plus one April item and one withdrawn March item"""
    return {
        "paneer": _menu_item(repository, "Paneer Wrap", date(2024, 3, 1)),
        "chicken": _menu_item(repository, "Chicken Rice", date(2024, 3, 1), is_vegetarian=False),
        "dal": _menu_item(repository, "Dal Khichdi", date(2024, 3, 1)),
        "withdrawn": _menu_item(repository, "Fish Curry", date(2024, 3, 1),
                                is_vegetarian=False, is_available=False),
        "april": _menu_item(repository, "Veg Pasta", date(2024, 4, 1)),
    }


@pytest.fixture
def auth_headers(services):
    """Bearer header factory for a user"""
    def make(user):
        token = services.security.create_jwt_token(user.id)
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def parent_headers(auth_headers, parent):
    return auth_headers(parent)


@pytest.fixture
def other_headers(auth_headers, other_parent):
    return auth_headers(other_parent)


@pytest.fixture
def admin_headers(auth_headers, admin_user):
    return auth_headers(admin_user)
