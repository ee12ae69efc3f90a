"""
Shared BDD fixtures and steps (pytest-bdd).
Uses the synchronous TestClient: pytest-bdd steps are plain functions.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import parsers, then, when

from replate.main import app
from replate.store.provider import get_listing_store, get_user_store


@pytest.fixture
def api_client(listing_store, user_store):
    app.dependency_overrides[get_listing_store] = lambda: listing_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I request "GET" "{path}"'))
def request_get(api_client, response, path):
    r = api_client.get(path)
    response["status"] = r.status_code
    response["body"] = r.json()


@then(parsers.parse("the response status should be {status:d}"))
def status_is(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["body"].get(key) == value


@then(parsers.parse('the response message should be "{message}"'))
def message_is(response, message):
    assert response["body"]["message"] == message
