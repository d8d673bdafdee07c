"""
Contacts API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the whole suite.
How:   Storage is an in-memory stand-in for ``AsyncMongoClient`` handed to the
       DatabaseAccessor through its ``client_factory``; endpoints are exercised
       with an HTTPX AsyncClient over ASGITransport (no server, no MongoDB).

Fixture Hierarchy:
    fake_client ─▶ accessor ─▶ test_client
                          └──▶ contacts_collection / users_collection
    uninitialized_accessor ─▶ disconnected_client
"""

import os

# Must be set before contacts_api.config builds its settings singleton
os.environ["MONGODB_URI"] = "mongodb://test-host:27017"
os.environ["MONGODB_DATABASE"] = "contacts_test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from contacts_api.database import DatabaseAccessor
from contacts_api.main import create_app
from tests.fakes import FakeCollection, FakeMongoClient

TEST_DATABASE = "contacts_test"


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_client():
    return FakeMongoClient()


@pytest_asyncio.fixture
async def accessor(fake_client):
    """A connected accessor backed by ``fake_client``."""
    acc = DatabaseAccessor(
        uri="mongodb://fake",
        database_name=TEST_DATABASE,
        client_factory=lambda uri: fake_client,
    )
    await acc.initialize()
    yield acc
    await acc.close()


@pytest.fixture
def uninitialized_accessor(fake_client):
    """An accessor whose initialize() was never called."""
    return DatabaseAccessor(
        uri="mongodb://fake",
        database_name=TEST_DATABASE,
        client_factory=lambda uri: fake_client,
    )


@pytest.fixture
def contacts_collection(fake_client) -> FakeCollection:
    return fake_client.get_database(TEST_DATABASE).get_collection("contacts")


@pytest.fixture
def users_collection(fake_client) -> FakeCollection:
    return fake_client.get_database(TEST_DATABASE).get_collection("users")


@pytest.fixture
def sample_contact():
    return {
        "firstName": "A",
        "lastName": "B",
        "email": "a@b.com",
        "favoriteColor": "red",
        "birthday": "2000-01-01",
    }


@pytest.fixture
def missing_id():
    """Well-formed identifier that names no stored document."""
    return str(ObjectId())


@pytest_asyncio.fixture
async def test_client(accessor):
    """HTTPX client talking to an app wired to the connected in-memory accessor."""
    app = create_app(accessor=accessor)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def disconnected_client(uninitialized_accessor):
    """HTTPX client for an app whose database never connected."""
    app = create_app(accessor=uninitialized_accessor)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
