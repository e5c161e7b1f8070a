"""Pytest fixtures: raw product documents, catalogs and API clients."""

import pytest
from fastapi.testclient import TestClient

from app.database.mongo import MongoConnection
from app.main import app
from app.services.product_service import CatalogService, get_catalog
from tests.mocks.catalog_data import make_raw_products
from tests.mocks.fake_mongo import FakeCollection, FakeMongoClient


@pytest.fixture
def raw_products():
    return make_raw_products()


@pytest.fixture
def fallback_catalog(raw_products):
    """Catalog with no store configured."""
    return CatalogService(connection=MongoConnection(uri=""), fallback=raw_products)


@pytest.fixture
def fake_client(raw_products):
    return FakeMongoClient({"Products": FakeCollection(raw_products)})


@pytest.fixture
def store_catalog(fake_client):
    """Catalog backed by an in-memory fake of the products collection."""
    connection = MongoConnection(
        uri="mongodb://localhost:27017",
        db_name="Extell",
        collection_name="Products",
        client_factory=fake_client,
    )
    return CatalogService(connection=connection, fallback=[])


@pytest.fixture
def api_client(fallback_catalog):
    app.dependency_overrides[get_catalog] = lambda: fallback_catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def store_api_client(store_catalog):
    app.dependency_overrides[get_catalog] = lambda: store_catalog
    yield TestClient(app)
    app.dependency_overrides.clear()
