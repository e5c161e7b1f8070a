import pytest
from bson import ObjectId

from app.database.mongo import MongoConnection
from app.errors import ProductNotFound, StoreUnavailable
from app.services.product_service import LIST_PROJECTION, CatalogService, numeric_id
from app.services.query_service import ProductQuery
from tests.mocks.fake_mongo import FakeCollection, FakeMongoClient


def _ids(products):
    return sorted(p["id"] for p in products)


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"q": "ups"},
        {"category": "ups"},
        {"in_stock": "0"},
        {"featured": "1", "published": "true"},
        {"product_type": "simple", "published": "0"},
        {"q": "rack", "in_stock": "1", "category": "power"},
    ],
)
@pytest.mark.asyncio
async def test_store_and_fallback_catalogs_return_same_products(store_catalog, fallback_catalog, params):
    query = ProductQuery.from_params(**params)
    from_store = await store_catalog.find_products(query)
    from_fallback = await fallback_catalog.find_products(query)
    assert _ids(from_store) == _ids(from_fallback)


@pytest.mark.asyncio
async def test_store_query_uses_list_projection(store_catalog, fake_client):
    products = await store_catalog.find_products(ProductQuery.from_params(q="galaxy"))

    assert _ids(products) == ["p-ups"]
    assert fake_client.collections["Products"].queries[-1]["$or"][0] == {"Name": {"$regex": "galaxy", "$options": "i"}}
    assert set(products[0]) - set(LIST_PROJECTION) <= {
        "id", "topCategory", "categorySlug", "imageList", "heroImage", "inStock", "isFeatured", "isPublished",
    }


@pytest.mark.asyncio
async def test_category_products(store_catalog, fallback_catalog):
    from_store = await store_catalog.list_category_products()
    from_fallback = await fallback_catalog.list_category_products()
    assert sorted(p["topCategory"] for p in from_store) == sorted(p["topCategory"] for p in from_fallback)


@pytest.mark.parametrize("product_id", ["BAT-12V-9AH", "3001"])
@pytest.mark.asyncio
async def test_get_product_by_any_identifier(store_catalog, fallback_catalog, product_id):
    for catalog in (store_catalog, fallback_catalog):
        product = await catalog.get_product(product_id)
        assert product["SKU"] == "BAT-12V-9AH"
        assert product["topCategory"] == "BATTERY"


@pytest.mark.asyncio
async def test_fallback_lookup_matches_string_store_id(fallback_catalog):
    product = await fallback_catalog.get_product("p-battery")
    assert product["SKU"] == "BAT-12V-9AH"


@pytest.mark.asyncio
async def test_get_product_by_generic_id_field(store_catalog, fallback_catalog):
    for catalog in (store_catalog, fallback_catalog):
        product = await catalog.get_product("acc-77")
        assert product["SKU"] == "UPS-SNMP-CARD"


@pytest.mark.asyncio
async def test_get_product_by_object_id():
    oid = ObjectId()
    client = FakeMongoClient({"Products": FakeCollection([{"_id": oid, "SKU": "X-1", "Name": "Thing"}])})
    catalog = CatalogService(
        connection=MongoConnection(uri="mongodb://localhost", client_factory=client),
        fallback=[],
    )
    product = await catalog.get_product(str(oid))

    assert product["id"] == str(oid)
    assert client.collections["Products"].queries[-1]["$or"][0] == {"_id": oid}


@pytest.mark.asyncio
async def test_get_product_not_found(store_catalog, fallback_catalog):
    for catalog in (store_catalog, fallback_catalog):
        with pytest.raises(ProductNotFound):
            await catalog.get_product("does-not-exist")


@pytest.mark.asyncio
async def test_store_failures_surface_as_store_unavailable(store_catalog, fake_client):
    fake_client.collections["Products"].fail = True

    with pytest.raises(StoreUnavailable, match="time limit"):
        await store_catalog.find_products(ProductQuery())
    with pytest.raises(StoreUnavailable):
        await store_catalog.get_product("p-ups")


@pytest.mark.parametrize(
    "value, expected",
    [("2276", 2276), ("-3", -3), ("22.5", 22.5), ("E001GIR31", "E001GIR31"), ("nan", "nan"), ("inf", "inf")],
)
def test_numeric_id(value, expected):
    assert numeric_id(value) == expected
