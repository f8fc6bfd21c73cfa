"""HTTP tests for the /api/products resource."""

from collections.abc import Generator

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from src.product_api.api.http.app import app
from src.product_api.api.http.deps import get_product_service, get_product_store
from src.product_api.core.exceptions import ConcurrencyConflictError
from src.product_api.core.services import ProductService
from src.product_api.core.store import InMemoryProductStore, ProductStore


def _by_id(products: list[dict]) -> list[dict]:
    return sorted(products, key=lambda product: product["id"])


SEED_JSON = [
    {"id": 1, "name": "Test Product 1", "description": "Test Description 1", "price": 0.0},
    {"id": 2, "name": "Test Product 2", "description": "Test Description 2", "price": 10.0},
    {"id": 3, "name": "Test Product 3", "description": "Test Description 3", "price": 20.0},
    {"id": 4, "name": "Test Product 4", "description": "Test Description 4", "price": 100.0},
]


class TestListProducts:
    def test_without_parameters(self, client: TestClient):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert _by_id(response.json()) == SEED_JSON

    def test_price_range(self, client: TestClient):
        response = client.get("/api/products", params={"minPrice": 5, "maxPrice": 50})

        assert response.status_code == 200
        assert _by_id(response.json()) == SEED_JSON[1:3]

    def test_only_min_price(self, client: TestClient):
        response = client.get("/api/products", params={"minPrice": 20})

        assert _by_id(response.json()) == SEED_JSON[2:]

    def test_empty_range(self, client: TestClient):
        response = client.get("/api/products", params={"minPrice": 500, "maxPrice": 1000})

        assert response.status_code == 200
        assert response.json() == []

    def test_malformed_price_is_bad_request(self, client: TestClient):
        response = client.get("/api/products", params={"minPrice": "cheap"})

        assert response.status_code == 400
        assert response.json()["detail"][0]["loc"] == ["query", "minPrice"]


class TestGetProduct:
    @pytest.mark.parametrize("expected", SEED_JSON)
    def test_existing(self, client: TestClient, expected: dict):
        response = client.get(f"/api/products/{expected['id']}")

        assert response.status_code == 200
        assert response.json() == expected

    def test_missing(self, client: TestClient):
        assert client.get("/api/products/5").status_code == 404


class TestCreateProduct:
    def test_created_with_location(self, client: TestClient):
        body = {"name": "Test Product 5", "description": "Test Description 5", "price": 200}

        response = client.post("/api/products", json=body)

        assert response.status_code == 201
        created = response.json()
        assert created == {**body, "id": created["id"], "price": 200.0}
        assert response.headers["location"].endswith(f"/api/products/{created['id']}")

        fetched = client.get(response.headers["location"])
        assert fetched.json() == created

    def test_client_id_ignored(self, client: TestClient):
        response = client.post(
            "/api/products", json={"id": 1, "name": "Impostor", "price": 1}
        )

        assert response.status_code == 201
        assert response.json()["id"] != 1
        assert client.get("/api/products/1").json() == SEED_JSON[0]

    @pytest.mark.parametrize(
        "body",
        [
            {"description": "no name", "price": 1},
            {"name": "", "price": 1},
            {"name": "Cup", "price": -1},
        ],
    )
    def test_invalid_fields(self, client: TestClient, body: dict):
        response = client.post("/api/products", json=body)

        assert response.status_code == 400
        assert _by_id(client.get("/api/products").json()) == SEED_JSON

    def test_malformed_body(self, client: TestClient):
        response = client.post("/api/products", json={"name": "Cup", "price": "lots"})

        assert response.status_code == 400


class TestUpdateProduct:
    def test_existing(self, client: TestClient):
        body = {
            "id": 1,
            "name": "Test Product 1 Version 2",
            "description": "Test Description 1 Version 2",
            "price": 150,
        }

        response = client.put("/api/products/1", json=body)

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/api/products/1").json() == {**body, "price": 150.0}

    def test_id_mismatch(self, client: TestClient):
        response = client.put("/api/products/2", json={**SEED_JSON[0], "name": "Changed"})

        assert response.status_code == 400
        assert client.get("/api/products/1").json() == SEED_JSON[0]
        assert client.get("/api/products/2").json() == SEED_JSON[1]

    def test_missing(self, client: TestClient):
        body = {"id": 5, "name": "Test Product 5", "description": "Test Description 5", "price": 200}

        response = client.put("/api/products/5", json=body)

        assert response.status_code == 404
        assert client.get("/api/products/5").status_code == 404

    def test_invalid_fields(self, client: TestClient):
        response = client.put("/api/products/1", json={"id": 1, "name": "", "price": 3})

        assert response.status_code == 400
        assert client.get("/api/products/1").json() == SEED_JSON[0]


class TestDeleteProduct:
    def test_existing(self, client: TestClient):
        assert client.get("/api/products/1").status_code == 200

        response = client.delete("/api/products/1")

        assert response.status_code == 204
        assert client.get("/api/products/1").status_code == 404

    def test_missing(self, client: TestClient):
        response = client.delete("/api/products/5")

        assert response.status_code == 404
        assert _by_id(client.get("/api/products").json()) == SEED_JSON


class TestRequestHandling:
    def test_request_id_echoed(self, client: TestClient):
        response = client.get("/api/products/1", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client: TestClient):
        assert client.get("/api/products").headers["X-Request-ID"]


@pytest.fixture
def store_client() -> Generator:
    """Client factory whose requests use a given ProductStore."""

    def _make(store: ProductStore) -> TestClient:
        app.dependency_overrides[get_product_store] = lambda: store
        return TestClient(app)

    try:
        yield _make
    finally:
        app.dependency_overrides.clear()


class TestUninitializedStore:
    @pytest.fixture
    def client(self, store_client) -> TestClient:
        return store_client(InMemoryProductStore(None))

    def test_list_not_found(self, client: TestClient):
        assert client.get("/api/products").status_code == 404

    def test_get_not_found(self, client: TestClient):
        assert client.get("/api/products/1").status_code == 404

    def test_delete_not_found(self, client: TestClient):
        assert client.delete("/api/products/1").status_code == 404

    def test_create_is_problem(self, client: TestClient):
        response = client.post("/api/products", json={"name": "Cup", "price": 1})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/problem+json")
        assert response.json()["status"] == 500


class ConflictingStore(InMemoryProductStore):
    """Store whose commits always conflict while the rows remain present."""

    def commit(self) -> None:
        raise ConcurrencyConflictError("row version changed")


class TestConcurrencyConflicts:
    def test_unrecovered_conflict_is_server_error(self, store_client, memory_table):
        client = store_client(ConflictingStore(memory_table))

        response = client.put(
            "/api/products/1", json={"id": 1, "name": "Changed", "price": 1}
        )

        assert response.status_code == 500
        assert memory_table.rows[1].name == "Test Product 1"


class TestValidationDisabled:
    def test_invalid_fields_accepted(self, client: TestClient):
        def lax_service(store: ProductStore = Depends(get_product_store)) -> ProductService:
            return ProductService(store, validation_enabled=False)

        app.dependency_overrides[get_product_service] = lax_service

        response = client.post("/api/products", json={"name": "", "price": -1})

        assert response.status_code == 201
        assert response.json()["price"] == -1.0
