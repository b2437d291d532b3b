from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from jp_address_utils import JapanAddressService, JSONDatasetSource
from jp_address_utils.api import create_app


@pytest.fixture
def client(dataset_json: Path) -> Iterator[TestClient]:
    service = JapanAddressService(source=JSONDatasetSource(dataset_json))
    with TestClient(create_app(service)) as test_client:
        yield test_client


@pytest.fixture
def unloaded_client(tmp_path: Path) -> Iterator[TestClient]:
    service = JapanAddressService(source=JSONDatasetSource(tmp_path / "missing.json"))
    with TestClient(create_app(service)) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["state"] == "ready"
    assert body["stats"]["total_records"] == 8


@pytest.mark.parametrize("code", ["1000001", "100-0001"])
def test_postal_lookup(client: TestClient, code: str) -> None:
    response = client.get(f"/postal/{code}")
    assert response.status_code == 200
    body = response.json()
    assert body["postal_code"] == "100-0001"
    assert body["addresses"][0]["city"] == "千代田区"


def test_postal_malformed(client: TestClient) -> None:
    response = client.get("/postal/12345")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid postal code format: expected 7 digits"


def test_postal_not_found(client: TestClient) -> None:
    response = client.get("/postal/9999999")
    assert response.status_code == 404


def test_search(client: TestClient) -> None:
    response = client.get("/search", params={"address": "千代田区"})
    assert response.status_code == 200
    assert len(response.json()["results"]) == 3


def test_search_short_query(client: TestClient) -> None:
    response = client.get("/search", params={"address": "東"})
    assert response.status_code == 400


def test_search_not_found(client: TestClient) -> None:
    response = client.get("/search", params={"address": "東京都港区"})
    assert response.status_code == 404


def test_normalize(client: TestClient) -> None:
    response = client.post("/normalize", json={"text": "１丁目２番３号"})
    assert response.status_code == 200
    assert response.json()["normalized"] == "1-2-3"


def test_normalize_with_camel_case_options(client: TestClient) -> None:
    response = client.post(
        "/normalize",
        json={"text": "三丁目", "options": {"convertKanjiNumbers": True}},
    )
    assert response.status_code == 200
    assert response.json()["normalized"] == "3丁目"


def test_validate(client: TestClient) -> None:
    response = client.get("/validate", params={"address": "京都府京都市下京区東塩小路町"})
    assert response.status_code == 200
    body = response.json()
    assert body["confidence"] == "medium"
    assert len(body["matched_records"]) == 2


def test_validate_empty(client: TestClient) -> None:
    response = client.get("/validate")
    assert response.status_code == 200
    assert response.json()["issues"] == ["Address not provided"]


def test_unloaded_dataset_returns_503(unloaded_client: TestClient) -> None:
    health = unloaded_client.get("/health").json()
    assert health["status"] == "degraded"
    assert health["state"] == "failed"

    response = unloaded_client.get("/postal/1000001")
    assert response.status_code == 503
    assert "not ready" in response.json()["detail"]


def test_normalize_works_without_dataset(unloaded_client: TestClient) -> None:
    response = unloaded_client.post("/normalize", json={"text": "１"})
    assert response.status_code == 200
    assert response.json()["normalized"] == "1"
