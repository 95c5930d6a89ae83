"""
HTTP tests for the variant endpoints.
Redis is not connected here, so the rate limiter only enforces the API key.
"""

import json

import pytest
from fastapi.testclient import TestClient

from variant_pricing.main import app
from variant_pricing.routers import variants

HEADERS = {"x-api-key": "test-key-123"}


@pytest.fixture
def client():
    return TestClient(app)


def test_root_and_health_need_no_key(client):
    assert client.get("/").status_code == 200

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_missing_api_key(client, shirt_config_data):
    response = client.post("/variants/validate", json={"config": shirt_config_data})

    assert response.status_code == 401
    assert response.json()["error"] == "Missing API Key"


def test_validate_endpoint(client):
    response = client.post("/variants/validate", json={"config": {"options": []}}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "isValid": False,
        "errors": ["At least one variant option is required"],
    }


def test_quote_endpoint(client, shirt_config_data):
    shirt_config_data["pricingRules"] = [
        {"conditions": {"Size": "L"}, "priceModifier": 10, "type": "percentage"},
    ]
    payload = {
        "basePrice": 100,
        "config": shirt_config_data,
        "selectedVariants": {"Size": "L", "Color": "Red"},
        "quantity": 2,
        "baseSku": "SHIRT",
    }

    response = client.post("/variants/quote", json=payload, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "AVAILABLE"
    assert body["price"]["finalPrice"] == pytest.approx(120)
    assert body["price"]["appliedRules"][0]["type"] == "percentage"
    assert body["unitPrice"] == pytest.approx(120)
    assert body["totalPrice"] == pytest.approx(240)
    assert body["sku"] == "SHIRT-SL-CRED"
    assert body["displayName"] == "Size: Large, Color: Red"
    assert body["selections"][0]["valueId"] == "size-l"
    assert "X-RateLimit-Limit" in response.headers


def test_quote_unavailable_selection(client, shirt_config_data):
    payload = {"basePrice": 10, "config": shirt_config_data, "selectedVariants": {}}

    response = client.post("/variants/quote", json=payload, headers=HEADERS)

    body = response.json()
    assert body["status"] == "UNAVAILABLE"
    assert body["availability"]["reason"] == "Please select: Size, Color"


def test_quote_invalid_config(client):
    payload = {"basePrice": 10, "config": {"options": [{"name": "Size"}]}}

    response = client.post("/variants/quote", json=payload, headers=HEADERS)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "Invalid variant configuration"
    assert "Option 1: At least one value is required" in detail["errors"]


def test_quote_negative_quantity(client, shirt_config_data):
    payload = {"basePrice": 10, "config": shirt_config_data, "quantity": -1}

    response = client.post("/variants/quote", json=payload, headers=HEADERS)

    assert response.status_code == 422


def test_defaults_endpoint(client, shirt_config_data):
    response = client.post("/variants/defaults", json={"config": shirt_config_data}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"selectedVariants": {"Size": "S", "Color": "Blue"}}


def test_combinations_endpoint(client, shirt_config_data):
    payload = {"config": shirt_config_data, "basePrice": 20, "baseSku": "TEE"}

    response = client.post("/variants/combinations", json=payload, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 6
    assert body["combinations"][0]["sku"] == "TEE-SS-CRED-GYES"


def test_combinations_limit(client, shirt_config_data, monkeypatch):
    monkeypatch.setattr(variants.controller, "max_combinations", 4)

    response = client.post("/variants/combinations", json={"config": shirt_config_data}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"]["limit"] == 4


def test_quote_accepts_config_stored_as_json_string(client, shirt_config_data):
    payload = {
        "basePrice": 20,
        "config": json.dumps(shirt_config_data),
        "selectedVariants": {"Size": "M", "Color": "Red"},
    }

    response = client.post("/variants/quote", json=payload, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["unitPrice"] == pytest.approx(25)


def test_combinations_accept_config_stored_as_json_string(client, shirt_config_data):
    payload = {"config": json.dumps(shirt_config_data)}

    response = client.post("/variants/combinations", json=payload, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["count"] == 6


def test_validate_invalid_json_string(client):
    response = client.post("/variants/validate", json={"config": "{options"}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is False
    assert body["errors"][0].startswith("Variant config is not valid JSON")
