"""End-to-end tests for the HTTP surface, with the provider call faked."""

import math

import pytest
from fastapi.testclient import TestClient

from bfhl.numeric import is_prime
from main import create_app

from .conftest import TEST_EMAIL, FakeResponse


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"is_success": True, "official_email": TEST_EMAIL}


@pytest.mark.parametrize(
    "body, data",
    [
        ({"fibonacci": 5}, [0, 1, 1, 2, 3]),
        ({"fibonacci": 1}, [0]),
        ({"prime": [4, 7, 9, 11]}, [7, 11]),
        ({"lcm": [4, 6]}, 12),
        ({"hcf": [4, 6]}, 2),
    ],
)
def test_numeric_operations(client, body, data):
    response = client.post("/bfhl", json=body)
    assert response.status_code == 200
    assert response.json() == {"is_success": True, "official_email": TEST_EMAIL, "data": data}


def test_ai_operation(client, fake_post):
    fake_post.response = FakeResponse(
        200, {"candidates": [{"content": {"parts": [{"text": "Mumbai."}]}}]}
    )
    response = client.post("/bfhl", json={"AI": "What is the capital city of Maharashtra?"})
    assert response.status_code == 200
    assert response.json()["data"] == "Mumbai"


def test_ai_unparsable_provider_response_is_empty_success(client, fake_post):
    fake_post.response = FakeResponse(200, {"unexpected": "shape"})
    response = client.post("/bfhl", json={"AI": "anything"})
    assert response.status_code == 200
    assert response.json() == {"is_success": True, "official_email": TEST_EMAIL, "data": ""}


def test_ai_provider_failure_is_generic_500(client, fake_post):
    fake_post.response = FakeResponse(401, {"error": {"message": "API key invalid"}})
    response = client.post("/bfhl", json={"AI": "anything"})
    assert response.status_code == 500
    assert response.json() == {
        "is_success": False,
        "official_email": TEST_EMAIL,
        "error": "Internal server error",
    }


def test_two_keys_rejected(client):
    response = client.post("/bfhl", json={"fibonacci": 5, "prime": [2]})
    assert response.status_code == 400
    assert response.json() == {
        "is_success": False,
        "official_email": TEST_EMAIL,
        "error": "request must contain exactly one key",
    }


def test_empty_body_rejected(client):
    response = client.post("/bfhl")
    assert response.status_code == 400
    assert response.json()["error"] == "request must contain exactly one key"


def test_array_value_out_of_bounds(client):
    response = client.post("/bfhl", json={"lcm": [1, 10**6]})
    assert response.status_code == 400
    assert response.json()["error"] == "array value out of bounds"


def test_non_object_body_rejected(client):
    response = client.post("/bfhl", json=[1, 2, 3])
    assert response.status_code == 400
    assert response.json()["error"] == "request body must be a JSON object"


def test_invalid_json(client):
    response = client.post(
        "/bfhl", content=b'{"fibonacci": 5', headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {
        "is_success": False,
        "official_email": TEST_EMAIL,
        "error": "Invalid JSON",
    }


def test_oversized_body_rejected(client, settings):
    padding = "x" * (settings.max_body_bytes + 1)
    response = client.post(
        "/bfhl",
        content=b'{"AI": "' + padding.encode() + b'"}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Request body too large"


def test_unknown_route_uses_envelope(client):
    response = client.get("/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["is_success"] is False
    assert body["official_email"] == TEST_EMAIL
    assert "data" not in body


def test_wrong_method_uses_envelope(client):
    response = client.get("/bfhl")
    assert response.status_code == 405
    assert response.json()["is_success"] is False


def _chunked(*parts):
    # A generator body is sent without Content-Length.
    def gen():
        yield from parts

    return gen()


def test_chunked_oversized_body_rejected(client, settings):
    body = _chunked(
        b'{"prime": [2], "pad": "',
        *[b"x" * settings.max_body_bytes] * 4,
        b'"}',
    )
    response = client.post("/bfhl", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {
        "is_success": False,
        "official_email": TEST_EMAIL,
        "error": "Request body too large",
    }


def test_chunked_body_within_limit_is_processed(client):
    body = _chunked(b'{"prime": ', b"[2, 3, 4]}")
    response = client.post("/bfhl", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 200
    assert response.json()["data"] == [2, 3]


def test_lcm_result_beyond_default_digit_limit(settings, fake_post):
    settings = settings.model_copy(update={"max_array_len": 1000, "max_abs_value": 1_000_000})
    primes = []
    n = 999_999
    while len(primes) < 1000:
        if is_prime(n):
            primes.append(n)
        n -= 2

    with TestClient(create_app(settings)) as client:
        response = client.post("/bfhl", json={"lcm": primes})

    assert response.status_code == 200
    body = response.json()
    assert body["is_success"] is True
    assert body["data"] == math.prod(primes)
