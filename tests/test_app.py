import logging
from itertools import cycle, islice
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from nanoid_server.alphabets import ALPHABETS, NUMBERS
from nanoid_server.app import app, get_random
from nanoid_server.config import get_settings


class ScriptedRandom:
    """Random source replaying bytes 0..255 forever."""

    def __init__(self):
        self._stream = cycle(range(256))

    def randbytes(self, n):
        return bytes(islice(self._stream, n))

    def getrandbits(self, k):
        return next(self._stream)


rng_holder = {"rng": ScriptedRandom()}


# Override the get_random dependency with a predictable source
def override_get_random():
    return rng_holder["rng"]


app.dependency_overrides[get_random] = override_get_random

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_rng():
    """Restart the byte stream before each test."""
    rng_holder["rng"] = ScriptedRandom()


def test_create_nanoid_default():
    """A request without options returns one default nanoid."""
    response = client.post("/api/v1/nanoids", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["object"] == "list"
    assert body["id"].startswith("nanoids_")
    assert body["alphabet"] == "url_safe"
    assert body["alphabet_length"] == 64
    assert body["size"] == 21
    assert body["strategy"] == "batched"
    assert body["data"] == ["_-0123456789abcdefghi"]


def test_create_nanoids_batched_discards_leftover_bytes():
    response = client.post("/api/v1/nanoids", json={"count": 2})

    assert response.status_code == 200
    assert response.json()["data"] == [
        "_-0123456789abcdefghi",
        "wxyzABCDEFGHIJKLMNOPQ",
    ]


def test_create_nanoids_iterative():
    response = client.post(
        "/api/v1/nanoids",
        json={"count": 2, "size": 12, "alphabet": "numbers", "strategy": "iterative"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["strategy"] == "iterative"
    assert body["alphabet"] == "numbers"
    # Bytes 10..15 are rejected, the second id picks up where the first stopped
    assert body["data"] == ["012345678901", "234567890123"]


def test_create_nanoids_custom_alphabet():
    rng_holder["rng"] = MagicMock(randbytes=lambda n: bytes(n))

    response = client.post(
        "/api/v1/nanoids",
        json={"size": 5, "alphabet": "numbers", "custom_alphabet": "a"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["alphabet"] == "custom"
    assert body["alphabet_length"] == 1
    assert body["data"] == ["aaaaa"]


@pytest.mark.parametrize("name", list(ALPHABETS))
def test_create_nanoids_every_named_alphabet(name):
    response = client.post(
        "/api/v1/nanoids", json={"alphabet": name, "count": 5, "size": 30}
    )

    assert response.status_code == 200
    alphabet = ALPHABETS[name].decode("ascii")
    for nanoid in response.json()["data"]:
        assert len(nanoid) == 30
        assert set(nanoid) <= set(alphabet)


def test_create_nanoids_unknown_alphabet():
    response = client.post("/api/v1/nanoids", json={"alphabet": "klingon"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Unknown alphabet: klingon"


@pytest.mark.parametrize("custom_alphabet,size", [("", 0), ("a" * 256, 256)])
def test_create_nanoids_invalid_custom_alphabet(custom_alphabet, size):
    response = client.post(
        "/api/v1/nanoids", json={"custom_alphabet": custom_alphabet}
    )

    assert response.status_code == 422
    assert f"Alphabet size ({size})" in response.json()["detail"]


def test_create_nanoids_non_ascii_alphabet():
    response = client.post("/api/v1/nanoids", json={"custom_alphabet": "äöü"})

    assert response.status_code == 422


def test_create_nanoids_size_above_limit():
    max_size = get_settings().max_size

    response = client.post("/api/v1/nanoids", json={"size": max_size + 1})

    assert response.status_code == 422
    assert response.json()["detail"] == (
        f"Result buffer size ({max_size + 1}) must be between 1 and {max_size}"
    )


def test_create_nanoids_count_above_limit():
    max_count = get_settings().max_count

    response = client.post("/api/v1/nanoids", json={"count": max_count + 1})

    assert response.status_code == 422
    assert str(max_count) in response.json()["detail"]


@pytest.mark.parametrize("field", ["size", "count"])
def test_create_nanoids_non_positive(field):
    response = client.post("/api/v1/nanoids", json={field: 0})

    assert response.status_code == 422


def test_generic_exception():
    """Tests the 500 Internal Server Error for unexpected exceptions."""
    rng_holder["rng"] = MagicMock()
    rng_holder["rng"].randbytes.side_effect = Exception("Entropy pool exhausted")

    response = client.post("/api/v1/nanoids", json={})

    assert response.status_code == 500
    assert "Entropy pool exhausted" in response.json()["detail"]


def test_generation_is_logged(caplog):
    with caplog.at_level(logging.INFO):
        response = client.post(
            "/api/v1/nanoids", json={"alphabet": "numbers", "size": 12}
        )

    assert response.status_code == 200
    assert "[NANOID] starting batched" in caplog.text
    assert "[NANOID] completed batched" in caplog.text


def test_list_alphabets():
    response = client.get("/api/v1/alphabets")

    assert response.status_code == 200
    data = {entry["name"]: entry for entry in response.json()["data"]}
    assert set(data) == set(ALPHABETS)
    assert data["numbers"] == {
        "name": "numbers",
        "alphabet": NUMBERS.decode("ascii"),
        "length": 10,
        "mask": 15,
    }
    assert data["url_safe"]["mask"] == 63


def test_health_endpoint():
    """Tests the health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == "ok"


def test_metrics_endpoint_integration():
    """Tests that /metrics exposes HTTP, system and nanoid metrics."""
    client.post("/api/v1/nanoids", json={"count": 3})

    metrics_response = client.get("/metrics")
    assert metrics_response.status_code == 200

    content = metrics_response.text

    # Verify prometheus-fastapi-instrumentator custom metrics are present
    assert "process_cpu_usage_percent" in content
    assert "process_memory_usage_bytes" in content

    # Verify standard Python metrics are present
    assert "python_info" in content

    # Verify nanoid metrics are present
    assert "nanoid_generation_duration_seconds" in content
    assert "nanoid_ids_total" in content
    assert "nanoid_random_bytes_per_symbol" in content
