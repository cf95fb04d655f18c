from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings


@pytest.fixture
def client():
    with TestClient(create_app(Settings(max_nesting_depth=10))) as c:
        yield c


def test_api_evaluate_returns_value_depth_and_rendering(client):
    response = client.post("/evaluate", json={"text": "3 + 5 * 2"})

    assert response.status_code == 200
    assert response.json() == {
        "value": 13.0,
        "depth": 3,
        "rendered": "(3 + (5 * 2))",
        "steps": [],
    }


def test_api_evaluate_includes_steps_on_request(client):
    response = client.post("/evaluate", json={"text": "2^3^2", "steps": True})

    assert response.status_code == 200
    assert response.json()["steps"] == ["3 ^ 2 = 9", "2 ^ 9 = 512"]


def test_api_evaluate_reports_non_finite_values_as_strings(client):
    response = client.post("/evaluate", json={"text": "1 / 0"})

    assert response.status_code == 200
    assert response.json()["value"] == "inf"


def test_api_evaluate_maps_lexical_error_to_422(client):
    response = client.post("/evaluate", json={"text": "3pi"})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Position 2: unexpected character p",
        "kind": "lexical",
        "position": 2,
    }


def test_api_evaluate_maps_syntax_error_to_422(client):
    response = client.post("/evaluate", json={"text": "2++3"})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Unexpected token PLUS",
        "kind": "syntax",
        "position": None,
    }


def test_api_evaluate_uses_configured_nesting_limit(client):
    response = client.post("/evaluate", json={"text": "(" * 11 + "1" + ")" * 11})

    assert response.status_code == 422
    assert response.json()["detail"] == "Expression nested too deeply"


def test_api_tokenize_lists_tokens(client):
    response = client.post("/tokenize", json={"text": "3 + 5"})

    assert response.status_code == 200
    body = response.json()
    assert body["labels"] == "VALUE PLUS VALUE"
    assert body["tokens"][0] == {"type": "VALUE", "value": 3.0}
    assert body["tokens"][1]["type"] == "PLUS"


def test_api_tokenize_empty_text_gives_no_tokens(client):
    response = client.post("/tokenize", json={"text": "   "})

    assert response.status_code == 200
    assert response.json() == {"tokens": [], "labels": ""}


def test_api_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_api_tokenize_reports_non_finite_values_as_strings(client):
    response = client.post("/tokenize", json={"text": "1e999 * 2"})

    assert response.status_code == 200
    tokens = response.json()["tokens"]
    assert tokens[0] == {"type": "VALUE", "value": "inf"}
    assert tokens[2] == {"type": "VALUE", "value": 2.0}
