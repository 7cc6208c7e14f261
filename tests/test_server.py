from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from lightsplit.runtime.server import create_app

RECEIPT = {
    "items": [
        {"description": "Burger", "qty": 1, "unit_price": "12.99"},
        {"description": "Fries", "qty": 1, "unit_price": "3.99"},
        {"description": "Soda", "qty": 2, "unit_price": "2.50"},
    ],
    "totals": {"tax": "1.76", "tip": "4.40", "total": "28.14"},
}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse(client: TestClient) -> None:
    response = client.post(
        "/receipts/parse",
        json={"text": "Burger 12.99\nBag fee 0.10\nTotal 12.99\n", "hints": {"ignore_phrases": ["bag fee"]}},
    )

    assert response.status_code == 200
    receipt = response.json()["receipt"]
    assert [item["description"] for item in receipt["items"]] == ["Burger"]
    assert receipt["totals"]["total"] == "12.99"


def test_reconcile(client: TestClient) -> None:
    response = client.post("/receipts/reconcile", json={"receipt": RECEIPT})

    assert response.status_code == 200
    body = response.json()
    assert body["receipt_status"] == "Parsed"
    assert body["reconcile"]["source"] == "Total"
    assert body["reconcile"]["baseline_subtotal"] == "21.98"
    assert body["auto_adjust"] == {"allowed": False, "reason": "no_subtotal", "adjustment": None}


def test_split_preview(client: TestClient) -> None:
    response = client.post(
        "/splits/preview",
        json={
            "receipt": RECEIPT,
            "participants": [{"id": "alice", "display_name": "Alice"}, {"id": "bob", "display_name": "Bob"}],
            "claims": [
                {"item_index": 0, "participant_id": "alice", "qty_share": 1},
                {"item_index": 1, "participant_id": "bob", "qty_share": 1},
                {"item_index": 2, "participant_id": "alice", "qty_share": 1},
                {"item_index": 2, "participant_id": "bob", "qty_share": 1},
            ],
        },
    )

    assert response.status_code == 200
    preview = response.json()["preview"]
    assert [p["total"] for p in preview["participants"]] == ["19.83", "8.31"]
    assert preview["receipt_total"] == "28.14"
    assert preview["unassigned"] == "0.00"


def test_invalid_input_maps_to_422(client: TestClient) -> None:
    response = client.post(
        "/splits/preview",
        json={
            "receipt": RECEIPT,
            "participants": [{"id": "alice"}],
            "claims": [{"item_index": 9, "participant_id": "alice", "qty_share": 1}],
        },
    )

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["field"] == "item_index"
    assert "#9" in body["message"]


def test_non_json_body_maps_to_422(client: TestClient) -> None:
    response = client.post("/receipts/reconcile", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 422
    assert response.json()["field"] == "body"


def test_reconcile_with_out_of_range_subtotal_is_a_failed_parse(client: TestClient) -> None:
    receipt = {"items": RECEIPT["items"], "totals": {"subtotal": "1e30"}}

    response = client.post("/receipts/reconcile", json={"receipt": receipt})

    assert response.status_code == 200
    body = response.json()
    assert body["receipt_status"] == "FailedParse"
    assert body["auto_adjust"]["reason"] == "status"


@pytest.mark.parametrize(
    ("item", "field"),
    [
        ({"unit_price": "1e30"}, "unit_price"),
        ({"unit_price": "1e10", "qty": 10**6}, "qty"),
    ],
)
def test_out_of_range_item_maps_to_422(client: TestClient, item: dict, field: str) -> None:
    receipt = {"items": [{"description": "Yacht", **item}], "totals": {"total": "10.00"}}

    response = client.post("/receipts/reconcile", json={"receipt": receipt})

    assert response.status_code == 422
    assert response.json()["field"] == field


def test_split_with_out_of_range_tax_maps_to_422(client: TestClient) -> None:
    receipt = {"items": RECEIPT["items"], "totals": {"subtotal": "21.98", "tax": "1e30"}}

    response = client.post(
        "/splits/preview",
        json={"receipt": receipt, "participants": [{"id": "alice"}], "claims": []},
    )

    assert response.status_code == 422
    assert response.json()["field"] == "tax"
