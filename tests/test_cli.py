from __future__ import annotations

import json

import pytest

from lightsplit.cli.main import main

RECEIPT_TEXT = """\
Burger 12.99
Fries 3.99
2 x Soda 5.00
Subtotal 21.98
Tax 1.76
Tip 4.40
Total 28.14
"""

SPLIT_DOC = {
    "receipt_text": RECEIPT_TEXT,
    "participants": [{"id": "alice", "display_name": "Alice"}, {"id": "bob", "display_name": "Bob"}],
    "claims": [
        {"item_index": 0, "participant_id": "alice", "qty_share": 1},
        {"item_index": 1, "participant_id": "bob", "qty_share": 1},
        {"item_index": 2, "participant_id": "alice", "qty_share": 1},
        {"item_index": 2, "participant_id": "bob", "qty_share": 1},
    ],
}


@pytest.fixture
def receipt_txt(tmp_path):
    path = tmp_path / "receipt.txt"
    path.write_text(RECEIPT_TEXT, encoding="utf-8")
    return path


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "Commands:" in capsys.readouterr().out


def test_parse_prints_items(receipt_txt, capsys) -> None:
    assert main(["parse", str(receipt_txt)]) == 0

    out = capsys.readouterr().out
    assert "Items (3):" in out
    assert "Soda" in out
    assert "$28.14" in out


def test_parse_json(receipt_txt, capsys) -> None:
    assert main(["parse", str(receipt_txt), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["totals"]["subtotal"] == "21.98"
    assert len(payload["items"]) == 3


def test_parse_ignore_phrase_option(tmp_path, capsys) -> None:
    path = tmp_path / "bread.txt"
    path.write_text("Bread 3.49\nBag fee 0.10\n", encoding="utf-8")

    assert main(["parse", str(path), "--json", "--ignore-phrase", "bag fee"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert [item["description"] for item in payload["items"]] == ["Bread"]


def test_reconcile_text(receipt_txt, capsys) -> None:
    assert main(["reconcile", str(receipt_txt)]) == 0

    out = capsys.readouterr().out
    assert "Status: Parsed" in out
    assert "Receipt status: Parsed" in out


def test_reconcile_json_payload(tmp_path, capsys) -> None:
    path = tmp_path / "receipt.json"
    path.write_text(
        json.dumps(
            {
                "items": [
                    {"description": "Pasta", "unit_price": "14.99"},
                    {"description": "Salad", "unit_price": "9.98"},
                ],
                "totals": {"subtotal": "25.00"},
            }
        ),
        encoding="utf-8",
    )

    assert main(["reconcile", str(path), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["receipt_status"] == "ParsedNeedsReview"
    assert payload["reconcile"]["discrepancy"] == "-0.03"
    assert payload["auto_adjust"]["adjustment"] == {
        "label": "Adjustment",
        "amount": "0.03",
        "note": "Auto-reconcile",
    }


def test_reconcile_respects_config_option(receipt_txt, tmp_path, capsys) -> None:
    config = tmp_path / "strict.toml"
    config.write_text('[reconcile]\nmax_abs = "0.01"\n', encoding="utf-8")
    receipt_txt.write_text(RECEIPT_TEXT.replace("Subtotal 21.98", "Subtotal 22.98"), encoding="utf-8")

    assert main(["reconcile", str(receipt_txt), "--config", str(config)]) == 0

    assert "Auto-adjust: refused (abs_cap)" in capsys.readouterr().out


def test_split(tmp_path, capsys) -> None:
    path = tmp_path / "split.json"
    path.write_text(json.dumps(SPLIT_DOC), encoding="utf-8")

    assert main(["split", str(path)]) == 0

    out = capsys.readouterr().out
    assert "Alice" in out
    assert "$19.83" in out
    assert "$8.31" in out


def test_split_json(tmp_path, capsys) -> None:
    path = tmp_path / "split.json"
    path.write_text(json.dumps(SPLIT_DOC), encoding="utf-8")

    assert main(["split", str(path), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["unassigned"] == "0.00"


def test_split_rejects_unknown_participant(tmp_path, capsys) -> None:
    doc = dict(SPLIT_DOC, claims=[{"item_index": 0, "participant_id": "mallory", "qty_share": 1}])
    path = tmp_path / "split.json"
    path.write_text(json.dumps(doc), encoding="utf-8")

    assert main(["split", str(path)]) == 1
    assert "Error: Claim references unknown participant: mallory" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys) -> None:
    assert main(["parse", str(tmp_path / "nope.txt")]) == 1
    assert "Error: File not found" in capsys.readouterr().out


def test_invalid_json(tmp_path, capsys) -> None:
    path = tmp_path / "split.json"
    path.write_text("{", encoding="utf-8")

    assert main(["split", str(path)]) == 1
    assert "Error: Invalid JSON" in capsys.readouterr().out


def test_invalid_config_is_reported(receipt_txt, tmp_path, capsys) -> None:
    config = tmp_path / "bad.toml"
    config.write_text('[reconcile]\ntolerance = "lots"\n', encoding="utf-8")

    assert main(["reconcile", str(receipt_txt), "--config", str(config)]) == 1
    assert "reconcile.tolerance" in capsys.readouterr().out
