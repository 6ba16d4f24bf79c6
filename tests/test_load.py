import json

import pytest

from _chain_fixtures import ADDR_A, ADDR_B, HASH_1, HASH_2
from common.errors import MalformedInput
from etl.load import records_from_json, records_to_json, write_records
from ingestion.parser import ParsedRecord


def _records():
    return [
        ParsedRecord(block_number=100, tx_hash=HASH_1, tx_value=5, sender=ADDR_A, receiver=ADDR_B),
        ParsedRecord(block_number=100, tx_hash=HASH_2, tx_value=2**200, sender=ADDR_B, receiver=None),
    ]


def test_json_field_names_and_order():
    rows = json.loads(records_to_json(_records()))
    assert list(rows[0]) == ["BlockNumber", "TxHash", "TxValue", "Sender", "Receiver"]
    assert rows[0]["TxValue"] == 5
    assert rows[1]["Receiver"] is None
    # large wei values stay exact JSON numbers
    assert rows[1]["TxValue"] == 2**200


def test_json_round_trip():
    recs = _records()
    assert records_from_json(records_to_json(recs, indent=2)) == recs


def test_empty_array():
    assert records_to_json([]) == "[]"
    assert records_from_json("[]") == []


@pytest.mark.parametrize("text", ["not json", '{"BlockNumber": 1}', '[{"BlockNumber": -1}]'])
def test_records_from_json_rejects_bad_input(text):
    with pytest.raises(MalformedInput):
        records_from_json(text)


def test_write_records(tmp_path):
    out = tmp_path / "nested" / "records.json"
    n = write_records(_records(), str(out))
    assert n == 2
    assert records_from_json(out.read_text(encoding="utf-8")) == _records()
