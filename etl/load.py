import json
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from common.errors import MalformedInput
from ingestion.parser import ParsedRecord


def records_to_json(records: Iterable[ParsedRecord], indent: Optional[int] = None) -> str:
    """Serialize records as a JSON array keyed BlockNumber, TxHash, TxValue, Sender, Receiver."""
    # stdlib json keeps arbitrarily large wei values as exact numbers
    rows = [r.model_dump(by_alias=True) for r in records]
    return json.dumps(rows, indent=indent)


def records_from_json(text: str) -> List[ParsedRecord]:
    try:
        rows = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"records JSON is not valid: {e}") from e
    if not isinstance(rows, list):
        raise MalformedInput("records JSON must be an array")
    out = []
    for i, row in enumerate(rows):
        try:
            out.append(ParsedRecord.model_validate(row))
        except ValidationError as e:
            raise MalformedInput(f"record {i} is invalid: {e}") from e
    return out


def write_records(records: Iterable[ParsedRecord], path: str, indent: Optional[int] = None) -> int:
    rows = list(records)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(records_to_json(rows, indent=indent) + "\n", encoding="utf-8")
    return len(rows)
