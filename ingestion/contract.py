# ingestion/contract.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from common.utils import normalize_address


def _read_abi(path: str) -> List[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to read contract ABI {path}: {e}") from e
    # hardhat / foundry artifacts wrap the list in an object
    if isinstance(data, dict) and "abi" in data:
        data = data["abi"]
    if not isinstance(data, list) or not all(isinstance(x, dict) for x in data):
        raise ValueError(f"Contract ABI {path} must be a JSON list of entries")
    return data


@dataclass(frozen=True)
class ContractBinding:
    """A contract address plus its interface description. The reader never needs it."""

    address: str
    abi: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def load(cls, abi_path: str, address: str) -> "ContractBinding":
        return cls(address=address, abi=_read_abi(abi_path))

    def _names(self, kind: str) -> List[str]:
        return [e["name"] for e in self.abi if e.get("type") == kind and e.get("name")]

    def function_names(self) -> List[str]:
        return self._names("function")

    def event_names(self) -> List[str]:
        return self._names("event")

    def involves(self, record) -> bool:
        receiver: Optional[str] = getattr(record, "receiver", None)
        return record.sender == self.address or receiver == self.address
