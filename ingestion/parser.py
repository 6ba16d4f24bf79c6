# ingestion/parser.py
"""
ingestion.parser
Map raw RPC transactions and receipts into flat ParsedRecord values.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from common.errors import MalformedInput
from common.utils import ADDRESS_HEX_LEN, hex_to_int, is_hex_of_len, is_tx_hash


class ParsedRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    block_number: int = Field(alias="BlockNumber", ge=0)
    tx_hash: str = Field(alias="TxHash")
    tx_value: int = Field(alias="TxValue", ge=0)
    sender: str = Field(alias="Sender")
    receiver: Optional[str] = Field(default=None, alias="Receiver")

    @field_validator("tx_hash")
    @classmethod
    def hash_shape(cls, v: str) -> str:
        if not is_tx_hash(v):
            raise ValueError("tx hash must be 0x followed by 64 hex chars")
        return v.lower()

    @field_validator("sender", "receiver")
    @classmethod
    def address_shape(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not is_hex_of_len(v, ADDRESS_HEX_LEN):
            raise ValueError("address must be 0x followed by 40 hex chars")
        return v.lower()


def _quantity(src: Dict[str, Any], key: str, what: str) -> int:
    try:
        return hex_to_int(src[key])
    except KeyError:
        raise MalformedInput(f"{what} is missing {key!r}")
    except (TypeError, ValueError) as e:
        raise MalformedInput(f"{what} has invalid {key!r}: {e}") from e


def map_record(
    tx: Dict[str, Any],
    receipt: Optional[Dict[str, Any]] = None,
    block_number: Optional[int] = None,
) -> ParsedRecord:
    """
    Build a ParsedRecord from one transaction and, optionally, its receipt.

    The block number comes from the explicit argument when given, else from
    the receipt (the confirming block), else from the transaction itself.
    The receiver is the transaction's ``to``; contract creations have none.
    """
    if not isinstance(tx, dict):
        raise MalformedInput("transaction must be a JSON object")
    receipt = receipt or {}
    tx_hash = tx.get("hash") or receipt.get("transactionHash")
    if not tx_hash:
        raise MalformedInput("transaction is missing 'hash'")
    what = f"transaction {tx_hash}"

    sender = tx.get("from") or receipt.get("from")
    if not sender:
        raise MalformedInput(f"{what} is missing 'from'")
    value = _quantity(tx, "value", what)

    if block_number is None:
        if receipt.get("blockNumber") is not None:
            block_number = _quantity(receipt, "blockNumber", f"receipt for {tx_hash}")
        elif tx.get("blockNumber") is not None:
            block_number = _quantity(tx, "blockNumber", what)
        else:
            raise MalformedInput(f"{what} has no block number (pending?)")

    try:
        return ParsedRecord(
            block_number=block_number,
            tx_hash=tx_hash,
            tx_value=value,
            sender=sender,
            receiver=tx.get("to") or receipt.get("to"),
        )
    except ValidationError as e:
        raise MalformedInput(f"{what} failed validation: {e}") from e

