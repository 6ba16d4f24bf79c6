from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from common.errors import MalformedInput
from common.utils import is_tx_hash
from ingestion.contract import ContractBinding
from ingestion.fetcher import ChainReader
from ingestion.parser import ParsedRecord, map_record

log = logging.getLogger(__name__)


class BlockchainParser:
    """
    Turns a block number or a transaction hash into ParsedRecord values.

    The reader only needs fetch_block, fetch_transaction and fetch_receipt,
    so tests can hand in any object with those methods. Any failure aborts
    the call and propagates; callers never see a partial list.
    """

    def __init__(self, reader: ChainReader, contract: Optional[ContractBinding] = None):
        self.reader = reader
        self.contract = contract

    def _resolve(self, entry: Any) -> Dict[str, Any]:
        # some nodes ignore the full-transactions flag and return bare hashes
        if isinstance(entry, str):
            if not is_tx_hash(entry):
                raise MalformedInput(f"block lists a malformed transaction hash: {entry!r}")
            return self.reader.fetch_transaction(entry)
        if not isinstance(entry, dict):
            raise MalformedInput(f"unexpected transaction entry in block: {entry!r}")
        return entry

    def _report(self, what: str, records: List[ParsedRecord]) -> None:
        if self.contract is None:
            log.info("%s: %d records", what, len(records))
            return
        hits = sum(1 for r in records if self.contract.involves(r))
        log.info("%s: %d records, %d touching contract %s", what, len(records), hits, self.contract.address)

    def parse_block(self, block_number: int) -> List[ParsedRecord]:
        block = self.reader.fetch_block(block_number)
        txs = block.get("transactions")
        if txs is None:
            raise MalformedInput(f"block {block_number} has no 'transactions' field")

        records: List[ParsedRecord] = []
        seen = set()
        for entry in txs:
            tx = self._resolve(entry)
            tx_hash = tx.get("hash")
            if not tx_hash:
                raise MalformedInput(f"block {block_number} contains a transaction without 'hash'")
            if not is_tx_hash(tx_hash):
                raise MalformedInput(f"block {block_number} contains a malformed transaction hash: {tx_hash!r}")
            receipt = self.reader.fetch_receipt(tx_hash)
            rec = map_record(tx, receipt, block_number=block_number)
            log.debug("mapped %s", rec)
            if rec.tx_hash in seen:
                raise MalformedInput(f"block {block_number} lists {rec.tx_hash} twice")
            seen.add(rec.tx_hash)
            records.append(rec)

        self._report(f"block {block_number}", records)
        return records

    def parse_tx(self, tx_hash: str) -> ParsedRecord:
        tx = self.reader.fetch_transaction(tx_hash)
        receipt = self.reader.fetch_receipt(tx_hash)
        # the receipt's confirming block, not anything the caller passed in
        rec = map_record(tx, receipt)
        self._report(f"tx {tx_hash}", [rec])
        return rec


def parse_block(reader: ChainReader, block_number: int, contract: Optional[ContractBinding] = None) -> List[ParsedRecord]:
    return BlockchainParser(reader, contract).parse_block(block_number)


def parse_tx(reader: ChainReader, tx_hash: str, contract: Optional[ContractBinding] = None) -> ParsedRecord:
    return BlockchainParser(reader, contract).parse_tx(tx_hash)
