from ingestion.fetcher import _check_hash


ADDR_A = "0x" + "a" * 40
ADDR_B = "0x" + "b" * 40
ADDR_C = "0x" + "c" * 40
HASH_1 = "0x" + "1" * 64
HASH_2 = "0x" + "2" * 64


class FakeReader:
    """In-memory stand-in for ChainReader keyed by block number and tx hash."""

    def __init__(self, blocks=None, txs=None, receipts=None, fail_receipt=None):
        self.blocks = blocks or {}
        self.txs = txs or {}
        self.receipts = receipts or {}
        self.fail_receipt = fail_receipt or {}
        self.calls = []

    def fetch_block(self, n):
        self.calls.append(("block", n))
        return self.blocks[n]

    def fetch_transaction(self, h):
        _check_hash(h)
        self.calls.append(("tx", h))
        return self.txs[h]

    def fetch_receipt(self, h):
        _check_hash(h)
        self.calls.append(("receipt", h))
        if h in self.fail_receipt:
            raise self.fail_receipt[h]
        return self.receipts[h]


