import pytest

from _chain_fixtures import ADDR_A, ADDR_B, ADDR_C, HASH_1, HASH_2


@pytest.fixture
def block_100():
    """Block 100: A->B value 5, then a contract creation from C with value 0."""
    txs = [
        {"hash": HASH_1, "from": ADDR_A, "to": ADDR_B, "value": "0x5", "blockNumber": "0x64"},
        {"hash": HASH_2, "from": ADDR_C, "to": None, "value": "0x0", "blockNumber": "0x64"},
    ]
    receipts = {
        HASH_1: {"transactionHash": HASH_1, "blockNumber": "0x64", "from": ADDR_A, "to": ADDR_B},
        HASH_2: {"transactionHash": HASH_2, "blockNumber": "0x64", "from": ADDR_C, "to": None,
                 "contractAddress": "0x" + "d" * 40},
    }
    return {"number": "0x64", "transactions": txs}, receipts
