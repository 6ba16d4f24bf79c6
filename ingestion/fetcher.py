# ingestion/fetcher.py
from __future__ import annotations

import itertools
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from common.errors import EndpointError, MalformedInput, NotFound
from common.utils import is_tx_hash

log = logging.getLogger(__name__)


def rpc_url() -> str:
    # read at call time so container env is honored
    return os.environ.get("RPC_URL") or "https://example.invalid"


def _check_hash(tx_hash: str) -> None:
    if not is_tx_hash(tx_hash):
        raise ValueError("tx_hash must be a 0x prefixed 32-byte hex string")


class ChainReader:
    """
    Block, transaction and receipt lookups against one JSON-RPC endpoint.

    Every call is a single round trip. Failures are raised to the caller as-is:
    NotFound for a null result, EndpointError for transport or RPC errors.
    Not safe to share between threads; build one reader per caller.
    """

    def __init__(self, url: Optional[str] = None, timeout: float = 30.0):
        self._url = url
        self.timeout = timeout
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self._url or rpc_url()

    def _rpc_post(self, method: str, params: List[Any]):
        """
        Return the JSON RPC result field directly.
        """
        u = self.url
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        log.debug("rpc %s %s", method, params)
        try:
            resp = requests.post(u, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise EndpointError(f"RPC transport failed for {method} url={u}: {e}") from e
        except ValueError as e:
            raise EndpointError(f"RPC response for {method} url={u} is not JSON") from e
        if not isinstance(data, dict):
            raise EndpointError(f"RPC response for {method} url={u} is not a JSON-RPC object")
        if "error" in data:
            raise EndpointError(f"RPC error for {method} url={u} err={data['error']}", rpc_error=data["error"])
        if "result" not in data:
            raise EndpointError(f"RPC response for {method} url={u} has no result")
        return data["result"]

    def _fetch_object(self, method: str, params: List[Any], what: str) -> Dict[str, Any]:
        result = self._rpc_post(method, params)
        if result is None:
            raise NotFound(f"{what} not found")
        if not isinstance(result, dict):
            raise MalformedInput(f"RPC response for {method} did not return an object for {what}")
        return result

    def fetch_block(self, block_number: int) -> Dict[str, Any]:
        if isinstance(block_number, bool) or not isinstance(block_number, int) or block_number < 0:
            raise ValueError("block_number must be a non negative integer")
        return self._fetch_object("eth_getBlockByNumber", [hex(block_number), True], f"block {block_number}")

    def fetch_transaction(self, tx_hash: str) -> Dict[str, Any]:
        _check_hash(tx_hash)
        return self._fetch_object("eth_getTransactionByHash", [tx_hash], f"transaction {tx_hash}")

    def fetch_receipt(self, tx_hash: str) -> Dict[str, Any]:
        _check_hash(tx_hash)
        return self._fetch_object("eth_getTransactionReceipt", [tx_hash], f"receipt {tx_hash}")


__all__ = [
    "ChainReader",
    "rpc_url",
]
