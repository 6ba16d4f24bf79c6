# common/errors.py
from __future__ import annotations

from typing import Any, Optional


class ChainParserError(Exception):
    pass


class NotFound(ChainParserError, RuntimeError):
    """The endpoint answered, but the block, transaction or receipt does not exist."""


class EndpointError(ChainParserError, RuntimeError):
    """Transport failure or a JSON-RPC error object returned by the endpoint."""

    def __init__(self, message: str, rpc_error: Optional[Any] = None):
        super().__init__(message)
        self.rpc_error = rpc_error


class MalformedInput(ChainParserError, ValueError):
    """A chain response is missing fields the record mapping needs."""


__all__ = ["ChainParserError", "NotFound", "EndpointError", "MalformedInput"]
