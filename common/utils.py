"""
common.utils

Hex helpers shared by the fetcher and the record mapper.
"""
import re

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

HASH_HEX_LEN = 64
ADDRESS_HEX_LEN = 40


def hex_to_int(v) -> int:
    """
    Accept an int, a 0x hex quantity or a decimal string.
    Raises ValueError for anything else, including bools and negatives.
    """
    if isinstance(v, bool) or v is None:
        raise ValueError(f"not a quantity: {v!r}")
    if isinstance(v, int):
        n = v
    else:
        s = str(v).strip().lower()
        n = int(s, 16) if s.startswith("0x") else int(s)
    if n < 0:
        raise ValueError(f"negative quantity: {v!r}")
    return n


def is_hex_of_len(v, length: int) -> bool:
    if not isinstance(v, str) or v[:2] not in ("0x", "0X"):
        return False
    h = v[2:]
    return len(h) == length and bool(_HEX_RE.match(h))


def is_tx_hash(v) -> bool:
    return is_hex_of_len(v, HASH_HEX_LEN)


def normalize_address(addr: str) -> str:
    """
    Returns lowercased 0x-prefixed 40-hex address or raises ValueError with a clear message.
    Accepts inputs with extra whitespace/quotes.
    """
    if not addr:
        raise ValueError("Empty contract address.")
    a = str(addr).strip().strip('"').strip("'")
    if a[:2] not in ("0x", "0X"):
        a = "0x" + a
    if not is_hex_of_len(a, ADDRESS_HEX_LEN):
        raise ValueError(f"Invalid contract address: {addr!r} (need 20-byte hex, e.g. 0x...40 hex chars)")
    return a.lower()
