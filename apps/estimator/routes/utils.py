import re
from typing import Optional

from fastapi import HTTPException
from web3 import Web3

_INT_RE = re.compile(r"[+-]?[0-9]+")


def require_address(field: str, value: Optional[str]) -> str:
    """Validate a 0x hex address query param and return it checksummed."""
    if not value:
        raise HTTPException(400, f"{field} address is required")
    if not Web3.is_address(value):
        raise HTTPException(400, f"invalid {field} address")
    return Web3.to_checksum_address(value)


def parse_amount(value: Optional[str]) -> int:
    """
    Parse a base-10 integer amount of token base units (no decimals, no
    exponent, no digit separators). Must be > 0.
    """
    if not value:
        raise HTTPException(400, "amount is required")
    if not _INT_RE.fullmatch(value):
        raise HTTPException(400, "invalid amount_in: invalid amount format")
    amount = int(value)
    if amount <= 0:
        raise HTTPException(400, "invalid amount_in: amount must be greater than zero")
    return amount
