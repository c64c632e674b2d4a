"""
Decoders for raw Uniswap V2 pair storage words.

    contract UniswapV2Pair is IUniswapV2Pair, UniswapV2ERC20 {
        ...
        address public factory;             // slot 5
        address public token0;              // slot 6
        address public token1;              // slot 7

        uint112 private reserve0;           // slot 8, bits   0..111
        uint112 private reserve1;           // slot 8, bits 112..223
        uint32  private blockTimestampLast; // slot 8, bits 224..255

Slots 0..4 belong to UniswapV2ERC20 (name/symbol are constants and take no slot).
"""

from typing import Union
from hexbytes import HexBytes
from web3 import Web3

from .models import Address, ReservePair

SLOT_TOKEN0 = 6
SLOT_TOKEN1 = 7
SLOT_RESERVES = 8

WORD_SIZE = 32
ADDRESS_SIZE = 20

MASK_112 = (1 << 112) - 1
MASK_32 = (1 << 32) - 1
MASK_160 = (1 << 160) - 1

Word = Union[bytes, bytearray, HexBytes]


def word_to_int(word: Word) -> int:
    """Big-endian unsigned value of a storage word (shorter words are left-padded)."""
    return int.from_bytes(bytes(word), "big")


def decode_address(word: Word) -> Address:
    """
    Address stored right-aligned in a word. Only the low 20 bytes are used;
    the 12 bytes of padding are stripped without being checked.
    """
    raw = (word_to_int(word) & MASK_160).to_bytes(ADDRESS_SIZE, "big")
    return Web3.to_checksum_address("0x" + raw.hex())


def decode_reserves(word: Word) -> ReservePair:
    """Unpack [reserve0:112][reserve1:112][blockTimestampLast:32] (LSB first)."""
    v = word_to_int(word)
    return ReservePair(
        reserve0=v & MASK_112,
        reserve1=(v >> 112) & MASK_112,
        block_timestamp_last=(v >> 224) & MASK_32,
    )
