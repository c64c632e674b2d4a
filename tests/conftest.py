from typing import Dict, List, Optional, Set, Tuple

import pytest
from web3 import Web3

from apps.estimator.adapters.base import StorageReader
from apps.estimator.domain.storage import (
    MASK_32, MASK_112, SLOT_RESERVES, SLOT_TOKEN0, SLOT_TOKEN1, WORD_SIZE,
)

TOKEN0 = Web3.to_checksum_address("0x00000000000000000000000000000000000000aa")
TOKEN1 = Web3.to_checksum_address("0x00000000000000000000000000000000000000bb")
OTHER = Web3.to_checksum_address("0x00000000000000000000000000000000000000cc")
POOL = Web3.to_checksum_address("0x0000000000000000000000000000000000000abc")


def int_to_word(value: int) -> bytes:
    if value < 0 or value >> 256:
        raise ValueError("value does not fit in a 32-byte word")
    return value.to_bytes(WORD_SIZE, "big")


def encode_address(address: str) -> bytes:
    """Address right-aligned in a zero-padded word, as the pair stores token0/token1."""
    return int_to_word(int(Web3.to_checksum_address(address), 16))


def encode_reserves(reserve0: int, reserve1: int, block_timestamp_last: int = 0) -> bytes:
    """Pack [reserve0:112][reserve1:112][blockTimestampLast:32] (LSB first)."""
    if reserve0 > MASK_112 or reserve1 > MASK_112:
        raise ValueError("reserve does not fit in uint112")
    if block_timestamp_last > MASK_32:
        raise ValueError("timestamp does not fit in uint32")
    return int_to_word((block_timestamp_last << 224) | (reserve1 << 112) | reserve0)


class FakeStorageReader(StorageReader):
    """
    In-memory node. Unknown slots read as 32 zero bytes, like a real node
    does for an address without code.
    """

    def __init__(self, block_number: int = 123, advance: bool = False):
        self.storage: Dict[Tuple[str, int], bytes] = {}
        self.head = block_number
        self.advance = advance
        self.fail_slots: Set[int] = set()
        self.fail_head = False
        self.block_calls = 0
        self.reads: List[Tuple[str, int, int]] = []

    def set_pool(self, pool: str, token0: str, token1: str, reserve0: int, reserve1: int, ts: int = 0):
        pool = Web3.to_checksum_address(pool)
        self.storage[(pool, SLOT_TOKEN0)] = encode_address(token0)
        self.storage[(pool, SLOT_TOKEN1)] = encode_address(token1)
        self.storage[(pool, SLOT_RESERVES)] = encode_reserves(reserve0, reserve1, ts)

    async def block_number(self) -> int:
        self.block_calls += 1
        if self.fail_head:
            raise ConnectionError("node unreachable")
        head = self.head
        if self.advance:
            self.head += 1
        return head

    async def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        self.reads.append((address, slot, block_number))
        if slot in self.fail_slots:
            raise ConnectionError(f"read timeout on slot {slot}")
        return self.storage.get((Web3.to_checksum_address(address), slot), bytes(32))


@pytest.fixture
def fake_reader() -> FakeStorageReader:
    reader = FakeStorageReader()
    reader.set_pool(POOL, TOKEN0, TOKEN1, 1_000_000, 2_000_000)
    return reader


@pytest.fixture
def empty_reader() -> FakeStorageReader:
    return FakeStorageReader(block_number=1)


def pool_reader(reserve0: int, reserve1: int, token0: str = TOKEN0, token1: str = TOKEN1,
                block_number: int = 1, pool: Optional[str] = None) -> FakeStorageReader:
    reader = FakeStorageReader(block_number=block_number)
    reader.set_pool(pool or POOL, token0, token1, reserve0, reserve1)
    return reader
