"""
Pool state reader: token pair + reserves of a Uniswap V2 pair, straight from storage.

No eth_call, no ABI: three eth_getStorageAt reads (slots 6, 7, 8), all pinned
to one block so the pair and the reserves describe the same chain state.
"""

import asyncio
import logging
from typing import Optional

from ..adapters.base import StorageReader
from ..domain.models import PoolState, PoolPairInfo
from ..domain.storage import (
    SLOT_TOKEN0, SLOT_TOKEN1, SLOT_RESERVES,
    decode_address, decode_reserves,
)
from .exceptions import ReadFailureError


class PoolStateReader:

    def __init__(self, reader: StorageReader, logger: Optional[logging.Logger] = None):
        self._reader = reader
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    async def resolve_block(self, pool: str) -> int:
        """
        Pin the current chain head. Call once per request, before any slot read.
        """
        try:
            return await self._reader.block_number()
        except Exception as exc:
            raise ReadFailureError(pool, None, None, exc) from exc

    async def read_slot(self, pool: str, slot: int, block_number: int) -> bytes:
        try:
            return await self._reader.get_storage_at(pool, slot, block_number)
        except Exception as exc:
            raise ReadFailureError(pool, slot, block_number, exc) from exc

    async def read(self, pool: str, block_number: int) -> PoolState:
        """
        Read token0, token1 and the packed reserves of `pool` at `block_number`.

        The reads are independent and issued concurrently. If any of them fails
        the first ReadFailureError is raised; the others are awaited so no task
        is left dangling.
        """
        results = await asyncio.gather(
            self.read_slot(pool, SLOT_TOKEN0, block_number),
            self.read_slot(pool, SLOT_TOKEN1, block_number),
            self.read_slot(pool, SLOT_RESERVES, block_number),
            return_exceptions=True,
        )
        for res in results:
            if isinstance(res, BaseException):
                raise res

        w0, w1, wr = results
        state = PoolState(
            pool=pool,
            block_number=block_number,
            pair=PoolPairInfo(token0=decode_address(w0), token1=decode_address(w1)),
            reserves=decode_reserves(wr),
        )
        self._logger.debug(
            "pool %s @%s: token0=%s token1=%s reserve0=%s reserve1=%s",
            pool, block_number, state.pair.token0, state.pair.token1,
            state.reserves.reserve0, state.reserves.reserve1,
        )
        return state

    async def read_latest(self, pool: str) -> PoolState:
        block_number = await self.resolve_block(pool)
        return await self.read(pool, block_number)
