import logging
from typing import Optional, Tuple

from web3 import Web3

from ..adapters.base import StorageReader
from ..domain.models import PoolPairInfo, ReservePair, SwapQuote, SwapRequest
from ..domain.uniswap_v2 import get_amount_out
from .chain_reader import PoolStateReader
from .exceptions import EmptyReservesError, PairMismatchError, SameTokenError


def resolve_direction(pair: PoolPairInfo, reserves: ReservePair, src: str, dst: str) -> Tuple[int, int]:
    """
    Map a src -> dst trade onto the pool's reserves.

    Returns (reserve_in, reserve_out). Raises SameTokenError, PairMismatchError
    or EmptyReservesError, in that order of precedence.
    """
    src = Web3.to_checksum_address(src)
    dst = Web3.to_checksum_address(dst)
    token0 = Web3.to_checksum_address(pair.token0)
    token1 = Web3.to_checksum_address(pair.token1)

    if src == dst:
        raise SameTokenError(src, dst)

    if src == token0 and dst == token1:
        reserve_in, reserve_out = reserves.reserve0, reserves.reserve1
    elif src == token1 and dst == token0:
        reserve_in, reserve_out = reserves.reserve1, reserves.reserve0
    else:
        raise PairMismatchError(token0, token1, src, dst)

    if reserve_in == 0 or reserve_out == 0:
        raise EmptyReservesError(reserve_in, reserve_out)
    return reserve_in, reserve_out


class EstimateService:
    """
    Uniswap V2 output-amount estimation from raw pair storage.

    Responsibilities:
    - Reject same-token requests without touching the chain.
    - Pin the chain head once and read pair + reserves at that block.
    - Resolve the trade direction and apply the 0.3% fee formula.
    """

    def __init__(self, reader: StorageReader, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._pools = PoolStateReader(reader, logger=self._logger)

    async def estimate(self, pool: str, src: str, dst: str, amount_in: int) -> SwapQuote:
        """
        Quote swapping `amount_in` of `src` for `dst` in `pool` at the latest block.

        :raises SameTokenError, PairMismatchError, EmptyReservesError, ReadFailureError:
        """
        req = SwapRequest(
            pool=Web3.to_checksum_address(pool),
            src=Web3.to_checksum_address(src),
            dst=Web3.to_checksum_address(dst),
            amount_in=int(amount_in),
        )
        self._logger.debug("estimating swap pool=%s src=%s dst=%s in=%s", req.pool, req.src, req.dst, req.amount_in)

        if req.src == req.dst:
            raise SameTokenError(req.src, req.dst)

        state = await self._pools.read_latest(req.pool)
        reserve_in, reserve_out = resolve_direction(state.pair, state.reserves, req.src, req.dst)

        amount_out = get_amount_out(req.amount_in, reserve_in, reserve_out)
        self._logger.debug("amount out computed: %s", amount_out)

        return SwapQuote(
            amount_out=amount_out,
            pool=req.pool,
            src=req.src,
            dst=req.dst,
            amount_in=req.amount_in,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            block_number=state.block_number,
        )
