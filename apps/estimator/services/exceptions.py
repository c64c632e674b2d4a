from typing import Optional


class EstimateError(Exception):
    """Base class of every terminal estimation failure. None of them are retried."""


class SameTokenError(EstimateError):
    """
    Raised BEFORE any chain read when src and dst are the same token.
    """
    def __init__(self, src: str, dst: str):
        super().__init__("src and dst are equal")
        self.src = src
        self.dst = dst


class PairMismatchError(EstimateError):
    """
    Raised when src/dst match the pool's (token0, token1) in neither order.
    """
    def __init__(self, token0: str, token1: str, src: str, dst: str):
        super().__init__(f"pair ({token0}, {token1}) does not match src {src} / dst {dst}")
        self.token0 = token0
        self.token1 = token1
        self.src = src
        self.dst = dst


class EmptyReservesError(EstimateError):
    """
    Raised when either side of the pool holds no liquidity.
    A pool address with no contract behind it reads the same way.
    """
    def __init__(self, reserve_in: int, reserve_out: int):
        super().__init__("empty reserves")
        self.reserve_in = reserve_in
        self.reserve_out = reserve_out


class ReadFailureError(EstimateError):
    """
    Raised when the node could not serve a read. The underlying error is
    chained as __cause__. slot is None when resolving the chain head failed.
    """
    def __init__(self, pool: str, slot: Optional[int], block_number: Optional[int], cause: BaseException):
        if slot is None:
            msg = f"block number (pool {pool}): {cause}"
        else:
            msg = f"storageAt slot {slot} (pool {pool}, block {block_number}): {cause}"
        super().__init__(msg)
        self.pool = pool
        self.slot = slot
        self.block_number = block_number
        self.cause = cause
