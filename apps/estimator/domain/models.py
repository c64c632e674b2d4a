from dataclasses import dataclass

# checksummed 0x-prefixed hex string
Address = str


@dataclass(frozen=True)
class PoolPairInfo:
    token0: Address
    token1: Address


@dataclass(frozen=True)
class ReservePair:
    reserve0: int
    reserve1: int
    block_timestamp_last: int = 0


@dataclass(frozen=True)
class PoolState:
    """Pair tokens and reserves of one pool, all read at the same block."""
    pool: Address
    block_number: int
    pair: PoolPairInfo
    reserves: ReservePair


@dataclass(frozen=True)
class SwapRequest:
    pool: Address
    src: Address
    dst: Address
    amount_in: int


@dataclass(frozen=True)
class SwapQuote:
    amount_out: int

    # context the quote was computed in
    pool: Address
    src: Address
    dst: Address
    amount_in: int
    reserve_in: int
    reserve_out: int
    block_number: int
