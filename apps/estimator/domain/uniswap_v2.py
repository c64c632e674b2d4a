# 0.3% swap fee, fixed by the pair contract
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    UniswapV2Library.getAmountOut, integer for integer:

        amountInWithFee = amountIn * 997
        numerator       = amountInWithFee * reserveOut
        denominator     = reserveIn * 1000 + amountInWithFee
        amountOut       = numerator / denominator   (floor)

    Raises ValueError where the library reverts (INSUFFICIENT_INPUT_AMOUNT,
    INSUFFICIENT_LIQUIDITY). Callers classify empty pools before calling.
    """
    if amount_in <= 0:
        raise ValueError("amount_in must be > 0")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError("reserves must be > 0")

    amount_in_with_fee = amount_in * FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator
