import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from ..services.estimate_service import EstimateService
from ..services.exceptions import (
    EmptyReservesError, PairMismatchError, ReadFailureError, SameTokenError,
)
from .deps import get_estimate_service
from .utils import parse_amount, require_address

router = APIRouter(tags=["estimate"])
logger = logging.getLogger(__name__)


@router.get("/estimate", response_class=PlainTextResponse)
async def estimate(
    pool: Optional[str] = Query(None),
    src: Optional[str] = Query(None),
    dst: Optional[str] = Query(None),
    src_amount: Optional[str] = Query(None),
    svc: EstimateService = Depends(get_estimate_service),
):
    """
    Expected output of swapping `src_amount` (base units) of `src` for `dst`
    in the Uniswap V2 pair `pool`, at the latest block. Body: decimal amount.
    """
    pool_addr = require_address("pool", pool)
    src_addr = require_address("src", src)
    dst_addr = require_address("dst", dst)
    if src_addr == dst_addr:
        raise HTTPException(400, "src and dst addresses cannot be the same")
    amount_in = parse_amount(src_amount)

    try:
        quote = await svc.estimate(pool_addr, src_addr, dst_addr, amount_in)
    except SameTokenError:
        raise HTTPException(400, "src and dst tokens cannot be the same")
    except EmptyReservesError:
        raise HTTPException(400, "pool has insufficient reserves")
    except PairMismatchError:
        raise HTTPException(400, "src/dst do not match pool token pair")
    except ReadFailureError as exc:
        logger.error("service estimate failed: %s", exc)
        raise HTTPException(502, "estimation failed")

    logger.debug(
        "estimate computed pool=%s src=%s dst=%s in=%s out=%s block=%s",
        pool_addr, src_addr, dst_addr, amount_in, quote.amount_out, quote.block_number,
    )
    return PlainTextResponse(str(quote.amount_out))
