"""API endpoints for the quoting service."""

import time
from decimal import Decimal

import structlog
from fastapi import APIRouter, Query

from lbquote.bins.book import BinBook
from lbquote.math.price import base_factor_for_fee
from lbquote.models.quote import QuoteRequest, QuoteResponse
from lbquote.swap.engine import quote_exact_in, quote_exact_out

logger = structlog.get_logger()

router = APIRouter()


def _request_time(request: QuoteRequest) -> int:
    return int(time.time()) if request.now is None else request.now


@router.post("/quote/exact-in", response_model=QuoteResponse)
async def exact_in(request: QuoteRequest) -> QuoteResponse:
    """Quote the output for an exact input amount.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Kernel errors: mapped by the application exception handler
    """
    logger.info(
        "received_quote",
        kind="exact_in",
        pool=request.pool.addr,
        amount=request.amount,
        swap_for_x=request.swap_for_x,
        bin_count=len(request.bins),
    )
    book = BinBook.from_unsorted(b.to_bin() for b in request.bins)
    quote = quote_exact_in(
        request.pool.to_pool(),
        book,
        request.amount,
        request.swap_for_x,
        _request_time(request),
    )
    return QuoteResponse.from_quote(quote)


@router.post("/quote/exact-out", response_model=QuoteResponse)
async def exact_out(request: QuoteRequest) -> QuoteResponse:
    """Quote the input required for an exact output amount."""
    logger.info(
        "received_quote",
        kind="exact_out",
        pool=request.pool.addr,
        amount=request.amount,
        swap_for_x=request.swap_for_x,
        bin_count=len(request.bins),
    )
    book = BinBook.from_unsorted(b.to_bin() for b in request.bins)
    quote = quote_exact_out(
        request.pool.to_pool(),
        book,
        request.amount,
        request.swap_for_x,
        _request_time(request),
    )
    return QuoteResponse.from_quote(quote)


@router.get("/config/base-factor")
async def base_factor(
    fee_percent: Decimal = Query(..., ge=0),
    bin_step: int = Query(..., gt=0),
) -> dict[str, object]:
    """Base factor giving exactly ``fee_percent`` for ``bin_step``."""
    return {
        "fee_percent": str(fee_percent),
        "bin_step": bin_step,
        "base_factor": base_factor_for_fee(fee_percent, bin_step),
    }
