"""Exact-in and exact-out quoting by walking liquidity-book bins.

Direction convention (price is Y per X):

- swap_for_x=True swaps X for Y: X comes in, Y goes out, and the walk moves
  toward lower ids through bins holding Y.
- swap_for_x=False swaps Y for X: Y comes in, X goes out, and the walk moves
  toward higher ids through bins holding X.

Rounding always favours the pool: fees and required inputs round up,
outputs round down.

Each quote advances the fee references once at entry and the volatility
accumulator once per bin visited; the evolved fee params are returned with
the quote and the caller's values are left untouched.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

import structlog

from lbquote.bins.book import Bin, BinBook, SwapDirection
from lbquote.constants import U64_MAX
from lbquote.errors import InsufficientLiquidity, InvalidParameterRange, require
from lbquote.fees.config import DEFAULT_FEE_LIMITS, FeeLimits
from lbquote.fees.model import (
    fee_amount,
    protocol_fee_amount,
    total_fee_for,
    update_references,
    update_volatility_accumulator,
)
from lbquote.fees.validation import validate_fee_params
from lbquote.math.price import PRICE_CONTEXT, price_from_id, validate_bin_id
from lbquote.safe_int import S, U64Overflow

from .pool import Pool
from .result import BinFill, SwapQuote

logger = structlog.get_logger()


def direction_for(swap_for_x: bool) -> SwapDirection:
    """Walk direction for a swap side (output liquidity drives the search)."""
    return SwapDirection.DOWN if swap_for_x else SwapDirection.UP


def to_output_amount(amount: int, price: Decimal, swap_for_x: bool) -> int:
    """Convert an input-side amount into output-side units, rounded down."""
    with decimal.localcontext(PRICE_CONTEXT):
        value = Decimal(amount) * price if swap_for_x else Decimal(amount) / price
        return int(value.to_integral_value(rounding=ROUND_FLOOR))


def to_input_amount(amount: int, price: Decimal, swap_for_x: bool) -> int:
    """Convert an output-side amount into input-side units, rounded up."""
    with decimal.localcontext(PRICE_CONTEXT):
        value = Decimal(amount) / price if swap_for_x else Decimal(amount) * price
        return int(value.to_integral_value(rounding=ROUND_CEILING))


def _validate_request(pool: Pool, amount: int, field: str, limits: FeeLimits) -> None:
    validate_bin_id(pool.active_bin_id, "active_bin_id")
    validate_fee_params(pool.fee_params, pool.bin_step, limits)
    require(
        isinstance(amount, int) and not isinstance(amount, bool),
        field,
        amount,
        "must be an integer amount",
    )
    require(0 <= amount <= U64_MAX, field, amount, f"must be in [0, {U64_MAX}]")


def _as_book(bins: BinBook | Iterable[Bin]) -> BinBook:
    return bins if isinstance(bins, BinBook) else BinBook(bins)


def quote_exact_in(
    pool: Pool,
    bins: BinBook | Iterable[Bin],
    amount_in: int,
    swap_for_x: bool,
    now: int,
    *,
    limits: FeeLimits = DEFAULT_FEE_LIMITS,
) -> SwapQuote:
    """Quote the output for an exact input amount.

    Args:
        pool: Pool snapshot (active bin, bin step, fee params)
        bins: Pool bins sorted by id, or a BinBook
        amount_in: Exact input amount, fees included
        swap_for_x: True to swap X for Y, False to swap Y for X
        now: Unix timestamp of the swap, used for reference decay
        limits: Fee ceilings applied to pool validation

    Returns:
        SwapQuote with amount_out, fees_in and the evolved fee params

    Raises:
        InvalidParameterRange: If the pool, bins or amount are invalid
        InsufficientLiquidity: If the book runs dry before amount_in is used up
    """
    _validate_request(pool, amount_in, "amount_in", limits)
    book = _as_book(bins)
    params = update_references(pool.fee_params, pool.active_bin_id, now)
    if amount_in == 0:
        return SwapQuote.empty(params)

    direction = direction_for(swap_for_x)
    remaining_in = S(amount_in)
    amount_out = S.zero()
    fees_in = S.zero()
    protocol_fees = S.zero()
    fills: list[BinFill] = []

    current = book.next_liquid_bin(pool.active_bin_id, direction)
    while remaining_in > 0:
        price = price_from_id(current.bin_id, pool.bin_step)
        params = update_volatility_accumulator(params, current.bin_id)
        fee = total_fee_for(params, pool.bin_step)

        max_output = current.reserve_for(direction)
        max_input = to_input_amount(max_output, price, swap_for_x)
        fee_on_max = fee_amount(max_input, fee)
        max_input_with_fee = max_input + fee_on_max

        if remaining_in >= max_input_with_fee:
            consumed = max_input_with_fee
            output = max_output
            bin_fee = fee_on_max
        else:
            consumed = remaining_in.value
            bin_fee = fee_amount(consumed, fee)
            output = min(to_output_amount((S(consumed) - bin_fee).value, price, swap_for_x), max_output)

        remaining_in = remaining_in - consumed
        amount_out = amount_out + output
        fees_in = fees_in + bin_fee
        protocol_fees = protocol_fees + protocol_fee_amount(bin_fee, params.protocol_share)
        fills.append(BinFill(current.bin_id, consumed, output, bin_fee))

        if remaining_in <= 0:
            break
        try:
            current = book.next_liquid_bin(current.bin_id + direction.step, direction)
        except InsufficientLiquidity:
            logger.info(
                "quote_exact_in_insufficient_liquidity",
                amount_in=amount_in,
                remaining_in=remaining_in.value,
                bins_crossed=len(fills),
            )
            raise

    logger.debug(
        "quote_exact_in_complete",
        amount_in=amount_in,
        amount_out=amount_out.value,
        fees_in=fees_in.value,
        bins_crossed=len(fills),
    )
    return SwapQuote(
        amount_in=amount_in,
        amount_out=amount_out.value,
        fees_in=fees_in.value,
        protocol_fees=protocol_fees.value,
        updated_fee_params=params,
        fills=tuple(fills),
    )


def quote_exact_out(
    pool: Pool,
    bins: BinBook | Iterable[Bin],
    amount_out: int,
    swap_for_x: bool,
    now: int,
    *,
    limits: FeeLimits = DEFAULT_FEE_LIMITS,
) -> SwapQuote:
    """Quote the input (fees included) required for an exact output amount.

    Mirrors quote_exact_in, driving the walk on the remaining output.

    Raises:
        InvalidParameterRange: If the pool, bins or amount are invalid, or the
            required input does not fit in a u64 amount
        InsufficientLiquidity: If the book runs dry before amount_out is filled
    """
    _validate_request(pool, amount_out, "amount_out", limits)
    book = _as_book(bins)
    params = update_references(pool.fee_params, pool.active_bin_id, now)
    if amount_out == 0:
        return SwapQuote.empty(params)

    direction = direction_for(swap_for_x)
    remaining_out = S(amount_out)
    amount_in = S.zero()
    fees_in = S.zero()
    protocol_fees = S.zero()
    fills: list[BinFill] = []

    current = book.next_liquid_bin(pool.active_bin_id, direction)
    while remaining_out > 0:
        output_cap = remaining_out.min(current.reserve_for(direction))
        params = update_volatility_accumulator(params, current.bin_id)
        price = price_from_id(current.bin_id, pool.bin_step)

        optimal_input = to_input_amount(output_cap.value, price, swap_for_x)
        bin_fee = fee_amount(optimal_input, total_fee_for(params, pool.bin_step))

        amount_in = amount_in + optimal_input + bin_fee
        fees_in = fees_in + bin_fee
        protocol_fees = protocol_fees + protocol_fee_amount(bin_fee, params.protocol_share)
        remaining_out = remaining_out - output_cap
        fills.append(BinFill(current.bin_id, optimal_input + bin_fee, output_cap.value, bin_fee))

        if remaining_out <= 0:
            break
        try:
            current = book.next_liquid_bin(current.bin_id + direction.step, direction)
        except InsufficientLiquidity:
            logger.info(
                "quote_exact_out_insufficient_liquidity",
                amount_out=amount_out,
                remaining_out=remaining_out.value,
                bins_crossed=len(fills),
            )
            raise

    try:
        total_in = amount_in.to_u64()
    except U64Overflow as err:
        raise InvalidParameterRange(
            f"amount_out: required input {amount_in.value} exceeds u64",
            field="amount_out",
            value=amount_out,
        ) from err

    logger.debug(
        "quote_exact_out_complete",
        amount_out=amount_out,
        amount_in=total_in,
        fees_in=fees_in.value,
        bins_crossed=len(fills),
    )
    return SwapQuote(
        amount_in=total_in,
        amount_out=amount_out,
        fees_in=fees_in.value,
        protocol_fees=protocol_fees.value,
        updated_fee_params=params,
        fills=tuple(fills),
    )


__all__ = [
    "direction_for",
    "to_output_amount",
    "to_input_amount",
    "quote_exact_in",
    "quote_exact_out",
]
