"""Dynamic fee model for liquidity-book pools.

The swap fee is a static base fee plus a variable fee that grows with
recent price movement:

    base_fee     = base_factor * bin_step * 1e10
    variable_fee = ceil((volatility_accum * bin_step)^2 * variable_fee_control / 100)
    total_fee    = base_fee + variable_fee

All fees are integers in PRECISION (1e18) units; a fee of 1e16 is 1%.

The volatility state advances in two steps:

1. update_references() once at swap entry: depending on the time since
   the last swap, references are kept, partially decayed, or reset.
2. update_volatility_accumulator() once per bin visited: the accumulator
   becomes volatility_ref plus the distance from index_ref, saturating at
   max_volatility_accum.

Both return a new StaticFeeParams; nothing is mutated in place.
"""

from __future__ import annotations

import decimal
from dataclasses import replace
from decimal import Decimal

import structlog

from lbquote.constants import BASE_FEE_SCALE, BASIS_POINT_MAX, PRECISION
from lbquote.errors import require
from lbquote.math.price import PRICE_CONTEXT
from lbquote.safe_int import S

from .params import StaticFeeParams

logger = structlog.get_logger()


# =============================================================================
# Volatility state machine
# =============================================================================


def update_references(params: StaticFeeParams, active_bin_id: int, now: int) -> StaticFeeParams:
    """Advance the volatility references at the start of a swap.

    - dt >= decay_period: reset (index_ref = active bin, volatility_ref = 0)
    - dt >= filter_period: decay (index_ref = active bin,
      volatility_ref = accumulator * reduction_factor / BASIS_POINT_MAX)
    - otherwise: references unchanged

    last_swap_ts is always set to ``now``.

    Raises:
        InvalidParameterRange: If ``now`` is earlier than last_swap_ts
    """
    require(
        now >= params.last_swap_ts,
        "now",
        now,
        f"must not be earlier than last_swap_ts={params.last_swap_ts}",
    )

    dt = now - params.last_swap_ts
    if dt >= params.decay_period:
        logger.debug("fee_references_reset", dt=dt, index_ref=active_bin_id)
        return replace(params, index_ref=active_bin_id, volatility_ref=0, last_swap_ts=now)

    if dt >= params.filter_period:
        volatility_ref = compute_volatility_ref(
            params.current_volatility_accum, params.reduction_factor
        )
        logger.debug(
            "fee_references_decayed",
            dt=dt,
            index_ref=active_bin_id,
            volatility_ref=volatility_ref,
        )
        return replace(
            params,
            index_ref=active_bin_id,
            volatility_ref=volatility_ref,
            last_swap_ts=now,
        )

    return replace(params, last_swap_ts=now)


def compute_volatility_ref(volatility_accum: int, reduction_factor: int) -> int:
    """Decayed accumulator kept after a filter period (rounded down)."""
    return (S(volatility_accum) * reduction_factor // BASIS_POINT_MAX).value


def update_volatility_accumulator(params: StaticFeeParams, bin_id: int) -> StaticFeeParams:
    """Record the volatility introduced by moving to ``bin_id``.

    The accumulator is volatility_ref + |bin_id - index_ref|, capped at
    max_volatility_accum.
    """
    newly_introduced = abs(bin_id - params.index_ref)
    volatility_accum = min(params.volatility_ref + newly_introduced, params.max_volatility_accum)
    return replace(params, current_volatility_accum=volatility_accum)


# =============================================================================
# Fee math (PRECISION units)
# =============================================================================


def base_fee(base_factor: int, bin_step: int) -> int:
    """Static fee component."""
    return base_factor * bin_step * BASE_FEE_SCALE


def variable_fee(bin_step: int, variable_fee_control: int, volatility_accum: int) -> int:
    """Volatility-driven fee component, rounded up."""
    if variable_fee_control == 0:
        return 0
    prod = S(volatility_accum) * bin_step
    return (prod * prod * variable_fee_control).ceiling_div(100).value


def total_fee(bin_step: int, base_factor: int, variable_fee_control: int, volatility_accum: int) -> int:
    """Base plus variable fee."""
    return base_fee(base_factor, bin_step) + variable_fee(
        bin_step, variable_fee_control, volatility_accum
    )


def total_fee_for(params: StaticFeeParams, bin_step: int) -> int:
    """Total fee at the params' current volatility accumulator."""
    return total_fee(
        bin_step,
        params.base_factor,
        params.variable_fee_control,
        params.current_volatility_accum,
    )


def _to_percent(fee: int) -> Decimal:
    with decimal.localcontext(PRICE_CONTEXT):
        return Decimal(fee) * 100 / PRECISION


def base_fee_percent(base_factor: int, bin_step: int) -> Decimal:
    """Base fee in percent (0.1 means 0.1%)."""
    return _to_percent(base_fee(base_factor, bin_step))


def variable_fee_percent(bin_step: int, variable_fee_control: int, volatility_accum: int) -> Decimal:
    """Variable fee in percent."""
    return _to_percent(variable_fee(bin_step, variable_fee_control, volatility_accum))


def total_fee_percent(
    bin_step: int, base_factor: int, variable_fee_control: int, volatility_accum: int
) -> Decimal:
    """Total fee in percent."""
    return _to_percent(total_fee(bin_step, base_factor, variable_fee_control, volatility_accum))


def fee_amount(amount: int, fee: int) -> int:
    """Fee charged on ``amount`` at rate ``fee`` (PRECISION units), rounded up."""
    return (S(amount) * fee).ceiling_div(PRECISION).value


def protocol_fee_amount(fee: int, protocol_share: int) -> int:
    """Protocol's cut of a fee amount, rounded down."""
    return (S(fee) * protocol_share // BASIS_POINT_MAX).value


__all__ = [
    "update_references",
    "compute_volatility_ref",
    "update_volatility_accumulator",
    "base_fee",
    "variable_fee",
    "total_fee",
    "total_fee_for",
    "base_fee_percent",
    "variable_fee_percent",
    "total_fee_percent",
    "fee_amount",
    "protocol_fee_amount",
]
