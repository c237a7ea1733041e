"""Fee parameter validation.

Checks run at call entry, before any bin walk, so a rejected request never
leaves partially computed state behind.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields

from lbquote.constants import PRECISION
from lbquote.errors import require
from lbquote.math.price import validate_bin_step

from .config import DEFAULT_FEE_LIMITS, FeeLimits
from .model import total_fee
from .params import StaticFeeParams


def validate_fee_params(
    params: StaticFeeParams,
    bin_step: int,
    limits: FeeLimits = DEFAULT_FEE_LIMITS,
) -> None:
    """Validate static and dynamic fee parameters for a pool.

    Args:
        params: Fee parameters to check
        bin_step: Pool bin step in basis points
        limits: Protocol ceilings (default: DEFAULT_FEE_LIMITS)

    Raises:
        InvalidParameterRange: Naming the first offending field
    """
    validate_bin_step(bin_step)

    for f in fields(params):
        value = getattr(params, f.name)
        require(value >= 0, f.name, value, "must be non-negative")

    require(
        params.filter_period < params.decay_period,
        "filter_period",
        params.filter_period,
        f"must be less than decay_period={params.decay_period}",
    )
    require(
        params.reduction_factor <= limits.max_reduction_factor,
        "reduction_factor",
        params.reduction_factor,
        f"must not exceed {limits.max_reduction_factor}",
    )
    require(
        params.protocol_share <= limits.max_protocol_share,
        "protocol_share",
        params.protocol_share,
        f"must not exceed {limits.max_protocol_share}",
    )
    require(
        params.current_volatility_accum <= params.max_volatility_accum,
        "current_volatility_accum",
        params.current_volatility_accum,
        f"must not exceed max_volatility_accum={params.max_volatility_accum}",
    )

    max_total_fee = total_fee(
        bin_step,
        params.base_factor,
        params.variable_fee_control,
        params.max_volatility_accum,
    )
    require(
        max_total_fee <= limits.max_fee,
        "base_factor",
        params.base_factor,
        f"total fee at max volatility ({max_total_fee}) exceeds max fee {limits.max_fee}",
    )


def validate_liquidity_shape(
    delta_ids: Sequence[int],
    distribution_x: Sequence[int],
    distribution_y: Sequence[int],
) -> None:
    """Validate a liquidity distribution before it is handed to a payload builder.

    Each of the three arrays describes the same bins, so their lengths must
    match. Weights are PRECISION-scaled shares of the deposited amount: each
    must be non-negative and each side must sum to at most PRECISION.

    Raises:
        InvalidParameterRange: On mismatched lengths, duplicate deltas,
            negative weights or over-allocated distributions
    """
    require(
        len(delta_ids) == len(distribution_x) == len(distribution_y),
        "distribution",
        (len(delta_ids), len(distribution_x), len(distribution_y)),
        "delta_ids, distribution_x and distribution_y must have equal lengths",
    )
    require(
        len(set(delta_ids)) == len(delta_ids),
        "delta_ids",
        list(delta_ids),
        "must not contain duplicates",
    )
    for name, distribution in (("distribution_x", distribution_x), ("distribution_y", distribution_y)):
        require(
            all(weight >= 0 for weight in distribution),
            name,
            list(distribution),
            "weights must be non-negative",
        )
        total = sum(distribution)
        require(total <= PRECISION, name, total, f"must sum to at most {PRECISION}")


__all__ = ["validate_fee_params", "validate_liquidity_shape"]
