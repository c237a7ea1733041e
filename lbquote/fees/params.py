"""Fee parameter record for a liquidity-book pool."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaticFeeParams:
    """Static fee configuration plus the dynamic volatility state of a pool.

    The static half is fixed at pool creation. The dynamic half evolves with
    every swap; the kernel never mutates it in place and instead returns an
    updated copy alongside each quote.

    Attributes:
        base_factor: Multiplier for the base fee (base_fee = base_factor * bin_step * 1e10)
        filter_period: Seconds below which references are left untouched
        decay_period: Seconds at or above which references fully reset
        reduction_factor: Basis points of the accumulator kept on partial decay
        variable_fee_control: Scale of the volatility-driven fee (0 disables it)
        protocol_share: Basis points of swap fees routed to the protocol
        max_volatility_accum: Ceiling for current_volatility_accum
        current_volatility_accum: Volatility accumulated by the latest swap
        index_ref: Bin id the accumulator measures movement from
        volatility_ref: Decayed accumulator carried into the next swap
        last_swap_ts: Unix timestamp of the latest reference update
    """

    base_factor: int
    filter_period: int
    decay_period: int
    reduction_factor: int
    variable_fee_control: int
    protocol_share: int
    max_volatility_accum: int
    current_volatility_accum: int = 0
    index_ref: int = 0
    volatility_ref: int = 0
    last_swap_ts: int = 0


__all__ = ["StaticFeeParams"]
