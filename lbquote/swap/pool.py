"""Pool snapshot value type."""

from __future__ import annotations

from dataclasses import dataclass

from lbquote.fees.params import StaticFeeParams


@dataclass(frozen=True)
class Pool:
    """Immutable snapshot of a liquidity-book pool for one quoting call.

    The caller owns the pool. The kernel returns updated fee params with each
    quote; persisting them when a swap executes is the caller's job.
    """

    active_bin_id: int
    bin_step: int  # Basis points between adjacent bins (25 = 0.25%)
    fee_params: StaticFeeParams
    reserves_x: int = 0
    reserves_y: int = 0
    address: str | None = None
    x_addr: str | None = None
    y_addr: str | None = None
    locked: bool = False


__all__ = ["Pool"]
