"""Pydantic models for pool and bin snapshots served by an indexer.

These models describe the JSON shapes a snapshot provider hands over. They
validate numeric ranges, tolerate unknown fields, and convert into the
kernel's frozen value types with to_fee_params(), to_bin() and to_pool().
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lbquote.bins.book import Bin
from lbquote.fees.params import StaticFeeParams
from lbquote.swap.pool import Pool

from .types import U64, U128, AccountAddress, normalize_address


class FeeParamsSnapshot(BaseModel):
    """Static and dynamic fee parameters as served by the indexer."""

    base_factor: U64
    filter_period: U64
    decay_period: U64
    reduction_factor: int = Field(ge=0)
    variable_fee_control: int = Field(ge=0)
    protocol_share: U64
    max_volatility_accum: int = Field(ge=0)
    current_volatility_accum: int = Field(default=0, ge=0)
    index_ref: int = Field(default=0, ge=0)
    volatility_ref: int = Field(default=0, ge=0)
    last_swap_ts: U64 = 0

    model_config = {"extra": "ignore"}

    def to_fee_params(self) -> StaticFeeParams:
        return StaticFeeParams(
            base_factor=self.base_factor,
            filter_period=self.filter_period,
            decay_period=self.decay_period,
            reduction_factor=self.reduction_factor,
            variable_fee_control=self.variable_fee_control,
            protocol_share=self.protocol_share,
            max_volatility_accum=self.max_volatility_accum,
            current_volatility_accum=self.current_volatility_accum,
            index_ref=self.index_ref,
            volatility_ref=self.volatility_ref,
            last_swap_ts=self.last_swap_ts,
        )

    @classmethod
    def from_fee_params(cls, params: StaticFeeParams) -> FeeParamsSnapshot:
        """Serialize updated fee params back into the indexer shape."""
        return cls(
            base_factor=params.base_factor,
            filter_period=params.filter_period,
            decay_period=params.decay_period,
            reduction_factor=params.reduction_factor,
            variable_fee_control=params.variable_fee_control,
            protocol_share=params.protocol_share,
            max_volatility_accum=params.max_volatility_accum,
            current_volatility_accum=params.current_volatility_accum,
            index_ref=params.index_ref,
            volatility_ref=params.volatility_ref,
            last_swap_ts=params.last_swap_ts,
        )


class BinSnapshot(BaseModel):
    """A single bin row."""

    pool_addr: AccountAddress | None = None
    bin_id: int = Field(ge=0)
    reserves_x: U64
    reserves_y: U64
    liquidity_gross: U128 = 0
    fee_growth_x: U128 = 0
    fee_growth_y: U128 = 0

    model_config = {"extra": "ignore"}

    def to_bin(self) -> Bin:
        return Bin(
            bin_id=self.bin_id,
            reserves_x=self.reserves_x,
            reserves_y=self.reserves_y,
            liquidity_gross=self.liquidity_gross,
            fee_growth_x=self.fee_growth_x,
            fee_growth_y=self.fee_growth_y,
            pool_addr=normalize_address(self.pool_addr) if self.pool_addr else None,
        )


class PoolSnapshot(BaseModel):
    """Pool state row, including its fee parameters."""

    addr: AccountAddress | None = None
    x_addr: str | None = None
    y_addr: str | None = None
    active_bin_id: int = Field(ge=0)
    bin_step: int = Field(gt=0)
    collection_name: str | None = None
    collection_addr: str | None = None
    reserves_x: U64 = 0
    reserves_y: U64 = 0
    locked: bool = False
    ts: U64 | None = None
    tx_version: U64 | None = None
    static_fee_params: FeeParamsSnapshot

    model_config = {"extra": "ignore"}

    def to_pool(self) -> Pool:
        return Pool(
            active_bin_id=self.active_bin_id,
            bin_step=self.bin_step,
            fee_params=self.static_fee_params.to_fee_params(),
            reserves_x=self.reserves_x,
            reserves_y=self.reserves_y,
            address=normalize_address(self.addr) if self.addr else None,
            x_addr=self.x_addr,
            y_addr=self.y_addr,
            locked=self.locked,
        )


class Pagination(BaseModel):
    """Page metadata attached to list responses."""

    offset: int = Field(ge=0)
    limit: int = Field(ge=0)
    total: int = Field(ge=0)
    has_more: bool


class BinPage(BaseModel):
    """One page of bins for a pool."""

    data: list[BinSnapshot] = Field(default_factory=list)
    pagination: Pagination

    def to_bins(self) -> list[Bin]:
        return [b.to_bin() for b in self.data]


__all__ = [
    "FeeParamsSnapshot",
    "BinSnapshot",
    "PoolSnapshot",
    "Pagination",
    "BinPage",
]
