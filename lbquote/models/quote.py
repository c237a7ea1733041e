"""Request and response models for the HTTP quoting API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from lbquote.swap.result import SwapQuote

from .snapshot import BinSnapshot, FeeParamsSnapshot, PoolSnapshot
from .types import U64


class QuoteRequest(BaseModel):
    """A swap quote request carrying its own pool snapshot."""

    pool: PoolSnapshot
    bins: list[BinSnapshot] = Field(default_factory=list)
    amount: U64 = Field(description="amount_in for exact-in, amount_out for exact-out")
    swap_for_x: bool = Field(
        alias="swapForX",
        description="True swaps X for Y, False swaps Y for X",
    )
    now: int | None = Field(
        default=None,
        ge=0,
        description="Unix timestamp of the swap. Defaults to server time.",
    )

    model_config = {"populate_by_name": True}


class BinFillResponse(BaseModel):
    bin_id: int = Field(alias="binId")
    amount_in: str = Field(alias="amountIn")
    amount_out: str = Field(alias="amountOut")
    fee: str

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Quote result with amounts as decimal strings."""

    amount_in: str = Field(alias="amountIn")
    amount_out: str = Field(alias="amountOut")
    fees_in: str = Field(alias="feesIn")
    protocol_fees: str = Field(alias="protocolFees")
    bins_crossed: int = Field(alias="binsCrossed")
    fills: list[BinFillResponse] = Field(default_factory=list)
    fee_params: FeeParamsSnapshot = Field(alias="feeParams")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: SwapQuote) -> QuoteResponse:
        return cls(
            amount_in=str(quote.amount_in),
            amount_out=str(quote.amount_out),
            fees_in=str(quote.fees_in),
            protocol_fees=str(quote.protocol_fees),
            bins_crossed=quote.bins_crossed,
            fills=[
                BinFillResponse(
                    bin_id=fill.bin_id,
                    amount_in=str(fill.amount_in),
                    amount_out=str(fill.amount_out),
                    fee=str(fill.fee),
                )
                for fill in quote.fills
            ],
            fee_params=FeeParamsSnapshot.from_fee_params(quote.updated_fee_params),
        )


class ErrorResponse(BaseModel):
    error: str
    detail: str
    field: str | None = None


__all__ = ["QuoteRequest", "QuoteResponse", "BinFillResponse", "ErrorResponse"]
