"""Quote result types."""

from __future__ import annotations

from dataclasses import dataclass, field

from lbquote.fees.params import StaticFeeParams


@dataclass(frozen=True)
class BinFill:
    """Amounts exchanged against a single bin during a walk."""

    bin_id: int
    amount_in: int  # Input consumed, fee included
    amount_out: int
    fee: int


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a swap across one or more bins.

    Attributes:
        amount_in: Total input, fees included
        amount_out: Total output
        fees_in: Total fees charged on the input side
        protocol_fees: Protocol's share of fees_in
        updated_fee_params: Fee state after the walk; persist it only if the
            swap is executed
        fills: Per-bin breakdown in walk order
    """

    amount_in: int
    amount_out: int
    fees_in: int
    protocol_fees: int
    updated_fee_params: StaticFeeParams
    fills: tuple[BinFill, ...] = field(default_factory=tuple)

    @property
    def bins_crossed(self) -> int:
        """Number of bins the walk consumed from."""
        return len(self.fills)

    @classmethod
    def empty(cls, fee_params: StaticFeeParams) -> SwapQuote:
        """Quote for a zero amount: nothing exchanged, references still advanced."""
        return cls(
            amount_in=0,
            amount_out=0,
            fees_in=0,
            protocol_fees=0,
            updated_fee_params=fee_params,
        )


__all__ = ["BinFill", "SwapQuote"]
