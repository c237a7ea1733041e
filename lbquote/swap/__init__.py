"""Swap quoting over liquidity-book bins."""

from lbquote.swap.engine import (
    direction_for,
    quote_exact_in,
    quote_exact_out,
    to_input_amount,
    to_output_amount,
)
from lbquote.swap.pool import Pool
from lbquote.swap.result import BinFill, SwapQuote

__all__ = [
    "Pool",
    "BinFill",
    "SwapQuote",
    "direction_for",
    "to_input_amount",
    "to_output_amount",
    "quote_exact_in",
    "quote_exact_out",
]
