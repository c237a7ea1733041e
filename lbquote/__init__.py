"""Liquidity-book AMM quoting kernel - Python Implementation."""

from lbquote.bins import Bin, BinBook, SwapDirection
from lbquote.errors import (
    InsufficientLiquidity,
    InvalidParameterRange,
    LiquidityBookError,
    NonIntegralBaseFactor,
)
from lbquote.fees import StaticFeeParams
from lbquote.math import base_factor_for_fee, id_from_price, price_from_id
from lbquote.swap import Pool, SwapQuote, quote_exact_in, quote_exact_out

__version__ = "0.1.0"
__all__ = [
    "Bin",
    "BinBook",
    "SwapDirection",
    "Pool",
    "StaticFeeParams",
    "SwapQuote",
    "quote_exact_in",
    "quote_exact_out",
    "price_from_id",
    "id_from_price",
    "base_factor_for_fee",
    "LiquidityBookError",
    "InvalidParameterRange",
    "NonIntegralBaseFactor",
    "InsufficientLiquidity",
    "__version__",
]
