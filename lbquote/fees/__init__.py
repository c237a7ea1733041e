"""Fee configuration, dynamic fee state and fee math."""

from lbquote.fees.config import DEFAULT_FEE_LIMITS, FeeLimits
from lbquote.fees.model import (
    base_fee,
    base_fee_percent,
    compute_volatility_ref,
    fee_amount,
    protocol_fee_amount,
    total_fee,
    total_fee_for,
    total_fee_percent,
    update_references,
    update_volatility_accumulator,
    variable_fee,
    variable_fee_percent,
)
from lbquote.fees.params import StaticFeeParams
from lbquote.fees.validation import validate_fee_params, validate_liquidity_shape

__all__ = [
    # Configuration
    "FeeLimits",
    "DEFAULT_FEE_LIMITS",
    # Params
    "StaticFeeParams",
    # State machine
    "update_references",
    "update_volatility_accumulator",
    "compute_volatility_ref",
    # Fee math
    "base_fee",
    "variable_fee",
    "total_fee",
    "total_fee_for",
    "base_fee_percent",
    "variable_fee_percent",
    "total_fee_percent",
    "fee_amount",
    "protocol_fee_amount",
    # Validation
    "validate_fee_params",
    "validate_liquidity_shape",
]
