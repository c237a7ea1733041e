"""Fee limits configuration for pool validation."""

from dataclasses import dataclass

from lbquote.constants import BASIS_POINT_MAX, MAX_FEE, MAX_PROTOCOL_SHARE


@dataclass(frozen=True)
class FeeLimits:
    """Protocol ceilings applied when validating fee parameters.

    Attributes:
        max_fee: Highest total fee (base + variable at the volatility ceiling),
            in 1e18 precision units (default: 1e17, i.e. 10%)
        max_protocol_share: Highest protocol share of swap fees in basis
            points (default: 2,500, i.e. 25%)
        max_reduction_factor: Highest reduction factor in basis points
    """

    max_fee: int = MAX_FEE
    max_protocol_share: int = MAX_PROTOCOL_SHARE
    max_reduction_factor: int = BASIS_POINT_MAX


# Default configuration instance
DEFAULT_FEE_LIMITS = FeeLimits()
