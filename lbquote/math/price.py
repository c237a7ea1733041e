"""Price ladder math for liquidity-book pools.

Bins sit on a geometric ladder:

    price(bin_id) = (1 + bin_step / 10_000) ** (bin_id - BIN_ID_OFFSET)

so bin ``BIN_ID_OFFSET`` trades at exactly 1 and each neighbouring bin is
``bin_step`` basis points away. Prices are expressed as Y per X in the
smallest on-chain units of each coin.

All functions are pure. Prices are computed with ``Decimal`` inside a local
78-digit context so results do not depend on the caller's decimal context.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, ROUND_HALF_EVEN, Decimal

from lbquote.constants import (
    BASE_FEE_SCALE,
    BASIS_POINT_MAX,
    BIN_ID_OFFSET,
    MAX_BIN_ID,
    MIN_BIN_ID,
    PRECISION,
)
from lbquote.errors import NonIntegralBaseFactor, require

# 78 digits of precision with an unbounded exponent: a 100% bin step at the
# ladder edge is 2^(2^23), far past the default Emax.
PRICE_CONTEXT = decimal.Context(
    prec=78,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
)

# Log ratios this close to an integer are treated as sitting on the lattice.
# Exact inputs carry 78-digit rounding error only; floats carry ~1e-16.
LATTICE_TOLERANCE = Decimal("1e-60")
FLOAT_LATTICE_TOLERANCE = Decimal("1e-9")

_ONE = Decimal(1)


def validate_bin_step(bin_step: int) -> None:
    """Raise InvalidParameterRange unless 0 < bin_step <= BASIS_POINT_MAX."""
    require(
        0 < bin_step <= BASIS_POINT_MAX,
        "bin_step",
        bin_step,
        f"must be in (0, {BASIS_POINT_MAX}]",
    )


def validate_bin_id(bin_id: int, field: str = "bin_id") -> None:
    """Raise InvalidParameterRange unless bin_id lies on the ladder."""
    require(
        MIN_BIN_ID <= bin_id <= MAX_BIN_ID,
        field,
        bin_id,
        f"must be in [{MIN_BIN_ID}, {MAX_BIN_ID}]",
    )


def _step_base(bin_step: int) -> Decimal:
    return _ONE + Decimal(bin_step) / Decimal(BASIS_POINT_MAX)


def price_from_id(bin_id: int, bin_step: int) -> Decimal:
    """Price of a bin (Y per X) on the geometric ladder.

    Args:
        bin_id: Bin index in [MIN_BIN_ID, MAX_BIN_ID]
        bin_step: Bin step in basis points

    Returns:
        The bin price as a Decimal, monotonically increasing in bin_id

    Raises:
        InvalidParameterRange: If bin_id or bin_step is out of range
    """
    validate_bin_id(bin_id)
    validate_bin_step(bin_step)

    with decimal.localcontext(PRICE_CONTEXT):
        return +(_step_base(bin_step) ** (bin_id - BIN_ID_OFFSET))


def id_from_price(price: Decimal | int | float | str, bin_step: int) -> int:
    """Bin id whose ladder price is at or just inside ``price``.

    The log ratio ``ln(price) / ln(1 + bin_step / 10_000)`` is truncated
    toward zero. Ratios within LATTICE_TOLERANCE of an integer snap to it, so
    prices produced by price_from_id map back to their own bin. Float prices
    use the looser FLOAT_LATTICE_TOLERANCE since they only hold ~17 digits.

    Raises:
        InvalidParameterRange: If price <= 0, bin_step is out of range, or the
            resulting id falls off the ladder
    """
    validate_bin_step(bin_step)

    with decimal.localcontext(PRICE_CONTEXT):
        price_dec = Decimal(str(price)) if isinstance(price, float) else Decimal(price)
        require(price_dec > 0, "price", price, "must be positive")

        ratio = price_dec.ln() / _step_base(bin_step).ln()
        tolerance = FLOAT_LATTICE_TOLERANCE if isinstance(price, float) else LATTICE_TOLERANCE
        nearest = ratio.to_integral_value(rounding=ROUND_HALF_EVEN)
        if abs(ratio - nearest) <= tolerance:
            exponent = int(nearest)
        else:
            exponent = int(ratio.to_integral_value(rounding=ROUND_DOWN))

    bin_id = exponent + BIN_ID_OFFSET
    validate_bin_id(bin_id)
    return bin_id


def base_factor_for_fee(fee_percent: Decimal | int | float | str, bin_step: int) -> int:
    """Base factor that yields exactly ``fee_percent`` as the base fee.

    Solves ``base_factor * bin_step * 1e10 = fee_percent / 100 * 1e18``.

    Args:
        fee_percent: Desired base fee in percent (0.1 means 0.1%)
        bin_step: Bin step in basis points

    Returns:
        The integer base factor

    Raises:
        InvalidParameterRange: If bin_step is out of range or fee is negative
        NonIntegralBaseFactor: If no integer base factor gives that fee exactly
    """
    validate_bin_step(bin_step)

    with decimal.localcontext(PRICE_CONTEXT):
        fee_dec = Decimal(str(fee_percent)) if isinstance(fee_percent, float) else Decimal(fee_percent)
        require(fee_dec >= 0, "fee_percent", fee_percent, "must be non-negative")

        computed = (fee_dec / 100) * PRECISION / (Decimal(bin_step) * BASE_FEE_SCALE)
        if computed != computed.to_integral_value(rounding=ROUND_DOWN):
            raise NonIntegralBaseFactor(
                f"Fee {fee_percent}% is not representable with bin_step {bin_step} "
                f"(base factor would be {computed})",
                field="fee_percent",
                value=fee_percent,
            )
    return int(computed)


def from_price_per_octas(decimals_x: int, decimals_y: int, price: Decimal | int | str) -> Decimal:
    """Convert a raw ladder price (smallest units) into a human price."""
    with decimal.localcontext(PRICE_CONTEXT):
        return Decimal(price) * Decimal(10) ** (decimals_x - decimals_y)


def price_per_octas(decimals_y: int, decimals_x: int, price: Decimal | int | str) -> Decimal:
    """Convert a human price into a raw ladder price (smallest units)."""
    with decimal.localcontext(PRICE_CONTEXT):
        return Decimal(price) * Decimal(10) ** (decimals_y - decimals_x)


__all__ = [
    "PRICE_CONTEXT",
    "LATTICE_TOLERANCE",
    "FLOAT_LATTICE_TOLERANCE",
    "validate_bin_step",
    "validate_bin_id",
    "price_from_id",
    "id_from_price",
    "base_factor_for_fee",
    "from_price_per_octas",
    "price_per_octas",
]
