"""Price ladder math."""

from lbquote.math.price import (
    FLOAT_LATTICE_TOLERANCE,
    LATTICE_TOLERANCE,
    PRICE_CONTEXT,
    base_factor_for_fee,
    from_price_per_octas,
    id_from_price,
    price_from_id,
    price_per_octas,
    validate_bin_id,
    validate_bin_step,
)

__all__ = [
    "PRICE_CONTEXT",
    "LATTICE_TOLERANCE",
    "FLOAT_LATTICE_TOLERANCE",
    "price_from_id",
    "id_from_price",
    "base_factor_for_fee",
    "from_price_per_octas",
    "price_per_octas",
    "validate_bin_id",
    "validate_bin_step",
]
