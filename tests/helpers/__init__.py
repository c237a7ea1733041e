"""Test helpers module for shared test utilities.

- constants: ladder origin, default bin step and timestamps
- factories: bin, fee params and pool factory functions
"""

from tests.helpers.constants import BASE_FACTOR_10_BPS, BIN_STEP, NOW, ORIGIN, POOL_ADDR
from tests.helpers.factories import make_bin, make_fee_params, make_pool

__all__ = [
    # Constants
    "ORIGIN",
    "BIN_STEP",
    "BASE_FACTOR_10_BPS",
    "NOW",
    "POOL_ADDR",
    # Factories
    "make_bin",
    "make_fee_params",
    "make_pool",
]
