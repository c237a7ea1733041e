"""Pytest configuration and fixtures."""

import pytest

from lbquote.bins.book import Bin, BinBook
from lbquote.swap.pool import Pool
from tests.helpers import ORIGIN, make_bin, make_pool


@pytest.fixture
def pool() -> Pool:
    """Pool at the ladder origin, bin step 25, 0.1% base fee, no variable fee."""
    return make_pool()


@pytest.fixture
def single_bin() -> list[Bin]:
    """One bin at the origin holding 1000 X and 1000 Y."""
    return [make_bin(ORIGIN, 1000, 1000)]


@pytest.fixture
def y_ladder() -> BinBook:
    """Y liquidity at and below the origin (walked by X -> Y swaps).

    The origin bin holds only Y, as an active bin does after X was sold into it.
    """
    return BinBook(
        [
            make_bin(ORIGIN - 2, 0, 100),
            make_bin(ORIGIN - 1, 0, 100),
            make_bin(ORIGIN, 0, 100),
        ]
    )


@pytest.fixture
def x_ladder() -> BinBook:
    """X liquidity at and above the origin (walked by Y -> X swaps)."""
    return BinBook(
        [
            make_bin(ORIGIN, 100, 0),
            make_bin(ORIGIN + 1, 100, 0),
            make_bin(ORIGIN + 2, 100, 0),
        ]
    )
