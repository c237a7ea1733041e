"""Tests for the price ladder."""

import decimal
from decimal import Decimal

import pytest

from lbquote.constants import BIN_ID_OFFSET, MAX_BIN_ID, MIN_BIN_ID
from lbquote.errors import InvalidParameterRange, NonIntegralBaseFactor
from lbquote.math.price import (
    base_factor_for_fee,
    from_price_per_octas,
    id_from_price,
    price_from_id,
    price_per_octas,
)

ORIGIN = BIN_ID_OFFSET


class TestPriceFromId:
    """Tests for price_from_id."""

    def test_origin_is_one(self):
        """The offset bin trades at exactly 1 for any bin step."""
        for bin_step in (1, 25, 100, 10_000):
            assert price_from_id(ORIGIN, bin_step) == 1

    def test_one_bin_up(self):
        """One bin above the origin is one bin step above 1."""
        assert price_from_id(ORIGIN + 1, 25) == Decimal("1.0025")
        assert price_from_id(ORIGIN + 2, 100) == Decimal("1.0201")

    def test_one_bin_down_is_reciprocal(self):
        """One bin below the origin is the reciprocal of one bin above."""
        down = price_from_id(ORIGIN - 1, 25)
        assert abs(down * Decimal("1.0025") - 1) < Decimal("1e-70")

    def test_full_bin_step_doubles(self):
        """A 10_000 bps step doubles the price per bin."""
        assert price_from_id(ORIGIN + 10, 10_000) == 1024

    def test_monotonically_increasing(self):
        """Higher bin ids have strictly higher prices."""
        prices = [price_from_id(ORIGIN + i, 25) for i in range(-50, 51)]
        assert all(a < b for a, b in zip(prices, prices[1:]))

    def test_ladder_edges(self):
        """The extreme ids stay finite and positive."""
        assert price_from_id(MIN_BIN_ID, 10_000) > 0
        assert price_from_id(MAX_BIN_ID, 10_000) > 1

    def test_independent_of_caller_context(self):
        """A low-precision caller context does not change the result."""
        expected = price_from_id(ORIGIN + 7, 25)
        with decimal.localcontext(decimal.Context(prec=5)):
            assert price_from_id(ORIGIN + 7, 25) == expected

    @pytest.mark.parametrize("bin_id", [MIN_BIN_ID - 1, MAX_BIN_ID + 1])
    def test_bin_id_out_of_range(self, bin_id):
        """Ids off the ladder are rejected."""
        with pytest.raises(InvalidParameterRange) as exc_info:
            price_from_id(bin_id, 25)
        assert exc_info.value.field == "bin_id"

    @pytest.mark.parametrize("bin_step", [0, -1, 10_001])
    def test_bin_step_out_of_range(self, bin_step):
        """Bin steps outside (0, 10_000] are rejected."""
        with pytest.raises(InvalidParameterRange) as exc_info:
            price_from_id(ORIGIN, bin_step)
        assert exc_info.value.field == "bin_step"


class TestIdFromPrice:
    """Tests for id_from_price."""

    @pytest.mark.parametrize("bin_step", [1, 10, 25, 100, 10_000])
    @pytest.mark.parametrize("offset", [-100_000, -1_000, -1, 0, 1, 777, 100_000])
    def test_round_trip(self, bin_step, offset):
        """id_from_price inverts price_from_id on the lattice."""
        bin_id = ORIGIN + offset
        assert id_from_price(price_from_id(bin_id, bin_step), bin_step) == bin_id

    def test_round_trip_ladder_edges(self):
        """Round trip holds at the ends of the ladder."""
        for bin_id in (MIN_BIN_ID, MAX_BIN_ID):
            assert id_from_price(price_from_id(bin_id, 100), 100) == bin_id

    def test_price_one(self):
        """Price 1 maps to the origin, whatever its input type."""
        assert id_from_price(1, 25) == ORIGIN
        assert id_from_price(1.0, 25) == ORIGIN
        assert id_from_price("1", 25) == ORIGIN

    def test_between_bins_above_truncates_down(self):
        """Prices between bins above 1 truncate toward the origin."""
        # ln(1.006) / ln(1.0025) ~= 2.39
        assert id_from_price(Decimal("1.006"), 25) == ORIGIN + 2
        # ln(1.001) / ln(1.0025) ~= 0.40
        assert id_from_price(Decimal("1.001"), 25) == ORIGIN

    def test_between_bins_below_truncates_toward_zero(self):
        """Prices between bins below 1 also truncate toward the origin."""
        # ln(0.999) / ln(1.0025) ~= -0.40
        assert id_from_price(Decimal("0.999"), 25) == ORIGIN
        # ln(0.994) / ln(1.0025) ~= -2.41
        assert id_from_price(Decimal("0.994"), 25) == ORIGIN - 2

    def test_float_price_on_lattice(self):
        """Float prices computed on the lattice snap back to their bin."""
        assert id_from_price(1.0025**5, 25) == ORIGIN + 5
        assert id_from_price(1.0025**-5, 25) == ORIGIN - 5

    def test_just_inside_lattice_above_truncates(self):
        """A price a hair below an upper lattice price stays in the bin below it."""
        price = price_from_id(ORIGIN + 5, 25) * (1 - Decimal("1e-12"))
        assert id_from_price(price, 25) == ORIGIN + 4

    def test_just_inside_lattice_below_truncates(self):
        """A price a hair above a lower lattice price truncates toward the origin."""
        price = price_from_id(ORIGIN - 5, 25) * (1 + Decimal("1e-12"))
        assert id_from_price(price, 25) == ORIGIN - 4

    def test_exact_lattice_prices_do_not_move(self):
        """A hair past a lattice price, away from the origin, keeps that bin."""
        assert id_from_price(price_from_id(ORIGIN + 5, 25) * (1 + Decimal("1e-12")), 25) == ORIGIN + 5
        assert id_from_price(price_from_id(ORIGIN - 5, 25) * (1 - Decimal("1e-12")), 25) == ORIGIN - 5

    @pytest.mark.parametrize("price", [0, -1, Decimal("-0.5")])
    def test_non_positive_price(self, price):
        """Zero and negative prices are rejected."""
        with pytest.raises(InvalidParameterRange) as exc_info:
            id_from_price(price, 25)
        assert exc_info.value.field == "price"

    def test_zero_bin_step(self):
        """A zero bin step is rejected."""
        with pytest.raises(InvalidParameterRange):
            id_from_price(1, 0)

    def test_price_off_ladder(self):
        """Prices beyond the last bin are rejected."""
        beyond_last = price_from_id(MAX_BIN_ID, 1) * Decimal("1.0002")
        with pytest.raises(InvalidParameterRange):
            id_from_price(beyond_last, 1)


class TestBaseFactorForFee:
    """Tests for base_factor_for_fee."""

    def test_ten_bps_at_step_25(self):
        """0.1% at bin step 25 is base factor 4000."""
        assert base_factor_for_fee(0.1, 25) == 4000

    def test_other_exact_combinations(self):
        """Exactly representable fees return integers."""
        assert base_factor_for_fee(Decimal("0.25"), 25) == 10_000
        assert base_factor_for_fee(1, 1) == 1_000_000
        assert base_factor_for_fee("0.2", 100) == 2_000
        assert base_factor_for_fee(0, 25) == 0

    def test_result_is_int(self):
        """The base factor is a plain int."""
        assert type(base_factor_for_fee(0.1, 25)) is int

    def test_non_integral_raises(self):
        """0.1% at bin step 30 would need base factor 3333.33..."""
        with pytest.raises(NonIntegralBaseFactor) as exc_info:
            base_factor_for_fee(0.1, 30)
        assert exc_info.value.field == "fee_percent"

    def test_zero_bin_step(self):
        """A zero bin step is a range error, not a division error."""
        with pytest.raises(InvalidParameterRange):
            base_factor_for_fee(0.1, 0)

    def test_negative_fee(self):
        """Negative fees are rejected."""
        with pytest.raises(InvalidParameterRange):
            base_factor_for_fee(-0.1, 25)


class TestDecimalsScaling:
    """Tests for price_per_octas / from_price_per_octas."""

    def test_from_price_per_octas(self):
        """Raw prices scale by 10^(decimals_x - decimals_y)."""
        assert from_price_per_octas(8, 6, Decimal("1.5")) == Decimal("150")

    def test_price_per_octas(self):
        """Human prices scale by 10^(decimals_y - decimals_x)."""
        assert price_per_octas(6, 8, Decimal("150")) == Decimal("1.5")

    def test_inverse(self):
        """The two conversions undo each other."""
        raw = Decimal("0.000123")
        assert price_per_octas(6, 8, from_price_per_octas(8, 6, raw)) == raw
