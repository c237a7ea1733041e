"""Tests for exact-out quoting."""

import pytest

from lbquote.constants import U64_MAX
from lbquote.errors import InsufficientLiquidity, InvalidParameterRange
from lbquote.swap import quote_exact_in, quote_exact_out
from tests.helpers import NOW, ORIGIN, make_bin, make_fee_params, make_pool


class TestSingleBin:
    """Tests for exact-out within the active bin."""

    def test_exact_out_at_price_one(self, pool, single_bin):
        """99 out at 0.1% needs 99 plus a 1 unit fee."""
        quote = quote_exact_out(pool, single_bin, 99, True, NOW)

        assert quote.amount_out == 99
        assert quote.amount_in == 100
        assert quote.fees_in == 1
        assert quote.bins_crossed == 1

    def test_consistent_with_exact_in(self, pool, single_bin):
        """Feeding the exact-out input back into exact-in yields at least the target."""
        out_quote = quote_exact_out(pool, single_bin, 99, True, NOW)
        in_quote = quote_exact_in(pool, single_bin, out_quote.amount_in, True, NOW)
        assert in_quote.amount_out >= 99

    def test_protocol_share(self):
        """Protocol fees accumulate from the per-bin fees."""
        pool = make_pool(fee_params=make_fee_params(protocol_share=2_500))
        bins = [make_bin(ORIGIN, 10_000_000, 10_000_000)]

        quote = quote_exact_out(pool, bins, 1_000_000, False, NOW)

        assert quote.amount_in == 1_001_000
        assert quote.fees_in == 1_000
        assert quote.protocol_fees == 250


class TestMultiBin:
    """Tests for exact-out crossing bins."""

    def test_walks_down_for_x(self, pool, y_ladder):
        """150 Y out takes all of the origin bin and 50 from the bin below."""
        quote = quote_exact_out(pool, y_ladder, 150, True, NOW)

        assert quote.amount_in == 153
        assert quote.fees_in == 2
        assert [f.bin_id for f in quote.fills] == [ORIGIN, ORIGIN - 1]
        assert [f.amount_out for f in quote.fills] == [100, 50]
        assert [f.amount_in for f in quote.fills] == [101, 52]

    def test_walks_up_for_y(self, pool, x_ladder):
        """150 X out takes all of the origin bin and 50 from the bin above."""
        quote = quote_exact_out(pool, x_ladder, 150, False, NOW)

        assert quote.amount_in == 153
        assert quote.fees_in == 2
        assert [f.bin_id for f in quote.fills] == [ORIGIN, ORIGIN + 1]

    def test_drains_whole_book(self, pool, y_ladder):
        """Asking for exactly all the liquidity succeeds."""
        quote = quote_exact_out(pool, y_ladder, 300, True, NOW)

        assert quote.amount_in == 305
        assert quote.fees_in == 3
        assert quote.bins_crossed == 3
        assert quote.updated_fee_params.current_volatility_accum == 2

    def test_fees_accumulate_across_bins(self, pool, y_ladder):
        """fees_in is the sum of every bin's fee, not the last one."""
        quote = quote_exact_out(pool, y_ladder, 300, True, NOW)
        assert quote.fees_in == sum(f.fee for f in quote.fills)
        assert sum(f.amount_in for f in quote.fills) == quote.amount_in


class TestExactOutErrors:
    """Tests for rejected exact-out requests."""

    def test_insufficient_liquidity(self, pool):
        """250 out against 200 of liquidity fails."""
        bins = [make_bin(ORIGIN - 1, 0, 100), make_bin(ORIGIN, 0, 100)]
        with pytest.raises(InsufficientLiquidity):
            quote_exact_out(pool, bins, 250, True, NOW)

    def test_empty_book(self, pool):
        """No bins at all fails on the first lookup."""
        with pytest.raises(InsufficientLiquidity):
            quote_exact_out(pool, [], 1, True, NOW)

    def test_zero_amount(self, pool, y_ladder):
        """A zero amount quotes nothing."""
        quote = quote_exact_out(pool, y_ladder, 0, True, NOW)
        assert (quote.amount_in, quote.amount_out, quote.bins_crossed) == (0, 0, 0)

    def test_amount_out_of_range(self, pool, single_bin):
        """Amounts past u64 are rejected up front."""
        with pytest.raises(InvalidParameterRange) as exc_info:
            quote_exact_out(pool, single_bin, U64_MAX + 1, True, NOW)
        assert exc_info.value.field == "amount_out"

    def test_required_input_overflows_u64(self, pool):
        """An input that would not fit in a u64 is reported against amount_out."""
        bins = [make_bin(ORIGIN, 0, U64_MAX)]
        with pytest.raises(InvalidParameterRange) as exc_info:
            quote_exact_out(pool, bins, U64_MAX, True, NOW)
        assert exc_info.value.field == "amount_out"
        assert exc_info.value.value == U64_MAX


class TestWalkDetails:
    """Tests for exact-out walks off the unit price and with variable fees."""

    def test_skips_bin_without_output_reserve(self, pool):
        """A bin holding only X is passed over when paying out Y."""
        bins = [
            make_bin(ORIGIN - 2, 0, 100),
            make_bin(ORIGIN - 1, 100, 0),
            make_bin(ORIGIN, 0, 100),
        ]
        quote = quote_exact_out(pool, bins, 150, True, NOW)

        assert [f.bin_id for f in quote.fills] == [ORIGIN, ORIGIN - 2]
        # 101 at the origin, then ceil(50 * 1.0025^2) = 51 plus a 1 unit fee
        assert quote.amount_in == 153
        assert quote.fees_in == 2
        assert quote.updated_fee_params.current_volatility_accum == 2

    def test_wrong_side_liquidity(self, pool, y_ladder):
        """A book holding only Y cannot pay out X."""
        with pytest.raises(InsufficientLiquidity) as exc_info:
            quote_exact_out(pool, y_ladder, 10, False, NOW)
        assert exc_info.value.direction == "up"

    def test_non_unit_price(self):
        """400 X out at price 1.0025^4 needs ceil(404.015...) = 405 Y plus fee."""
        pool = make_pool(active_bin_id=ORIGIN + 4)
        bins = [make_bin(ORIGIN + 4, 1_000, 0)]

        quote = quote_exact_out(pool, bins, 400, False, NOW)

        assert quote.fills[0].bin_id == ORIGIN + 4
        assert quote.fees_in == 1
        assert quote.amount_in == 406

    def test_variable_fee_uses_distance_of_visited_bin(self):
        """The accumulator is updated before the bin's fee is computed."""
        params = make_fee_params(
            variable_fee_control=1_440_000_000_000,
            max_volatility_accum=100,
            index_ref=ORIGIN + 100,
            last_swap_ts=NOW - 10,
        )
        pool = make_pool(fee_params=params)
        bins = [make_bin(ORIGIN, 10_000, 10_000)]

        quote = quote_exact_out(pool, bins, 1_000, True, NOW)

        # 9e16 variable + 1e15 base = 9.1% of 1000
        assert quote.fees_in == 91
        assert quote.amount_in == 1_091
        assert quote.updated_fee_params.current_volatility_accum == 100


class TestDeterminism:
    """Identical inputs give identical quotes."""

    def test_repeated_quote_is_identical(self, y_ladder):
        """Two calls with the same snapshot return equal quotes."""
        pool = make_pool(fee_params=make_fee_params(variable_fee_control=40_000, protocol_share=1_000))
        first = quote_exact_out(pool, y_ladder, 250, True, NOW)
        second = quote_exact_out(pool, y_ladder, 250, True, NOW)
        assert first == second
