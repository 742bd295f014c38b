"""Tests for constant-product pricing functions."""

import pytest

from dex.amm.pricing import (
    quote_additional_shares,
    quote_initial_shares,
    quote_proportional,
    quote_proportional_up,
    quote_swap_output,
    quote_withdrawal,
)
from dex.errors import EmptyReserves, InvalidAmount
from tests.helpers import WEI


class TestQuoteSwapOutput:
    """Tests for the fee-bearing swap formula."""

    def test_small_trade_whole_units(self):
        """1 base into (1000, 2000) yields 1 whole token."""
        assert quote_swap_output(1, 1000, 2000) == 1

    def test_small_trade_wei_precision(self):
        """Same trade at 18 decimals keeps the full fractional output."""
        assert quote_swap_output(1 * WEI, 1000 * WEI, 2000 * WEI) == 1_978041738678708079

    @pytest.mark.parametrize(
        "amount_in,expected",
        [
            (100 * WEI, 180_163785259326660600),
            (1000 * WEI, 994_974874371859296482),
        ],
    )
    def test_token_output_larger_trades(self, amount_in, expected):
        assert quote_swap_output(amount_in, 1000 * WEI, 2000 * WEI) == expected

    @pytest.mark.parametrize(
        "amount_in,expected",
        [
            (2 * WEI, 989020869339354039),
            (100 * WEI, 47_165316817532158170),
            (2000 * WEI, 497_487437185929648241),
        ],
    )
    def test_base_output(self, amount_in, expected):
        """Selling tokens into (token=2000, base=1000)."""
        assert quote_swap_output(amount_in, 2000 * WEI, 1000 * WEI) == expected

    def test_zero_input_returns_zero(self):
        assert quote_swap_output(0, 1000, 2000) == 0

    def test_output_never_reaches_reserve(self):
        """Even an enormous input cannot drain the output reserve."""
        assert quote_swap_output(10**60, 1000 * WEI, 2000 * WEI) < 2000 * WEI

    def test_rounds_down(self):
        # 10 * 99 * 10 / (10 * 100 + 990) = 9900 / 1990 = 4.97...
        assert quote_swap_output(10, 10, 10) == 4

    def test_fee_is_charged(self):
        """Output is strictly below the fee-free constant-product output."""
        fee_free = (10 * WEI * 2000 * WEI) // (1000 * WEI + 10 * WEI)
        assert quote_swap_output(10 * WEI, 1000 * WEI, 2000 * WEI) < fee_free

    def test_custom_fee_multiplier(self):
        """Fee-free multiplier reproduces plain x*y=k."""
        assert quote_swap_output(10, 100, 100, fee_numerator=1, fee_denominator=1) == 9

    def test_empty_reserves_raise(self):
        with pytest.raises(EmptyReserves):
            quote_swap_output(1, 0, 2000)
        with pytest.raises(EmptyReserves):
            quote_swap_output(1, 1000, 0)

    def test_negative_input_raises(self):
        with pytest.raises(InvalidAmount):
            quote_swap_output(-1, 1000, 2000)

    def test_non_int_input_raises(self):
        with pytest.raises(InvalidAmount):
            quote_swap_output(1.5, 1000, 2000)  # type: ignore[arg-type]
        with pytest.raises(InvalidAmount):
            quote_swap_output(True, 1000, 2000)  # type: ignore[arg-type]

    def test_product_never_decreases(self):
        """Applying the quoted output keeps base * token non-decreasing."""
        base, token = 1000 * WEI, 2000 * WEI
        for amount_in in (1, 7, 10**9, 3 * WEI, 777 * WEI, 10**24):
            out = quote_swap_output(amount_in, base, token)
            assert (base + amount_in) * (token - out) >= base * token


class TestQuoteProportional:
    """Tests for ratio-preserving deposit amounts."""

    def test_exact_ratio(self):
        assert quote_proportional(50, 100, 200) == 100
        assert quote_proportional_up(50, 100, 200) == 100

    def test_inexact_ratio_rounds_each_way(self):
        assert quote_proportional(1, 3, 10) == 3
        assert quote_proportional_up(1, 3, 10) == 4

    def test_rounding_up_differs_by_one_at_most(self):
        for amount in (1, 2, 1_000_000_001, 7 * WEI + 3):
            down = quote_proportional(amount, 3 * WEI, 10 * WEI)
            up = quote_proportional_up(amount, 3 * WEI, 10 * WEI)
            assert up - down in (0, 1)

    def test_zero_reserve_raises(self):
        with pytest.raises(EmptyReserves):
            quote_proportional(1, 0, 10)
        with pytest.raises(EmptyReserves):
            quote_proportional_up(1, 10, 0)


class TestQuoteShares:
    """Tests for share minting and withdrawal formulas."""

    def test_initial_shares_match_base_deposit(self):
        assert quote_initial_shares(100 * WEI) == 100 * WEI

    def test_additional_shares_proportional(self):
        assert quote_additional_shares(50 * WEI, 100 * WEI, 100 * WEI) == 50 * WEI

    def test_additional_shares_round_down(self):
        # 1 * 2 / 3 = 0.66...
        assert quote_additional_shares(1, 3, 2) == 0

    def test_additional_shares_need_funded_pool(self):
        with pytest.raises(EmptyReserves):
            quote_additional_shares(1, 0, 0)

    def test_withdrawal(self):
        assert quote_withdrawal(25 * WEI, 100 * WEI, 100 * WEI) == 25 * WEI
        assert quote_withdrawal(25 * WEI, 200 * WEI, 100 * WEI) == 50 * WEI

    def test_withdrawal_of_all_shares_returns_whole_reserve(self):
        assert quote_withdrawal(3, 10, 3) == 10

    def test_withdrawal_rounds_down(self):
        assert quote_withdrawal(1, 10, 3) == 3

    def test_withdrawal_from_empty_pool_raises(self):
        with pytest.raises(EmptyReserves):
            quote_withdrawal(1, 0, 0)
