"""Tests for the in-memory token ledger."""

import pytest

from dex.assets import AssetLedger, Token
from tests.helpers import OTHER_USER, OWNER, TOKEN_A, USER


@pytest.fixture
def token() -> Token:
    token = Token(TOKEN_A, name="Token A", symbol="AAA")
    token.mint(OWNER, 1_000)
    return token


class TestToken:
    def test_satisfies_asset_ledger(self, token):
        assert isinstance(token, AssetLedger)

    def test_metadata(self, token):
        assert (token.name, token.symbol, token.decimals) == ("Token A", "AAA", 18)
        assert token.address == TOKEN_A

    def test_invalid_address_rejected(self):
        with pytest.raises(ValueError):
            Token("0x1234")

    def test_mint(self, token):
        token.mint(USER, 5)
        assert token.balance_of(USER) == 5
        assert token.total_supply == 1_005

    def test_negative_mint_rejected(self, token):
        with pytest.raises(ValueError):
            token.mint(USER, -1)

    def test_transfer(self, token):
        assert token.transfer(OWNER, USER, 400)
        assert token.balance_of(OWNER) == 600
        assert token.balance_of(USER) == 400
        assert token.total_supply == 1_000

    def test_transfer_over_balance_returns_false(self, token):
        assert not token.transfer(OWNER, USER, 1_001)
        assert token.balance_of(OWNER) == 1_000
        assert token.balance_of(USER) == 0

    def test_transfer_from_spends_allowance(self, token):
        token.approve(OWNER, OTHER_USER, 300)

        assert token.transfer_from(OTHER_USER, OWNER, USER, 200)
        assert token.allowance(OWNER, OTHER_USER) == 100
        assert token.balance_of(USER) == 200

    def test_transfer_from_without_allowance_returns_false(self, token):
        assert not token.transfer_from(OTHER_USER, OWNER, USER, 1)
        assert token.balance_of(OWNER) == 1_000

    def test_transfer_from_over_balance_keeps_allowance(self, token):
        token.approve(OWNER, OTHER_USER, 5_000)
        assert not token.transfer_from(OTHER_USER, OWNER, USER, 2_000)
        assert token.allowance(OWNER, OTHER_USER) == 5_000

    def test_approve_overwrites(self, token):
        token.approve(OWNER, USER, 10)
        token.approve(OWNER, USER, 3)
        assert token.allowance(OWNER, USER) == 3

    def test_negative_approve_refused(self, token):
        assert not token.approve(OWNER, USER, -1)
        assert token.allowance(OWNER, USER) == 0
