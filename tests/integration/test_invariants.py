"""Pool invariants checked over longer operation sequences."""

import random

import pytest

from dex.errors import ExchangeError
from tests.helpers import (
    DEADLINE,
    INITIAL_BALANCE,
    OTHER_USER,
    OWNER,
    USER,
    WEI,
    approve_pool,
    seed_pool,
    total_held_shares,
)

ACCOUNTS = (OWNER, USER, OTHER_USER)


@pytest.fixture
def market(pool, pool_b, base, token, token_b):
    """Two seeded pools; every account holds and has approved every asset."""
    token.mint(USER, INITIAL_BALANCE)
    token.mint(OTHER_USER, INITIAL_BALANCE)
    token_b.mint(OWNER, INITIAL_BALANCE)
    token_b.mint(OTHER_USER, INITIAL_BALANCE)
    seed_pool(pool, OWNER, 1000 * WEI, 2000 * WEI)
    seed_pool(pool_b, USER, 1000 * WEI, 1000 * WEI)
    for account in ACCOUNTS:
        approve_pool(pool, account, INITIAL_BALANCE, INITIAL_BALANCE)
        approve_pool(pool_b, account, INITIAL_BALANCE, INITIAL_BALANCE)
    return pool, pool_b


def assert_consistent(pool) -> None:
    assert pool.base.balance_of(pool.address) == pool.base_reserve
    assert pool.token.balance_of(pool.address) == pool.token_reserve
    assert total_held_shares(pool) == pool.total_shares
    assert pool.reserves.is_empty or min(pool.base_reserve, pool.token_reserve, pool.total_shares) > 0


def random_operation(rng: random.Random, pool_a, pool_b) -> None:
    pool = rng.choice((pool_a, pool_b))
    other = pool_b if pool is pool_a else pool_a
    account = rng.choice(ACCOUNTS)
    amount = rng.randint(1, 50 * WEI)
    kind = rng.randrange(5)
    if kind == 0:
        pool.add_liquidity(account, amount, INITIAL_BALANCE, DEADLINE)
    elif kind == 1:
        held = pool.share_balance(account)
        if held:
            pool.remove_liquidity(account, rng.randint(1, held), 0, 0, DEADLINE)
    elif kind == 2:
        pool.swap_base_for_token(account, amount, 0, DEADLINE)
    elif kind == 3:
        pool.swap_token_for_base(account, amount, 0, DEADLINE)
    else:
        pool.swap_token_for_token(account, amount, 0, other.token.address, DEADLINE)


class TestInvariantsOverSequences:
    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_ledgers_and_shares_stay_consistent(self, market, seed):
        pool_a, pool_b = market
        rng = random.Random(seed)

        for _ in range(200):
            try:
                random_operation(rng, pool_a, pool_b)
            except ExchangeError:
                pass
            assert_consistent(pool_a)
            assert_consistent(pool_b)

    def test_swaps_never_decrease_product(self, market):
        pool_a, pool_b = market
        rng = random.Random(3)
        products = {pool_a.address: pool_a.reserves.product, pool_b.address: pool_b.reserves.product}

        for _ in range(100):
            pool = rng.choice((pool_a, pool_b))
            other = pool_b if pool is pool_a else pool_a
            amount = rng.randint(0, 20 * WEI)
            rng.choice(
                (
                    lambda: pool.swap_base_for_token(USER, amount, 0, DEADLINE),
                    lambda: pool.swap_token_for_base(USER, amount, 0, DEADLINE),
                    lambda: pool.swap_token_for_token(USER, amount, 0, other.token.address, DEADLINE),
                )
            )()
            for p in (pool_a, pool_b):
                assert p.reserves.product >= products[p.address]
                products[p.address] = p.reserves.product

    def test_deposit_then_withdraw_never_profits(self, market):
        pool_a, _ = market
        rng = random.Random(11)

        for _ in range(50):
            base_before = pool_a.base.balance_of(OTHER_USER)
            token_before = pool_a.token.balance_of(OTHER_USER)
            minted = pool_a.add_liquidity(OTHER_USER, rng.randint(1, 10 * WEI), INITIAL_BALANCE, DEADLINE)
            if minted:
                pool_a.remove_liquidity(OTHER_USER, minted, 0, 0, DEADLINE)

            assert pool_a.base.balance_of(OTHER_USER) <= base_before
            assert pool_a.token.balance_of(OTHER_USER) <= token_before

    def test_last_withdrawal_empties_pool(self, market):
        pool_a, _ = market
        pool_a.swap_base_for_token(USER, 10 * WEI, 0, DEADLINE)
        pool_a.add_liquidity(OTHER_USER, 5 * WEI, INITIAL_BALANCE, DEADLINE)

        for account in ACCOUNTS:
            held = pool_a.share_balance(account)
            if held:
                pool_a.remove_liquidity(account, held, 0, 0, DEADLINE)

        assert pool_a.reserves.is_empty
        assert pool_a.base.balance_of(pool_a.address) == 0
        assert pool_a.token.balance_of(pool_a.address) == 0
