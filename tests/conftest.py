"""Pytest configuration and fixtures."""

import pytest

from dex.amm.exchange import Exchange
from dex.assets.token import Token
from dex.pools.registry import PoolRegistry
from tests.helpers import (
    BASE_ADDRESS,
    NOW,
    OTHER_USER,
    OWNER,
    REGISTRY_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    USER,
    FlakyToken,
    FrozenClock,
    make_token,
)


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen one day before the default deadline."""
    return FrozenClock(NOW)


@pytest.fixture
def base() -> Token:
    """Base currency ledger with every test account funded."""
    return make_token(BASE_ADDRESS, OWNER, USER, OTHER_USER, symbol="ETH")


@pytest.fixture
def token() -> Token:
    """Traded token owned by OWNER."""
    return make_token(TOKEN_A, OWNER, symbol="AAA")


@pytest.fixture
def token_b() -> Token:
    """Second traded token owned by USER."""
    return make_token(TOKEN_B, USER, symbol="BBB")


@pytest.fixture
def registry(base: Token, clock: FrozenClock) -> PoolRegistry:
    return PoolRegistry(base=base, address=REGISTRY_ADDRESS, clock=clock)


@pytest.fixture
def pool(registry: PoolRegistry, token: Token) -> Exchange:
    """Empty pool for TOKEN_A."""
    return registry.create_pool(token)


@pytest.fixture
def pool_b(registry: PoolRegistry, token_b: Token) -> Exchange:
    """Empty pool for TOKEN_B."""
    return registry.create_pool(token_b)


@pytest.fixture
def flaky_base() -> FlakyToken:
    return make_token(BASE_ADDRESS, OWNER, USER, symbol="ETH", cls=FlakyToken)


@pytest.fixture
def flaky_token() -> FlakyToken:
    return make_token(TOKEN_A, OWNER, USER, symbol="AAA", cls=FlakyToken)
