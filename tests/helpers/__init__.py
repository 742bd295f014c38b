"""Test helpers module for shared test utilities.

- constants: Accounts, asset addresses, time and amounts
- factories: Clock and token doubles, pool seeding helpers
"""

from tests.helpers.constants import (
    BASE_ADDRESS,
    DEADLINE,
    INITIAL_BALANCE,
    NOW,
    NULL_ADDRESS,
    OTHER_USER,
    OWNER,
    REGISTRY_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    USER,
    WEI,
)
from tests.helpers.factories import (
    FlakyToken,
    FrozenClock,
    approve_pool,
    make_token,
    seed_pool,
    total_held_shares,
)

__all__ = [
    # Constants
    "WEI",
    "OWNER",
    "USER",
    "OTHER_USER",
    "BASE_ADDRESS",
    "TOKEN_A",
    "TOKEN_B",
    "REGISTRY_ADDRESS",
    "NULL_ADDRESS",
    "NOW",
    "DEADLINE",
    "INITIAL_BALANCE",
    # Factories
    "FrozenClock",
    "FlakyToken",
    "make_token",
    "approve_pool",
    "seed_pool",
    "total_held_shares",
]
