"""Exchange constants.

Centralizes the fixed fee, the bootstrap dust threshold and share token
metadata. The fee is not governable.
"""

from dex.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a well-known address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# 10**18 smallest units per whole unit of the base currency and of tokens
WEI = 10**18

# Swap fee of 1%: the effective input multiplier is 99/100
FEE_NUMERATOR = 99
FEE_DENOMINATOR = 100

# An empty pool must be seeded with strictly more base currency than this
MINIMUM_LIQUIDITY = 1_000_000_000

# Pool-ownership share token metadata (ERC-20 style)
SHARE_NAME = "Uniswap-V1"
SHARE_SYMBOL = "UNI-V1"
SHARE_DECIMALS = 18

# Address the in-memory market deploys its registry and tokens from
MARKET_DEPLOYER = _validate_address("MARKET_DEPLOYER", "0x00000000000000000000000000000000000d1e70")
