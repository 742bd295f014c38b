"""Shared type definitions for exchange models and identities.

Addresses identify everything in the exchange: holders, tokens, pools and
the registry itself. Amounts cross the HTTP boundary as uint256 decimal
strings.
"""

from typing import Annotated, Any

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak
from pydantic import BeforeValidator, Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

NULL_ADDRESS = "0x" + "0" * 40


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"Uint256 cannot be negative: {value}")
        if value > UINT256_MAX:
            raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return value


# Ethereum-style address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"

Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an address to lowercase with 0x prefix.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a well-formed address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def is_null_address(address: str | None) -> bool:
    """True for None, the empty string and the all-zero address."""
    if not address:
        return True
    return normalize_address(address) == NULL_ADDRESS


def derive_address(deployer: str, salt: str | int) -> str:
    """Derive a deterministic child address, CREATE2-style.

    The deployer and salt are ABI-encoded and hashed with keccak256; the
    last 20 bytes of the digest form the new address. Used for pool
    addresses (salt = token address) and in-memory tokens (salt = nonce).

    Args:
        deployer: Address of the creating entity
        salt: Token address or integer nonce

    Returns:
        Lowercase 0x-prefixed address
    """
    deployer_norm = normalize_address(deployer, validate=True)
    if isinstance(salt, int):
        payload = encode(["address", "uint256"], [deployer_norm, salt])
    else:
        payload = encode(["address", "address"], [deployer_norm, normalize_address(salt, validate=True)])
    return "0x" + keccak(payload)[-20:].hex()


def short(address: str) -> str:
    """Last 8 hex chars of an address, for log lines."""
    return address[-8:]
