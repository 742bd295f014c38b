"""Pool registry (factory): one exchange per token.

The registry owns the token -> pool mapping. Entries are created once
and never removed or replaced. Pools keep a reference back to the
registry so token-to-token swaps can locate their sibling pool.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from dex.amm.exchange import Clock, Exchange
from dex.assets.base import AssetLedger
from dex.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from dex.errors import InvalidTokenIdentity, PoolAlreadyExists
from dex.models.types import derive_address, is_null_address, normalize_address, short

logger = structlog.get_logger()


class PoolRegistry:
    """Registry of base/token exchanges, keyed by token address.

    Args:
        base: Ledger of the base currency shared by every pool
        address: The registry's own address (pool addresses derive from it)
        clock: Time source handed to every pool for deadline checks
        config: Pool configuration handed to every pool
    """

    def __init__(
        self,
        base: AssetLedger,
        address: str,
        clock: Clock | None = None,
        config: ExchangeConfig = DEFAULT_EXCHANGE_CONFIG,
    ) -> None:
        self._base = base
        self._address = normalize_address(address, validate=True)
        self._clock = clock
        self._config = config
        self._pools: dict[str, Exchange] = {}

    @property
    def address(self) -> str:
        return self._address

    @property
    def base(self) -> AssetLedger:
        return self._base

    def create_pool(self, token: AssetLedger | None) -> Exchange:
        """Create the pool for ``token``.

        Args:
            token: Ledger of the token to pair with the base currency

        Returns:
            The new, empty Exchange

        Raises:
            InvalidTokenIdentity: If token is missing, has the null address,
                or is the base currency itself
            PoolAlreadyExists: If the token already has a pool
        """
        if token is None or is_null_address(token.address):
            raise InvalidTokenIdentity("invalid token address")

        token_norm = normalize_address(token.address)
        if token_norm == normalize_address(self._base.address):
            raise InvalidTokenIdentity("invalid token address")
        if token_norm in self._pools:
            raise PoolAlreadyExists("exchange already exists")

        pool = Exchange(
            token=token,
            base=self._base,
            factory=self,
            address=derive_address(self._address, token_norm),
            clock=self._clock,
            config=self._config,
        )
        self._pools[token_norm] = pool

        logger.info("pool_created", token=short(token_norm), pool=short(pool.address))
        return pool

    def get_pool(self, token_address: str | None) -> Exchange | None:
        """Get the pool for a token (any case), or None if there is none."""
        if not isinstance(token_address, str):
            return None
        return self._pools.get(normalize_address(token_address))

    def tokens(self) -> list[str]:
        """Addresses of every token that has a pool, in creation order."""
        return list(self._pools)

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    def __contains__(self, token_address: object) -> bool:
        return isinstance(token_address, str) and normalize_address(token_address) in self._pools

    def __iter__(self) -> Iterator[Exchange]:
        return iter(self._pools.values())

    def __len__(self) -> int:
        return len(self._pools)
