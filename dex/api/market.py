"""In-memory market hosting the exchange for the HTTP API.

Holds the base currency ledger, every deployed token ledger and the
pool registry. Handlers run on the event loop one at a time, which
gives each pool the serial execution it assumes.
"""

from __future__ import annotations

import structlog

from dex.amm.exchange import Clock
from dex.assets.token import Token
from dex.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from dex.constants import MARKET_DEPLOYER
from dex.models.types import derive_address, normalize_address, short
from dex.pools.registry import PoolRegistry

logger = structlog.get_logger()

# Salts reserved for the market's own deployments
_BASE_SALT = 0
_REGISTRY_SALT = 1


class Market:
    """Base currency, tokens and pools of one running service.

    Args:
        clock: Time source for pool deadline checks (system time if None)
        config: Pool configuration shared by all pools
    """

    def __init__(self, clock: Clock | None = None, config: ExchangeConfig = DEFAULT_EXCHANGE_CONFIG) -> None:
        self.base = Token(derive_address(MARKET_DEPLOYER, _BASE_SALT), name="Ether", symbol="ETH")
        self.registry = PoolRegistry(
            base=self.base,
            address=derive_address(MARKET_DEPLOYER, _REGISTRY_SALT),
            clock=clock,
            config=config,
        )
        self._tokens: dict[str, Token] = {}
        self._nonce = _REGISTRY_SALT + 1

    def deploy_token(self, name: str, symbol: str, owner: str, initial_supply: int) -> Token:
        """Create a token ledger and mint ``initial_supply`` to ``owner``."""
        token = Token(derive_address(MARKET_DEPLOYER, self._nonce), name=name, symbol=symbol)
        self._nonce += 1
        token.mint(owner, initial_supply)
        self._tokens[token.address] = token
        logger.info("token_deployed", token=short(token.address), symbol=symbol, supply=initial_supply)
        return token

    def asset(self, address: str) -> Token | None:
        """Look up the base currency or a deployed token by address."""
        address_norm = normalize_address(address)
        if address_norm == self.base.address:
            return self.base
        return self._tokens.get(address_norm)

    def tokens(self) -> list[Token]:
        return list(self._tokens.values())


_default_market: Market | None = None


def get_default_market() -> Market:
    """Process-wide market used by the API unless overridden."""
    global _default_market
    if _default_market is None:
        _default_market = Market()
    return _default_market
