"""In-memory ERC-20 style token ledger.

Stands in for the host platform's asset ledgers in tests and in the HTTP
service. Transfers report failure by returning ``False`` rather than
raising, which is what pools have to cope with from real ledgers.
"""

from __future__ import annotations

from collections import defaultdict

import structlog

from dex.models.types import normalize_address, short

logger = structlog.get_logger()


class Token:
    """Fungible token with balances and allowances.

    Args:
        address: Token address
        name: Display name
        symbol: Ticker symbol
        decimals: Number of decimal places of one whole unit
    """

    def __init__(self, address: str, name: str = "Token", symbol: str = "TKN", decimals: int = 18) -> None:
        self._address = normalize_address(address, validate=True)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = defaultdict(int)
        self._allowances: dict[tuple[str, str], int] = defaultdict(int)

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self._address})"

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self, holder: str) -> int:
        return self._balances.get(normalize_address(holder), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def mint(self, recipient: str, amount: int) -> None:
        """Create ``amount`` new units for ``recipient``."""
        if amount < 0:
            raise ValueError(f"Cannot mint a negative amount: {amount}")
        self._balances[normalize_address(recipient)] += amount
        self.total_supply += amount
        logger.debug("token_minted", token=self.symbol, recipient=short(recipient), amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        if amount < 0:
            return False
        self._allowances[(normalize_address(owner), normalize_address(spender))] = amount
        return True

    def transfer(self, owner: str, recipient: str, amount: int) -> bool:
        owner_norm = normalize_address(owner)
        if amount < 0 or self._balances.get(owner_norm, 0) < amount:
            logger.debug(
                "token_transfer_rejected",
                token=self.symbol,
                owner=short(owner_norm),
                amount=amount,
                balance=self._balances.get(owner_norm, 0),
            )
            return False
        self._balances[owner_norm] -= amount
        self._balances[normalize_address(recipient)] += amount
        return True

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        key = (normalize_address(owner), normalize_address(spender))
        if amount < 0 or self._allowances.get(key, 0) < amount:
            logger.debug(
                "token_allowance_exceeded",
                token=self.symbol,
                owner=short(owner),
                spender=short(spender),
                amount=amount,
            )
            return False
        if not self.transfer(owner, recipient, amount):
            return False
        self._allowances[key] -= amount
        return True
