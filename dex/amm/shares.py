"""Pool-ownership shares.

Shares are an ERC-20 style asset in their own right: the pool mints and
burns them, and holders may move them around independently of the pool.
Transfers and allowances come from ``Token``; only the pool-side supply
changes live here.
"""

from __future__ import annotations

from dex.assets.token import Token
from dex.errors import InsufficientShareBalance, InvalidAmount
from dex.models.types import normalize_address


class ShareLedger(Token):
    """Share balances of one pool.

    The sum of all balances always equals ``total_supply``.
    """

    def __repr__(self) -> str:
        return f"ShareLedger({self.symbol}, {self.address}, supply={self.total_supply})"

    def holders(self) -> dict[str, int]:
        """Non-zero balances keyed by holder."""
        return {holder: balance for holder, balance in self._balances.items() if balance}

    def mint(self, recipient: str, amount: int) -> None:
        if amount < 0:
            raise InvalidAmount(f"Cannot mint a negative share amount: {amount}")
        super().mint(recipient, amount)

    def burn(self, holder: str, amount: int) -> None:
        """Destroy ``amount`` of ``holder``'s shares.

        Raises:
            InsufficientShareBalance: burn amount exceeds balance
        """
        holder_norm = normalize_address(holder)
        if amount < 0:
            raise InvalidAmount(f"Cannot burn a negative share amount: {amount}")
        if self._balances.get(holder_norm, 0) < amount:
            raise InsufficientShareBalance("burn amount exceeds balance")
        self._balances[holder_norm] -= amount
        self.total_supply -= amount
