"""Interface of the fungible-asset ledgers a pool moves value through.

The base currency and every traded token are reached through the same
protocol. Pools treat a ``False`` return exactly like a raised failure.
A pool only ever spends what its counterparty approved beforehand, and
restores that approval when it hands a pulled amount back.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Balance ledger for one fungible asset.

    The acting identity is explicit on every mutating call, since there
    is no implicit message sender in-process.
    """

    @property
    def address(self) -> str:
        """Identity of the asset."""
        ...

    def balance_of(self, holder: str) -> int:
        """Current balance of ``holder``."""
        ...

    def allowance(self, owner: str, spender: str) -> int:
        """Amount ``spender`` may still move out of ``owner``'s balance."""
        ...

    def transfer(self, owner: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``owner`` to ``recipient``."""
        ...

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``owner`` to ``recipient`` using ``spender``'s allowance."""
        ...

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Let ``spender`` move up to ``amount`` of ``owner``'s balance."""
        ...
