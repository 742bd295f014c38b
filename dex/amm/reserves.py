"""Reserve ledger: the accounting state of one pool."""

from __future__ import annotations

from dataclasses import dataclass

from dex.safe_int import S


@dataclass(frozen=True)
class ReserveLedger:
    """Immutable snapshot of a pool's reserves and share supply.

    A pool owns exactly one current snapshot and swaps it for a new one
    when an operation commits, so no reader ever sees a half-applied
    update. A pool is either empty (all three zero) or fully funded (all
    three positive).
    """

    base_reserve: int = 0
    token_reserve: int = 0
    total_shares: int = 0

    def __post_init__(self) -> None:
        for name in ("base_reserve", "token_reserve", "total_shares"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative int, got {value!r}")
        zeros = (self.base_reserve == 0, self.token_reserve == 0, self.total_shares == 0)
        if any(zeros) and not all(zeros):
            raise ValueError(
                "Reserves must be all zero or all positive: "
                f"base={self.base_reserve} token={self.token_reserve} shares={self.total_shares}"
            )

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0

    @property
    def product(self) -> int:
        """Constant-product invariant k = base * token."""
        return self.base_reserve * self.token_reserve

    def reserves_for(self, input_is_base: bool) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if input_is_base:
            return self.base_reserve, self.token_reserve
        return self.token_reserve, self.base_reserve

    def deposit(self, base_amount: int, token_amount: int, shares: int) -> ReserveLedger:
        """Snapshot after adding liquidity."""
        return ReserveLedger(
            base_reserve=(S(self.base_reserve) + base_amount).value,
            token_reserve=(S(self.token_reserve) + token_amount).value,
            total_shares=(S(self.total_shares) + shares).value,
        )

    def withdraw(self, base_amount: int, token_amount: int, shares: int) -> ReserveLedger:
        """Snapshot after removing liquidity.

        Raises:
            Underflow: If any amount exceeds what the pool holds
        """
        return ReserveLedger(
            base_reserve=(S(self.base_reserve) - base_amount).value,
            token_reserve=(S(self.token_reserve) - token_amount).value,
            total_shares=(S(self.total_shares) - shares).value,
        )

    def swap(self, input_is_base: bool, amount_in: int, amount_out: int) -> ReserveLedger:
        """Snapshot after a swap; share supply is untouched.

        Raises:
            Underflow: If amount_out exceeds the output reserve
        """
        if input_is_base:
            base = (S(self.base_reserve) + amount_in).value
            token = (S(self.token_reserve) - amount_out).value
        else:
            token = (S(self.token_reserve) + amount_in).value
            base = (S(self.base_reserve) - amount_out).value
        return ReserveLedger(base_reserve=base, token_reserve=token, total_shares=self.total_shares)
