"""Base/token liquidity pool (exchange).

One ``Exchange`` exists per token, created by the ``PoolRegistry``. It
holds the pool's reserve snapshot and share ledger, prices swaps with
the constant-product formula and moves value through the asset ledgers.

Every mutating operation runs in two phases:
1. Plan: validate inputs and compute all amounts and the next reserve
   snapshot from the current (immutable) snapshot.
2. Settle: perform the transfers inside a ``Settlement``, then commit
   the snapshot and mint/burn shares. Any failure undoes the completed
   transfers and leaves the snapshot untouched.

Operations on one pool are assumed to be serialized by the host.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from dex.amm.pricing import (
    quote_additional_shares,
    quote_initial_shares,
    quote_proportional_up,
    quote_swap_output,
    quote_withdrawal,
    validate_amount,
)
from dex.amm.reserves import ReserveLedger
from dex.amm.settlement import Settlement
from dex.amm.shares import ShareLedger
from dex.assets.base import AssetLedger
from dex.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from dex.errors import (
    BelowMinimumLiquidity,
    EmptyReserves,
    Expired,
    InsufficientOutputAmount,
    InsufficientShareBalance,
    InsufficientTokenAmount,
    InvalidAmount,
    NoSuchPool,
)
from dex.models.types import normalize_address, short

if TYPE_CHECKING:
    from dex.pools.registry import PoolRegistry

logger = structlog.get_logger()

# Returns the current time as integer unix seconds
Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


@dataclass(frozen=True)
class SwapPlan:
    """Fully computed swap against one pool, not yet applied."""

    pool: Exchange
    input_is_base: bool
    amount_in: int
    amount_out: int
    before: ReserveLedger
    after: ReserveLedger


class Exchange:
    """Constant-product pool pairing the base currency with one token.

    Args:
        token: Ledger of the paired token
        base: Ledger of the base currency
        factory: Registry that created this pool (used for routed swaps)
        address: This pool's own address on the asset ledgers
        clock: Source of the current time for deadline checks
        config: Fee and bootstrap parameters
    """

    def __init__(
        self,
        token: AssetLedger,
        base: AssetLedger,
        factory: PoolRegistry,
        address: str,
        clock: Clock | None = None,
        config: ExchangeConfig = DEFAULT_EXCHANGE_CONFIG,
    ) -> None:
        self._token = token
        self._base = base
        self._factory = factory
        self._address = normalize_address(address, validate=True)
        self._clock = clock or system_clock
        self._config = config
        self._reserves = ReserveLedger()
        self._shares = ShareLedger(
            address=self._address,
            name=config.share_name,
            symbol=config.share_symbol,
            decimals=config.share_decimals,
        )

    def __repr__(self) -> str:
        return (
            f"Exchange(token={short(self._token.address)}, base={self._reserves.base_reserve}, "
            f"tokens={self._reserves.token_reserve}, shares={self._reserves.total_shares})"
        )

    # --- Read-only accessors ---

    @property
    def address(self) -> str:
        return self._address

    @property
    def token(self) -> AssetLedger:
        return self._token

    @property
    def base(self) -> AssetLedger:
        return self._base

    @property
    def factory(self) -> PoolRegistry:
        return self._factory

    @property
    def config(self) -> ExchangeConfig:
        return self._config

    @property
    def shares(self) -> ShareLedger:
        """The pool-ownership share token."""
        return self._shares

    @property
    def reserves(self) -> ReserveLedger:
        """Current reserve snapshot."""
        return self._reserves

    @property
    def base_reserve(self) -> int:
        return self._reserves.base_reserve

    @property
    def token_reserve(self) -> int:
        return self._reserves.token_reserve

    @property
    def total_shares(self) -> int:
        return self._reserves.total_shares

    def share_balance(self, holder: str) -> int:
        return self._shares.balance_of(holder)

    # --- Price discovery ---

    def quote_token_output(self, input_base_amount: int) -> int:
        """Tokens paid out for selling ``input_base_amount`` base currency."""
        base_reserve, token_reserve = self._reserves.reserves_for(input_is_base=True)
        return quote_swap_output(
            input_base_amount,
            base_reserve,
            token_reserve,
            self._config.fee_numerator,
            self._config.fee_denominator,
        )

    def quote_base_output(self, input_token_amount: int) -> int:
        """Base currency paid out for selling ``input_token_amount`` tokens."""
        token_reserve, base_reserve = self._reserves.reserves_for(input_is_base=False)
        return quote_swap_output(
            input_token_amount,
            token_reserve,
            base_reserve,
            self._config.fee_numerator,
            self._config.fee_denominator,
        )

    # --- Liquidity ---

    def add_liquidity(self, sender: str, base_deposit: int, max_token_deposit: int, deadline: int) -> int:
        """Deposit base currency and tokens in exchange for shares.

        An empty pool takes exactly ``max_token_deposit`` tokens and sets the
        initial price. A funded pool takes the proportional token amount,
        rounded up, and fails if that exceeds ``max_token_deposit``. A deposit
        too small to earn a single share is rejected rather than donated.

        Args:
            sender: Depositor; must have approved this pool on both ledgers
            base_deposit: Base currency to deposit
            max_token_deposit: Token ceiling (exact amount for an empty pool)
            deadline: Unix time after which the deposit is rejected

        Returns:
            Shares minted to ``sender``

        Raises:
            Expired, InvalidAmount, BelowMinimumLiquidity,
            InsufficientTokenAmount, InsufficientOutputAmount, TransferFailed
        """
        self._ensure_not_expired(deadline)
        validate_amount("base_deposit", base_deposit)
        validate_amount("max_token_deposit", max_token_deposit)
        sender = normalize_address(sender)

        before = self._reserves
        if before.is_empty:
            if base_deposit <= self._config.minimum_liquidity:
                raise BelowMinimumLiquidity(
                    f"need more than {self._config.minimum_liquidity} wei to create pool"
                )
            if max_token_deposit == 0:
                raise BelowMinimumLiquidity("token deposit must be positive to create pool")
            token_deposit = max_token_deposit
            minted = quote_initial_shares(base_deposit)
        else:
            if base_deposit == 0:
                raise InvalidAmount("invalid amount")
            token_deposit = quote_proportional_up(base_deposit, before.base_reserve, before.token_reserve)
            if token_deposit > max_token_deposit:
                raise InsufficientTokenAmount("insufficient token amount")
            minted = quote_additional_shares(base_deposit, before.base_reserve, before.total_shares)
            if minted == 0:
                raise InsufficientOutputAmount("deposit too small to mint shares")

        after = before.deposit(base_deposit, token_deposit, minted)

        with Settlement("add_liquidity") as settlement:
            settlement.pull(self._base, self._address, sender, self._address, base_deposit)
            settlement.pull(self._token, self._address, sender, self._address, token_deposit)
            self._check_fresh(before)
            self._shares.mint(sender, minted)
            self._commit(before, after)

        logger.info(
            "liquidity_added",
            pool=short(self._address),
            provider=short(sender),
            base_amount=base_deposit,
            token_amount=token_deposit,
            shares_minted=minted,
            total_shares=after.total_shares,
        )
        return minted

    def remove_liquidity(
        self,
        sender: str,
        burn_shares: int,
        min_base_out: int,
        min_token_out: int,
        deadline: int,
    ) -> tuple[int, int]:
        """Burn shares for a proportional cut of both reserves.

        Returns:
            (base_out, token_out) paid to ``sender``

        Raises:
            Expired, InvalidAmount, InsufficientShareBalance,
            InsufficientOutputAmount, TransferFailed
        """
        self._ensure_not_expired(deadline)
        validate_amount("burn_shares", burn_shares)
        validate_amount("min_base_out", min_base_out)
        validate_amount("min_token_out", min_token_out)
        sender = normalize_address(sender)

        if burn_shares == 0:
            raise InvalidAmount("invalid amount")
        if self._shares.balance_of(sender) < burn_shares:
            raise InsufficientShareBalance("burn amount exceeds balance")

        before = self._reserves
        base_out = quote_withdrawal(burn_shares, before.base_reserve, before.total_shares)
        token_out = quote_withdrawal(burn_shares, before.token_reserve, before.total_shares)
        if base_out < min_base_out or token_out < min_token_out:
            raise InsufficientOutputAmount("insufficient output amount")

        after = before.withdraw(base_out, token_out, burn_shares)

        with Settlement("remove_liquidity") as settlement:
            settlement.push(self._base, self._address, sender, base_out)
            settlement.push(self._token, self._address, sender, token_out)
            self._check_fresh(before)
            self._shares.burn(sender, burn_shares)
            self._commit(before, after)

        logger.info(
            "liquidity_removed",
            pool=short(self._address),
            provider=short(sender),
            base_amount=base_out,
            token_amount=token_out,
            shares_burned=burn_shares,
            total_shares=after.total_shares,
        )
        return base_out, token_out

    # --- Swaps ---

    def swap_base_for_token(
        self,
        sender: str,
        input_base_amount: int,
        min_token_out: int,
        deadline: int,
        recipient: str | None = None,
    ) -> int:
        """Sell base currency for tokens delivered to ``recipient``.

        ``recipient`` defaults to ``sender``.

        Raises:
            Expired, InvalidAmount, EmptyReserves, InsufficientOutputAmount,
            TransferFailed
        """
        self._ensure_not_expired(deadline)
        sender = normalize_address(sender)
        recipient = normalize_address(recipient) if recipient else sender

        plan = self.plan_swap(input_is_base=True, amount_in=input_base_amount, min_amount_out=min_token_out)

        with Settlement("swap_base_for_token") as settlement:
            settlement.pull(self._base, self._address, sender, self._address, plan.amount_in)
            settlement.push(self._token, self._address, recipient, plan.amount_out)
            self._commit(plan.before, plan.after)

        logger.info(
            "token_purchase",
            pool=short(self._address),
            buyer=short(sender),
            recipient=short(recipient),
            base_sold=plan.amount_in,
            tokens_bought=plan.amount_out,
        )
        return plan.amount_out

    def swap_token_for_base(
        self,
        sender: str,
        input_token_amount: int,
        min_base_out: int,
        deadline: int,
        recipient: str | None = None,
    ) -> int:
        """Sell tokens for base currency delivered to ``recipient``.

        Raises:
            Expired, InvalidAmount, EmptyReserves, InsufficientOutputAmount,
            TransferFailed
        """
        self._ensure_not_expired(deadline)
        sender = normalize_address(sender)
        recipient = normalize_address(recipient) if recipient else sender

        plan = self.plan_swap(input_is_base=False, amount_in=input_token_amount, min_amount_out=min_base_out)

        with Settlement("swap_token_for_base") as settlement:
            settlement.pull(self._token, self._address, sender, self._address, plan.amount_in)
            settlement.push(self._base, self._address, recipient, plan.amount_out)
            self._commit(plan.before, plan.after)

        logger.info(
            "base_purchase",
            pool=short(self._address),
            buyer=short(sender),
            recipient=short(recipient),
            tokens_sold=plan.amount_in,
            base_bought=plan.amount_out,
        )
        return plan.amount_out

    def swap_token_for_token(
        self,
        sender: str,
        input_amount: int,
        min_output_amount: int,
        other_token: str,
        deadline: int,
        recipient: str | None = None,
    ) -> int:
        """Sell this pool's token for another registered token.

        Routes token -> base through this pool and base -> other token
        through the other token's pool. The intermediate base currency
        moves pool to pool and never reaches the caller. Both legs are
        planned against the current snapshots before anything moves, so
        either both apply or neither does.

        Args:
            sender: Seller; must have approved this pool on the token ledger
            input_amount: Tokens of this pool to sell
            min_output_amount: Floor on the other token received
            other_token: Address of the token to buy
            deadline: Unix time after which the swap is rejected
            recipient: Receiver of the other token (defaults to sender)

        Returns:
            Amount of the other token delivered

        Raises:
            Expired, NoSuchPool, InvalidAmount, EmptyReserves,
            InsufficientOutputAmount, TransferFailed
        """
        self._ensure_not_expired(deadline)
        sender = normalize_address(sender)
        recipient = normalize_address(recipient) if recipient else sender

        other = self._factory.get_pool(other_token)
        if other is None or other is self:
            raise NoSuchPool(f"no pool for token {other_token}")

        # Intermediate floor is zero: the caller's bound applies to the final output only
        first = self.plan_swap(input_is_base=False, amount_in=input_amount, min_amount_out=0)
        second = other.plan_swap(input_is_base=True, amount_in=first.amount_out, min_amount_out=min_output_amount)

        with Settlement("swap_token_for_token") as settlement:
            settlement.pull(self._token, self._address, sender, self._address, first.amount_in)
            settlement.push(self._base, self._address, other.address, first.amount_out)
            settlement.push(other.token, other.address, recipient, second.amount_out)
            self._check_fresh(first.before)
            other._check_fresh(second.before)
            self._commit(first.before, first.after)
            other._commit(second.before, second.after)

        logger.info(
            "token_to_token_purchase",
            pool=short(self._address),
            other_pool=short(other.address),
            buyer=short(sender),
            recipient=short(recipient),
            tokens_sold=first.amount_in,
            base_routed=first.amount_out,
            tokens_bought=second.amount_out,
        )
        return second.amount_out

    def plan_swap(self, input_is_base: bool, amount_in: int, min_amount_out: int) -> SwapPlan:
        """Price a swap against the current snapshot without applying it.

        Raises:
            InvalidAmount: If an amount is negative
            EmptyReserves: If the pool holds no liquidity
            InsufficientOutputAmount: If the output is below ``min_amount_out``
        """
        validate_amount("amount_in", amount_in)
        validate_amount("min_amount_out", min_amount_out)

        before = self._reserves
        if before.is_empty:
            raise EmptyReserves("invalid reserves")

        reserve_in, reserve_out = before.reserves_for(input_is_base)
        amount_out = quote_swap_output(
            amount_in,
            reserve_in,
            reserve_out,
            self._config.fee_numerator,
            self._config.fee_denominator,
        )
        if amount_out < min_amount_out:
            raise InsufficientOutputAmount("insufficient output amount")

        logger.debug(
            "swap_planned",
            pool=short(self._address),
            input_is_base=input_is_base,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapPlan(
            pool=self,
            input_is_base=input_is_base,
            amount_in=amount_in,
            amount_out=amount_out,
            before=before,
            after=before.swap(input_is_base, amount_in, amount_out),
        )

    # --- Internals ---

    def _ensure_not_expired(self, deadline: int) -> None:
        now = self._clock()
        if now > deadline:
            raise Expired(f"deadline {deadline} passed at {now}")

    def _check_fresh(self, before: ReserveLedger) -> None:
        if self._reserves is not before:
            raise RuntimeError(f"Reserves of pool {self._address} changed while an operation was in flight")

    def _commit(self, before: ReserveLedger, after: ReserveLedger) -> None:
        self._check_fresh(before)
        self._reserves = after
