"""All-or-nothing settlement of the asset transfers behind one operation.

A pool operation may move value on several ledgers (base in, token out;
or three legs for a routed token-to-token swap). Ledgers commit one
transfer at a time, so ``Settlement`` journals every completed transfer
and, if a later step fails, undoes the completed ones in reverse order.

Usage pattern:
    with Settlement("swap") as settlement:
        settlement.pull(base, spender=pool, owner=trader, recipient=pool, amount=x)
        settlement.push(token, owner=pool, recipient=trader, amount=y)
        pool.commit(plan)  # any exception here also undoes the transfers
"""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType

import structlog

from dex.assets.base import AssetLedger
from dex.errors import TransferFailed
from dex.models.types import short

logger = structlog.get_logger()


@dataclass(frozen=True)
class TransferRecord:
    """One completed ledger transfer.

    Pulls also carry the spender and the allowance it held beforehand.
    """

    asset: AssetLedger
    owner: str
    recipient: str
    amount: int
    spender: str | None = None
    allowance: int = 0


class Settlement:
    """Journal of transfers that are rolled back together on failure.

    Compensation moves each completed amount back from its recipient to
    its owner and resets any allowance a pull consumed, the way the host
    platform reverts a failed transaction.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self._completed: list[TransferRecord] = []

    def __enter__(self) -> Settlement:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and self._completed:
            self.compensate()

    @property
    def completed(self) -> list[TransferRecord]:
        return list(self._completed)

    def pull(self, asset: AssetLedger, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move ``amount`` from ``owner`` using the allowance granted to ``spender``.

        Raises:
            TransferFailed: If the ledger rejects the transfer
        """
        if amount == 0:
            return
        allowance = asset.allowance(owner, spender)
        if not asset.transfer_from(spender, owner, recipient, amount):
            raise TransferFailed(
                f"{self.operation}: transfer of {amount} from {owner} to {recipient} rejected by {asset.address}"
            )
        self._completed.append(TransferRecord(asset, owner, recipient, amount, spender, allowance))

    def push(self, asset: AssetLedger, owner: str, recipient: str, amount: int) -> None:
        """Move ``amount`` out of ``owner``'s own balance.

        Raises:
            TransferFailed: If the ledger rejects the transfer
        """
        if amount == 0:
            return
        if not asset.transfer(owner, recipient, amount):
            raise TransferFailed(
                f"{self.operation}: transfer of {amount} from {owner} to {recipient} rejected by {asset.address}"
            )
        self._completed.append(TransferRecord(asset, owner, recipient, amount))

    def compensate(self) -> None:
        """Undo every completed transfer, newest first.

        Raises:
            TransferFailed: If a ledger refuses to give an amount back
        """
        while self._completed:
            record = self._completed.pop()
            if not record.asset.transfer(record.recipient, record.owner, record.amount):
                logger.error(
                    "compensation_failed",
                    operation=self.operation,
                    asset=short(record.asset.address),
                    owner=short(record.owner),
                    recipient=short(record.recipient),
                    amount=record.amount,
                )
                raise TransferFailed(
                    f"{self.operation}: could not return {record.amount} to {record.owner}"
                )
            if record.spender is not None and not record.asset.approve(
                record.owner, record.spender, record.allowance
            ):
                logger.error(
                    "allowance_restore_failed",
                    operation=self.operation,
                    asset=short(record.asset.address),
                    owner=short(record.owner),
                    spender=short(record.spender),
                    allowance=record.allowance,
                )
                raise TransferFailed(
                    f"{self.operation}: could not restore allowance of {record.spender} on {record.owner}"
                )
            logger.debug(
                "transfer_compensated",
                operation=self.operation,
                asset=short(record.asset.address),
                amount=record.amount,
            )
