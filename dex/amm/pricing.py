"""Constant-product pricing for base/token pools.

Pure functions over a reserve snapshot; nothing here mutates state.

Swap formula (x * y = k with a 1% fee on the input):

    amount_out = (in * 99 * res_out) / (res_in * 100 + in * 99)

Every multiplication happens before any division. All divisions round
down except ``quote_proportional_up``, which rounds the dependent
deposit of ``add_liquidity`` up so the pool never loses value to
rounding.
"""

from __future__ import annotations

from dex.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from dex.errors import EmptyReserves, InvalidAmount
from dex.safe_int import S


def validate_amount(name: str, value: int) -> None:
    """Raise InvalidAmount unless ``value`` is a non-negative int."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmount(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidAmount(f"{name} cannot be negative: {value}")


def quote_proportional(input_amount: int, input_reserve: int, output_reserve: int) -> int:
    """Amount of the other asset matching ``input_amount`` at the current ratio.

    Formula: floor(input_amount * output_reserve / input_reserve)

    Raises:
        EmptyReserves: If either reserve is zero
    """
    validate_amount("input_amount", input_amount)
    if input_reserve <= 0 or output_reserve <= 0:
        raise EmptyReserves("invalid reserves")
    return (S(input_amount) * S(output_reserve) // S(input_reserve)).value


def quote_proportional_up(input_amount: int, input_reserve: int, output_reserve: int) -> int:
    """Same ratio as ``quote_proportional`` but rounded up.

    Used for the amount pulled from a depositor when it is the dependent
    variable: any remainder goes against the caller, not the pool.
    """
    validate_amount("input_amount", input_amount)
    if input_reserve <= 0 or output_reserve <= 0:
        raise EmptyReserves("invalid reserves")
    return (S(input_amount) * S(output_reserve)).ceiling_div(S(input_reserve)).value


def quote_swap_output(
    input_amount: int,
    input_reserve: int,
    output_reserve: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """Calculate swap output using the constant product formula.

    Formula: amount_out = (in * fee * res_out) / (res_in * denom + in * fee)

    Args:
        input_amount: Amount sold into the pool
        input_reserve: Pool reserve of the asset sold
        output_reserve: Pool reserve of the asset bought
        fee_numerator: Fee multiplier numerator (99 for a 1% fee)
        fee_denominator: Fee multiplier denominator (100)

    Returns:
        Output amount, always strictly less than output_reserve

    Raises:
        InvalidAmount: If input_amount is negative
        EmptyReserves: If either reserve is zero
    """
    validate_amount("input_amount", input_amount)
    if input_reserve <= 0 or output_reserve <= 0:
        raise EmptyReserves("invalid reserves")

    if input_amount == 0:
        return 0

    input_with_fee = S(input_amount) * S(fee_numerator)
    numerator = input_with_fee * S(output_reserve)
    denominator = S(input_reserve) * S(fee_denominator) + input_with_fee

    return (numerator // denominator).value


def quote_initial_shares(base_deposit: int) -> int:
    """Shares minted by the first deposit into an empty pool (1:1 with base)."""
    validate_amount("base_deposit", base_deposit)
    return base_deposit


def quote_additional_shares(base_deposit: int, base_reserve: int, total_shares: int) -> int:
    """Shares minted by a deposit into a funded pool.

    Formula: floor(base_deposit * total_shares / base_reserve)
    """
    validate_amount("base_deposit", base_deposit)
    if base_reserve <= 0 or total_shares <= 0:
        raise EmptyReserves("invalid reserves")
    return (S(base_deposit) * S(total_shares) // S(base_reserve)).value


def quote_withdrawal(burn_shares: int, reserve: int, total_shares: int) -> int:
    """Share of one reserve paid out for burning ``burn_shares``.

    Formula: floor(burn_shares * reserve / total_shares)
    """
    validate_amount("burn_shares", burn_shares)
    if total_shares <= 0:
        raise EmptyReserves("invalid reserves")
    return (S(burn_shares) * S(reserve) // S(total_shares)).value
