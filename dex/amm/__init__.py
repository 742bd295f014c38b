"""Constant-product AMM: reserves, shares, pricing and the exchange."""

from dex.amm.exchange import Exchange, SwapPlan, system_clock
from dex.amm.pricing import (
    quote_additional_shares,
    quote_initial_shares,
    quote_proportional,
    quote_proportional_up,
    quote_swap_output,
    quote_withdrawal,
)
from dex.amm.reserves import ReserveLedger
from dex.amm.settlement import Settlement
from dex.amm.shares import ShareLedger

__all__ = [
    # Exchange
    "Exchange",
    "SwapPlan",
    "system_clock",
    # State
    "ReserveLedger",
    "ShareLedger",
    "Settlement",
    # Pricing
    "quote_proportional",
    "quote_proportional_up",
    "quote_swap_output",
    "quote_initial_shares",
    "quote_additional_shares",
    "quote_withdrawal",
]
