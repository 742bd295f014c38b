"""Pydantic models and shared types for the exchange API."""

from dex.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
    CreatePoolRequest,
    CreateTokenRequest,
    ErrorResponse,
    MintRequest,
    PoolState,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
    TokenInfo,
    TokenToTokenSwapRequest,
)
from dex.models.types import Address, Uint256

__all__ = [
    # Types
    "Address",
    "Uint256",
    # Assets
    "CreateTokenRequest",
    "TokenInfo",
    "ApproveRequest",
    "MintRequest",
    "BalanceResponse",
    # Pools
    "CreatePoolRequest",
    "PoolState",
    "QuoteResponse",
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "SwapRequest",
    "TokenToTokenSwapRequest",
    "SwapResponse",
    "ErrorResponse",
]
