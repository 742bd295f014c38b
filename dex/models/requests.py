"""Pydantic models for the exchange HTTP API.

Amounts are uint256 decimal strings on the wire and plain ints inside
the exchange. Field names are camelCase on the wire.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from dex.models.types import Address, Uint256

if TYPE_CHECKING:
    from dex.amm.exchange import Exchange


class ApiModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    model_config = {"populate_by_name": True}


# --- Assets ---


class CreateTokenRequest(ApiModel):
    """Deploy an in-memory token and mint its initial supply."""

    name: str = Field(default="Token", max_length=64)
    symbol: str = Field(default="TKN", max_length=16)
    owner: Address = Field(description="Receiver of the initial supply.")
    initial_supply: Uint256 = Field(alias="initialSupply")


class TokenInfo(ApiModel):
    address: Address
    name: str
    symbol: str
    decimals: int
    total_supply: Uint256 = Field(alias="totalSupply")


class ApproveRequest(ApiModel):
    owner: Address
    spender: Address
    amount: Uint256


class MintRequest(ApiModel):
    recipient: Address
    amount: Uint256


class BalanceResponse(ApiModel):
    asset: Address
    holder: Address
    balance: Uint256


# --- Pools ---


class CreatePoolRequest(ApiModel):
    token: str = Field(description="Token address; the null address is rejected.")


class PoolState(ApiModel):
    """Reserves and share supply of one pool."""

    address: Address
    token: Address
    base_reserve: Uint256 = Field(alias="baseReserve")
    token_reserve: Uint256 = Field(alias="tokenReserve")
    total_shares: Uint256 = Field(alias="totalShares")

    @classmethod
    def from_exchange(cls, pool: Exchange) -> PoolState:
        return cls(
            address=pool.address,
            token=pool.token.address,
            base_reserve=str(pool.base_reserve),
            token_reserve=str(pool.token_reserve),
            total_shares=str(pool.total_shares),
        )


class QuoteResponse(ApiModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")


class AddLiquidityRequest(ApiModel):
    sender: Address
    base_deposit: Uint256 = Field(alias="baseDeposit")
    max_token_deposit: Uint256 = Field(alias="maxTokenDeposit")
    deadline: int = Field(ge=0, description="Unix time after which the deposit is rejected.")


class AddLiquidityResponse(ApiModel):
    shares_minted: Uint256 = Field(alias="sharesMinted")
    pool: PoolState


class RemoveLiquidityRequest(ApiModel):
    sender: Address
    shares: Uint256
    min_base_out: Uint256 = Field(alias="minBaseOut")
    min_token_out: Uint256 = Field(alias="minTokenOut")
    deadline: int = Field(ge=0)


class RemoveLiquidityResponse(ApiModel):
    base_out: Uint256 = Field(alias="baseOut")
    token_out: Uint256 = Field(alias="tokenOut")
    pool: PoolState


class SwapRequest(ApiModel):
    sender: Address
    amount_in: Uint256 = Field(alias="amountIn")
    min_amount_out: Uint256 = Field(alias="minAmountOut")
    deadline: int = Field(ge=0)
    recipient: Address | None = None


class TokenToTokenSwapRequest(SwapRequest):
    output_token: Address = Field(alias="outputToken")


class SwapResponse(ApiModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")


class ErrorResponse(ApiModel):
    error: str
    detail: str
