"""API endpoints for the exchange.

Every pool operation maps one-to-one onto an ``Exchange`` or
``PoolRegistry`` call. Exchange errors propagate to the exception
handler in ``dex.api.main``, which turns them into JSON error bodies.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from dex.amm.exchange import Exchange
from dex.api.market import Market, get_default_market
from dex.assets.token import Token
from dex.errors import NoSuchPool
from dex.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
    CreatePoolRequest,
    CreateTokenRequest,
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
from dex.models.types import ADDRESS_PATTERN, UINT256_MAX, is_null_address

router = APIRouter()

AddressPath = Annotated[str, Path(pattern=ADDRESS_PATTERN)]


def get_market() -> Market:
    """Dependency provider for the market instance.

    Override this in tests to inject a fresh market:
        app.dependency_overrides[get_market] = lambda: market
    """
    return get_default_market()


def _require_asset(market: Market, address: str) -> Token:
    asset = market.asset(address)
    if asset is None:
        raise HTTPException(status_code=404, detail=f"Unknown asset {address}")
    return asset


def _require_pool(market: Market, token: str) -> Exchange:
    pool = market.registry.get_pool(token)
    if pool is None:
        raise NoSuchPool(f"no pool for token {token}")
    return pool


def _token_info(token: Token) -> TokenInfo:
    return TokenInfo(
        address=token.address,
        name=token.name,
        symbol=token.symbol,
        decimals=token.decimals,
        total_supply=str(token.total_supply),
    )


# --- Assets ---


@router.get("/base")
async def base_currency(market: Market = Depends(get_market)) -> TokenInfo:
    """Describe the base currency every pool trades against."""
    return _token_info(market.base)


@router.post("/base/mint")
async def mint_base(request: MintRequest, market: Market = Depends(get_market)) -> BalanceResponse:
    """Credit base currency to an account (simulation faucet)."""
    market.base.mint(request.recipient, int(request.amount))
    return BalanceResponse(
        asset=market.base.address,
        holder=request.recipient,
        balance=str(market.base.balance_of(request.recipient)),
    )


@router.post("/tokens", status_code=201)
async def create_token(request: CreateTokenRequest, market: Market = Depends(get_market)) -> TokenInfo:
    """Deploy an in-memory token."""
    token = market.deploy_token(request.name, request.symbol, request.owner, int(request.initial_supply))
    return _token_info(token)


@router.post("/tokens/{address}/approve")
async def approve(
    address: AddressPath,
    request: ApproveRequest,
    market: Market = Depends(get_market),
) -> dict[str, bool]:
    """Grant a spender (usually a pool) an allowance on an asset."""
    asset = _require_asset(market, address)
    return {"approved": asset.approve(request.owner, request.spender, int(request.amount))}


@router.get("/tokens/{address}/balances/{holder}")
async def balance(address: AddressPath, holder: AddressPath, market: Market = Depends(get_market)) -> BalanceResponse:
    asset = _require_asset(market, address)
    return BalanceResponse(asset=asset.address, holder=holder, balance=str(asset.balance_of(holder)))


# --- Registry ---


@router.post("/pools", status_code=201)
async def create_pool(request: CreatePoolRequest, market: Market = Depends(get_market)) -> PoolState:
    """Create the pool for a deployed token."""
    token = market.asset(request.token)
    if token is None and not is_null_address(request.token):
        raise HTTPException(status_code=404, detail=f"Unknown asset {request.token}")
    # The null address reaches the registry, which rejects it
    pool = market.registry.create_pool(token)
    return PoolState.from_exchange(pool)


@router.get("/pools")
async def list_pools(market: Market = Depends(get_market)) -> list[PoolState]:
    return [PoolState.from_exchange(pool) for pool in market.registry]


@router.get("/pools/{token}")
async def get_pool(token: AddressPath, market: Market = Depends(get_market)) -> PoolState:
    return PoolState.from_exchange(_require_pool(market, token))


@router.get("/pools/{token}/shares/{holder}")
async def share_balance(
    token: AddressPath,
    holder: AddressPath,
    market: Market = Depends(get_market),
) -> BalanceResponse:
    pool = _require_pool(market, token)
    return BalanceResponse(asset=pool.address, holder=holder, balance=str(pool.share_balance(holder)))


# --- Quotes ---


@router.get("/pools/{token}/quote/token")
async def quote_token_output(
    token: AddressPath,
    amount: int = Query(ge=0, le=UINT256_MAX, description="Base currency sold."),
    market: Market = Depends(get_market),
) -> QuoteResponse:
    """Tokens received for selling ``amount`` base currency."""
    pool = _require_pool(market, token)
    return QuoteResponse(amount_in=str(amount), amount_out=str(pool.quote_token_output(amount)))


@router.get("/pools/{token}/quote/base")
async def quote_base_output(
    token: AddressPath,
    amount: int = Query(ge=0, le=UINT256_MAX, description="Tokens sold."),
    market: Market = Depends(get_market),
) -> QuoteResponse:
    """Base currency received for selling ``amount`` tokens."""
    pool = _require_pool(market, token)
    return QuoteResponse(amount_in=str(amount), amount_out=str(pool.quote_base_output(amount)))


# --- Liquidity ---


@router.post("/pools/{token}/liquidity/add")
async def add_liquidity(
    token: AddressPath,
    request: AddLiquidityRequest,
    market: Market = Depends(get_market),
) -> AddLiquidityResponse:
    pool = _require_pool(market, token)
    minted = pool.add_liquidity(
        request.sender,
        int(request.base_deposit),
        int(request.max_token_deposit),
        request.deadline,
    )
    return AddLiquidityResponse(shares_minted=str(minted), pool=PoolState.from_exchange(pool))


@router.post("/pools/{token}/liquidity/remove")
async def remove_liquidity(
    token: AddressPath,
    request: RemoveLiquidityRequest,
    market: Market = Depends(get_market),
) -> RemoveLiquidityResponse:
    pool = _require_pool(market, token)
    base_out, token_out = pool.remove_liquidity(
        request.sender,
        int(request.shares),
        int(request.min_base_out),
        int(request.min_token_out),
        request.deadline,
    )
    return RemoveLiquidityResponse(
        base_out=str(base_out),
        token_out=str(token_out),
        pool=PoolState.from_exchange(pool),
    )


# --- Swaps ---


@router.post("/pools/{token}/swap/base-for-token")
async def swap_base_for_token(
    token: AddressPath,
    request: SwapRequest,
    market: Market = Depends(get_market),
) -> SwapResponse:
    pool = _require_pool(market, token)
    amount_out = pool.swap_base_for_token(
        request.sender,
        int(request.amount_in),
        int(request.min_amount_out),
        request.deadline,
        recipient=request.recipient,
    )
    return SwapResponse(amount_in=request.amount_in, amount_out=str(amount_out))


@router.post("/pools/{token}/swap/token-for-base")
async def swap_token_for_base(
    token: AddressPath,
    request: SwapRequest,
    market: Market = Depends(get_market),
) -> SwapResponse:
    pool = _require_pool(market, token)
    amount_out = pool.swap_token_for_base(
        request.sender,
        int(request.amount_in),
        int(request.min_amount_out),
        request.deadline,
        recipient=request.recipient,
    )
    return SwapResponse(amount_in=request.amount_in, amount_out=str(amount_out))


@router.post("/pools/{token}/swap/token-for-token")
async def swap_token_for_token(
    token: AddressPath,
    request: TokenToTokenSwapRequest,
    market: Market = Depends(get_market),
) -> SwapResponse:
    pool = _require_pool(market, token)
    amount_out = pool.swap_token_for_token(
        request.sender,
        int(request.amount_in),
        int(request.min_amount_out),
        request.output_token,
        request.deadline,
        recipient=request.recipient,
    )
    return SwapResponse(amount_in=request.amount_in, amount_out=str(amount_out))
