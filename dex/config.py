"""Configuration for exchange pools."""

from dataclasses import dataclass

from dex.constants import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    MINIMUM_LIQUIDITY,
    SHARE_DECIMALS,
    SHARE_NAME,
    SHARE_SYMBOL,
)


@dataclass(frozen=True)
class ExchangeConfig:
    """Centralized configuration for a pool.

    Every pool created by a registry shares one instance, so all pools
    price with the same fee and bootstrap threshold.

    Attributes:
        minimum_liquidity: Base deposit an empty pool must strictly exceed
        fee_numerator: Share of each swap input that is priced (99 = 1% fee)
        fee_denominator: Denominator of the fee multiplier
        share_name: Name of the pool-ownership share token
        share_symbol: Symbol of the pool-ownership share token
        share_decimals: Decimals of the pool-ownership share token
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR

    share_name: str = SHARE_NAME
    share_symbol: str = SHARE_SYMBOL
    share_decimals: int = SHARE_DECIMALS

    def __post_init__(self) -> None:
        if not 0 < self.fee_numerator <= self.fee_denominator:
            raise ValueError(
                f"Fee multiplier must be in (0, 1]: {self.fee_numerator}/{self.fee_denominator}"
            )
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity cannot be negative: {self.minimum_liquidity}")


# Default configuration instance
DEFAULT_EXCHANGE_CONFIG = ExchangeConfig()
