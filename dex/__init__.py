"""Two-asset constant-product exchange with a per-token pool registry."""

from dex.amm.exchange import Exchange
from dex.pools.registry import PoolRegistry

__version__ = "0.1.0"
__all__ = ["Exchange", "PoolRegistry", "__version__"]
