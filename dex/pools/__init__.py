"""Pool management package.

Provides PoolRegistry, which creates and looks up one exchange per token.
"""

from .registry import PoolRegistry

__all__ = ["PoolRegistry"]
