"""Fungible-asset ledgers used by pools."""

from dex.assets.base import AssetLedger
from dex.assets.token import Token

__all__ = ["AssetLedger", "Token"]
