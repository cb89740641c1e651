"""Price oracle protocol: on-chain asset price source."""
from typing import Protocol


class PriceOracle(Protocol):
    """Price of an asset in the market's reference unit."""

    async def get_asset_price(self, asset: str) -> int: ...
