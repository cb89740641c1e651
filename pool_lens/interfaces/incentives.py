"""Incentives service protocol: reward emission accounting."""
from typing import Protocol

from ..models import AssetIncentives


class IncentivesService(Protocol):
    """Abstract interface for the rewards distributor."""

    async def get_asset_data(self, asset: str) -> AssetIncentives: ...

    async def get_user_asset_data(self, user: str, asset: str) -> int: ...

    async def get_user_unclaimed_rewards(self, user: str) -> int: ...

    async def distribution_end(self) -> int: ...
