"""Optional incentives capability.

``incentives_capability`` is the only place that checks whether a rewards
distributor is configured. Builders receive one of the two variants below
and never test for ``None`` themselves.
"""
from __future__ import annotations

from typing import Union

from ..config import ZERO_ADDRESS
from ..interfaces.incentives import IncentivesService
from ..models import AssetIncentives


def is_null_user(user: str | None) -> bool:
    """True for ``None``, ``""`` and the zero address."""
    return not user or user.lower() == ZERO_ADDRESS


class EnabledIncentives:
    """Reads incentive data from a configured distributor."""

    def __init__(self, service: IncentivesService) -> None:
        self._service = service

    @property
    def service(self) -> IncentivesService:
        return self._service

    async def asset_data(self, asset: str) -> AssetIncentives:
        return await self._service.get_asset_data(asset)

    async def user_index(self, user: str, asset: str) -> int:
        return await self._service.get_user_asset_data(user, asset)

    async def unclaimed_rewards(self, user: str | None) -> int:
        if is_null_user(user):
            return 0
        return await self._service.get_user_unclaimed_rewards(user)

    async def emission_end(self) -> int:
        return await self._service.distribution_end()


class DisabledIncentives:
    """Stand-in used when no distributor is configured; every value is zero."""
    service = None

    async def asset_data(self, asset: str) -> AssetIncentives:
        return AssetIncentives.ZERO

    async def user_index(self, user: str, asset: str) -> int:
        return 0

    async def unclaimed_rewards(self, user: str | None) -> int:
        return 0

    async def emission_end(self) -> int:
        return 0


Incentives = Union[EnabledIncentives, DisabledIncentives]


def incentives_capability(service: IncentivesService | None) -> Incentives:
    if service is None:
        return DisabledIncentives()
    return EnabledIncentives(service)
