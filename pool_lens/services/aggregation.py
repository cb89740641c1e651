"""Aggregation facade: composes reserve, NFT pool and loan views.

Every operation resolves the ledgers from the registry it is given, walks
the ledger's asset enumeration in order and builds one record per asset.
No state survives between calls apart from the three services fixed at
construction.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..interfaces import IncentivesService, PriceOracle, Registry
from ..models import (
    IncentivesSnapshot,
    LoanRequest,
    LoanSnapshot,
    NftSnapshot,
    NftsView,
    ReserveSnapshot,
    ReservesView,
    UserNftPosition,
    UserReservePosition,
)
from .builders import (
    build_nft_snapshot,
    build_reserve_snapshot,
    build_user_nft_position,
    build_user_reserve_position,
)
from .incentives import incentives_capability, is_null_user

logger = logging.getLogger(__name__)


class ParameterMismatchError(ValueError):
    """Loan batch inputs have different lengths."""


def pair_loan_requests(
    assets: Sequence[str], token_ids: Sequence[int]
) -> list[LoanRequest]:
    """Zip parallel asset / token id sequences into loan requests."""
    if len(assets) != len(token_ids):
        raise ParameterMismatchError(
            f"assets and token ids differ in length: {len(assets)} != {len(token_ids)}"
        )
    return [
        LoanRequest(asset=asset, token_id=int(token_id))
        for asset, token_id in zip(assets, token_ids)
    ]


class AggregationFacade:
    """Read-only, UI-ready views over a lending pool and its NFT pools."""

    def __init__(
        self,
        incentives: IncentivesService | None,
        reserve_oracle: PriceOracle,
        nft_oracle: PriceOracle,
    ) -> None:
        self._incentives = incentives_capability(incentives)
        self._reserve_oracle = reserve_oracle
        self._nft_oracle = nft_oracle

    @property
    def incentives(self) -> IncentivesService | None:
        return self._incentives.service

    @property
    def reserve_oracle(self) -> PriceOracle:
        return self._reserve_oracle

    @property
    def nft_oracle(self) -> PriceOracle:
        return self._nft_oracle

    # ------------------------------------------------------------------
    # Reserves
    # ------------------------------------------------------------------

    async def list_reserves(self, registry: Registry) -> list[str]:
        pool = await registry.pool_ledger()
        return list(await pool.get_reserves_list())

    async def get_reserve_snapshots(
        self, registry: Registry
    ) -> tuple[list[ReserveSnapshot], int]:
        """Return all reserve snapshots and the incentives emission end."""
        view = await self._reserves(registry, None)
        return view.reserves, view.incentives.emission_end_timestamp

    async def get_user_reserve_positions(
        self, registry: Registry, user: str | None
    ) -> tuple[list[UserReservePosition], int]:
        """Return the user's position in every reserve and unclaimed rewards."""
        if is_null_user(user):
            return [], 0

        pool = await registry.pool_ledger()
        assets = await pool.get_reserves_list()

        positions: list[UserReservePosition] = []
        for asset in assets:
            record = await pool.get_reserve_data(asset)
            positions.append(
                await build_user_reserve_position(
                    registry, asset, record, user, self._incentives
                )
            )

        rewards = await self._incentives.unclaimed_rewards(user)
        logger.info("Built %d reserve positions for %s", len(positions), user)
        return positions, rewards

    async def get_reserves_view(
        self, registry: Registry, user: str | None
    ) -> ReservesView:
        """Reserve snapshots and user positions built from one read per asset."""
        return await self._reserves(registry, user)

    async def _reserves(self, registry: Registry, user: str | None) -> ReservesView:
        with_user = not is_null_user(user)

        pool = await registry.pool_ledger()
        assets = await pool.get_reserves_list()

        reserves: list[ReserveSnapshot] = []
        positions: list[UserReservePosition] = []
        for asset in assets:
            record = await pool.get_reserve_data(asset)
            reserves.append(
                await build_reserve_snapshot(
                    registry, asset, record, self._reserve_oracle, self._incentives
                )
            )
            if with_user:
                positions.append(
                    await build_user_reserve_position(
                        registry, asset, record, user, self._incentives
                    )
                )

        incentives = IncentivesSnapshot(
            user_unclaimed_rewards=await self._incentives.unclaimed_rewards(user),
            emission_end_timestamp=await self._incentives.emission_end(),
        )
        logger.info(
            "Built %d reserve snapshots (%d user positions)",
            len(reserves),
            len(positions),
        )
        return ReservesView(reserves, positions, incentives)

    # ------------------------------------------------------------------
    # NFT pools
    # ------------------------------------------------------------------

    async def list_nfts(self, registry: Registry) -> list[str]:
        pool = await registry.pool_ledger()
        return list(await pool.get_nfts_list())

    async def get_simple_nfts_data(self, registry: Registry) -> list[NftSnapshot]:
        view = await self._nfts(registry, None)
        return view.nfts

    async def get_user_nfts_data(
        self, registry: Registry, user: str | None
    ) -> list[UserNftPosition]:
        if is_null_user(user):
            return []

        pool = await registry.pool_ledger()
        loan_ledger = await registry.loan_ledger()
        assets = await pool.get_nfts_list()

        positions: list[UserNftPosition] = []
        for asset in assets:
            record = await pool.get_nft_data(asset)
            positions.append(
                await build_user_nft_position(loan_ledger, asset, record, user)
            )

        logger.info("Built %d NFT positions for %s", len(positions), user)
        return positions

    async def get_nfts_data(self, registry: Registry, user: str | None) -> NftsView:
        """NFT pool snapshots and user positions built from one read per asset."""
        return await self._nfts(registry, user)

    async def _nfts(self, registry: Registry, user: str | None) -> NftsView:
        with_user = not is_null_user(user)

        pool = await registry.pool_ledger()
        loan_ledger = await registry.loan_ledger()
        assets = await pool.get_nfts_list()

        nfts: list[NftSnapshot] = []
        positions: list[UserNftPosition] = []
        for asset in assets:
            record = await pool.get_nft_data(asset)
            nfts.append(
                await build_nft_snapshot(
                    registry, loan_ledger, asset, record, self._nft_oracle
                )
            )
            if with_user:
                positions.append(
                    await build_user_nft_position(loan_ledger, asset, record, user)
                )

        logger.info(
            "Built %d NFT pool snapshots (%d user positions)", len(nfts), len(positions)
        )
        return NftsView(nfts, positions)

    # ------------------------------------------------------------------
    # Loans
    # ------------------------------------------------------------------

    async def get_loan_snapshots(
        self,
        registry: Registry,
        assets: Sequence[str],
        token_ids: Sequence[int],
    ) -> list[LoanSnapshot]:
        """Risk metrics per (asset, token id); lengths are checked before any read."""
        requests = pair_loan_requests(assets, token_ids)
        return await self.get_loan_snapshots_for(registry, requests)

    async def get_loan_snapshots_for(
        self, registry: Registry, requests: Sequence[LoanRequest]
    ) -> list[LoanSnapshot]:
        if not requests:
            return []

        pool = await registry.pool_ledger()

        snapshots: list[LoanSnapshot] = []
        for request in requests:
            risk = await pool.get_nft_loan_data(request.asset, request.token_id)
            snapshots.append(
                LoanSnapshot(
                    asset=request.asset,
                    token_id=request.token_id,
                    total_collateral=risk.total_collateral,
                    total_debt=risk.total_debt,
                    available_borrows=risk.available_borrows,
                    ltv=risk.ltv,
                    liquidation_threshold=risk.liquidation_threshold,
                    loan_id=risk.loan_id,
                    health_factor=risk.health_factor,
                )
            )

        logger.info("Built %d loan snapshots", len(snapshots))
        return snapshots
