"""Query orchestration: config → pinned chain state → facade → JSON-ready dicts."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Sequence

from ..chains.evm import EvmClient
from ..config import AppConfig, MarketConfig
from ..models import LoanRequest
from ..protocols.lendpool import EvmIncentivesController, EvmPriceOracle, EvmRegistry
from .aggregation import AggregationFacade

logger = logging.getLogger(__name__)


class QueryService:
    """Runs facade queries for one configured market.

    Each query reads the head block once and evaluates every read of that
    query at that block, so all parts of a result describe the same state.
    """

    def __init__(self, config: AppConfig, market: str | None = None) -> None:
        self._market_name = market or config.default_market
        if self._market_name not in config.markets:
            raise ValueError(f"Unknown market '{self._market_name}'")
        self._market: MarketConfig = config.markets[self._market_name]
        self._client = EvmClient(config.chains[self._market.chain])

    @property
    def market_name(self) -> str:
        return self._market_name

    def build_facade(self, client: EvmClient) -> AggregationFacade:
        incentives = None
        if self._market.incentives_enabled:
            incentives = EvmIncentivesController(client, self._market.incentives)
        return AggregationFacade(
            incentives=incentives,
            reserve_oracle=EvmPriceOracle(client, self._market.reserve_oracle),
            nft_oracle=EvmPriceOracle(client, self._market.nft_oracle),
        )

    async def _session(self) -> tuple[int, AggregationFacade, EvmRegistry]:
        block = await self._client.block_number()
        client = self._client.pinned(block)
        logger.debug("Market %s pinned at block %d", self._market_name, block)
        return block, self.build_facade(client), EvmRegistry(client, self._market.registry)

    def _envelope(self, block: int, **payload: Any) -> dict[str, Any]:
        return {"market": self._market_name, "block": block, **payload}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_reserves(self) -> dict[str, Any]:
        block, facade, registry = await self._session()
        return self._envelope(block, reserves=await facade.list_reserves(registry))

    async def list_nfts(self) -> dict[str, Any]:
        block, facade, registry = await self._session()
        return self._envelope(block, nfts=await facade.list_nfts(registry))

    async def reserves(self, user: str | None = None) -> dict[str, Any]:
        block, facade, registry = await self._session()
        view = await facade.get_reserves_view(registry, user)

        for r in view.reserves:
            logger.info(
                "  %-8s price=%d liquidity=%d active=%s frozen=%s",
                r.symbol, r.price, r.available_liquidity, r.is_active, r.is_frozen,
            )

        return self._envelope(
            block,
            user=user,
            reserves=[asdict(r) for r in view.reserves],
            user_reserves=[asdict(p) for p in view.user_reserves],
            incentives=asdict(view.incentives),
        )

    async def user_reserves(self, user: str) -> dict[str, Any]:
        block, facade, registry = await self._session()
        positions, unclaimed = await facade.get_user_reserve_positions(registry, user)
        return self._envelope(
            block,
            user=user,
            user_reserves=[asdict(p) for p in positions],
            user_unclaimed_rewards=unclaimed,
        )

    async def nfts(self, user: str | None = None) -> dict[str, Any]:
        block, facade, registry = await self._session()
        view = await facade.get_nfts_data(registry, user)

        for n in view.nfts:
            logger.info(
                "  %-8s price=%d collateral=%d active=%s frozen=%s",
                n.symbol, n.price, n.total_collateral, n.is_active, n.is_frozen,
            )

        return self._envelope(
            block,
            user=user,
            nfts=[asdict(n) for n in view.nfts],
            user_nfts=[asdict(p) for p in view.user_nfts],
        )

    async def loans(self, requests: Sequence[LoanRequest]) -> dict[str, Any]:
        block, facade, registry = await self._session()
        snapshots = await facade.get_loan_snapshots_for(registry, requests)

        for s in snapshots:
            logger.info(
                "  %s #%d loan=%d health_factor=%d",
                s.asset, s.token_id, s.loan_id, s.health_factor,
            )

        return self._envelope(block, loans=[asdict(s) for s in snapshots])
