"""Integration tests for QueryService with a mocked chain client and facade."""
from __future__ import annotations

import dataclasses
from unittest.mock import AsyncMock, MagicMock

import pytest

from pool_lens.config import AppConfig
from pool_lens.models import (
    IncentivesSnapshot,
    LoanRequest,
    LoanSnapshot,
    NftsView,
    ReservesView,
    UserNftPosition,
    UserReservePosition,
)
from pool_lens.protocols.lendpool import (
    EvmIncentivesController,
    EvmPriceOracle,
    EvmRegistry,
)
from pool_lens.services import QueryService

from ..sample_data import APES, B_APES, PUNKS, USER, WAD, WETH

BLOCK = 19_000_000


def _stub_session(service: QueryService, facade: AsyncMock) -> MagicMock:
    registry = MagicMock()
    service._session = AsyncMock(return_value=(BLOCK, facade, registry))
    return registry


class TestConstruction:
    def test_default_market(self, sample_app_config: AppConfig) -> None:
        assert QueryService(sample_app_config).market_name == "main"

    def test_unknown_market(self, sample_app_config: AppConfig) -> None:
        with pytest.raises(ValueError, match="Unknown market 'other'"):
            QueryService(sample_app_config, "other")

    def test_facade_incentives_enabled(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = service.build_facade(MagicMock())

        assert isinstance(facade.incentives, EvmIncentivesController)
        assert isinstance(facade.reserve_oracle, EvmPriceOracle)
        assert facade.reserve_oracle.address == "0x9000000000000000000000000000000000000002"
        assert facade.nft_oracle.address == "0x9000000000000000000000000000000000000003"

    def test_facade_incentives_disabled(self, sample_app_config: AppConfig) -> None:
        market = dataclasses.replace(sample_app_config.markets["main"], incentives="")
        config = AppConfig(chains=sample_app_config.chains, markets={"main": market})

        facade = QueryService(config).build_facade(MagicMock())

        assert facade.incentives is None


class TestSession:
    @pytest.mark.asyncio
    async def test_pins_head_block(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        pinned = MagicMock()
        service._client = MagicMock()
        service._client.block_number = AsyncMock(return_value=BLOCK)
        service._client.pinned.return_value = pinned

        block, facade, registry = await service._session()

        assert block == BLOCK
        service._client.pinned.assert_called_once_with(BLOCK)
        assert isinstance(registry, EvmRegistry)
        assert registry._client is pinned
        assert facade.incentives._client is pinned
        assert facade.nft_oracle._client is pinned


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_reserves(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.list_reserves.return_value = [WETH]
        registry = _stub_session(service, facade)

        result = await service.list_reserves()

        assert result == {"market": "main", "block": BLOCK, "reserves": [WETH]}
        facade.list_reserves.assert_awaited_once_with(registry)

    @pytest.mark.asyncio
    async def test_list_nfts(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.list_nfts.return_value = [APES, PUNKS]
        _stub_session(service, facade)

        result = await service.list_nfts()

        assert result["nfts"] == [APES, PUNKS]

    @pytest.mark.asyncio
    async def test_reserves_view(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.get_reserves_view.return_value = ReservesView(
            reserves=[],
            user_reserves=[UserReservePosition(WETH, 10 * WAD, 2 * WAD)],
            incentives=IncentivesSnapshot(42, 1_800_000_000),
        )
        registry = _stub_session(service, facade)

        result = await service.reserves(USER)

        facade.get_reserves_view.assert_awaited_once_with(registry, USER)
        assert result["user"] == USER
        assert result["block"] == BLOCK
        assert result["reserves"] == []
        assert result["user_reserves"][0]["scaled_b_token_balance"] == 10 * WAD
        assert result["incentives"] == {
            "user_unclaimed_rewards": 42,
            "emission_end_timestamp": 1_800_000_000,
        }

    @pytest.mark.asyncio
    async def test_user_reserves(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.get_user_reserve_positions.return_value = (
            [UserReservePosition(WETH, 10 * WAD, 2 * WAD, 101, 301)],
            42 * WAD,
        )
        registry = _stub_session(service, facade)

        result = await service.user_reserves(USER)

        facade.get_user_reserve_positions.assert_awaited_once_with(registry, USER)
        assert result["user_unclaimed_rewards"] == 42 * WAD
        assert result["user_reserves"][0]["debt_token_incentives_user_index"] == 301

    @pytest.mark.asyncio
    async def test_nfts_view(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.get_nfts_data.return_value = NftsView(
            nfts=[], user_nfts=[UserNftPosition(APES, B_APES, 2)]
        )
        _stub_session(service, facade)

        result = await service.nfts(USER)

        assert result["user_nfts"] == [
            {"underlying_asset": APES, "b_nft_address": B_APES, "total_collateral": 2}
        ]

    @pytest.mark.asyncio
    async def test_loans(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        snapshot = LoanSnapshot(APES, 7, 60 * WAD, 20 * WAD, 0, 3000, 8000, 11, 24 * 10**17)
        facade.get_loan_snapshots_for.return_value = [snapshot]
        _stub_session(service, facade)
        requests = [LoanRequest(APES, 7)]

        result = await service.loans(requests)

        facade.get_loan_snapshots_for.assert_awaited_once()
        assert facade.get_loan_snapshots_for.await_args.args[1] == requests
        assert result["loans"] == [dataclasses.asdict(snapshot)]

    @pytest.mark.asyncio
    async def test_failure_propagates(self, sample_app_config: AppConfig) -> None:
        service = QueryService(sample_app_config)
        facade = AsyncMock()
        facade.get_reserves_view.side_effect = RuntimeError("All RPC endpoints failed")
        _stub_session(service, facade)

        with pytest.raises(RuntimeError, match="All RPC endpoints failed"):
            await service.reserves()
