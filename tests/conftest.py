"""Shared test fixtures."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from pool_lens.config import AppConfig, ChainConfig, MarketConfig

from .sample_data import MockProtocol


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_market_config() -> MarketConfig:
    return MarketConfig(
        chain="ethereum",
        registry="0x9000000000000000000000000000000000000001",
        reserve_oracle="0x9000000000000000000000000000000000000002",
        nft_oracle="0x9000000000000000000000000000000000000003",
        incentives="0x9000000000000000000000000000000000000004",
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_market_config: MarketConfig
) -> AppConfig:
    return AppConfig(
        chains={"ethereum": sample_chain_config},
        markets={"main": sample_market_config},
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chains:
      ethereum:
        rpc_endpoints: ["https://rpc.example.com"]
        rpc_timeout: 10
    markets:
      main:
        chain: ethereum
        registry: "0x9000000000000000000000000000000000000001"
        reserve_oracle: "0x9000000000000000000000000000000000000002"
        nft_oracle: "0x9000000000000000000000000000000000000003"
        incentives: ""
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Mocked protocol
# ---------------------------------------------------------------------------


@pytest.fixture()
def protocol() -> MockProtocol:
    return MockProtocol()
