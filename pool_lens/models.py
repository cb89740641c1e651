"""Data models: all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple


# ---------------------------------------------------------------------------
# Records read from collaborators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReserveRecord:
    """Raw reserve state as stored by the pool ledger."""

    configuration: int
    liquidity_index: int
    variable_borrow_index: int
    current_liquidity_rate: int
    current_variable_borrow_rate: int
    last_update_timestamp: int
    b_token_address: str
    debt_token_address: str
    interest_rate_address: str
    id: int = 0


@dataclass(frozen=True)
class NftRecord:
    """Raw NFT pool state as stored by the pool ledger."""

    configuration: int
    b_nft_address: str
    id: int = 0
    max_supply: int = 0
    max_token_id: int = 0


@dataclass(frozen=True)
class LoanRiskData:
    """Pool ledger risk figures for a single NFT loan, kept in ledger order."""

    total_collateral: int
    total_debt: int
    available_borrows: int
    ltv: int
    liquidation_threshold: int
    loan_id: int
    health_factor: int


@dataclass(frozen=True)
class ReserveConfiguration:
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    decimals: int
    reserve_factor: int
    is_active: bool
    is_frozen: bool
    borrowing_enabled: bool


@dataclass(frozen=True)
class NftConfiguration:
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    is_active: bool
    is_frozen: bool


@dataclass(frozen=True)
class AssetIncentives:
    """Emission state of one incentivised token."""

    index: int
    emission_per_second: int
    last_update_timestamp: int

    ZERO: ClassVar[AssetIncentives]


AssetIncentives.ZERO = AssetIncentives(
    index=0, emission_per_second=0, last_update_timestamp=0
)


@dataclass(frozen=True)
class LoanRequest:
    """One (NFT asset, token id) pair to evaluate."""

    asset: str
    token_id: int


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReserveSnapshot:
    """UI-ready view of one fungible reserve."""

    underlying_asset: str
    name: str
    symbol: str
    decimals: int
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    reserve_factor: int
    is_active: bool
    is_frozen: bool
    borrowing_enabled: bool
    liquidity_index: int
    variable_borrow_index: int
    liquidity_rate: int
    variable_borrow_rate: int
    last_update_timestamp: int
    b_token_address: str
    debt_token_address: str
    interest_rate_address: str
    available_liquidity: int
    total_scaled_variable_debt: int
    price: int
    variable_rate_slope1: int
    variable_rate_slope2: int
    supply_incentives: AssetIncentives = AssetIncentives.ZERO
    debt_incentives: AssetIncentives = AssetIncentives.ZERO


@dataclass(frozen=True)
class UserReservePosition:
    underlying_asset: str
    scaled_b_token_balance: int
    scaled_variable_debt: int
    b_token_incentives_user_index: int = 0
    debt_token_incentives_user_index: int = 0


@dataclass(frozen=True)
class IncentivesSnapshot:
    user_unclaimed_rewards: int = 0
    emission_end_timestamp: int = 0


@dataclass(frozen=True)
class NftSnapshot:
    """UI-ready view of one NFT collateral pool."""

    underlying_asset: str
    b_nft_address: str
    name: str
    symbol: str
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    is_active: bool
    is_frozen: bool
    price: int
    total_collateral: int


@dataclass(frozen=True)
class UserNftPosition:
    underlying_asset: str
    b_nft_address: str
    total_collateral: int


@dataclass(frozen=True)
class LoanSnapshot:
    """Risk metrics of one NFT loan, copied from the pool ledger."""

    asset: str
    token_id: int
    total_collateral: int
    total_debt: int
    available_borrows: int
    ltv: int
    liquidation_threshold: int
    loan_id: int
    health_factor: int


class ReservesView(NamedTuple):
    reserves: list[ReserveSnapshot]
    user_reserves: list[UserReservePosition]
    incentives: IncentivesSnapshot


class NftsView(NamedTuple):
    nfts: list[NftSnapshot]
    user_nfts: list[UserNftPosition]
