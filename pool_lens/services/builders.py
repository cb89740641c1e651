"""Per-asset snapshot and position builders.

Each builder awaits every collaborator it needs and only then constructs its
record, so a failed read leaves nothing behind.
"""
from __future__ import annotations

import logging

from ..interfaces import LoanLedger, PriceOracle, Registry
from ..models import (
    NftRecord,
    NftSnapshot,
    ReserveRecord,
    ReserveSnapshot,
    UserNftPosition,
    UserReservePosition,
)
from ..protocols.lendpool.configuration import (
    decode_nft_configuration,
    decode_reserve_configuration,
)
from .incentives import Incentives

logger = logging.getLogger(__name__)


async def build_reserve_snapshot(
    registry: Registry,
    asset: str,
    record: ReserveRecord,
    oracle: PriceOracle,
    incentives: Incentives,
) -> ReserveSnapshot:
    """Compose a reserve snapshot from its base record and secondary services."""
    underlying = registry.fungible_token(asset)
    debt_token = registry.scaled_token(record.debt_token_address)
    rate_curve = registry.rate_curve(record.interest_rate_address)

    price = await oracle.get_asset_price(asset)
    available_liquidity = await underlying.balance_of(record.b_token_address)
    total_scaled_variable_debt = await debt_token.scaled_total_supply()
    symbol = await underlying.symbol()
    name = await underlying.name()
    slope1 = await rate_curve.variable_rate_slope1()
    slope2 = await rate_curve.variable_rate_slope2()
    supply_incentives = await incentives.asset_data(record.b_token_address)
    debt_incentives = await incentives.asset_data(record.debt_token_address)

    config = decode_reserve_configuration(record.configuration)
    logger.debug("Reserve %s (%s) price=%d", symbol, asset, price)

    return ReserveSnapshot(
        underlying_asset=asset,
        name=name,
        symbol=symbol,
        decimals=config.decimals,
        ltv=config.ltv,
        liquidation_threshold=config.liquidation_threshold,
        liquidation_bonus=config.liquidation_bonus,
        reserve_factor=config.reserve_factor,
        is_active=config.is_active,
        is_frozen=config.is_frozen,
        borrowing_enabled=config.borrowing_enabled,
        liquidity_index=record.liquidity_index,
        variable_borrow_index=record.variable_borrow_index,
        liquidity_rate=record.current_liquidity_rate,
        variable_borrow_rate=record.current_variable_borrow_rate,
        last_update_timestamp=record.last_update_timestamp,
        b_token_address=record.b_token_address,
        debt_token_address=record.debt_token_address,
        interest_rate_address=record.interest_rate_address,
        available_liquidity=available_liquidity,
        total_scaled_variable_debt=total_scaled_variable_debt,
        price=price,
        variable_rate_slope1=slope1,
        variable_rate_slope2=slope2,
        supply_incentives=supply_incentives,
        debt_incentives=debt_incentives,
    )


async def build_user_reserve_position(
    registry: Registry,
    asset: str,
    record: ReserveRecord,
    user: str,
    incentives: Incentives,
) -> UserReservePosition:
    b_token = registry.scaled_token(record.b_token_address)
    debt_token = registry.scaled_token(record.debt_token_address)

    scaled_b_token_balance = await b_token.scaled_balance_of(user)
    scaled_variable_debt = await debt_token.scaled_balance_of(user)
    b_token_index = await incentives.user_index(user, record.b_token_address)
    debt_token_index = await incentives.user_index(user, record.debt_token_address)

    return UserReservePosition(
        underlying_asset=asset,
        scaled_b_token_balance=scaled_b_token_balance,
        scaled_variable_debt=scaled_variable_debt,
        b_token_incentives_user_index=b_token_index,
        debt_token_incentives_user_index=debt_token_index,
    )


async def build_nft_snapshot(
    registry: Registry,
    loan_ledger: LoanLedger,
    asset: str,
    record: NftRecord,
    oracle: PriceOracle,
) -> NftSnapshot:
    """Compose an NFT pool snapshot; collateral totals come from the loan ledger."""
    nft = registry.non_fungible_token(asset)

    price = await oracle.get_asset_price(asset)
    total_collateral = await loan_ledger.get_nft_collateral_amount(asset)
    symbol = await nft.symbol()
    name = await nft.name()

    config = decode_nft_configuration(record.configuration)
    logger.debug("NFT pool %s (%s) price=%d", symbol, asset, price)

    return NftSnapshot(
        underlying_asset=asset,
        b_nft_address=record.b_nft_address,
        name=name,
        symbol=symbol,
        ltv=config.ltv,
        liquidation_threshold=config.liquidation_threshold,
        liquidation_bonus=config.liquidation_bonus,
        is_active=config.is_active,
        is_frozen=config.is_frozen,
        price=price,
        total_collateral=total_collateral,
    )


async def build_user_nft_position(
    loan_ledger: LoanLedger,
    asset: str,
    record: NftRecord,
    user: str,
) -> UserNftPosition:
    total_collateral = await loan_ledger.get_user_nft_collateral_amount(user, asset)
    return UserNftPosition(
        underlying_asset=asset,
        b_nft_address=record.b_nft_address,
        total_collateral=total_collateral,
    )
