"""EVM-backed collaborators of the lending protocol.

Each wrapper binds one contract address to an ``EvmClient`` and turns
``eth_call`` return data into the models used by the aggregation layer.
Nothing is cached; every method call is a fresh read.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from eth_abi import decode, encode
from web3 import Web3

from ...chains.evm import EvmClient
from ...models import AssetIncentives, LoanRiskData, NftRecord, ReserveRecord
from . import abi

logger = logging.getLogger(__name__)


def selector(signature: str) -> bytes:
    """4-byte function selector, e.g. ``balanceOf(address)`` → ``0x70a08231``."""
    return bytes(Web3.keccak(text=signature)[:4])


def arg_types(signature: str) -> list[str]:
    """Argument types of a flat signature string."""
    inner = signature[signature.index("(") + 1 : signature.rindex(")")]
    return [t for t in inner.split(",") if t]


def encode_call(signature: str, args: Sequence[Any] = ()) -> bytes:
    return selector(signature) + encode(arg_types(signature), list(args))


def checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


def decode_text(raw: bytes) -> str:
    """Decode a ``string`` return, accepting legacy ``bytes32`` tokens.

    An encoded string is at least two words (offset, length); a single word
    can only be a ``bytes32``.
    """
    if len(raw) == 32:
        (value,) = decode(["bytes32"], raw)
        return value.rstrip(b"\x00").decode("utf-8", errors="replace")
    (value,) = decode(["string"], raw)
    return value


class _Contract:
    def __init__(self, client: EvmClient, address: str) -> None:
        self._client = client
        self.address = checksum(address)

    async def _raw(self, signature: str, *args: Any) -> bytes:
        return await self._client.call(self.address, encode_call(signature, args))

    async def _call(self, method: tuple[str, list[str]], *args: Any) -> tuple:
        signature, output_types = method
        raw = await self._raw(signature, *args)
        return decode(output_types, raw)

    async def _call_one(self, method: tuple[str, list[str]], *args: Any) -> Any:
        (value,) = await self._call(method, *args)
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


# ---------------------------------------------------------------------------
# Ledgers
# ---------------------------------------------------------------------------


class EvmPoolLedger(_Contract):
    """Lend pool contract."""

    async def get_reserves_list(self) -> list[str]:
        assets = await self._call_one(abi.GET_RESERVES_LIST)
        return [checksum(a) for a in assets]

    async def get_nfts_list(self) -> list[str]:
        assets = await self._call_one(abi.GET_NFTS_LIST)
        return [checksum(a) for a in assets]

    async def get_reserve_data(self, asset: str) -> ReserveRecord:
        (
            configuration,
            liquidity_index,
            variable_borrow_index,
            liquidity_rate,
            variable_borrow_rate,
            last_update_timestamp,
            b_token,
            debt_token,
            interest_rate,
            reserve_id,
        ) = await self._call(abi.GET_RESERVE_DATA, checksum(asset))
        return ReserveRecord(
            configuration=configuration,
            liquidity_index=liquidity_index,
            variable_borrow_index=variable_borrow_index,
            current_liquidity_rate=liquidity_rate,
            current_variable_borrow_rate=variable_borrow_rate,
            last_update_timestamp=last_update_timestamp,
            b_token_address=checksum(b_token),
            debt_token_address=checksum(debt_token),
            interest_rate_address=checksum(interest_rate),
            id=reserve_id,
        )

    async def get_nft_data(self, asset: str) -> NftRecord:
        configuration, b_nft, nft_id, max_supply, max_token_id = await self._call(
            abi.GET_NFT_DATA, checksum(asset)
        )
        return NftRecord(
            configuration=configuration,
            b_nft_address=checksum(b_nft),
            id=nft_id,
            max_supply=max_supply,
            max_token_id=max_token_id,
        )

    async def get_nft_loan_data(self, asset: str, token_id: int) -> LoanRiskData:
        values = await self._call(abi.GET_NFT_LOAN_DATA, checksum(asset), token_id)
        return LoanRiskData(*values)


class EvmLoanLedger(_Contract):
    """Lend pool loan contract."""

    async def get_nft_collateral_amount(self, asset: str) -> int:
        return await self._call_one(abi.GET_NFT_COLLATERAL_AMOUNT, checksum(asset))

    async def get_user_nft_collateral_amount(self, user: str, asset: str) -> int:
        return await self._call_one(
            abi.GET_USER_NFT_COLLATERAL_AMOUNT, checksum(user), checksum(asset)
        )


# ---------------------------------------------------------------------------
# Oracles and incentives
# ---------------------------------------------------------------------------


class EvmPriceOracle(_Contract):
    """Reserve or NFT oracle; both expose ``getAssetPrice(address)``."""

    async def get_asset_price(self, asset: str) -> int:
        return await self._call_one(abi.GET_ASSET_PRICE, checksum(asset))


class EvmIncentivesController(_Contract):
    async def get_asset_data(self, asset: str) -> AssetIncentives:
        index, emission_per_second, last_update = await self._call(
            abi.GET_ASSET_DATA, checksum(asset)
        )
        return AssetIncentives(
            index=index,
            emission_per_second=emission_per_second,
            last_update_timestamp=last_update,
        )

    async def get_user_asset_data(self, user: str, asset: str) -> int:
        return await self._call_one(
            abi.GET_USER_ASSET_DATA, checksum(user), checksum(asset)
        )

    async def get_user_unclaimed_rewards(self, user: str) -> int:
        return await self._call_one(abi.GET_USER_UNCLAIMED_REWARDS, checksum(user))

    async def distribution_end(self) -> int:
        return await self._call_one(abi.DISTRIBUTION_END)


# ---------------------------------------------------------------------------
# Tokens and rate strategy
# ---------------------------------------------------------------------------


class _TokenMetadata(_Contract):
    async def symbol(self) -> str:
        return decode_text(await self._raw(abi.SYMBOL))

    async def name(self) -> str:
        return decode_text(await self._raw(abi.NAME))


class Erc20Token(_TokenMetadata):
    async def balance_of(self, account: str) -> int:
        return await self._call_one(abi.BALANCE_OF, checksum(account))


class Erc721Token(_TokenMetadata):
    pass


class ScaledToken(_Contract):
    """bToken or debt token."""

    async def scaled_balance_of(self, user: str) -> int:
        return await self._call_one(abi.SCALED_BALANCE_OF, checksum(user))

    async def scaled_total_supply(self) -> int:
        return await self._call_one(abi.SCALED_TOTAL_SUPPLY)


class InterestRateStrategy(_Contract):
    async def variable_rate_slope1(self) -> int:
        return await self._call_one(abi.VARIABLE_RATE_SLOPE1)

    async def variable_rate_slope2(self) -> int:
        return await self._call_one(abi.VARIABLE_RATE_SLOPE2)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class EvmRegistry(_Contract):
    """Lend pool addresses provider.

    Ledger addresses are looked up on every call; binders share this
    registry's client, so a pinned client pins every derived read too.
    """

    async def pool_ledger(self) -> EvmPoolLedger:
        address = await self._call_one(abi.GET_LEND_POOL)
        logger.debug("Resolved lend pool %s", address)
        return EvmPoolLedger(self._client, address)

    async def loan_ledger(self) -> EvmLoanLedger:
        address = await self._call_one(abi.GET_LEND_POOL_LOAN)
        logger.debug("Resolved lend pool loan %s", address)
        return EvmLoanLedger(self._client, address)

    def fungible_token(self, address: str) -> Erc20Token:
        return Erc20Token(self._client, address)

    def scaled_token(self, address: str) -> ScaledToken:
        return ScaledToken(self._client, address)

    def non_fungible_token(self, address: str) -> Erc721Token:
        return Erc721Token(self._client, address)

    def rate_curve(self, address: str) -> InterestRateStrategy:
        return InterestRateStrategy(self._client, address)
