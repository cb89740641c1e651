"""Pool and loan ledger protocols."""
from typing import Protocol

from ..models import LoanRiskData, NftRecord, ReserveRecord


class PoolLedger(Protocol):
    """Authoritative reserve and NFT pool records."""

    async def get_reserves_list(self) -> list[str]: ...

    async def get_reserve_data(self, asset: str) -> ReserveRecord: ...

    async def get_nfts_list(self) -> list[str]: ...

    async def get_nft_data(self, asset: str) -> NftRecord: ...

    async def get_nft_loan_data(self, asset: str, token_id: int) -> LoanRiskData: ...


class LoanLedger(Protocol):
    """Collateral accounting per NFT asset and user."""

    async def get_nft_collateral_amount(self, asset: str) -> int: ...

    async def get_user_nft_collateral_amount(self, user: str, asset: str) -> int: ...
