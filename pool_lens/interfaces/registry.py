"""Registry protocol: resolves the protocol's current services."""
from typing import Protocol

from .ledgers import LoanLedger, PoolLedger
from .tokens import FungibleToken, NonFungibleToken, RateCurve, ScaledBalanceToken


class Registry(Protocol):
    """Lookup service for protocol components.

    Ledgers are resolved on every call since the registry may point them at
    upgraded deployments. Binders attach a service interface to an address
    found in a pool record and perform no I/O.
    """

    async def pool_ledger(self) -> PoolLedger: ...

    async def loan_ledger(self) -> LoanLedger: ...

    def fungible_token(self, address: str) -> FungibleToken: ...

    def scaled_token(self, address: str) -> ScaledBalanceToken: ...

    def non_fungible_token(self, address: str) -> NonFungibleToken: ...

    def rate_curve(self, address: str) -> RateCurve: ...
