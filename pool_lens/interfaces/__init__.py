"""Protocol interfaces for the lending pool collaborators."""
from .incentives import IncentivesService
from .ledgers import LoanLedger, PoolLedger
from .price_oracle import PriceOracle
from .registry import Registry
from .tokens import FungibleToken, NonFungibleToken, RateCurve, ScaledBalanceToken

__all__ = [
    "FungibleToken",
    "IncentivesService",
    "LoanLedger",
    "NonFungibleToken",
    "PoolLedger",
    "PriceOracle",
    "RateCurve",
    "Registry",
    "ScaledBalanceToken",
]
