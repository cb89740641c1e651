"""Lend pool protocol integration."""
from .contracts import (
    EvmIncentivesController,
    EvmLoanLedger,
    EvmPoolLedger,
    EvmPriceOracle,
    EvmRegistry,
)

__all__ = [
    "EvmIncentivesController",
    "EvmLoanLedger",
    "EvmPoolLedger",
    "EvmPriceOracle",
    "EvmRegistry",
]
