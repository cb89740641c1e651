"""EVM chain client."""
from .client import ContractCallError, EvmClient

__all__ = ["ContractCallError", "EvmClient"]
