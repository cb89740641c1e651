"""Read-only aggregation of lending pool state for NFT-collateralised markets."""

__version__ = "0.1.0"
