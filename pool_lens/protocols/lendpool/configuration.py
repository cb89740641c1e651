"""Pure decoding functions for pool configuration bitmaps: no I/O.

Reserve layout:
    bit 0-15   LTV (bps)
    bit 16-31  liquidation threshold (bps)
    bit 32-47  liquidation bonus (bps)
    bit 48-55  decimals
    bit 56     active
    bit 57     frozen
    bit 58     borrowing enabled
    bit 64-79  reserve factor (bps)

NFT layout shares bits 0-47, 56 and 57 with the reserve layout.
"""
from __future__ import annotations

from ...models import NftConfiguration, ReserveConfiguration

LTV_START = 0
LIQUIDATION_THRESHOLD_START = 16
LIQUIDATION_BONUS_START = 32
DECIMALS_START = 48
ACTIVE_BIT = 56
FROZEN_BIT = 57
BORROWING_BIT = 58
RESERVE_FACTOR_START = 64


def conf_bits(configuration: int, start: int, length: int) -> int:
    """Extract ``length`` bits starting at ``start``."""
    mask = (1 << length) - 1
    return (configuration >> start) & mask


def conf_flag(configuration: int, bit: int) -> bool:
    return bool(conf_bits(configuration, bit, 1))


def decode_reserve_configuration(configuration: int) -> ReserveConfiguration:
    """Decode a reserve configuration bitmap.

    Examples:
        decode_reserve_configuration(0) → all fields zero / False
    """
    return ReserveConfiguration(
        ltv=conf_bits(configuration, LTV_START, 16),
        liquidation_threshold=conf_bits(configuration, LIQUIDATION_THRESHOLD_START, 16),
        liquidation_bonus=conf_bits(configuration, LIQUIDATION_BONUS_START, 16),
        decimals=conf_bits(configuration, DECIMALS_START, 8),
        reserve_factor=conf_bits(configuration, RESERVE_FACTOR_START, 16),
        is_active=conf_flag(configuration, ACTIVE_BIT),
        is_frozen=conf_flag(configuration, FROZEN_BIT),
        borrowing_enabled=conf_flag(configuration, BORROWING_BIT),
    )


def decode_nft_configuration(configuration: int) -> NftConfiguration:
    """Decode an NFT pool configuration bitmap."""
    return NftConfiguration(
        ltv=conf_bits(configuration, LTV_START, 16),
        liquidation_threshold=conf_bits(configuration, LIQUIDATION_THRESHOLD_START, 16),
        liquidation_bonus=conf_bits(configuration, LIQUIDATION_BONUS_START, 16),
        is_active=conf_flag(configuration, ACTIVE_BIT),
        is_frozen=conf_flag(configuration, FROZEN_BIT),
    )

