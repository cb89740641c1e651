"""Token and rate-curve protocols bound from addresses in pool records."""
from typing import Protocol


class FungibleToken(Protocol):
    async def symbol(self) -> str: ...

    async def name(self) -> str: ...

    async def balance_of(self, account: str) -> int: ...


class ScaledBalanceToken(Protocol):
    """Interest-bearing or debt token that tracks index-normalised balances."""

    async def scaled_balance_of(self, user: str) -> int: ...

    async def scaled_total_supply(self) -> int: ...


class NonFungibleToken(Protocol):
    async def symbol(self) -> str: ...

    async def name(self) -> str: ...


class RateCurve(Protocol):
    """Interest rate strategy of a reserve."""

    async def variable_rate_slope1(self) -> int: ...

    async def variable_rate_slope2(self) -> int: ...
