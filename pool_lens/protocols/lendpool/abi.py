"""Call signatures and return types of the lending protocol contracts.

Struct returns are static tuples, so they decode as flat type lists.
"""
from __future__ import annotations

# Registry (addresses provider)
GET_LEND_POOL = ("getLendPool()", ["address"])
GET_LEND_POOL_LOAN = ("getLendPoolLoan()", ["address"])

# Pool ledger
GET_RESERVES_LIST = ("getReservesList()", ["address[]"])
GET_NFTS_LIST = ("getNftsList()", ["address[]"])
GET_RESERVE_DATA = (
    "getReserveData(address)",
    [
        "uint256",  # configuration
        "uint128",  # liquidityIndex
        "uint128",  # variableBorrowIndex
        "uint128",  # currentLiquidityRate
        "uint128",  # currentVariableBorrowRate
        "uint40",  # lastUpdateTimestamp
        "address",  # bTokenAddress
        "address",  # debtTokenAddress
        "address",  # interestRateAddress
        "uint8",  # id
    ],
)
GET_NFT_DATA = (
    "getNftData(address)",
    [
        "uint256",  # configuration
        "address",  # bNftAddress
        "uint8",  # id
        "uint256",  # maxSupply
        "uint256",  # maxTokenId
    ],
)
GET_NFT_LOAN_DATA = (
    "getNftLoanData(address,uint256)",
    [
        "uint256",  # totalCollateral (reference unit)
        "uint256",  # totalDebt (reference unit)
        "uint256",  # availableBorrows (reference unit)
        "uint256",  # ltv
        "uint256",  # liquidationThreshold
        "uint256",  # loanId
        "uint256",  # healthFactor
    ],
)

# Loan ledger
GET_NFT_COLLATERAL_AMOUNT = ("getNftCollateralAmount(address)", ["uint256"])
GET_USER_NFT_COLLATERAL_AMOUNT = (
    "getUserNftCollateralAmount(address,address)",
    ["uint256"],
)

# Oracles
GET_ASSET_PRICE = ("getAssetPrice(address)", ["uint256"])

# Incentives controller
GET_ASSET_DATA = ("getAssetData(address)", ["uint256", "uint256", "uint256"])
GET_USER_ASSET_DATA = ("getUserAssetData(address,address)", ["uint256"])
GET_USER_UNCLAIMED_REWARDS = ("getUserUnclaimedRewards(address)", ["uint256"])
DISTRIBUTION_END = ("DISTRIBUTION_END()", ["uint256"])

# Tokens
SYMBOL = "symbol()"
NAME = "name()"
BALANCE_OF = ("balanceOf(address)", ["uint256"])
SCALED_BALANCE_OF = ("scaledBalanceOf(address)", ["uint256"])
SCALED_TOTAL_SUPPLY = ("scaledTotalSupply()", ["uint256"])

# Interest rate strategy
VARIABLE_RATE_SLOPE1 = ("variableRateSlope1()", ["uint256"])
VARIABLE_RATE_SLOPE2 = ("variableRateSlope2()", ["uint256"])
