"""Service modules"""
from .aggregation import AggregationFacade, ParameterMismatchError, pair_loan_requests
from .query import QueryService

__all__ = [
    "AggregationFacade",
    "ParameterMismatchError",
    "QueryService",
    "pair_loan_requests",
]
