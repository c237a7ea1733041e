"""Pydantic models for indexer snapshots."""

from lbquote.models.quote import ErrorResponse, QuoteRequest, QuoteResponse
from lbquote.models.snapshot import (
    BinPage,
    BinSnapshot,
    FeeParamsSnapshot,
    Pagination,
    PoolSnapshot,
)
from lbquote.models.types import U64, U128, AccountAddress, normalize_address

__all__ = [
    # Snapshots
    "FeeParamsSnapshot",
    "BinSnapshot",
    "PoolSnapshot",
    "Pagination",
    "BinPage",
    # Quote API
    "QuoteRequest",
    "QuoteResponse",
    "ErrorResponse",
    # Types
    "U64",
    "U128",
    "AccountAddress",
    "normalize_address",
]
