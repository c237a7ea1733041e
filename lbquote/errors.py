"""Liquidity-book kernel error classes.

All kernel failures are local and synchronous. Each error carries the
offending field and value (when there is one) so callers can decide whether
to retry with adjusted parameters or surface the failure.
"""

from __future__ import annotations

from typing import Any


class LiquidityBookError(Exception):
    """Base error for quoting and fee-configuration operations."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value

    @property
    def kind(self) -> str:
        """Error kind name used in API responses."""
        return type(self).__name__


class InvalidParameterRange(LiquidityBookError):
    """A structural input violates a bound (bin id, bin step, fee limits, ...)."""

    pass


class NonIntegralBaseFactor(LiquidityBookError):
    """Requested fee cannot be represented by an exact integer base factor."""

    pass


class InsufficientLiquidity(LiquidityBookError):
    """The bin walk exhausted the book before the requested amount was filled."""

    def __init__(
        self,
        message: str,
        *,
        direction: str | None = None,
        last_bin_id: int | None = None,
    ) -> None:
        super().__init__(message, field="bins", value=last_bin_id)
        self.direction = direction
        self.last_bin_id = last_bin_id


def require(condition: bool, field: str, value: Any, message: str) -> None:
    """Raise InvalidParameterRange naming ``field`` unless ``condition`` holds."""
    if not condition:
        raise InvalidParameterRange(f"{field}: {message} (got {value!r})", field=field, value=value)


__all__ = [
    "LiquidityBookError",
    "InvalidParameterRange",
    "NonIntegralBaseFactor",
    "InsufficientLiquidity",
    "require",
]
