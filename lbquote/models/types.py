"""Shared type definitions for snapshot models.

Indexers serialize u64/u128 values as decimal strings (JSON numbers lose
precision past 2^53); these annotated types accept either form and
validate the range.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from lbquote.constants import U64_MAX, U128_MAX


def _validate_unsigned(value: Any, max_value: int, type_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{type_name} must be an integer, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"{type_name} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"{type_name} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"{type_name} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{type_name} overflow: {value} > {max_value}")
    return int_value


def validate_u64(value: Any) -> int:
    """Validate a u64 given as int or decimal string."""
    return _validate_unsigned(value, U64_MAX, "U64")


def validate_u128(value: Any) -> int:
    """Validate a u128 given as int or decimal string."""
    return _validate_unsigned(value, U128_MAX, "U128")


U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="Unsigned 64-bit integer (int or decimal string)"),
]

U128 = Annotated[
    int,
    BeforeValidator(validate_u128),
    Field(description="Unsigned 128-bit integer (int or decimal string)"),
]

# Account address (0x + 1..64 hex chars)
AccountAddress = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{1,64}$")]


def normalize_address(address: str) -> str:
    """Lowercase an account address and ensure the 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


__all__ = [
    "U64",
    "U128",
    "AccountAddress",
    "validate_u64",
    "validate_u128",
    "normalize_address",
]
