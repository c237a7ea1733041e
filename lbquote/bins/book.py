"""Bins and the ordered bin book walked by the swap engine."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from lbquote.errors import InsufficientLiquidity, require
from lbquote.math.price import validate_bin_id

logger = structlog.get_logger()


class SwapDirection(str, Enum):
    """Direction of a bin walk.

    UP walks toward higher ids looking for X liquidity; DOWN walks toward
    lower ids looking for Y liquidity.
    """

    UP = "up"
    DOWN = "down"

    @property
    def step(self) -> int:
        return 1 if self is SwapDirection.UP else -1


@dataclass(frozen=True)
class Bin:
    """One discrete price slot of a pool.

    Attributes:
        bin_id: Index on the price ladder
        reserves_x: Amount of X held by the bin
        reserves_y: Amount of Y held by the bin
        liquidity_gross: Pass-through accounting field
        fee_growth_x: Pass-through accounting field
        fee_growth_y: Pass-through accounting field
        pool_addr: Owning pool, when known
    """

    bin_id: int
    reserves_x: int
    reserves_y: int
    liquidity_gross: int = 0
    fee_growth_x: int = 0
    fee_growth_y: int = 0
    pool_addr: str | None = None

    def __post_init__(self) -> None:
        validate_bin_id(self.bin_id)
        require(self.reserves_x >= 0, "reserves_x", self.reserves_x, "must be non-negative")
        require(self.reserves_y >= 0, "reserves_y", self.reserves_y, "must be non-negative")

    def reserve_for(self, direction: SwapDirection) -> int:
        """Reserve that can leave the bin when walking in ``direction``."""
        return self.reserves_x if direction is SwapDirection.UP else self.reserves_y

    def has_liquidity(self, direction: SwapDirection) -> bool:
        return self.reserve_for(direction) > 0


class BinBook:
    """Read-only sequence of bins, strictly increasing by bin id.

    The book is built fresh for each quote from a caller snapshot and is
    never mutated.
    """

    __slots__ = ("_bins", "_ids")

    def __init__(self, bins: Iterable[Bin]) -> None:
        self._bins: tuple[Bin, ...] = tuple(bins)
        self._ids: tuple[int, ...] = tuple(b.bin_id for b in self._bins)
        for prev, curr in zip(self._ids, self._ids[1:]):
            require(
                curr > prev,
                "bins",
                (prev, curr),
                "bin ids must be strictly increasing",
            )

    @classmethod
    def from_unsorted(cls, bins: Iterable[Bin]) -> BinBook:
        """Sort bins by id first; duplicate ids are still rejected."""
        return cls(sorted(bins, key=lambda b: b.bin_id))

    def __len__(self) -> int:
        return len(self._bins)

    def __iter__(self) -> Iterator[Bin]:
        return iter(self._bins)

    @property
    def bins(self) -> Sequence[Bin]:
        return self._bins

    def get(self, bin_id: int) -> Bin | None:
        """Bin with exactly ``bin_id``, or None."""
        index = bisect_left(self._ids, bin_id)
        if index < len(self._ids) and self._ids[index] == bin_id:
            return self._bins[index]
        return None

    def total_reserves(self) -> tuple[int, int]:
        """Sum of (reserves_x, reserves_y) over all bins."""
        return (
            sum(b.reserves_x for b in self._bins),
            sum(b.reserves_y for b in self._bins),
        )

    def next_liquid_bin(self, from_id: int, direction: SwapDirection) -> Bin:
        """Nearest bin at or past ``from_id`` in ``direction`` with liquidity.

        If ``from_id`` is not in the book the scan starts at its insertion
        point. The scan moves one index at a time toward the end of the book
        in ``direction`` and stops there.

        Raises:
            InsufficientLiquidity: If no bin in that direction holds the
                required reserve
        """
        index = bisect_left(self._ids, from_id)
        if direction is SwapDirection.DOWN and (
            index == len(self._ids) or self._ids[index] != from_id
        ):
            # Insertion point is the first id above from_id; step below it
            index -= 1

        step = direction.step
        while 0 <= index < len(self._bins):
            candidate = self._bins[index]
            if candidate.has_liquidity(direction):
                return candidate
            index += step

        logger.debug(
            "bin_book_exhausted",
            from_id=from_id,
            direction=direction.value,
            bin_count=len(self._bins),
        )
        raise InsufficientLiquidity(
            f"No bin with liquidity at or {'above' if step > 0 else 'below'} {from_id}",
            direction=direction.value,
            last_bin_id=from_id,
        )


__all__ = ["Bin", "BinBook", "SwapDirection"]
