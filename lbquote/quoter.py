"""Snapshot provider interface and a quoter that runs the kernel over it.

The kernel itself never fetches anything. Retrieval (indexer pagination,
RPC reads) and transaction submission live in collaborators outside this
package; SnapshotProvider is the narrow seam they plug into. Indexers serve
bins in pages (lbquote.models.BinPage); a provider flattens those pages into
one bin list per pool, as InMemorySnapshotProvider.add_pool_pages does.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

import structlog

from lbquote.bins.book import Bin, BinBook
from lbquote.models.snapshot import BinPage
from lbquote.models.types import normalize_address
from lbquote.swap.engine import quote_exact_in, quote_exact_out
from lbquote.swap.pool import Pool
from lbquote.swap.result import SwapQuote

logger = structlog.get_logger()


class SnapshotProvider(Protocol):
    """Protocol for pool/bin snapshot sources.

    This allows swapping between an indexer-backed provider and an in-memory
    provider for testing.
    """

    def get_pool(self, address: str) -> Pool | None:
        """Get the latest pool snapshot, or None if the pool is unknown."""
        ...

    def get_bins(self, address: str) -> Sequence[Bin]:
        """Get every bin of the pool (any order)."""
        ...


class InMemorySnapshotProvider:
    """Dict-backed snapshot provider for tests and offline quoting.

    Tracks calls for assertions.
    """

    def __init__(
        self,
        pools: dict[str, Pool] | None = None,
        bins: dict[str, Iterable[Bin]] | None = None,
    ):
        self.pools = {normalize_address(k): v for k, v in (pools or {}).items()}
        self.bins = {normalize_address(k): list(v) for k, v in (bins or {}).items()}
        self.calls: list[tuple[str, str]] = []  # (method, address)

    def add_pool(self, address: str, pool: Pool, bins: Iterable[Bin]) -> None:
        key = normalize_address(address)
        self.pools[key] = pool
        self.bins[key] = list(bins)

    def add_pool_pages(self, address: str, pool: Pool, pages: Iterable[BinPage]) -> None:
        """Register a pool whose bins arrive as indexer pages."""
        self.add_pool(address, pool, [b for page in pages for b in page.to_bins()])

    def get_pool(self, address: str) -> Pool | None:
        self.calls.append(("get_pool", address))
        return self.pools.get(normalize_address(address))

    def get_bins(self, address: str) -> Sequence[Bin]:
        self.calls.append(("get_bins", address))
        return self.bins.get(normalize_address(address), [])


class PoolQuoter:
    """Quotes swaps for pools fetched from a SnapshotProvider.

    Attributes:
        provider: Source of pool and bin snapshots
        clock: Returns the current unix time; used when no timestamp is given
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self.clock = clock

    def _load(self, address: str) -> tuple[Pool, BinBook] | None:
        pool = self.provider.get_pool(address)
        if pool is None:
            logger.debug("quoter_unknown_pool", pool=address)
            return None
        return pool, BinBook.from_unsorted(self.provider.get_bins(address))

    def _now(self, now: int | None) -> int:
        return int(self.clock()) if now is None else now

    def quote_exact_in(
        self,
        address: str,
        amount_in: int,
        swap_for_x: bool,
        now: int | None = None,
    ) -> SwapQuote | None:
        """Quote an exact-in swap, or None if the pool is unknown.

        Kernel errors (InvalidParameterRange, InsufficientLiquidity) propagate.
        """
        loaded = self._load(address)
        if loaded is None:
            return None
        pool, book = loaded
        return quote_exact_in(pool, book, amount_in, swap_for_x, self._now(now))

    def quote_exact_out(
        self,
        address: str,
        amount_out: int,
        swap_for_x: bool,
        now: int | None = None,
    ) -> SwapQuote | None:
        """Quote an exact-out swap, or None if the pool is unknown."""
        loaded = self._load(address)
        if loaded is None:
            return None
        pool, book = loaded
        return quote_exact_out(pool, book, amount_out, swap_for_x, self._now(now))


__all__ = ["SnapshotProvider", "InMemorySnapshotProvider", "PoolQuoter"]
