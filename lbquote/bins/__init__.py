"""Bin value type and ordered bin book."""

from lbquote.bins.book import Bin, BinBook, SwapDirection

__all__ = ["Bin", "BinBook", "SwapDirection"]
