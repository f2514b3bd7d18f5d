"""Drainage basins as a union-find over grid cells, used to keep rivers from looping back."""

from scipy.cluster.hierarchy import DisjointSet


def basin_forest(cell_count: int) -> DisjointSet:
    """One singleton basin per cell, keyed by `cell_key`."""
    return DisjointSet(range(cell_count))


def cell_key(row: int, column: int, size: int) -> int:
    """Dense union-find key for a cell (row-major index)."""
    return row * size + column
