"""Console user interface package for the student folder sorter."""

from .sort_tui import SortTUI

__all__ = ["SortTUI"]
