"""
Structural equivalence of XML document trees.

Compares two document trees under configurable rules (significance of order, additional items and node kinds), and
locates the first pair of nodes at which the trees diverge.
"""

from ._version import __version__
from .compare import Mismatch, TreeComparator, deep_equals, is_equivalent
from .options import ComparisonOptions

__all__ = ["__version__", "ComparisonOptions", "Mismatch", "TreeComparator", "deep_equals", "is_equivalent"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
