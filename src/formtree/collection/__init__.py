"""Children collections and their dependency ordering."""

from formtree.collection.level import Level
from formtree.collection.tree import DependencyTree, iterate_levels

__all__ = ["DependencyTree", "Level", "iterate_levels"]
