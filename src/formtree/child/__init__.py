"""Children — named slots of containers."""

from formtree.child.builder import ChildBuilder
from formtree.child.child import Child

__all__ = ["Child", "ChildBuilder"]
