"""Tree node capability used by cascade data sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Sequence


class TreeNode(ABC):
    """A node with a display label and an ordered sequence of children.

    Any class can take part in cascade data either by subclassing or through
    ``TreeNode.register(cls)``.
    """

    @abstractmethod
    def display_label(self) -> str:
        """Label shown for this node and used to match committed values."""

    @abstractmethod
    def children(self) -> Sequence['TreeNode']:
        """Child nodes in display order."""


@dataclass(eq=False)
class CascaderNode(TreeNode):
    """Named node owning its child list. Compared by identity."""
    name: str
    children_list: List['CascaderNode'] = field(default_factory=list)

    def display_label(self) -> str:
        return self.name

    def children(self) -> Sequence['CascaderNode']:
        return self.children_list

    def __str__(self) -> str:
        return self.name
