"""
CascadeSelector: three dependent levels of selection over a TreeNode forest.

State is the tuple (level1, level2, level3) with level3 ⇒ level2 ⇒ level1.
Option lists are derived from the parent selection and never set directly:

    level1_options = roots
    level2_options = level1.children() if level1 else ()
    level3_options = level2.children() if level2 else ()

Selecting the third level while the first two are set commits the joined
labels through the owner's commit callback and closes the dropdown. There is
no terminal state; the selector can be re-navigated and re-committed.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

from propgrid.config import get_grid_config
from propgrid.core.tree_node import TreeNode
from propgrid.utils.collation import texts_equal

logger = logging.getLogger(__name__)


def _contains(options: Sequence[TreeNode], node: TreeNode) -> bool:
    return any(option is node for option in options)


def _find_by_label(options: Sequence[TreeNode], label: str) -> Optional[TreeNode]:
    for option in options:
        if texts_equal(option.display_label(), label):
            return option
    return None


class CascadeSelector:
    """Per-entry cascade state machine.

    Args:
        roots: Root forest (level 1 options), snapshotted as a tuple
        on_commit: Called with the joined label string when a full path is selected
        notify: Called with the accessor name whenever observable state changes
        separator: Level separator; defaults to the configured cascade separator
    """

    def __init__(
        self,
        roots: Sequence[TreeNode] = (),
        on_commit: Optional[Callable[[str], None]] = None,
        notify: Optional[Callable[[str], None]] = None,
        separator: Optional[str] = None,
    ):
        self._level1_options: Tuple[TreeNode, ...] = tuple(roots)
        self._level2_options: Tuple[TreeNode, ...] = ()
        self._level3_options: Tuple[TreeNode, ...] = ()
        self._level1: Optional[TreeNode] = None
        self._level2: Optional[TreeNode] = None
        self._level3: Optional[TreeNode] = None
        self._is_open = False
        self._on_commit = on_commit
        self._notify = notify or (lambda name: None)
        self._separator = separator or get_grid_config().cascade_separator
        self._seeding = False

    # ========== STATE ==========

    @property
    def level1(self) -> Optional[TreeNode]:
        return self._level1

    @property
    def level2(self) -> Optional[TreeNode]:
        return self._level2

    @property
    def level3(self) -> Optional[TreeNode]:
        return self._level3

    @property
    def level1_options(self) -> Tuple[TreeNode, ...]:
        return self._level1_options

    @property
    def level2_options(self) -> Tuple[TreeNode, ...]:
        return self._level2_options

    @property
    def level3_options(self) -> Tuple[TreeNode, ...]:
        return self._level3_options

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def is_complete(self) -> bool:
        return self._level1 is not None and self._level2 is not None and self._level3 is not None

    @property
    def is_open(self) -> bool:
        return self._is_open

    @is_open.setter
    def is_open(self, value: bool) -> None:
        value = bool(value)
        if value == self._is_open:
            return
        self._is_open = value
        self._notify('is_cascader_open')

    def toggle(self) -> None:
        self.is_open = not self._is_open

    # ========== TRANSITIONS ==========

    def set_level1(self, node: Optional[TreeNode]) -> None:
        if node is self._level1:
            return
        if node is not None and not _contains(self._level1_options, node):
            logger.debug(f"Ignoring level 1 node not among root options: {node!r}")
            return

        self._level1 = node
        self._notify('selected_level1')
        self._clear_level2()
        self._level2_options = tuple(node.children()) if node is not None else ()
        self._notify('level2_options')
        self._clear_level3()
        self._level3_options = ()
        self._notify('level3_options')

    def set_level2(self, node: Optional[TreeNode]) -> None:
        if node is self._level2:
            return
        if node is not None and not _contains(self._level2_options, node):
            logger.debug(f"Ignoring level 2 node not among children of {self._level1!r}: {node!r}")
            return

        self._level2 = node
        self._notify('selected_level2')
        self._clear_level3()
        self._level3_options = tuple(node.children()) if node is not None else ()
        self._notify('level3_options')

    def set_level3(self, node: Optional[TreeNode]) -> None:
        if node is self._level3:
            return
        if node is not None and not _contains(self._level3_options, node):
            logger.debug(f"Ignoring level 3 node not among children of {self._level2!r}: {node!r}")
            return

        self._level3 = node
        self._notify('selected_level3')
        if self.is_complete and not self._seeding:
            self._commit()

    def joined_labels(self) -> str:
        """Labels of the selected levels joined by the separator."""
        selected = (self._level1, self._level2, self._level3)
        return self._separator.join(node.display_label() for node in selected if node is not None)

    def seed(self, value: Optional[str]) -> None:
        """Pre-select levels from a committed string such as ``'A/A1/A1-1'``.

        Parts are trimmed and empty parts dropped; each part is matched by
        display label among the current level's options. Seeding stops at the
        first unmatched part and never commits.
        """
        if not value or not value.strip():
            return
        parts = [part.strip() for part in value.split(self._separator) if part.strip()]
        setters = (
            (self.set_level1, lambda: self._level1_options),
            (self.set_level2, lambda: self._level2_options),
            (self.set_level3, lambda: self._level3_options),
        )
        self._seeding = True
        try:
            for part, (setter, options) in zip(parts, setters):
                node = _find_by_label(options(), part)
                if node is None:
                    logger.debug(f"Cascade seed stopped: no option labelled {part!r}")
                    break
                setter(node)
        finally:
            self._seeding = False

    def _clear_level2(self) -> None:
        if self._level2 is not None:
            self._level2 = None
            self._notify('selected_level2')

    def _clear_level3(self) -> None:
        if self._level3 is not None:
            self._level3 = None
            self._notify('selected_level3')

    def _commit(self) -> None:
        value = self.joined_labels()
        logger.debug(f"Cascade commit: {value!r}")
        if self._on_commit is not None:
            self._on_commit(value)
        self.is_open = False
