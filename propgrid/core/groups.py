"""CategoryGroup: a named, ordered bucket of property entries."""

from typing import Iterable, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from propgrid.core.entry import PropertyEntry


class CategoryGroup(QObject):
    """Entries sharing one category. ``expanded`` is UI state only."""

    property_changed = pyqtSignal(str)

    def __init__(self, name: str, entries: Iterable[PropertyEntry], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._name = name
        self._entries: Tuple[PropertyEntry, ...] = tuple(entries)
        self._expanded = True

    def __repr__(self) -> str:
        return f"CategoryGroup(name={self._name!r}, entries={len(self._entries)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def entries(self) -> Tuple[PropertyEntry, ...]:
        return self._entries

    @property
    def expanded(self) -> bool:
        return self._expanded

    @expanded.setter
    def expanded(self, value: bool) -> None:
        value = bool(value)
        if value != self._expanded:
            self._expanded = value
            self.property_changed.emit('expanded')

    def toggle(self) -> None:
        self.expanded = not self._expanded
