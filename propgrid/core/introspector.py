"""
Instance → grouped, sorted property entries.

PropertyIntrospector does the pure build. PropertyGridModel holds the
non-visual state of a grid (inspected object, published groups, selected
entry) and rebuilds whenever the inspected object changes.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from propgrid.core.coercion import TypeCoercionBridge
from propgrid.core.entry import PropertyEntry
from propgrid.core.groups import CategoryGroup
from propgrid.introspection.provider import DescriptorProvider, get_descriptor_provider
from propgrid.utils.collation import collation_key
from propgrid.utils.performance_monitor import timer

logger = logging.getLogger(__name__)


class PropertyIntrospector:
    """
    Builds category groups for an instance.

    Only browsable descriptors become entries. Categories that compare equal
    case-insensitively under the current locale share one group, named after
    the first spelling encountered. Groups are ordered by name and entries by
    display name, with the same collation; ties keep enumeration order.

    Args:
        provider: Descriptor provider to use for every instance; by default the
                  provider registered for the instance's type (reflection otherwise)
        bridge_factory: Creates the coercion bridge owned by each entry
    """

    def __init__(
        self,
        provider: Optional[DescriptorProvider] = None,
        bridge_factory: Callable[[], TypeCoercionBridge] = TypeCoercionBridge,
    ):
        self._provider = provider
        self._bridge_factory = bridge_factory

    def build(self, instance: Any) -> List[CategoryGroup]:
        if instance is None:
            return []

        provider = self._provider or get_descriptor_provider(instance)
        with timer(f"PropertyIntrospector.build ({type(instance).__name__})", threshold_ms=5.0):
            descriptors = [d for d in provider.get_descriptors(instance) if d.browsable]
            entries = [PropertyEntry(instance, d, bridge=self._bridge_factory()) for d in descriptors]

            buckets: Dict[str, Tuple[str, List[PropertyEntry]]] = {}
            for entry in entries:
                key = collation_key(entry.category)
                if key not in buckets:
                    buckets[key] = (entry.category, [])
                buckets[key][1].append(entry)

            groups = []
            for key in sorted(buckets):
                name, members = buckets[key]
                members.sort(key=lambda e: collation_key(e.display_name))
                groups.append(CategoryGroup(name, members))

        logger.debug(
            f"Built {len(groups)} groups / {len(entries)} entries for {type(instance).__name__}"
        )
        return groups


class PropertyGridModel(QObject):
    """
    Inspection session state for one grid.

    Signals:
        groups_changed(): the published groups were replaced
        selected_entry_changed(object): new selected entry (or None)
    """

    groups_changed = pyqtSignal()
    selected_entry_changed = pyqtSignal(object)

    def __init__(self, introspector: Optional[PropertyIntrospector] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._introspector = introspector or PropertyIntrospector()
        self._selected_object: Any = None
        self._groups: Tuple[CategoryGroup, ...] = ()
        self._selected_entry: Optional[PropertyEntry] = None

    @property
    def selected_object(self) -> Any:
        return self._selected_object

    @selected_object.setter
    def selected_object(self, instance: Any) -> None:
        if instance is self._selected_object:
            return
        self._selected_object = instance
        self.refresh()

    @property
    def groups(self) -> Tuple[CategoryGroup, ...]:
        return self._groups

    @property
    def selected_entry(self) -> Optional[PropertyEntry]:
        return self._selected_entry

    @selected_entry.setter
    def selected_entry(self, entry: Optional[PropertyEntry]) -> None:
        if entry is self._selected_entry:
            return
        if entry is not None and not any(e is entry for e in self.iter_entries()):
            logger.debug(f"Ignoring selection of entry outside the current groups: {entry!r}")
            return
        self._selected_entry = entry
        self.selected_entry_changed.emit(entry)

    def refresh(self) -> None:
        """Re-inspect the selected object and publish the new groups."""
        new_groups = tuple(self._introspector.build(self._selected_object))

        # Swap only after the complete set exists
        had_selection = self._selected_entry is not None
        self._groups = new_groups
        self._selected_entry = None
        if self._selected_object is None:
            logger.debug("Inspection cleared")
        else:
            logger.info(
                f"Inspecting {type(self._selected_object).__name__}: {len(new_groups)} categories"
            )
        self.groups_changed.emit()
        if had_selection:
            self.selected_entry_changed.emit(None)

    def toggle_group(self, group: CategoryGroup) -> None:
        if any(g is group for g in self._groups):
            group.toggle()

    def iter_entries(self) -> Iterator[PropertyEntry]:
        for group in self._groups:
            yield from group.entries

    def find_entry(self, name: str) -> Optional[PropertyEntry]:
        for entry in self.iter_entries():
            if entry.name == name:
                return entry
        return None
