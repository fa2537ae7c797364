"""
PropertyEntry: live binding between one property of an instance and its editor.

The entry classifies the property into an EditorKind once, at construction,
and exposes the accessor set for that kind. Accessors that do not match the
kind ignore writes. Every successful write goes through the descriptor to
the instance and then announces all derived accessors on
``property_changed``, whichever accessor triggered it.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
import logging
from typing import Any, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from propgrid.config import get_grid_config
from propgrid.core.cascade import CascadeSelector
from propgrid.core.coercion import TypeCoercionBridge
from propgrid.core.list_picker import ListPickerResolver
from propgrid.core.tree_node import TreeNode
from propgrid.exceptions import CoercionError
from propgrid.introspection.descriptors import PropertyDescriptor
from propgrid.introspection.metadata import CascaderEditor, ListPickerEditor
from propgrid.utils.type_utils import friendly_type_name, is_bool_type, is_enum_type

logger = logging.getLogger(__name__)


class EditorKind(str, Enum):
    TEXT = "text"
    BOOL = "bool"
    ENUM = "enum"
    CASCADER = "cascader"
    LIST_PICKER = "list_picker"


# Accessors re-announced after every write-through
DERIVED_ACCESSORS = (
    'value',
    'string_value',
    'bool_value',
    'enum_value',
    'selected_item',
    'selected_item_display',
)


def classify_editor_kind(descriptor: PropertyDescriptor) -> EditorKind:
    """First match wins: bool, enum, string cascader, list picker, text."""
    declared_type = descriptor.declared_type
    if is_bool_type(declared_type):
        return EditorKind.BOOL
    if is_enum_type(declared_type):
        return EditorKind.ENUM
    if declared_type is str and isinstance(descriptor.editor, CascaderEditor):
        return EditorKind.CASCADER
    if isinstance(descriptor.editor, ListPickerEditor):
        return EditorKind.LIST_PICKER
    return EditorKind.TEXT


class PropertyEntry(QObject):
    """
    One inspectable property bound to its instance.

    Signals:
        property_changed(str): accessor name whose effective value changed
    """

    property_changed = pyqtSignal(str)

    def __init__(
        self,
        instance: Any,
        descriptor: PropertyDescriptor,
        bridge: Optional[TypeCoercionBridge] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._instance = instance
        self._descriptor = descriptor
        self._bridge = bridge or TypeCoercionBridge()
        self._editor_kind = classify_editor_kind(descriptor)
        self._type_name = friendly_type_name(descriptor.declared_type)
        self._enum_values: Tuple[Any, ...] = ()
        self._cascade: Optional[CascadeSelector] = None
        self._list_picker: Optional[ListPickerResolver] = None

        # Diagnostic channel: the last rejected text edit, cleared by the next accepted one
        self.last_coercion_error: Optional[CoercionError] = None

        if self._editor_kind is EditorKind.ENUM:
            self._enum_values = tuple(descriptor.declared_type)
        elif self._editor_kind is EditorKind.CASCADER:
            self._init_cascade()
        elif self._editor_kind is EditorKind.LIST_PICKER:
            self._init_list_picker()

    def __repr__(self) -> str:
        return f"PropertyEntry(name={self.name!r}, kind={self._editor_kind.value})"

    # ========== METADATA ==========

    @property
    def descriptor(self) -> PropertyDescriptor:
        return self._descriptor

    @property
    def instance(self) -> Any:
        return self._instance

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def display_name(self) -> str:
        return self._descriptor.display_name

    @property
    def description(self) -> str:
        return self._descriptor.description

    @property
    def category(self) -> str:
        return self._descriptor.category

    @property
    def declared_type(self) -> Any:
        return self._descriptor.declared_type

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def is_read_only(self) -> bool:
        return self._descriptor.is_read_only

    @property
    def editor_kind(self) -> EditorKind:
        return self._editor_kind

    @property
    def enum_values(self) -> Tuple[Any, ...]:
        return self._enum_values

    # ========== VALUE ACCESSORS ==========

    @property
    def value(self) -> Any:
        return self._descriptor.get(self._instance)

    @property
    def string_value(self) -> str:
        return self._bridge.to_display_string(self.value)

    @string_value.setter
    def string_value(self, text: Optional[str]) -> None:
        if self._editor_kind is not EditorKind.TEXT:
            return
        try:
            converted = self._bridge.from_display_string(text, self.declared_type)
        except CoercionError as e:
            # Rejected input leaves the prior value in place
            self.last_coercion_error = e
            logger.debug(f"Rejected edit of '{self.name}': {e}")
            return
        self.last_coercion_error = None
        self._write_value(converted)

    @property
    def bool_value(self) -> bool:
        value = self.value
        return isinstance(value, bool) and value

    @bool_value.setter
    def bool_value(self, value: bool) -> None:
        if self._editor_kind is not EditorKind.BOOL:
            return
        self._write_value(bool(value))

    @property
    def enum_value(self) -> Any:
        return self.value

    @enum_value.setter
    def enum_value(self, value: Any) -> None:
        if self._editor_kind is not EditorKind.ENUM or value is None:
            return
        if not isinstance(value, self.declared_type):
            try:
                value = self._bridge.from_display_string(str(value), self.declared_type)
            except CoercionError as e:
                logger.debug(f"Rejected enum value for '{self.name}': {e}")
                return
        self._write_value(value)

    # ========== CASCADE ACCESSORS ==========

    @property
    def cascade(self) -> Optional[CascadeSelector]:
        return self._cascade

    @property
    def level1_options(self) -> Tuple[TreeNode, ...]:
        return self._cascade.level1_options if self._cascade else ()

    @property
    def level2_options(self) -> Tuple[TreeNode, ...]:
        return self._cascade.level2_options if self._cascade else ()

    @property
    def level3_options(self) -> Tuple[TreeNode, ...]:
        return self._cascade.level3_options if self._cascade else ()

    @property
    def selected_level1(self) -> Optional[TreeNode]:
        return self._cascade.level1 if self._cascade else None

    @selected_level1.setter
    def selected_level1(self, node: Optional[TreeNode]) -> None:
        if self._cascade is not None:
            self._cascade.set_level1(node)

    @property
    def selected_level2(self) -> Optional[TreeNode]:
        return self._cascade.level2 if self._cascade else None

    @selected_level2.setter
    def selected_level2(self, node: Optional[TreeNode]) -> None:
        if self._cascade is not None:
            self._cascade.set_level2(node)

    @property
    def selected_level3(self) -> Optional[TreeNode]:
        return self._cascade.level3 if self._cascade else None

    @selected_level3.setter
    def selected_level3(self, node: Optional[TreeNode]) -> None:
        if self._cascade is not None:
            self._cascade.set_level3(node)

    @property
    def is_cascader_open(self) -> bool:
        return self._cascade.is_open if self._cascade else False

    @is_cascader_open.setter
    def is_cascader_open(self, value: bool) -> None:
        if self._cascade is not None:
            self._cascade.is_open = value

    def toggle_cascader(self) -> None:
        if self._cascade is not None:
            self._cascade.toggle()

    # ========== LIST PICKER ACCESSORS ==========

    @property
    def list_picker(self) -> Optional[ListPickerResolver]:
        return self._list_picker

    @property
    def item_options(self) -> Tuple[Any, ...]:
        return self._list_picker.candidates if self._list_picker else ()

    @property
    def selected_item(self) -> Any:
        return self._list_picker.selected if self._list_picker else None

    @selected_item.setter
    def selected_item(self, candidate: Any) -> None:
        if self._list_picker is not None:
            self._list_picker.set_selected(candidate)

    @property
    def selected_item_display(self) -> Optional[str]:
        return self._list_picker.selected_display if self._list_picker else None

    # ========== INTERNALS ==========

    def _notify(self, accessor: str) -> None:
        if get_grid_config().log_notifications:
            logger.debug(f"🔔 {self.name}.{accessor} changed")
        self.property_changed.emit(accessor)

    def _write_value(self, value: Any) -> None:
        """Write through to the instance and announce every derived accessor."""
        if self._descriptor.is_read_only:
            logger.debug(f"Dropped write to read-only property '{self.name}'")
            return
        self._descriptor.set(self._instance, value)
        for accessor in DERIVED_ACCESSORS:
            self._notify(accessor)

    def _items_from_source(self, source_name: Optional[str]) -> Optional[list]:
        """Snapshot a sibling attribute as a list; None if absent or not a collection."""
        if not source_name:
            return None
        source = getattr(self._instance, source_name, None)
        if source is None or isinstance(source, (str, bytes)):
            return None
        if isinstance(source, Mapping):
            return list(source.keys())
        if not isinstance(source, Iterable):
            logger.debug(f"Items source '{source_name}' of '{self.name}' is not iterable")
            return None
        return list(source)

    def _init_cascade(self) -> None:
        items = self._items_from_source(self._descriptor.editor.items_source) or []
        roots = [item for item in items if isinstance(item, TreeNode)]
        self._cascade = CascadeSelector(
            roots,
            on_commit=self._write_value,
            notify=self._notify,
        )
        current = self.value
        if isinstance(current, str):
            self._cascade.seed(current)

    def _init_list_picker(self) -> None:
        items = self._items_from_source(self._descriptor.editor.items_source) or []
        self._list_picker = ListPickerResolver(
            items,
            self.declared_type,
            write_value=self._write_value,
            bridge=self._bridge,
            notify=self._notify,
        )
        self._list_picker.preselect(self.value)
