"""
Grid core: entries, editor state machines and the introspection pipeline.

Modules:
    - coercion: string <-> typed value bridge
    - tree_node: TreeNode capability for cascade data
    - cascade: three-level cascade selector
    - list_picker: list picker value resolution
    - entry: EditorKind and PropertyEntry
    - groups: CategoryGroup
    - introspector: PropertyIntrospector and PropertyGridModel
"""

from propgrid.core.coercion import TypeCoercionBridge, register_converter
from propgrid.core.tree_node import CascaderNode, TreeNode
from propgrid.core.cascade import CascadeSelector
from propgrid.core.list_picker import ListPickerResolver
from propgrid.core.entry import DERIVED_ACCESSORS, EditorKind, PropertyEntry, classify_editor_kind
from propgrid.core.groups import CategoryGroup
from propgrid.core.introspector import PropertyGridModel, PropertyIntrospector

__all__ = [
    'TypeCoercionBridge',
    'register_converter',
    'CascaderNode',
    'TreeNode',
    'CascadeSelector',
    'ListPickerResolver',
    'DERIVED_ACCESSORS',
    'EditorKind',
    'PropertyEntry',
    'classify_editor_kind',
    'CategoryGroup',
    'PropertyGridModel',
    'PropertyIntrospector',
]
