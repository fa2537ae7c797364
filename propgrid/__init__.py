"""
propgrid: an object-inspection property grid core.

Given any object, propgrid introspects its properties, classifies each one
into an editor kind (text, bool, enum, cascade selector, list picker) and
keeps editor state and the object's attributes synchronized.

Quick Start:
    >>> from propgrid import PropertyGridModel
    >>> model = PropertyGridModel()
    >>> model.selected_object = settings
    >>> for group in model.groups:
    ...     for entry in group.entries:
    ...         print(group.name, entry.display_name, entry.string_value)

Rendering layers read entry state and forward user edits into the entry
setters; changes are announced on each entry's ``property_changed`` signal.
"""

import logging

__version__ = "0.1.0"


# Set up basic logging configuration if none exists
def _ensure_basic_logging():
    """Ensure basic logging is configured if no configuration exists."""
    root_logger = logging.getLogger()

    # Only configure if no handlers exist and level is too high
    if not root_logger.handlers and root_logger.level > logging.INFO:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


_ensure_basic_logging()

from propgrid.config import GridConfig, get_grid_config, reset_grid_config
from propgrid.exceptions import CoercionError, DescriptorError, PropertyGridError
from propgrid.introspection import (
    CascaderEditor,
    DescriptorProvider,
    ListPickerEditor,
    PropertyDescriptor,
    PropertyMeta,
    ReflectionDescriptorProvider,
    TableDescriptorProvider,
    grid_field,
    grid_property,
    register_descriptor_provider,
    unregister_descriptor_provider,
)
from propgrid.core import (
    CascadeSelector,
    CascaderNode,
    CategoryGroup,
    EditorKind,
    ListPickerResolver,
    PropertyEntry,
    PropertyGridModel,
    PropertyIntrospector,
    TreeNode,
    TypeCoercionBridge,
    register_converter,
)

__all__ = [
    # Configuration
    "GridConfig",
    "get_grid_config",
    "reset_grid_config",
    # Errors
    "PropertyGridError",
    "CoercionError",
    "DescriptorError",
    # Introspection
    "CascaderEditor",
    "ListPickerEditor",
    "PropertyMeta",
    "PropertyDescriptor",
    "DescriptorProvider",
    "ReflectionDescriptorProvider",
    "TableDescriptorProvider",
    "grid_field",
    "grid_property",
    "register_descriptor_provider",
    "unregister_descriptor_provider",
    # Core
    "TypeCoercionBridge",
    "register_converter",
    "TreeNode",
    "CascaderNode",
    "CascadeSelector",
    "ListPickerResolver",
    "EditorKind",
    "PropertyEntry",
    "CategoryGroup",
    "PropertyIntrospector",
    "PropertyGridModel",
]
