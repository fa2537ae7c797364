"""
Property introspection for the grid.

This package provides:
- PropertyDescriptor: metadata and accessors for one property
- PropertyMeta / grid_field / grid_property: declarative metadata
- CascaderEditor / ListPickerEditor: editor opt-in markers
- Descriptor providers: reflection by default, explicit tables per type
"""

from propgrid.introspection.metadata import (
    CascaderEditor,
    EditorConfig,
    ListPickerEditor,
    PropertyMeta,
    grid_field,
    grid_property,
)
from propgrid.introspection.descriptors import PropertyDescriptor
from propgrid.introspection.provider import (
    DescriptorProvider,
    ReflectionDescriptorProvider,
    TableDescriptorProvider,
    get_analysis_cache,
    get_descriptor_provider,
    register_descriptor_provider,
    unregister_descriptor_provider,
)

__all__ = [
    # Metadata
    'CascaderEditor',
    'EditorConfig',
    'ListPickerEditor',
    'PropertyMeta',
    'grid_field',
    'grid_property',
    # Descriptors
    'PropertyDescriptor',
    # Providers
    'DescriptorProvider',
    'ReflectionDescriptorProvider',
    'TableDescriptorProvider',
    'get_analysis_cache',
    'get_descriptor_provider',
    'register_descriptor_provider',
    'unregister_descriptor_provider',
]
