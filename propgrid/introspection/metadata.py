"""
Declarative metadata for inspectable properties.

A property opts into grid metadata in one of three ways::

    @dataclass
    class Settings:
        retry_count: int = grid_field(3, category="Advanced", display_name="Retry Count")
        region: Annotated[str, PropertyMeta(editor=CascaderEditor("regions"))] = ""

        @grid_property(category="General", description="Current user")
        @property
        def user_name(self) -> str: ...

The editor markers are plain records; the grid core reads them once when an
entry is built.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union


METADATA_KEY = 'propgrid'
PROPERTY_META_ATTR = '__propgrid_meta__'


@dataclass(frozen=True)
class CascaderEditor:
    """Edit a string property with the three-level cascade selector.

    items_source names a sibling attribute holding the root TreeNode forest.
    Without it the selector has no options.
    """
    items_source: Optional[str] = None


@dataclass(frozen=True)
class ListPickerEditor:
    """Edit a property by picking one value from a sibling attribute's items."""
    items_source: str


EditorConfig = Union[CascaderEditor, ListPickerEditor]


@dataclass(frozen=True)
class PropertyMeta:
    """Per-property display and editing metadata."""
    display_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    browsable: bool = True
    read_only: bool = False
    editor: Optional[EditorConfig] = None


def grid_field(default: Any = dataclasses.MISSING, *,
               default_factory: Any = dataclasses.MISSING,
               display_name: Optional[str] = None,
               description: Optional[str] = None,
               category: Optional[str] = None,
               browsable: bool = True,
               read_only: bool = False,
               editor: Optional[EditorConfig] = None,
               **field_kwargs):
    """dataclasses.field() carrying a PropertyMeta under METADATA_KEY."""
    meta = PropertyMeta(
        display_name=display_name,
        description=description,
        category=category,
        browsable=browsable,
        read_only=read_only,
        editor=editor,
    )
    metadata = dict(field_kwargs.pop('metadata', None) or {})
    metadata[METADATA_KEY] = meta
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **field_kwargs
    )


def grid_property(*, display_name: Optional[str] = None,
                  description: Optional[str] = None,
                  category: Optional[str] = None,
                  browsable: bool = True,
                  read_only: bool = False,
                  editor: Optional[EditorConfig] = None):
    """Attach a PropertyMeta to a ``property``.

    The metadata lives on the getter, so ``@name.setter`` keeps it.
    """
    meta = PropertyMeta(
        display_name=display_name,
        description=description,
        category=category,
        browsable=browsable,
        read_only=read_only,
        editor=editor,
    )

    def decorator(prop):
        if not isinstance(prop, property) or prop.fget is None:
            raise TypeError("grid_property() must decorate a property with a getter")
        setattr(prop.fget, PROPERTY_META_ATTR, meta)
        return prop

    return decorator
