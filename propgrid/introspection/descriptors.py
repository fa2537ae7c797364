"""PropertyDescriptor: metadata plus read/write accessors for one property."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from propgrid.config import get_grid_config
from propgrid.exceptions import DescriptorError
from propgrid.introspection.metadata import EditorConfig


def _attribute_getter(name: str) -> Callable[[Any], Any]:
    return lambda instance: getattr(instance, name)


def _attribute_setter(name: str) -> Callable[[Any, Any], None]:
    return lambda instance, value: setattr(instance, name, value)


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Describes one inspectable property of an object.

    Descriptors are produced by a DescriptorProvider each time an instance is
    inspected and are never mutated afterwards. Accessors default to plain
    getattr/setattr on ``name``.
    """
    name: str
    declared_type: Any
    display_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    is_read_only: bool = False
    browsable: bool = True
    editor: Optional[EditorConfig] = None
    getter: Optional[Callable[[Any], Any]] = field(default=None, repr=False, compare=False)
    setter: Optional[Callable[[Any, Any], None]] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if not self.name:
            raise DescriptorError("Property descriptor requires a name")
        if self.display_name is None:
            object.__setattr__(self, 'display_name', self.name)
        if self.description is None:
            object.__setattr__(self, 'description', "")
        if self.category is None:
            object.__setattr__(self, 'category', get_grid_config().default_category)
        if self.getter is None:
            object.__setattr__(self, 'getter', _attribute_getter(self.name))
        if self.setter is None and not self.is_read_only:
            object.__setattr__(self, 'setter', _attribute_setter(self.name))

    def get(self, instance: Any) -> Any:
        return self.getter(instance)

    def set(self, instance: Any, value: Any) -> None:
        if self.is_read_only or self.setter is None:
            raise DescriptorError(f"Property '{self.name}' is read-only", self.name)
        self.setter(instance, value)
