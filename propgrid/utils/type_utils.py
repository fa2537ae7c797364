"""
Type inspection helpers for declared property types.

Declared types come from annotations, so they can be plain classes,
``Optional[...]``/``X | None`` unions, ``Annotated[...]`` wrappers or
parametrized generics. These helpers normalize them for classification and
coercion.
"""

from decimal import Decimal
from enum import Enum
import types
import typing
from typing import Any, Tuple, Union, get_args, get_origin


# Non-nullable primitives: empty input produces their zero value
VALUE_TYPE_DEFAULTS = {
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    bool: False,
}

TEXT_TYPES = (str, Any, object)

_UNION_TYPES = (Union, types.UnionType)


def strip_annotated(tp: Any) -> Any:
    """Return the underlying type of ``Annotated[T, ...]``."""
    if get_origin(tp) is typing.Annotated:
        return get_args(tp)[0]
    return tp


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """Split ``Optional[T]`` into ``(T, True)``; other types give ``(tp, False)``.

    Unions with more than one non-None member are returned unchanged.
    """
    tp = strip_annotated(tp)
    if get_origin(tp) in _UNION_TYPES:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1 and len(args) < len(get_args(tp)):
            return args[0], True
    return tp, False


def is_bool_type(tp: Any) -> bool:
    return tp is bool


def is_enum_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Enum)


def is_text_type(tp: Any) -> bool:
    return any(tp is text_type for text_type in TEXT_TYPES)


def is_value_type(tp: Any) -> bool:
    return tp in VALUE_TYPE_DEFAULTS


def default_for_type(tp: Any) -> Any:
    """Default value used when a value-typed property receives empty input."""
    return VALUE_TYPE_DEFAULTS.get(tp)


def runtime_class(tp: Any) -> Any:
    """Class usable with isinstance() for ``tp``, or None if there is none."""
    tp = strip_annotated(tp)
    origin = get_origin(tp)
    if origin is not None and isinstance(origin, type):
        return origin
    if isinstance(tp, type):
        return tp
    return None


def is_instance_of(value: Any, tp: Any) -> bool:
    """isinstance() that understands Optional, generics and Any."""
    inner, optional = unwrap_optional(tp)
    if value is None:
        return optional
    if is_text_type(inner) and inner is not str:
        return True
    # bool is an int subclass; a True candidate must not count as an int value
    if isinstance(value, bool) and inner is not bool and inner in VALUE_TYPE_DEFAULTS:
        return False
    cls = runtime_class(inner)
    if cls is None:
        return False
    return isinstance(value, cls)


def friendly_type_name(tp: Any) -> str:
    """Short display name for a declared type.

    Examples:
        int            -> "int"
        Optional[int]  -> "int?"
        list[str]      -> "list"
        Dict[str, int] -> "dict"
    """
    inner, optional = unwrap_optional(tp)
    if optional:
        return friendly_type_name(inner) + "?"
    if inner is Any:
        return "Any"
    origin = get_origin(inner)
    if origin is not None:
        return getattr(origin, '__name__', None) or str(origin).replace('typing.', '')
    return getattr(inner, '__name__', None) or str(inner)
