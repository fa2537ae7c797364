"""
TypeCoercionBridge: converts between display text and a property's declared type.

Text → value conversion goes through a registry of per-type converters.
Lookup order for a target type:

1. Enum subclasses always use the enum converter (IntEnum is also an int)
2. The most specific registered class in the target's MRO
3. Calling the type with the text, except for builtin collections

Every failure surfaces as CoercionError; callers decide whether to swallow it.
"""

from collections import ChainMap
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
import locale
import logging
from pathlib import PurePath
from typing import Any, Callable, Dict, Optional, get_origin
import uuid

from propgrid.exceptions import CoercionError
from propgrid.utils.type_utils import (
    default_for_type, is_enum_type, is_text_type, is_value_type, unwrap_optional,
)

logger = logging.getLogger(__name__)

Converter = Callable[[str, Any], Any]

_COLLECTION_TYPES = (list, tuple, set, frozenset, dict)


def _convert_int(text: str, target_type: Any) -> Any:
    return target_type(locale.atoi(text))


def _convert_float(text: str, target_type: Any) -> Any:
    return target_type(locale.atof(text))


def _convert_decimal(text: str, target_type: Any) -> Any:
    try:
        return target_type(locale.delocalize(text))
    except InvalidOperation as e:
        raise CoercionError(text, target_type, "not a decimal number") from e


def _convert_bool(text: str, target_type: Any) -> Any:
    lowered = text.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    raise CoercionError(text, target_type, "expected 'True' or 'False'")


def _convert_enum(text: str, target_type: Any) -> Any:
    # Exact name, then case-insensitive name, then the member's value as text
    if text in target_type.__members__:
        return target_type.__members__[text]
    folded = text.casefold()
    for name, member in target_type.__members__.items():
        if name.casefold() == folded:
            return member
    for member in target_type:
        if str(member.value) == text:
            return member
    raise CoercionError(text, target_type, f"not a member of {target_type.__name__}")


def _convert_iso(text: str, target_type: Any) -> Any:
    return target_type.fromisoformat(text)


def _convert_by_constructor(text: str, target_type: Any) -> Any:
    return target_type(text)


_converters: Dict[type, Converter] = {
    int: _convert_int,
    float: _convert_float,
    complex: _convert_by_constructor,
    Decimal: _convert_decimal,
    bool: _convert_bool,
    datetime: _convert_iso,
    date: _convert_iso,
    time: _convert_iso,
    PurePath: _convert_by_constructor,
    uuid.UUID: _convert_by_constructor,
}


def register_converter(target_type: type, converter: Converter) -> None:
    """Register a text → value converter for ``target_type`` and its subclasses."""
    _converters[target_type] = converter
    logger.debug(f"Registered converter for {target_type.__name__}")


def _localize_decimal_point(text: str) -> str:
    point = locale.localeconv().get('decimal_point') or '.'
    return text if point == '.' else text.replace('.', point)


class TypeCoercionBridge:
    """
    Two-way conversion between display strings and typed values.

    Each PropertyEntry owns one bridge. ``converters`` adds per-bridge
    overrides on top of the module registry.
    """

    def __init__(self, converters: Optional[Dict[type, Converter]] = None):
        self._converters = ChainMap(dict(converters or {}), _converters)

    def to_display_string(self, value: Any) -> str:
        """Render ``value`` for display. Never raises."""
        if value is None:
            return ""
        try:
            if isinstance(value, bool):
                return "True" if value else "False"
            if isinstance(value, Enum):
                return value.name
            if isinstance(value, (float, Decimal)):
                return _localize_decimal_point(str(value))
            if isinstance(value, (datetime, date, time)):
                return value.isoformat()
            return str(value)
        except Exception as e:
            logger.debug(f"str() failed for {type(value).__name__}: {e}")
        try:
            return repr(value)
        except Exception:
            return ""

    def from_display_string(self, text: Optional[str], target_type: Any) -> Any:
        """Convert ``text`` to ``target_type``.

        Raises:
            CoercionError: if the text cannot be converted
        """
        if text is None:
            text = ""
        inner, optional = unwrap_optional(target_type)

        if is_text_type(inner):
            return text

        stripped = text.strip()
        if not stripped:
            if is_value_type(inner) and not optional:
                return default_for_type(inner)
            return None

        converter = self._find_converter(inner)
        if converter is None:
            raise CoercionError(text, target_type, "no converter for this type")
        try:
            return converter(stripped, inner)
        except CoercionError:
            raise
        except (ValueError, TypeError, ArithmeticError, LookupError) as e:
            raise CoercionError(text, target_type, str(e)) from e

    def _find_converter(self, target_type: Any) -> Optional[Converter]:
        if is_enum_type(target_type):
            return self._converters.get(target_type, _convert_enum)
        if get_origin(target_type) is not None or not isinstance(target_type, type):
            # Parametrized generics and typing constructs have no text form
            return None
        for klass in target_type.__mro__:
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        if issubclass(target_type, _COLLECTION_TYPES):
            # Constructing from text would split it into characters
            return None
        return _convert_by_constructor
