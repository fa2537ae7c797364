"""Property grid exceptions."""

from typing import Any, Optional


class PropertyGridError(Exception):
    """Base exception for the property grid core."""

    pass


class CoercionError(PropertyGridError):
    """Raised when text cannot be converted to a property's declared type."""

    def __init__(self, text: Any, target_type: Any, reason: Optional[str] = None):
        self.text = text
        self.target_type = target_type
        self.reason = reason
        type_name = getattr(target_type, '__name__', repr(target_type))
        message = f"Cannot convert {text!r} to {type_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DescriptorError(PropertyGridError):
    """Raised when a property descriptor is misused or malformed."""

    def __init__(self, message: str, property_name: Optional[str] = None):
        self.property_name = property_name
        super().__init__(message)
