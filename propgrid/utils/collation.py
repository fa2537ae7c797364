"""Locale-aware string comparison.

All ordering and label matching in the grid goes through these helpers so
that the active LC_COLLATE decides how category names, display names and
cascade labels compare.
"""
import locale
from typing import Optional


def collation_key(text: Optional[str]) -> str:
    """Case-insensitive sort/group key under the current locale collation."""
    return locale.strxfrm((text or '').casefold())


def texts_equal(left: Optional[str], right: Optional[str]) -> bool:
    """Case-sensitive equality under the current locale collation."""
    if left is None or right is None:
        return left is right
    return locale.strcoll(left, right) == 0
