"""ListPickerResolver: single selection over a flat candidate snapshot."""

import logging
from typing import Any, Callable, Iterable, Optional, Tuple

from propgrid.core.coercion import TypeCoercionBridge
from propgrid.exceptions import CoercionError
from propgrid.utils.collation import texts_equal
from propgrid.utils.type_utils import is_instance_of, unwrap_optional

logger = logging.getLogger(__name__)


def _safe_equals(left: Any, right: Any) -> bool:
    try:
        return bool(left == right)
    except Exception:
        return False


def _safe_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        return str(value)
    except Exception:
        return None


class ListPickerResolver:
    """
    Holds the candidate snapshot and the selected candidate for one entry.

    The current value is resolved to a candidate once, at construction, by
    identity, then equality, then string form. Afterwards the selection only
    changes through set_selected(), which writes the (converted) candidate
    back through ``write_value``.
    """

    def __init__(
        self,
        candidates: Iterable[Any],
        declared_type: Any,
        write_value: Callable[[Any], None],
        bridge: Optional[TypeCoercionBridge] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self._candidates: Tuple[Any, ...] = tuple(candidates)
        self._declared_type = declared_type
        self._write_value = write_value
        self._bridge = bridge or TypeCoercionBridge()
        self._notify = notify or (lambda name: None)
        self._selected: Any = None

    @property
    def candidates(self) -> Tuple[Any, ...]:
        return self._candidates

    @property
    def selected(self) -> Any:
        return self._selected

    @property
    def selected_display(self) -> Optional[str]:
        return self.candidate_display(self._selected)

    @staticmethod
    def candidate_display(candidate: Any) -> Optional[str]:
        return _safe_str(candidate)

    def resolve(self, current: Any) -> Any:
        """Find the candidate matching ``current``; None if nothing matches."""
        if current is None:
            return None
        for candidate in self._candidates:
            if candidate is current:
                return candidate
        for candidate in self._candidates:
            if _safe_equals(candidate, current):
                return candidate
        current_text = _safe_str(current)
        if current_text is not None:
            for candidate in self._candidates:
                candidate_text = _safe_str(candidate)
                if candidate_text is not None and texts_equal(candidate_text, current_text):
                    return candidate
        return None

    def preselect(self, current: Any) -> None:
        """Select the candidate matching ``current`` without writing back."""
        self._selected = self.resolve(current)
        if self._selected is not None:
            logger.debug(f"List picker preselected {self._selected!r}")

    def is_candidate(self, value: Any) -> bool:
        return self._member_for(value) is not None

    def _member_for(self, value: Any) -> Any:
        """The candidate that is, or else equals, ``value``; None if there is none."""
        for candidate in self._candidates:
            if candidate is value:
                return candidate
        for candidate in self._candidates:
            if _safe_equals(candidate, value):
                return candidate
        return None

    def set_selected(self, candidate: Any) -> None:
        """Select ``candidate`` (or clear with None) and write it to the entry."""
        if candidate is self._selected:
            return
        if candidate is not None and self._selected is not None and _safe_equals(candidate, self._selected):
            return
        if candidate is not None:
            member = self._member_for(candidate)
            if member is None:
                logger.debug(f"Ignoring selection of non-candidate {candidate!r}")
                return
            candidate = member

        self._selected = candidate
        self._notify('selected_item')
        self._notify('selected_item_display')
        self._write_value(self._convert_for_target(candidate))

    def _convert_for_target(self, candidate: Any) -> Any:
        if candidate is None:
            return None
        if is_instance_of(candidate, self._declared_type):
            return candidate

        text = _safe_str(candidate)
        inner, _ = unwrap_optional(self._declared_type)
        if inner is str:
            return text
        try:
            return self._bridge.from_display_string(text, self._declared_type)
        except CoercionError as e:
            logger.debug(f"List picker candidate not convertible, clearing value: {e}")
            return None
