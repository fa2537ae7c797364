"""
Descriptor providers: where PropertyDescriptors come from.

The default ReflectionDescriptorProvider discovers properties by inspecting
the instance's class:

- Dataclass fields (via dataclasses.fields())
- Annotated class attributes on plain classes
- ``property`` objects anywhere in the MRO
- Plain attributes set on the instance (type taken from the current value)

Applications that prefer explicit tables register a TableDescriptorProvider
for their type with register_descriptor_provider(); lookups walk the MRO so a
provider registered for a base class covers its subclasses.

Class-level analysis (type hints, metadata, read-only flags) is cached per
type in a weak-keyed cache; only value-dependent parts (inferred types and
instance attributes) are computed per instance.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, is_dataclass
import inspect
import logging
import typing
import weakref
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, get_args, get_origin, get_type_hints

from propgrid.config import get_grid_config
from propgrid.exceptions import DescriptorError
from propgrid.introspection.descriptors import PropertyDescriptor
from propgrid.introspection.metadata import (
    METADATA_KEY, PROPERTY_META_ATTR, CascaderEditor, ListPickerEditor, PropertyMeta,
)
from propgrid.utils.type_utils import strip_annotated

logger = logging.getLogger(__name__)


class DescriptorProvider(ABC):
    """Supplies the descriptors for an instance."""

    @abstractmethod
    def get_descriptors(self, instance: Any) -> List[PropertyDescriptor]:
        """Return descriptors for every property of ``instance`` (browsable or not)."""


# ==================== TYPE ANALYSIS CACHE ====================

@dataclass(frozen=True)
class PropertyTemplate:
    """Class-level facts about one property; declared_type None means infer from the value."""
    name: str
    declared_type: Any
    meta: PropertyMeta
    read_only: bool
    doc: str = ""


class PropertyAnalysisCache:
    """Cache of per-class property analysis.

    WeakKeyDictionary: entries disappear when the class is garbage collected.
    """

    def __init__(self):
        self._templates: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    def get(self, cls: Type) -> Optional[Tuple[PropertyTemplate, ...]]:
        return self._templates.get(cls)

    def put(self, cls: Type, templates: Tuple[PropertyTemplate, ...]) -> None:
        self._templates[cls] = templates

    def clear(self) -> None:
        self._templates.clear()


# Global singleton instance
_analysis_cache = PropertyAnalysisCache()


def get_analysis_cache() -> PropertyAnalysisCache:
    """Get the global property analysis cache instance."""
    return _analysis_cache


def _meta_from_hint(hint: Any) -> Optional[PropertyMeta]:
    """Extract PropertyMeta (or a bare editor marker) from ``Annotated[...]`` extras."""
    if get_origin(hint) is not typing.Annotated:
        return None
    for extra in get_args(hint)[1:]:
        if isinstance(extra, PropertyMeta):
            return extra
        if isinstance(extra, (CascaderEditor, ListPickerEditor)):
            return PropertyMeta(editor=extra)
    return None


def _first_doc_line(obj: Any) -> str:
    doc = inspect.getdoc(obj) or ""
    return doc.strip().splitlines()[0] if doc.strip() else ""


def _resolve_hints(target: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(target, include_extras=True)
    except Exception as e:
        # Unresolvable forward references: fall back to the raw annotations
        logger.debug(f"Could not resolve type hints for {target!r}: {e}")
        raw: Dict[str, Any] = {}
        if inspect.isclass(target):
            for klass in reversed(target.__mro__):
                raw.update(getattr(klass, '__annotations__', {}) or {})
        else:
            raw.update(getattr(target, '__annotations__', {}) or {})
        return raw


class ReflectionDescriptorProvider(DescriptorProvider):
    """Discovers properties by reflecting over the instance's class."""

    def __init__(self, cache: Optional[PropertyAnalysisCache] = None):
        self._cache = cache if cache is not None else get_analysis_cache()

    def get_descriptors(self, instance: Any) -> List[PropertyDescriptor]:
        cls = type(instance)
        templates = self._cache.get(cls)
        if templates is None:
            templates = self.analyze(cls)
            self._cache.put(cls, templates)
            logger.debug(f"Analyzed {cls.__name__}: {len(templates)} properties")

        config = get_grid_config()
        descriptors = []
        for template in templates:
            declared_type = template.declared_type
            if declared_type is None:
                declared_type = self._infer_type(instance, template.name)
            meta = template.meta
            browsable = meta.browsable and (config.include_private or not template.name.startswith('_'))
            descriptors.append(PropertyDescriptor(
                name=template.name,
                declared_type=declared_type,
                display_name=meta.display_name,
                description=meta.description if meta.description is not None else template.doc,
                category=meta.category,
                is_read_only=template.read_only or meta.read_only,
                browsable=browsable,
                editor=meta.editor,
            ))

        # Attributes set on the instance itself depend on the value and are never cached
        covered = {template.name for template in templates}
        instance_attrs = {} if isinstance(instance, type) else getattr(instance, '__dict__', None) or {}
        for name, value in instance_attrs.items():
            if name in covered or callable(value):
                continue
            if name.startswith('_') and not config.include_private:
                continue
            descriptors.append(PropertyDescriptor(
                name=name,
                declared_type=self._infer_type(instance, name),
            ))
        return descriptors

    @staticmethod
    def _infer_type(instance: Any, name: str) -> Any:
        value = getattr(instance, name, None)
        return type(value) if value is not None else Any

    @classmethod
    def analyze(cls, target_type: Type) -> Tuple[PropertyTemplate, ...]:
        """Compute the class-level property templates for ``target_type``."""
        hints = _resolve_hints(target_type)
        templates: Dict[str, PropertyTemplate] = {}

        if is_dataclass(target_type):
            frozen = target_type.__dataclass_params__.frozen
            for f in fields(target_type):
                hint = hints.get(f.name, f.type)
                meta = f.metadata.get(METADATA_KEY) or _meta_from_hint(hint) or PropertyMeta()
                templates[f.name] = PropertyTemplate(
                    name=f.name,
                    declared_type=strip_annotated(hint),
                    meta=meta,
                    read_only=frozen,
                )
        else:
            for name, hint in hints.items():
                if get_origin(hint) is typing.ClassVar or hint is typing.ClassVar:
                    continue
                class_attr = inspect.getattr_static(target_type, name, None)
                if isinstance(class_attr, property) or callable(class_attr):
                    continue
                templates[name] = PropertyTemplate(
                    name=name,
                    declared_type=strip_annotated(hint),
                    meta=_meta_from_hint(hint) or PropertyMeta(),
                    read_only=False,
                )

        # Properties, base classes first so subclasses override in place
        for klass in reversed(target_type.__mro__):
            for name, attr in vars(klass).items():
                if not isinstance(attr, property) or attr.fget is None:
                    continue
                if name in templates and not isinstance(
                        inspect.getattr_static(target_type, name, None), property):
                    continue
                meta = getattr(attr.fget, PROPERTY_META_ATTR, None) or PropertyMeta()
                return_hint = _resolve_hints(attr.fget).get('return')
                templates[name] = PropertyTemplate(
                    name=name,
                    declared_type=strip_annotated(return_hint) if return_hint is not None else None,
                    meta=meta,
                    read_only=attr.fset is None,
                    doc=_first_doc_line(attr.fget),
                )

        return tuple(templates.values())


class TableDescriptorProvider(DescriptorProvider):
    """Serves a fixed, explicitly registered descriptor table."""

    def __init__(self, descriptors: Iterable[PropertyDescriptor]):
        self._descriptors = tuple(descriptors)
        seen = set()
        for descriptor in self._descriptors:
            if descriptor.name in seen:
                raise DescriptorError(
                    f"Duplicate descriptor '{descriptor.name}' in descriptor table", descriptor.name
                )
            seen.add(descriptor.name)

    def get_descriptors(self, instance: Any) -> List[PropertyDescriptor]:
        return list(self._descriptors)


# ==================== PROVIDER REGISTRY ====================

_providers: Dict[Type, DescriptorProvider] = {}
_default_provider = ReflectionDescriptorProvider()


def register_descriptor_provider(target_type: Type, provider: DescriptorProvider) -> None:
    """Use ``provider`` for instances of ``target_type`` and its subclasses."""
    if target_type in _providers:
        logger.warning(f"Overwriting descriptor provider for {target_type.__name__}")
    _providers[target_type] = provider
    logger.debug(f"Registered descriptor provider for {target_type.__name__}: {type(provider).__name__}")


def unregister_descriptor_provider(target_type: Type) -> None:
    _providers.pop(target_type, None)


def get_descriptor_provider(instance: Any) -> DescriptorProvider:
    """Most specific registered provider for ``instance``, else reflection."""
    for klass in type(instance).__mro__:
        provider = _providers.get(klass)
        if provider is not None:
            return provider
    return _default_provider
