import inspect
from typing import Any, Dict, List, Mapping, Optional

from .analysis import ParameterSpec, analyze_constructor, positional_arity
from .constants import LOGGER
from .exceptions import (
    NotInstantiableError,
    ServiceNotFoundError,
    UnresolvableDependencyError,
    UnresolvablePrimitiveError,
)
from .keys import KeyT, is_primitive


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


class _ResolutionMixin:
    def _instantiable_class(self, key: str) -> Optional[type]:
        cls = self._types.lookup(key)
        if cls is None or inspect.isabstract(cls) or _is_protocol(cls):
            return None
        return cls

    def _dependency_key(self, annotation: Any) -> Optional[KeyT]:
        if isinstance(annotation, type):
            return annotation
        if isinstance(annotation, str):
            return annotation
        return None

    def _can_resolve(self, key: KeyT) -> bool:
        if self.bound(key):
            return True
        return self._instantiable_class(self._types.remember(key)) is not None

    def _resolve_parameter(self, cls: type, spec: ParameterSpec, overrides: Mapping[str, Any]) -> Any:
        if spec.name in overrides:
            return overrides[spec.name]

        if not is_primitive(spec.annotation):
            dep = self._dependency_key(spec.annotation)
            if dep is not None and self._can_resolve(dep):
                return self.make(dep)
            if spec.nullable:
                return None
            if spec.has_default:
                return spec.default
            LOGGER.debug("Unresolvable dependency %s of %s", spec.name, cls.__qualname__)
            raise UnresolvableDependencyError(spec.name, spec.annotation, cls)

        if spec.has_default:
            return spec.default
        LOGGER.debug("Unresolvable primitive %s of %s", spec.name, cls.__qualname__)
        raise UnresolvablePrimitiveError(spec.name, cls)

    def build_class(self, key: str, overrides: Mapping[str, Any]) -> Any:
        cls = self._types.lookup(key)
        if cls is None:
            LOGGER.debug("No binding or class for %s", key)
            raise ServiceNotFoundError(key)
        if inspect.isabstract(cls):
            raise NotInstantiableError(key, "abstract class")
        if _is_protocol(cls):
            raise NotInstantiableError(key, "protocol")

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for spec in analyze_constructor(cls):
            value = self._resolve_parameter(cls, spec, overrides)
            if spec.positional_only:
                args.append(value)
            else:
                kwargs[spec.name] = value
        return cls(*args, **kwargs)

    def build_factory(self, factory: Any, overrides: Mapping[str, Any]) -> Any:
        arity = positional_arity(factory)
        if arity == 0:
            return factory()
        if arity == 1:
            return factory(self)
        return factory(self, dict(overrides))
