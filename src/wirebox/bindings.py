"""Binding records and the identifier-to-binding registry.

This module defines :class:`Binding` (the immutable descriptor of how an
identifier is produced) and :class:`BindingRegistry` (the canonical
identifier to binding map, which also keeps the shared instance cache
consistent whenever a binding is replaced).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .instances import InstanceCache

Factory = Callable[..., Any]


class BindingKind(Enum):
    IDENTIFIER = "identifier"
    FACTORY = "factory"
    INSTANCE = "instance"


@dataclass(frozen=True)
class Binding:
    """Immutable descriptor for a registered binding.

    Attributes:
        key: The canonical identifier the binding is stored under.
        concrete: An identifier (``str``, usually a class name), a factory
            callable, or a pre-built object for instance registrations.
        shared: Whether the built object is cached and reused.
        kind: Which of the three shapes *concrete* has.
    """

    key: str
    concrete: Union[str, Factory, Any]
    shared: bool = False
    kind: BindingKind = BindingKind.IDENTIFIER

    @property
    def is_factory(self) -> bool:
        return self.kind is BindingKind.FACTORY

    @property
    def is_instance(self) -> bool:
        return self.kind is BindingKind.INSTANCE


class BindingRegistry:
    """Key-to-binding registry.

    Holds at most one :class:`Binding` per canonical identifier. Replacing or
    removing a binding evicts any cached instance for the same identifier so
    that a shared object built from an old binding is never served again.

    Args:
        instances: The cache whose entries are invalidated on rebind.
    """

    def __init__(self, instances: InstanceCache) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._instances = instances

    def put(self, binding: Binding) -> None:
        """Store *binding*, replacing any previous one for the same key.

        Args:
            binding: The binding to store; ``binding.key`` must already be
                canonical.
        """
        self._bindings[binding.key] = binding
        self._instances.evict(binding.key)

    def has(self, key: str) -> bool:
        return key in self._bindings

    def get(self, key: str) -> Optional[Binding]:
        return self._bindings.get(key)

    def is_shared(self, key: str) -> bool:
        binding = self._bindings.get(key)
        return binding is not None and binding.shared

    def remove(self, key: str) -> None:
        """Remove the binding and cached instance for *key*, if any."""
        self._bindings.pop(key, None)
        self._instances.evict(key)

    def snapshot(self) -> Mapping[str, Binding]:
        return MappingProxyType(dict(self._bindings))

    def clear(self) -> None:
        self._bindings.clear()
