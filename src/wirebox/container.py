# src/wirebox/container.py
import contextvars
import functools
import inspect
import os
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .aliases import AliasTable
from .bindings import Binding, BindingKind, BindingRegistry
from .config_store import ConfigStore
from .constants import CONFIG_FILE_KEY, LOGGER
from .container_resolution import _ResolutionMixin
from .exceptions import AutoInstantiationError, CircularDependencyError, ConfigurationError
from .instances import InstanceCache
from .keys import KeyT, TypeRegistry, derive_alias, key_of
from .tags import TagRegistry

_PLAIN_DATA = (str, bytes, bytearray, int, float, complex, bool, list, tuple, dict, set, frozenset)


def _is_plain_data(value: Any) -> bool:
    return value is None or isinstance(value, _PLAIN_DATA) or isinstance(value, Mapping)


def _is_factory(value: Any) -> bool:
    return inspect.isroutine(value) or isinstance(value, functools.partial)


class Container(_ResolutionMixin):
    """Auto-wiring service container with a dot-path configuration store.

    Identifiers are strings or classes; a class is addressed by its qualified
    name ``"<module>.<qualname>"``. One container is meant to be owned by one
    application, request or test; it does no locking of its own.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None, context: str = "") -> None:
        self._context = context
        self._types = TypeRegistry()
        self._aliases = AliasTable()
        self._instances = InstanceCache()
        self._bindings = BindingRegistry(self._instances)
        self._tags = TagRegistry()
        self._config = ConfigStore(config)
        self._resolving: contextvars.ContextVar[Tuple[str, ...]] = contextvars.ContextVar(
            f"wirebox_resolving_{id(self):x}", default=()
        )

    @classmethod
    def create(
        cls,
        config: Any = None,
        context: str = "",
        *,
        files: Iterable[str] = (),
    ) -> "Container":
        """Build a container from an initial configuration.

        Args:
            config: A (possibly nested) mapping, or a scalar stored under the
                ``"file"`` key. ``None`` means an empty configuration.
            context: Class-name prefix stripped when deriving automatic aliases.
            files: JSON or YAML settings files merged in order before
                *config*, so explicit keys in *config* win.
        """
        if config is None:
            config = {}
        elif not isinstance(config, Mapping):
            config = {CONFIG_FILE_KEY: config}

        store = ConfigStore()
        for path in files:
            store.load(path)
        store.merge(config)
        return cls(store.to_dict(), context)

    @property
    def context(self) -> str:
        return self._context

    # --- unified key/value surface ---

    def get(self, key: KeyT, fallback: Any = None) -> Any:
        if isinstance(key, str) and self._config.has(key):
            return self._config.get(key, fallback)
        if self.bound(key):
            return self.make(key)
        return fallback

    def set(self, key: KeyT, value: Any) -> "Container":
        if isinstance(value, type) or _is_factory(value):
            self.bind(key, value)
        elif isinstance(value, str) and self._types.exists(value):
            self.bind(key, value)
        elif _is_plain_data(value):
            self.set_config(key_of(key), value)
        else:
            self.instance(key, value)
        return self

    def has(self, key: KeyT) -> bool:
        return (isinstance(key, str) and self._config.has(key)) or self.bound(key)

    def unset(self, key: KeyT) -> None:
        self._forget(key)
        if isinstance(key, str) and self._config.has(key):
            self._config.unset(key)

    # --- configuration ---

    def get_config(self, path: str, fallback: Any = None) -> Any:
        return self._config.get(path, fallback)

    def set_config(self, path: str, value: Any) -> "Container":
        self._config.set(path, value)
        return self

    def has_config(self, path: str) -> bool:
        return self._config.has(path)

    def load_config(self, path: Optional[str] = None) -> "Container":
        """Merge a settings file into the configuration.

        Without *path*, the file recorded under the ``"file"`` key (the scalar
        given to :meth:`create`) is read. Values from the file overwrite
        existing keys.
        """
        if path is None:
            path = self._config.get(CONFIG_FILE_KEY)
            if not isinstance(path, (str, os.PathLike)):
                raise ConfigurationError(f"No config file recorded under {CONFIG_FILE_KEY!r}")
        self._config.load(path)
        LOGGER.debug("Loaded config file %s", path)
        return self

    # --- bindings ---

    def _canonical(self, key: KeyT) -> str:
        return self._aliases.canonicalize(self._types.remember(key))

    def _register_auto_alias(self, class_name: str) -> None:
        self._aliases.define(class_name, derive_alias(class_name, self._context))

    def bind(self, key: KeyT, concrete: Any = None, shared: bool = False) -> "Container":
        key_name = self._types.remember(key)
        if concrete is None:
            concrete = key_name if self._types.exists(key_name) else self._aliases.canonicalize(key_name)

        if isinstance(concrete, str) or isinstance(concrete, type):
            concrete_name = self._types.remember(concrete)
            if self._types.exists(concrete_name):
                self._register_auto_alias(concrete_name)
            binding_concrete, kind = concrete_name, BindingKind.IDENTIFIER
        elif callable(concrete):
            binding_concrete, kind = concrete, BindingKind.FACTORY
        else:
            raise TypeError(
                f"Cannot bind {key_name!r} to {type(concrete).__name__}; use instance() for pre-built objects"
            )

        cid = self._aliases.canonicalize(key_name)
        self._bindings.put(Binding(cid, binding_concrete, shared, kind))
        self._unmark(cid)
        LOGGER.debug("Bound %s -> %r (shared=%s)", cid, binding_concrete, shared)
        return self

    def singleton(self, key: KeyT, concrete: Any = None) -> "Container":
        return self.bind(key, concrete, True)

    def instance(self, key: Union[KeyT, Mapping[KeyT, Any]], instance: Any = None) -> "Container":
        if isinstance(key, Mapping):
            for k, v in key.items():
                if not _is_plain_data(v):
                    self.instance(k, v)
            return self

        key_name = self._types.remember(key)
        if instance is None:
            if not self._types.exists(key_name):
                LOGGER.debug("Cannot auto-instantiate %s", key_name)
                raise AutoInstantiationError(key_name)
            instance = self.make(key_name)

        self._register_auto_alias(self._types.remember(type(instance)))

        cid = self._aliases.canonicalize(key_name)
        self._bindings.put(Binding(cid, instance, True, BindingKind.INSTANCE))
        self._instances.put(cid, instance)
        self._unmark(cid)
        LOGGER.debug("Registered instance %s (%s)", cid, type(instance).__qualname__)
        return self

    def bound(self, key: KeyT) -> bool:
        cid = self._canonical(key)
        return self._bindings.has(cid) or self._instances.has(cid)

    def _forget(self, key: KeyT) -> None:
        cid = self._canonical(key)
        self._bindings.remove(cid)
        self._unmark(cid)

    def alias(self, key: KeyT, alias: KeyT) -> None:
        self._aliases.define(self._types.remember(key), self._types.remember(alias))

    # --- resolution ---

    def resolving(self) -> Tuple[str, ...]:
        """Identifiers currently being built in this thread or task, outermost first."""
        return self._resolving.get()

    def _unmark(self, cid: str) -> None:
        chain = self._resolving.get()
        if cid in chain:
            self._resolving.set(tuple(k for k in chain if k != cid))

    def make(self, key: KeyT, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        overrides = dict(overrides or {})
        cid = self._canonical(key)

        if not overrides:
            found, cached = self._instances.lookup(cid)
            if found:
                return cached

        chain = self._resolving.get()
        if cid in chain:
            LOGGER.debug("Circular dependency: %s", " -> ".join(chain + (cid,)))
            raise CircularDependencyError(cid, chain)

        token = self._resolving.set(chain + (cid,))
        try:
            obj = self._produce(cid, overrides)
        finally:
            self._resolving.reset(token)

        if not overrides and self._bindings.is_shared(cid):
            self._instances.put(cid, obj)
        return obj

    def _produce(self, cid: str, overrides: Mapping[str, Any]) -> Any:
        binding = self._bindings.get(cid)
        if binding is None:
            return self.build_class(cid, overrides)
        if binding.is_instance:
            return binding.concrete
        if binding.is_factory:
            return self.build_factory(binding.concrete, overrides)
        if binding.concrete == cid:
            return self.build_class(cid, overrides)
        return self.make(binding.concrete, overrides)

    # --- tags ---

    def tag(self, tag: str, keys: Union[KeyT, Iterable[KeyT]]) -> None:
        self._tags.add(tag, keys)

    def tagged(self, tag: str) -> List[Any]:
        return [self.get(key) for key in self._tags.members(tag)]

    # --- housekeeping ---

    def flush(self) -> None:
        self._config.clear()
        self._bindings.clear()
        self._instances.clear()
        self._tags.clear()
        self._aliases.clear()
        if self._resolving.get():
            self._resolving.set(())

    def aliases(self) -> Mapping[str, str]:
        return self._aliases.snapshot()

    def bindings(self) -> Mapping[str, Binding]:
        return self._bindings.snapshot()
