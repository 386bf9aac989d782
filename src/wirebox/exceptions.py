"""Exception hierarchy for wirebox.

All container exceptions inherit from :class:`ContainerError`, making it
easy to catch any wirebox failure with a single ``except ContainerError``
clause. Exceptions raised by user constructors and factories are never
wrapped and propagate unchanged.
"""

from typing import Any, Iterable, Optional


def _name_of(obj: Any) -> str:
    return getattr(obj, "__name__", str(obj))


class ContainerError(Exception):
    """Base exception for all wirebox errors."""

    pass


class AliasConflictError(ContainerError):
    """Raised when an alias is redefined to point at a different identifier.

    Attributes:
        alias: The alias being defined.
        existing: The identifier the alias already points to.
        requested: The identifier the caller tried to point it to.
    """

    def __init__(self, alias: str, existing: str, requested: str):
        super().__init__(
            f"Alias '{alias}' is already registered for '{existing}'; cannot point it to '{requested}'"
        )
        self.alias = alias
        self.existing = existing
        self.requested = requested


class AliasCycleError(ContainerError):
    """Raised when following an alias chain would never terminate.

    Attributes:
        alias: The alias whose resolution loops.
        chain: The identifiers visited, ending with the repeated one.
    """

    def __init__(self, alias: str, chain: Iterable[str]):
        self.chain = tuple(chain)
        super().__init__(f"Alias cycle detected for '{alias}': {' -> '.join(self.chain)}")
        self.alias = alias


class CircularDependencyError(ContainerError):
    """Raised when an identifier re-enters resolution while still being built.

    Attributes:
        key: The identifier that was requested a second time.
        chain: The active resolution chain at the time of the failure.
    """

    def __init__(self, key: str, chain: Iterable[str] = ()):
        self.chain = tuple(chain)
        path = " -> ".join(self.chain + (key,))
        super().__init__(f"Circular dependency detected for: {key} ({path})")
        self.key = key


class UnresolvableDependencyError(ContainerError):
    """Raised when a class-typed constructor parameter cannot be satisfied.

    The parameter's type is neither bound nor instantiable, the parameter
    does not accept ``None`` and it declares no default.

    Attributes:
        parameter: The constructor parameter name.
        annotation: The declared type of the parameter.
        owner: The class being constructed.
    """

    def __init__(self, parameter: str, annotation: Any, owner: Any = None):
        owner_name = _name_of(owner) if owner is not None else "?"
        super().__init__(
            f"Cannot resolve dependency '{parameter}' of type {_name_of(annotation)} (required by: '{owner_name}')"
        )
        self.parameter = parameter
        self.annotation = annotation
        self.owner = owner


class UnresolvablePrimitiveError(ContainerError):
    """Raised when an untyped or builtin-typed parameter has no value.

    Attributes:
        parameter: The constructor parameter name.
        owner: The class being constructed.
    """

    def __init__(self, parameter: str, owner: Any = None):
        owner_name = _name_of(owner) if owner is not None else "?"
        super().__init__(f"Cannot resolve primitive dependency '{parameter}' (required by: '{owner_name}')")
        self.parameter = parameter
        self.owner = owner


class NotInstantiableError(ContainerError):
    """Raised when the target of a resolution cannot be constructed.

    Attributes:
        key: The identifier being built.
        reason: Short human-readable explanation.
    """

    def __init__(self, key: str, reason: Optional[str] = None):
        detail = f": {reason}" if reason else ""
        super().__init__(f"Class {key} is not instantiable{detail}")
        self.key = key
        self.reason = reason


class ServiceNotFoundError(NotInstantiableError):
    """Raised when an identifier is neither bound nor names an importable class."""

    def __init__(self, key: str):
        super().__init__(key, "identifier is not bound and does not name a class")


class AutoInstantiationError(ContainerError):
    """Raised when ``instance(key)`` has no object and *key* is not a class.

    Attributes:
        key: The identifier that could not be auto-instantiated.
    """

    def __init__(self, key: str):
        super().__init__(f"Cannot auto-instantiate '{key}': class does not exist.")
        self.key = key


class ConfigurationError(ContainerError):
    """Raised when a configuration file cannot be read or holds no mapping."""

    def __init__(self, msg: str):
        super().__init__(msg)
