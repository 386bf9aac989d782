# wirebox/__init__.py
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wirebox")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .container import Container
from .bindings import Binding, BindingKind
from .config_store import ConfigStore, read_tree
from .exceptions import (
    AliasConflictError,
    AliasCycleError,
    AutoInstantiationError,
    CircularDependencyError,
    ConfigurationError,
    ContainerError,
    NotInstantiableError,
    ServiceNotFoundError,
    UnresolvableDependencyError,
    UnresolvablePrimitiveError,
)

create = Container.create

__all__ = [
    "__version__",
    "Container",
    "create",
    "Binding",
    "BindingKind",
    "ConfigStore",
    "read_tree",
    "ContainerError",
    "AliasConflictError",
    "AliasCycleError",
    "CircularDependencyError",
    "UnresolvableDependencyError",
    "UnresolvablePrimitiveError",
    "NotInstantiableError",
    "ServiceNotFoundError",
    "AutoInstantiationError",
    "ConfigurationError",
]
