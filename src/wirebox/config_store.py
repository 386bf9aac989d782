"""Hierarchical configuration tree with dot-path addressing.

:class:`ConfigStore` holds a nested mapping of configuration values. Paths
such as ``"database.credentials.username"`` address nested keys; reads fail
closed (returning the fallback) while writes create missing intermediate
mappings.

Settings files are read with :func:`read_tree`: ``.json`` through the
standard library, ``.yaml``/``.yml`` through PyYAML when the ``yaml`` extra
is installed.
"""

import copy
import json
import os
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .exceptions import ConfigurationError

_MISSING = object()

_JSON_SUFFIXES = (".json",)
_YAML_SUFFIXES = (".yaml", ".yml")


def _parse_yaml(handle: Any) -> Any:
    try:
        import yaml
    except ImportError:
        raise ConfigurationError("PyYAML not installed")
    try:
        return yaml.safe_load(handle) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e


def _parse_json(handle: Any) -> Any:
    try:
        return json.load(handle)
    except ValueError as e:
        raise ConfigurationError(f"Invalid JSON in config file: {e}") from e


def read_tree(path: str) -> Dict[str, Any]:
    """Read a settings file into a nested dict, picking the format by suffix.

    Raises:
        ConfigurationError: The suffix is unknown, the file cannot be opened
            or parsed, or its top level is not a mapping.
    """
    suffix = os.path.splitext(str(path))[1].lower()
    if suffix in _JSON_SUFFIXES:
        parse = _parse_json
    elif suffix in _YAML_SUFFIXES:
        parse = _parse_yaml
    else:
        raise ConfigurationError(f"Unsupported config file type: {path}")

    try:
        with open(path, encoding="utf-8") as handle:
            tree = parse(handle)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(tree, Mapping):
        raise ConfigurationError(f"Config file {path} must hold a mapping at the top level")
    return dict(tree)


def _deep_merge(a: Any, b: Any) -> Any:
    if isinstance(a, dict) and isinstance(b, Mapping):
        out = dict(a)
        for k, v in b.items():
            if k in out:
                out[k] = _deep_merge(out[k], v)
            else:
                out[k] = copy.deepcopy(v)
        return out
    return copy.deepcopy(b)


def _split(path: str) -> Tuple[str, ...]:
    return tuple(path.split("."))


class ConfigStore:
    """Nested key-value store addressed by dot-separated paths.

    Args:
        data: Optional initial tree. It is deep-copied, so later writes never
            mutate the caller's mapping.

    Example:
        >>> store = ConfigStore({"db": {"host": "localhost"}})
        >>> store.get("db.host")
        'localhost'
        >>> store.set("db.port", 5432).get("db.port")
        5432
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = {}
        if data:
            self.merge(data)

    def _walk(self, path: str) -> Any:
        node: Any = self._data
        for part in _split(path):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, path: str, fallback: Any = None) -> Any:
        """Return the value at *path*, or *fallback* if any segment is missing.

        A segment is also considered missing when the node being descended
        into is not a mapping.
        """
        value = self._walk(path)
        return fallback if value is _MISSING else value

    def has(self, path: str) -> bool:
        return self._walk(path) is not _MISSING

    def set(self, path: str, value: Any) -> "ConfigStore":
        """Assign *value* at *path*, creating intermediate mappings.

        Any non-mapping value found on the way is replaced by an empty
        mapping before descending.

        Returns:
            The store itself, for chaining.
        """
        *parents, leaf = _split(path)
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value
        return self

    def unset(self, path: str) -> None:
        """Remove the leaf at *path*; a no-op if any parent is absent."""
        *parents, leaf = _split(path)
        node: Any = self._data
        for part in parents:
            if not isinstance(node, dict) or part not in node:
                return
            node = node[part]
        if isinstance(node, dict):
            node.pop(leaf, None)

    def merge(self, tree: Mapping[str, Any]) -> "ConfigStore":
        self._data = _deep_merge(self._data, tree)
        return self

    def load(self, path: str) -> "ConfigStore":
        """Deep-merge the settings file at *path* over the current tree."""
        return self.merge(read_tree(path))

    def clear(self) -> None:
        self._data = {}

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
