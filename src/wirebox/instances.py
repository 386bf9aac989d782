from typing import Any, Dict, Tuple

_MISSING = object()


class InstanceCache:
    """Built objects for shared bindings, keyed by canonical identifier."""

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}

    def has(self, key: str) -> bool:
        return key in self._instances

    def lookup(self, key: str) -> Tuple[bool, Any]:
        value = self._instances.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def put(self, key: str, value: Any) -> None:
        self._instances[key] = value

    def evict(self, key: str) -> None:
        self._instances.pop(key, None)

    def clear(self) -> None:
        self._instances.clear()
