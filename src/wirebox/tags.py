from typing import Dict, Iterable, List, Tuple, Union

from .keys import KeyT


class TagRegistry:
    """Ordered groups of identifiers; duplicates and insertion order are kept."""

    def __init__(self) -> None:
        self._tags: Dict[str, List[KeyT]] = {}

    def add(self, tag: str, keys: Union[KeyT, Iterable[KeyT]]) -> None:
        if isinstance(keys, (str, type)):
            keys = [keys]
        self._tags.setdefault(tag, []).extend(keys)

    def members(self, tag: str) -> Tuple[KeyT, ...]:
        return tuple(self._tags.get(tag, ()))

    def clear(self) -> None:
        self._tags.clear()
