from types import MappingProxyType
from typing import Dict, List, Mapping

from .constants import LOGGER
from .exceptions import AliasConflictError, AliasCycleError


class AliasTable:
    """Directed ``alias -> identifier`` edges, resolved transitively.

    Many aliases may point at one identifier, but an alias can only ever
    point at one identifier: redefining it elsewhere is a conflict.
    """

    def __init__(self) -> None:
        self._aliases: Dict[str, str] = {}

    def define(self, key: str, alias: str) -> None:
        if alias == key:
            return
        existing = self._aliases.get(alias)
        if existing is not None:
            if existing != key:
                LOGGER.debug("Alias conflict: %s -> %s (requested %s)", alias, existing, key)
                raise AliasConflictError(alias, existing, key)
            return
        if self.canonicalize(key) == alias:
            raise AliasCycleError(alias, [alias] + self._chain(key))
        self._aliases[alias] = key
        LOGGER.debug("Alias %s -> %s", alias, key)

    def _chain(self, key: str) -> List[str]:
        chain = [key]
        seen = {key}
        current = key
        while current in self._aliases:
            current = self._aliases[current]
            chain.append(current)
            if current in seen:
                raise AliasCycleError(key, chain)
            seen.add(current)
        return chain

    def canonicalize(self, key: str) -> str:
        if key not in self._aliases:
            return key
        return self._chain(key)[-1]

    def snapshot(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self._aliases))

    def clear(self) -> None:
        self._aliases.clear()
