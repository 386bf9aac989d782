import builtins
import importlib
import inspect
import types
from typing import Any, Dict, Optional, Union, get_args, get_origin

from .constants import PRIMITIVE_ANNOTATIONS

KeyT = Union[str, type]


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def key_of(key: KeyT) -> str:
    if isinstance(key, type):
        return qualified_name(key)
    if isinstance(key, str):
        return key
    raise TypeError(f"Identifier must be a str or a class, got {type(key).__name__}")


def derive_alias(class_name: str, context: str) -> str:
    if context and class_name.startswith(context + "."):
        class_name = class_name[len(context) + 1:]
    return class_name.replace("\\", ".").replace("/", ".").lower()


def is_primitive(annotation: Any) -> bool:
    """Whether *annotation* carries no class the container could wire.

    Builtins (also named as strings or parametrised, like ``list[int]``),
    ``Any``, ``object``, missing annotations and unions of more than one
    type are primitive. ``Optional[X]`` is judged by ``X``.
    """
    if annotation is inspect.Parameter.empty or annotation is None:
        return True
    if isinstance(annotation, str):
        head = annotation.split("[", 1)[0].strip()
        return isinstance(getattr(builtins, head, None), type)
    if any(annotation is p for p in PRIMITIVE_ANNOTATIONS):
        return True
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        return len(members) != 1 or is_primitive(members[0])
    if isinstance(origin, type):
        return origin.__module__ == builtins.__name__
    if isinstance(annotation, type):
        return annotation.__module__ == builtins.__name__
    return False


def import_class(dotted: str) -> Optional[type]:
    """Import ``pkg.module.Class`` (or ``pkg.module.Outer.Inner``) by name.

    Returns ``None`` when no prefix of *dotted* is an importable module or the
    remaining attribute path does not lead to a class.
    """
    parts = dotted.split(".")
    if not all(parts):
        return None
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                return None
        return obj if inspect.isclass(obj) else None
    return None


class TypeRegistry:
    """Remembers classes seen by the container, keyed by qualified name.

    Classes defined inside functions cannot be imported by name, so every
    class handed to the container is recorded here before its string
    identifier is used anywhere else.
    """

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}

    def remember(self, key: KeyT) -> str:
        if isinstance(key, type):
            name = qualified_name(key)
            self._types[name] = key
            return name
        return key_of(key)

    def lookup(self, name: str) -> Optional[type]:
        cls = self._types.get(name)
        if cls is None and "." in name:
            cls = import_class(name)
            if cls is not None:
                self._types[name] = cls
        return cls

    def exists(self, name: str) -> bool:
        return self.lookup(name) is not None
