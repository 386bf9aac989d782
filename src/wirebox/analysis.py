import inspect
import types
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union, get_args, get_origin, get_type_hints

from .constants import LOGGER

_EMPTY = inspect.Parameter.empty


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    annotation: Any = _EMPTY
    nullable: bool = False
    has_default: bool = False
    default: Any = None
    positional_only: bool = False


def _check_optional(ann: Any) -> Tuple[Any, bool]:
    origin = get_origin(ann)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(ann) if a is not type(None)]
        if len(args) == 1:
            return args[0], True
        if len(args) < len(get_args(ann)):
            return ann, True
    return ann, False


def _evaluate_hint(ann: Any, globalns: Dict[str, Any], localns: Dict[str, Any], owner: type) -> Any:
    if not isinstance(ann, str):
        return ann
    try:
        return eval(ann, globalns, localns)
    except NameError as exc:
        LOGGER.warning("'%s' name error retrieving %s type hints", exc.name, owner.__qualname__)
        return ann


def _init_type_hints(cls: type) -> Dict[str, Any]:
    try:
        init = inspect.getattr_static(cls, "__init__")
        return get_type_hints(init)
    except TypeError:
        return {}
    except NameError:
        pass

    # One bad forward reference must not cost the other parameters their types.
    try:
        raw = dict(init.__annotations__)
    except (AttributeError, NameError):
        return {}
    globalns = getattr(init, "__globals__", {})
    localns = dict(vars(cls))
    return {name: _evaluate_hint(ann, globalns, localns, cls) for name, ann in raw.items()}


def has_own_constructor(cls: type) -> bool:
    return cls.__init__ is not object.__init__


def analyze_constructor(cls: type) -> Tuple[ParameterSpec, ...]:
    if not has_own_constructor(cls):
        return ()
    try:
        sig = inspect.signature(cls.__init__)
    except (ValueError, TypeError):
        return ()

    hints = _init_type_hints(cls)
    plan: List[ParameterSpec] = []

    for index, (name, param) in enumerate(sig.parameters.items()):
        if index == 0 and param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        ann = hints.get(name, param.annotation)
        base_type, nullable = _check_optional(ann)
        has_default = param.default is not _EMPTY

        plan.append(
            ParameterSpec(
                name=name,
                annotation=base_type,
                nullable=nullable or (has_default and param.default is None),
                has_default=has_default,
                default=param.default if has_default else None,
                positional_only=param.kind is inspect.Parameter.POSITIONAL_ONLY,
            )
        )

    return tuple(plan)


def positional_arity(fn: Any) -> int:
    """Number of positional arguments *fn* accepts, or -1 for ``*args``."""
    try:
        sig = inspect.signature(fn)
    except (ValueError, TypeError):
        return -1
    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return -1
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count
