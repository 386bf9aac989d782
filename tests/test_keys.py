import collections
from typing import Any, Dict, List, Optional, Union

import pytest

from wirebox.keys import TypeRegistry, import_class, is_primitive, key_of, qualified_name


class Outer:
    class Inner:
        pass


def test_key_of_class_and_string():
    assert key_of(Outer) == f"{__name__}.Outer"
    assert key_of(Outer.Inner) == f"{__name__}.Outer.Inner"
    assert key_of("plain") == "plain"


def test_key_of_rejects_other_types():
    with pytest.raises(TypeError):
        key_of(42)


def test_import_class_by_dotted_path():
    assert import_class("collections.OrderedDict") is collections.OrderedDict
    assert import_class(qualified_name(Outer.Inner)) is Outer.Inner


def test_import_class_misses():
    assert import_class("collections.no_such_thing") is None
    assert import_class("os.path") is None
    assert import_class("no_such_package_xyz.Thing") is None
    assert import_class(".relative.Thing") is None


@pytest.mark.parametrize(
    "annotation",
    [int, str, bytes, dict, List[int], Dict[str, int], list[str], Any, None, "int", "dict[str, int]", Union[Outer, int]],
)
def test_primitive_annotations(annotation):
    assert is_primitive(annotation)


@pytest.mark.parametrize("annotation", [Outer, collections.OrderedDict, "SomeService", Optional[Outer], Outer | None])
def test_non_primitive_annotations(annotation):
    assert not is_primitive(annotation)


def test_type_registry_remembers_local_classes():
    class Local:
        pass

    registry = TypeRegistry()
    name = registry.remember(Local)

    assert registry.lookup(name) is Local
    assert registry.exists(name)
    assert not registry.exists("Local")
