"""Tests for PEP 563 compatibility (from __future__ import annotations).

When `from __future__ import annotations` is active, all type hints become
strings at runtime. wirebox must resolve them via typing.get_type_hints().
"""

from __future__ import annotations

from typing import Optional

import pytest

from wirebox import Container, UnresolvableDependencyError
from wirebox.analysis import analyze_constructor, positional_arity


class Repo:
    pass


class Service:
    def __init__(self, repo: Repo):
        self.repo = repo


class OptionalService:
    def __init__(self, repo: Repo, name: Optional[str] = None):
        self.repo = repo
        self.name = name


class UnionService:
    def __init__(self, repo: Repo | None):
        self.repo = repo


class NoInit:
    pass


class TestAnalyzeConstructor:
    def test_resolves_string_annotations(self):
        specs = analyze_constructor(Service)
        assert len(specs) == 1
        assert specs[0].name == "repo"
        assert specs[0].annotation is Repo
        assert not specs[0].nullable

    def test_resolves_optional_annotations(self):
        repo, name = analyze_constructor(OptionalService)
        assert repo.annotation is Repo
        assert name.annotation is str
        assert name.nullable
        assert name.has_default and name.default is None

    def test_resolves_pep604_union(self):
        (repo,) = analyze_constructor(UnionService)
        assert repo.annotation is Repo
        assert repo.nullable

    def test_class_without_constructor(self):
        assert analyze_constructor(NoInit) == ()

    def test_unresolvable_forward_reference_is_kept_as_string(self, caplog):
        class Local:
            def __init__(self, dep: Missing):  # noqa: F821
                self.dep = dep

        caplog.set_level("WARNING", logger="wirebox")
        (spec,) = analyze_constructor(Local)

        assert spec.annotation == "Missing"
        assert "Missing" in caplog.text


class TestPositionalArity:
    def test_counts_positional_parameters(self):
        assert positional_arity(lambda: None) == 0
        assert positional_arity(lambda c: None) == 1
        assert positional_arity(lambda c, o, *, k=1: None) == 2

    def test_var_positional(self):
        assert positional_arity(lambda *args: None) == -1


class TestContainerWithFutureAnnotations:
    def test_autowires_string_annotations(self):
        service = Container.create().make(Service)
        assert isinstance(service.repo, Repo)

    def test_optional_is_resolved_when_possible(self):
        service = Container.create().make(OptionalService)
        assert isinstance(service.repo, Repo)
        assert service.name is None

    def test_unresolved_forward_reference_bound_by_name(self):
        class Local:
            def __init__(self, dep: Missing):  # noqa: F821
                self.dep = dep

        c = Container.create()
        with pytest.raises(UnresolvableDependencyError):
            c.make(Local)

        c.bind("Missing", lambda: "bound by name")
        assert c.make(Local).dep == "bound by name"
