"""Expectations - the fluent assertion API.

``expect(subject)`` returns an :class:`Expectation`. Any public attribute
that is not defined on the class is treated as a matcher name and resolved
against the matcher registry when it is called::

    self.expect([1, 2]).to_have_count(2)
    self.expect(123).not_.to_be("123")
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

from tptest.matchers import MatcherRegistry, MatcherResult, default_registry, display_value

if TYPE_CHECKING:
    from tptest.case import TestCase


class Expectation:
    """One subject under assertion, owned by the test case that created it."""

    def __init__(
        self,
        subject: Any,
        case: TestCase,
        registry: MatcherRegistry | None = None,
    ):
        self.subject = subject
        self.case = case
        self.invert = False
        self.registry = registry if registry is not None else default_registry

    @property
    def not_(self) -> Expectation:
        """Invert the next matcher. Inverting twice is the same as once."""
        self.invert = True
        return self

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return functools.partial(self.match, name)

    def match(self, name: str, *args: Any, **kwargs: Any) -> MatcherResult:
        """Apply the matcher ``name`` and record the outcome on the test case.

        Raises:
            UnknownMatcherError: If ``name`` is not a registered matcher.
                Nothing is recorded in that case.
        """
        predicate = self.registry.resolve(name)
        passed = bool(predicate(self.subject, *args, **kwargs)) != self.invert
        description = self.describe(name, args)
        self.case.record(passed, description)
        return MatcherResult(passed, description)

    def describe(self, name: str, args: tuple[Any, ...]) -> str:
        matcher = f"not {name}" if self.invert else name
        text = f" : {self.case.name}, {self.case.current_test} : Expected {display_value(self.subject)} {matcher}"
        if args:
            text += f" {display_value(args[0])}"
        return text
