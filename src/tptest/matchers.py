"""Matcher registry for TPTest.

A matcher is a named predicate comparing the subject of an expectation
against the arguments given to the matcher call. Expectations look matchers
up by name at call time, so registering a new one here makes it available
on every expectation::

    @matcher("to_be_even")
    def _to_be_even(subject):
        return subject % 2 == 0
"""

from __future__ import annotations

import difflib
import logging
import numbers
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from tptest.diagnostics import DiagnosticContext, UnknownMatcherError
from tptest.mock import call_log, mock_target

logger = logging.getLogger(__name__)

Predicate = Callable[..., bool]

_STRINGS = (str, bytes, bytearray)


@dataclass
class MatcherResult:
    """Outcome of a single matcher call."""

    passed: bool
    description: str


class MatcherRegistry:
    """Mapping of matcher names to predicates."""

    def __init__(self) -> None:
        self._matchers: dict[str, Predicate] = {}

    def register(self, name: str) -> Callable[[Predicate], Predicate]:
        """Decorator registering a predicate under ``name``.

        Registering an existing name replaces the previous predicate.
        """

        def decorator(func: Predicate) -> Predicate:
            if name.startswith("_"):
                raise ValueError(f"Matcher names cannot start with '_': {name!r}")
            self._matchers[name] = func
            return func

        return decorator

    def resolve(self, name: str) -> Predicate:
        """Look up the predicate for ``name``.

        Raises:
            UnknownMatcherError: If no matcher is registered under ``name``.
        """
        try:
            return self._matchers[name]
        except KeyError:
            pass

        ctx = DiagnosticContext(target=name)
        ctx.add_search(f"{len(self._matchers)} registered matchers", found=False)
        for close in difflib.get_close_matches(name, self._matchers, n=3):
            ctx.add_suggestion(f"Did you mean '{close}'?")
        raise UnknownMatcherError(name, context=ctx)

    def names(self) -> list[str]:
        return sorted(self._matchers)

    def __contains__(self, name: object) -> bool:
        return name in self._matchers


default_registry = MatcherRegistry()


def matcher(name: str) -> Callable[[Predicate], Predicate]:
    """Register a matcher on the default registry."""
    return default_registry.register(name)


# Value helpers


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_collection(value: Any) -> bool:
    return isinstance(value, (Mapping, Sequence, Set)) and not isinstance(value, _STRINGS)


def _number_equals_string(number: Any, text: str) -> bool:
    stripped = text.strip()
    # "1_000" is Python literal syntax, not a numeric string
    if "_" in stripped:
        return str(number) == text
    try:
        if isinstance(number, Decimal):
            return number == Decimal(stripped)
        if isinstance(number, numbers.Integral):
            try:
                return number == int(stripped)
            except ValueError:
                return number == Decimal(stripped)
        return number == float(stripped)
    except (ValueError, InvalidOperation):
        return str(number) == text


def loose_equals(a: Any, b: Any) -> bool:
    """Compare two values, coercing across types where it is unambiguous.

    ``123`` equals ``"123"``, ``None`` equals any falsy value, booleans
    compare by truthiness, and sequences and mappings compare item-wise
    under the same rules.
    """
    if a is b:
        return True
    if a == b:
        return True

    if isinstance(a, bool) or isinstance(b, bool):
        return bool(a) == bool(b)
    if a is None or b is None:
        return not (b if a is None else a)

    if _is_number(a) and isinstance(b, str):
        return _number_equals_string(a, b)
    if _is_number(b) and isinstance(a, str):
        return _number_equals_string(b, a)

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if set(a) != set(b):
            return False
        return all(loose_equals(a[key], b[key]) for key in a)

    if (
        isinstance(a, Sequence)
        and isinstance(b, Sequence)
        and not isinstance(a, _STRINGS)
        and not isinstance(b, _STRINGS)
    ):
        if len(a) != len(b):
            return False
        return all(loose_equals(x, y) for x, y in zip(a, b))

    return False


def display_value(value: Any) -> str:
    """Return the human-readable form of a value used in descriptions."""
    target = mock_target(value)
    if target is not None:
        return f"instance of {target.__name__}"
    if value is None or isinstance(value, bool):
        return repr(value)
    if isinstance(value, str):
        return f'"{value}"'
    if _is_number(value):
        return str(value)
    if _is_collection(value):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, type):
        return value.__name__
    return f"instance of {type(value).__name__}"


def _lineage(subject: Any) -> tuple[type, ...]:
    target = mock_target(subject)
    cls = target if target is not None else type(subject)
    return cls.__mro__


# Built-in matchers


@matcher("to_be_truthy")
def _to_be_truthy(subject: Any) -> bool:
    return bool(subject)


@matcher("to_be_falsy")
def _to_be_falsy(subject: Any) -> bool:
    return not subject


@matcher("to_be")
def _to_be(subject: Any, value: Any) -> bool:
    if subject is value:
        return True
    return type(subject) is type(value) and subject == value


@matcher("to_equal")
def _to_equal(subject: Any, value: Any) -> bool:
    return loose_equals(subject, value)


@matcher("to_have")
def _to_have(subject: Any, key: Any) -> bool:
    if isinstance(subject, Mapping):
        return key in subject
    if isinstance(subject, Sequence) and isinstance(key, int) and not isinstance(key, bool):
        return 0 <= key < len(subject)
    return False


@matcher("to_have_count")
def _to_have_count(subject: Any, count: int) -> bool:
    try:
        return len(subject) == count
    except TypeError:
        return False


@matcher("to_have_method")
def _to_have_method(subject: Any, name: str) -> bool:
    return callable(getattr(subject, name, None))


@matcher("to_be_instance_of")
def _to_be_instance_of(subject: Any, kind: type | str) -> bool:
    if isinstance(kind, str):
        return any(
            kind in (cls.__name__, f"{cls.__module__}.{cls.__qualname__}")
            for cls in _lineage(subject)
        )
    if not isinstance(kind, type):
        return False
    return kind in _lineage(subject) or isinstance(subject, kind)


@matcher("to_have_called")
def _to_have_called(subject: Any, method: str, times: int) -> bool:
    log = call_log(subject)
    if log is None:
        logger.warning("to_have_called used on non-mock %s", type(subject).__name__)
        return False
    return log.count(method) == times


@matcher("to_have_called_with")
def _to_have_called_with(
    subject: Any,
    method: str,
    args: Sequence[Any],
    occurrence: int = 0,
    kwargs: Mapping[str, Any] | None = None,
) -> bool:
    log = call_log(subject)
    if log is None:
        logger.warning("to_have_called_with used on non-mock %s", type(subject).__name__)
        return False
    call = log.get(method, occurrence)
    if call is None:
        return False
    return loose_equals(list(call.args), list(args)) and call.kwargs == dict(kwargs or {})
