"""Call-tracking mocks for TPTest.

A mock wraps a real instance of the target class. Methods named in the
stubs are intercepted: each call is recorded in the mock's own call log and
answered with the configured stub value. Everything else passes through to
the wrapped instance. Plain methods of the target are re-bound to the mock,
so a real method calling ``self.stubbed(...)`` is intercepted as well.

Usage:
    mock = create_mock(Calculator, {"mock_me": 10})
    mock.compute()  # calls self.mock_me(8, 20) internally
    call_log(mock).count("mock_me")  # -> 1
"""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class MockSpec(BaseModel):
    """Describes a mock: what to construct and which methods to intercept."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target: type
    """Class to instantiate and stand in for."""

    stubs: dict[str, Any] = Field(default_factory=dict)
    """Method name -> value returned by the intercepted method."""

    args: list[Any] = Field(default_factory=list)
    """Positional constructor arguments."""

    kwargs: dict[str, Any] = Field(default_factory=dict)
    """Keyword constructor arguments."""

    raises: dict[str, BaseException] = Field(default_factory=dict)
    """Method name -> exception raised by the intercepted method."""

    @field_validator("stubs", "raises")
    @classmethod
    def check_method_names(cls, v: dict[str, Any]) -> dict[str, Any]:
        for name in v:
            if not name.isidentifier() or name.startswith("_mock_"):
                raise ValueError(f"Cannot intercept method {name!r}")
        return v

    @property
    def intercepted(self) -> list[str]:
        """Names of every intercepted method, stubs first."""
        return list(self.stubs) + [name for name in self.raises if name not in self.stubs]


@dataclass
class Call:
    """Arguments of one intercepted call."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)


@dataclass
class CallLog:
    """Calls recorded by one mock, per method, in call order."""

    calls: dict[str, list[Call]] = field(default_factory=dict)

    @classmethod
    def for_methods(cls, names: Iterable[str]) -> CallLog:
        return cls({name: [] for name in names})

    def record(self, method: str, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Call:
        call = Call(tuple(args), dict(kwargs))
        self.calls.setdefault(method, []).append(call)
        return call

    def count(self, method: str) -> int:
        """Number of recorded calls of ``method``."""
        return len(self.calls.get(method, ()))

    def get(self, method: str, occurrence: int = 0) -> Call | None:
        """The ``occurrence``-th recorded call of ``method``, or None."""
        calls = self.calls.get(method, [])
        if 0 <= occurrence < len(calls):
            return calls[occurrence]
        return None

    def __contains__(self, method: object) -> bool:
        return method in self.calls


class Mock:
    """Proxy standing in for an instance of ``spec.target``.

    The proxy deliberately has no public attributes of its own, so every
    public name resolves against the interception table or the wrapped
    instance.
    """

    def __init__(self, spec: MockSpec):
        instance = spec.target(*spec.args, **spec.kwargs)
        object.__setattr__(self, "_mock_spec", spec)
        object.__setattr__(self, "_mock_instance", instance)
        object.__setattr__(self, "_mock_calls", CallLog.for_methods(spec.intercepted))
        object.__setattr__(
            self,
            "_mock_table",
            {name: self._mock_interceptor(name) for name in spec.intercepted},
        )
        logger.debug(
            "Created mock of %s intercepting %s",
            spec.target.__name__,
            ", ".join(spec.intercepted) or "nothing",
        )

    def _mock_interceptor(self, name: str) -> Callable[..., Any]:
        spec = self._mock_spec
        calls = self._mock_calls

        def intercepted(*args: Any, **kwargs: Any) -> Any:
            calls.record(name, args, kwargs)
            logger.debug("Intercepted %s.%s%r", spec.target.__name__, name, args)
            if name in spec.raises:
                raise spec.raises[name]
            return spec.stubs.get(name)

        intercepted.__name__ = name
        intercepted.__qualname__ = f"{spec.target.__qualname__}.{name}"
        return intercepted

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. for names of the target
        if name.startswith("_mock_"):
            raise AttributeError(name)

        table = self._mock_table
        if name in table:
            return table[name]

        instance = self._mock_instance
        own = getattr(instance, "__dict__", {})
        if name not in own:
            try:
                raw = inspect.getattr_static(type(instance), name)
            except AttributeError:
                raw = None
            if isinstance(raw, types.FunctionType):
                return types.MethodType(raw, self)

        return getattr(instance, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._mock_instance, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self._mock_instance, name)

    def _mock_get_class(self) -> type:
        return self._mock_spec.target

    __class__ = property(_mock_get_class)  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Mock of {self._mock_spec.target.__name__} at {id(self):#x}>"

    def __str__(self) -> str:
        return str(self._mock_instance)

    def __bool__(self) -> bool:
        return bool(self._mock_instance)

    def __len__(self) -> int:
        return len(self._mock_instance)

    def __iter__(self):
        return iter(self._mock_instance)

    def __contains__(self, item: object) -> bool:
        return item in self._mock_instance

    def __getitem__(self, key: Any) -> Any:
        return self._mock_instance[key]


def create_mock(
    target: type,
    stubs: Mapping[str, Any] | None = None,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
    raises: Mapping[str, BaseException] | None = None,
) -> Any:
    """Build a mock of ``target``.

    Args:
        target: Class to construct and stand in for.
        stubs: Method name -> value returned instead of running the method.
        args: Positional constructor arguments.
        kwargs: Keyword constructor arguments.
        raises: Method name -> exception raised instead of running the method.

    Returns:
        A :class:`Mock` that passes ``isinstance(mock, target)``.
    """
    spec = MockSpec(
        target=target,
        stubs=dict(stubs or {}),
        args=list(args),
        kwargs=dict(kwargs or {}),
        raises=dict(raises or {}),
    )
    return Mock(spec)


def _is_mock(obj: Any) -> bool:
    # type() rather than isinstance: a mock reports its target as __class__
    return type(obj) is Mock


def mock_target(obj: Any) -> type | None:
    """The class a mock stands in for, or None for anything else."""
    if _is_mock(obj):
        return object.__getattribute__(obj, "_mock_spec").target
    return None


def call_log(obj: Any) -> CallLog | None:
    """The call log of a mock, or None for anything else."""
    if _is_mock(obj):
        return object.__getattribute__(obj, "_mock_calls")
    return None
