"""Test cases - discovery, lifecycle hooks and the assertion tally."""

from __future__ import annotations

import logging
import types
from dataclasses import dataclass, field
from typing import Any

from tptest.capture import OutputCapture
from tptest.config import TPTConfig
from tptest.expectation import Expectation
from tptest.matchers import MatcherRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class Tally:
    """Assertions recorded by one test case."""

    assertions: int = 0
    failures: list[str] = field(default_factory=list)
    passes: list[str] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)

    def record(self, passed: bool, description: str) -> None:
        self.assertions += 1
        if passed:
            self.passes.append(description)
        else:
            self.failures.append(description)

    @property
    def ok(self) -> bool:
        """Whether no failure was recorded."""
        return not self.failures


class TestCase:
    """Base class for test cases.

    Every public method whose name contains the test marker (``"it"`` by
    default) is a test. ``run()`` calls ``before_all`` once, wraps each test
    in ``before_each``/``after_each`` and finishes with ``after_all``.
    Exceptions escaping a hook or a test are recorded as failures; they
    never stop the remaining tests.

    Example:
        class WhenUsingCallbacks(TestCase):
            def before_each(self):
                self.items = []

            def it_should_start_empty(self):
                self.expect(self.items).to_have_count(0)

        tally = WhenUsingCallbacks(verbose=True).run()
    """

    # Keep pytest from collecting this class and its subclasses
    __test__ = False

    def __init__(self, verbose: bool | None = None, config: TPTConfig | None = None):
        self.config = config or TPTConfig()
        self.verbose = self.config.verbose if verbose is None else verbose
        self.tally = Tally()
        self.current_test: str | None = None
        self.registry: MatcherRegistry = default_registry

    @property
    def name(self) -> str:
        return type(self).__name__

    def before_all(self) -> None:
        pass

    def before_each(self) -> None:
        pass

    def after_each(self) -> None:
        pass

    def after_all(self) -> None:
        pass

    def expect(self, subject: Any) -> Expectation:
        """Start an expectation about ``subject``."""
        return Expectation(subject, self, self.registry)

    def record(self, passed: bool, description: str) -> None:
        self.tally.record(passed, description)

    @classmethod
    def discover(cls, marker: str = "it") -> list[str]:
        """Names of the test methods of this class, in definition order.

        Base classes come first. Only functions and staticmethods count;
        private names and names defined by TestCase itself are never tests.
        """
        reserved = set(dir(TestCase))
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            if not issubclass(klass, TestCase) or klass is TestCase:
                continue
            for name, raw in vars(klass).items():
                if name.startswith("_") or name in reserved or name in names:
                    continue
                if marker in name and isinstance(raw, (types.FunctionType, staticmethod)):
                    names.append(name)
        return names

    def test_methods(self) -> list[str]:
        return self.discover(self.config.test_marker)

    def run(self) -> Tally:
        """Run the whole case and return its tally."""
        methods = self.test_methods()
        logger.debug("Running %s: %d test methods", self.name, len(methods))

        self._run_hook("before_all")
        for method in methods:
            self._run_test(method)
        self._run_hook("after_all")

        self.current_test = None
        logger.debug(
            "Finished %s: %d/%d passed",
            self.name,
            len(self.tally.passes),
            self.tally.assertions,
        )
        return self.tally

    def _run_hook(self, hook: str) -> None:
        self.current_test = hook
        try:
            getattr(self, hook)()
        except Exception as e:
            self._record_error(e)

    def _run_test(self, method: str) -> None:
        self.current_test = method
        logger.debug("Running %s.%s", self.name, method)

        with OutputCapture(enabled=self.config.capture_output) as capture:
            try:
                self.before_each()
                getattr(self, method)()
            except Exception as e:
                self._record_error(e)

            # after_each runs even when the test raised
            try:
                self.after_each()
            except Exception as e:
                self._record_error(e)

        if capture.captured.has_output:
            self.tally.logs.extend(capture.captured.as_logs(method))

    def _record_error(self, exc: Exception) -> None:
        logger.debug("%s.%s raised", self.name, self.current_test, exc_info=exc)
        lines = str(exc).splitlines()
        message = f"{type(exc).__name__}: {lines[0]}" if lines else type(exc).__name__
        self.record(False, f" : {self.name}, {self.current_test} : Raised {message}")
