"""TPTest - a small behavior-driven test framework.

Test cases subclass :class:`TestCase`, name their test methods with ``it``
and make assertions through :meth:`TestCase.expect`::

    class WhenAddingNumbers(TestCase):
        def it_should_add(self):
            self.expect(1 + 1).to_equal(2)
"""

from tptest.case import Tally, TestCase
from tptest.diagnostics import LoadError, TPTError, UnknownMatcherError
from tptest.expectation import Expectation
from tptest.matchers import MatcherRegistry, MatcherResult, default_registry, matcher
from tptest.mock import Call, CallLog, Mock, MockSpec, call_log, create_mock, mock_target

__version__ = "0.1.0"

__all__ = [
    "Call",
    "CallLog",
    "Expectation",
    "LoadError",
    "MatcherRegistry",
    "MatcherResult",
    "Mock",
    "MockSpec",
    "Tally",
    "TestCase",
    "TPTError",
    "UnknownMatcherError",
    "call_log",
    "create_mock",
    "default_registry",
    "matcher",
    "mock_target",
]
