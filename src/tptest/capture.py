"""Output capture for TPTest.

Captures stdout/stderr while a test method runs so it can be reported
alongside that test's results instead of interleaving with the summary.
"""

from __future__ import annotations

from contextlib import ExitStack, redirect_stderr, redirect_stdout
from dataclasses import dataclass
from io import StringIO


@dataclass
class CapturedOutput:
    """Container for captured stdout/stderr."""

    stdout: str = ""
    stderr: str = ""

    @property
    def has_output(self) -> bool:
        """Whether any output was captured."""
        return bool(self.stdout or self.stderr)

    def as_logs(self, label: str) -> list[str]:
        """Convert captured output to log entries for a Tally."""
        logs = []
        if self.stdout:
            logs.append(f"[{label} stdout]\n{self.stdout.rstrip()}")
        if self.stderr:
            logs.append(f"[{label} stderr]\n{self.stderr.rstrip()}")
        return logs


class OutputCapture:
    """Context manager capturing stdout/stderr, or doing nothing when disabled.

    Usage:
        with OutputCapture() as capture:
            print("hello")

        assert capture.captured.stdout == "hello\\n"
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.captured = CapturedOutput()
        self._stack: ExitStack | None = None
        self._stdout = StringIO()
        self._stderr = StringIO()

    def __enter__(self) -> OutputCapture:
        if self.enabled:
            self._stack = ExitStack()
            self._stack.enter_context(redirect_stdout(self._stdout))
            self._stack.enter_context(redirect_stderr(self._stderr))
        return self

    def __exit__(self, *exc_info) -> None:
        if self._stack is None:
            return
        self._stack.close()
        self._stack = None
        self.captured = CapturedOutput(
            stdout=self._stdout.getvalue(),
            stderr=self._stderr.getvalue(),
        )
