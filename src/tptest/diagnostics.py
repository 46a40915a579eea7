"""Diagnostics and error reporting for TPTest.

Provides the framework's exceptions along with detailed error messages
that carry actionable suggestions.
"""

from dataclasses import dataclass, field


@dataclass
class SearchAttempt:
    """Record of a single search attempt during resolution."""

    location: str  # What was searched (matcher registry, file path, etc.)
    found: bool  # Whether anything was found
    reason: str | None = None  # Why it failed (if not found)


@dataclass
class DiagnosticContext:
    """Accumulated context during a resolution attempt."""

    target: str  # What we're trying to resolve
    searches: list[SearchAttempt] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def add_search(self, location: str, found: bool, reason: str | None = None) -> None:
        """Record a search attempt."""
        self.searches.append(SearchAttempt(location, found, reason))

    def add_suggestion(self, suggestion: str) -> None:
        """Add a suggested fix."""
        self.suggestions.append(suggestion)

    def format_error(self, summary: str) -> str:
        """Format a detailed error message.

        Args:
            summary: The main error message.

        Returns:
            Formatted error with search history and suggestions.
        """
        lines = [summary]

        if self.searches:
            lines.append("")
            lines.append("Searched:")
            for attempt in self.searches:
                icon = "✓" if attempt.found else "✗"
                line = f"  {icon} {attempt.location}"
                if attempt.reason:
                    line += f" ({attempt.reason})"
                lines.append(line)

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"  {i}. {suggestion}")

        return "\n".join(lines)


class TPTError(Exception):
    """Base class for errors raised by the framework itself.

    Includes diagnostic context when one is available.
    """

    def __init__(self, message: str, context: DiagnosticContext | None = None):
        self.context = context
        if context:
            message = context.format_error(message)
        super().__init__(message)


class UnknownMatcherError(TPTError):
    """Raised when an expectation calls a matcher that is not registered."""

    def __init__(self, matcher: str, context: DiagnosticContext | None = None):
        self.matcher = matcher
        super().__init__(f"Unknown matcher: {matcher}", context=context)


class LoadError(TPTError):
    """Raised when a spec file cannot be imported."""
