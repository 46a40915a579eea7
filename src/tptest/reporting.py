"""Reporting - turns a test case's tally into text."""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from tptest.case import Tally

RULE = "====================="


def format_summary(name: str, tally: Tally, verbose: bool = False) -> str:
    """Format a case summary as plain text.

    Args:
        name: Name of the test case.
        tally: The case's recorded assertions.
        verbose: If True, list passing assertions and captured output too.

    Returns:
        Summary text, one assertion per line.
    """
    lines = [f"{name} - {len(tally.passes)}/{tally.assertions}", RULE]
    lines.extend(f"FAIL{failure}" for failure in tally.failures)
    if verbose:
        lines.extend(f"PASS{passed}" for passed in tally.passes)
        lines.extend(tally.logs)
    if tally.ok:
        lines.append("  -> All tests passed!")
    return "\n".join(lines)


def print_summary(console: Console, name: str, tally: Tally, verbose: bool = False) -> None:
    """Render a case summary in a panel colored by outcome."""
    body = [Text.assemble(("FAIL", "bold red"), failure) for failure in tally.failures]
    if verbose:
        body.extend(Text.assemble(("PASS", "bold green"), passed) for passed in tally.passes)
        body.extend(Text(log, style="dim") for log in tally.logs)
    if tally.ok:
        body.append(Text("-> All tests passed!", style="green"))

    color = "green" if tally.ok else "red"
    console.print(
        Panel(
            Group(*body),
            title=f"[{color}]{name} - {len(tally.passes)}/{tally.assertions}[/{color}]",
            title_align="left",
            border_style=color,
        )
    )


def format_totals(tallies: list[Tally]) -> str:
    """One-line summary across several cases."""
    assertions = sum(t.assertions for t in tallies)
    failed = sum(len(t.failures) for t in tallies)
    failing_cases = sum(1 for t in tallies if not t.ok)
    return (
        f"{assertions - failed} passed, {failed} failed "
        f"({assertions} assertions in {len(tallies)} cases, {failing_cases} failing)"
    )
