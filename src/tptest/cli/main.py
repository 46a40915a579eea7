"""TPTest CLI entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from tptest import __version__

console = Console()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(paths: tuple[Path, ...], project: Path | None, config: Path | None):
    """Load config and test cases, exiting with status 1 on load errors."""
    from tptest.config import load_config, resolve_paths
    from tptest.diagnostics import LoadError
    from tptest.loader import load_cases

    project_root = project or Path.cwd()
    cfg = resolve_paths(load_config(config_path=config, project_root=project_root), project_root)
    spec_paths = list(paths) or [Path(p) for p in cfg.spec_paths]

    try:
        cases = load_cases(spec_paths, cfg)
    except LoadError as e:
        console.print("[red]Error loading tests:[/red]", escape(str(e)))
        raise SystemExit(1)

    return cfg, cases


@click.group()
@click.version_option(__version__, prog_name="tpt")
def cli() -> None:
    """TPTest - behavior-driven tests with expectations and mocks."""
    pass


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to tpt.yaml config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Also report passing assertions.")
@click.option("--debug", is_flag=True, help="Enable debug output.")
def run(
    paths: tuple[Path, ...],
    project: Path | None,
    config: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Run test cases.

    PATHS are spec files or directories. Defaults to spec_paths from tpt.yaml.
    """
    from tptest.reporting import format_totals, print_summary

    # Configure logging before loading so loader records are not dropped
    _setup_logging(debug)
    cfg, cases = _load(paths, project, config)
    if debug:
        cfg = cfg.model_copy(update={"debug_mode": True})
    elif cfg.debug_mode:
        _setup_logging(True)

    if cfg.debug_mode:
        console.print(f"[dim]Config: {cfg.model_dump_json(indent=2)}[/dim]\n")

    tallies = []
    for case_cls in cases:
        case = case_cls(verbose=verbose or None, config=cfg)
        tally = case.run()
        print_summary(console, case.name, tally, verbose=case.verbose)
        tallies.append(tally)

    summary = format_totals(tallies)
    if any(not t.ok for t in tallies):
        console.print(f"[red]{summary}[/red]")
        raise SystemExit(1)
    console.print(f"[green]{summary}[/green]")


@cli.command(name="list")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to tpt.yaml config file.",
)
def list_cases(paths: tuple[Path, ...], project: Path | None, config: Path | None) -> None:
    """List test cases and their test methods without running them."""
    cfg, cases = _load(paths, project, config)

    test_count = 0
    for case_cls in cases:
        methods = case_cls.discover(cfg.test_marker)
        test_count += len(methods)
        console.print(f"[bold]{case_cls.__name__}[/bold]")
        for method in methods:
            console.print(f"  - {method}")

    console.print(f"\n[green]✓[/green] {test_count} tests in {len(cases)} cases")


@cli.command()
def init() -> None:
    """Initialize TPTest in the current directory.

    Creates:
    - spec/
    - tpt.yaml
    """
    project_root = Path.cwd()

    spec_dir = project_root / "spec"
    spec_dir.mkdir(parents=True, exist_ok=True)
    console.print(f"[green]✓[/green] Created {spec_dir.relative_to(project_root)}/")

    config_file = project_root / "tpt.yaml"
    if not config_file.exists():
        config_file.write_text(
            """\
# TPTest configuration
version: "0.1"

# Report passing assertions as well as failures
# verbose: false

# Substring that marks a method as a test
# test_marker: it

# Files or directories to search for test cases
# spec_paths:
#   - spec

# Glob used to pick spec files inside directories
# file_pattern: "*.py"

# Paths to add to Python's sys.path before importing spec files
# source_paths:
#   - ./src

# Capture stdout/stderr during each test method
# capture_output: false

# Enable verbose debug output
# debug_mode: false
"""
        )
        console.print(f"[green]✓[/green] Created {config_file.name}")
    else:
        console.print(f"[yellow]-[/yellow] {config_file.name} already exists")

    console.print("\n[dim]TPTest initialized. Create test cases in spec/[/dim]")


@cli.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
def config(project: Path | None) -> None:
    """Show the current configuration."""
    from tptest.config import load_config

    project_root = project or Path.cwd()
    cfg = load_config(project_root=project_root)

    console.print(Panel(cfg.model_dump_json(indent=2), title="TPTest Config"))


if __name__ == "__main__":
    cli()
