"""Spec file loading.

Imports Python files from disk and collects the TestCase subclasses they
define, in the order they are defined.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from tptest.case import TestCase
from tptest.config import TPTConfig
from tptest.diagnostics import DiagnosticContext, LoadError

logger = logging.getLogger(__name__)


def add_source_paths(paths: Iterable[str]) -> None:
    """Put each path at the front of sys.path, once."""
    for source_path in paths:
        if source_path not in sys.path:
            sys.path.insert(0, source_path)


def collect_files(paths: Iterable[Path], pattern: str = "*.py") -> list[Path]:
    """Expand files and directories into a sorted list of spec files.

    Raises:
        LoadError: If a path does not exist.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(
                p for p in sorted(path.rglob(pattern)) if p.is_file() and not p.name.startswith("_")
            )
        else:
            ctx = DiagnosticContext(target=str(path))
            ctx.add_search(str(path), found=False, reason="no such file or directory")
            ctx.add_suggestion("Check spec_paths in tpt.yaml or the paths given on the command line")
            raise LoadError(f"Spec path not found: {path}", context=ctx)
    return files


def load_module(path: Path) -> ModuleType:
    """Import a spec file as a fresh module.

    Raises:
        LoadError: If the file cannot be imported.
    """
    resolved = path.resolve()
    ctx = DiagnosticContext(target=str(path))

    spec = importlib.util.spec_from_file_location(
        f"tptest_spec_{resolved.stem}_{abs(hash(str(resolved)))}",
        resolved,
    )
    if spec is None or spec.loader is None:
        ctx.add_search(str(resolved), found=False, reason="not an importable Python file")
        raise LoadError(f"Cannot import {path}", context=ctx)

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module

    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(spec.name, None)
        ctx.add_search(str(resolved), found=True, reason=f"{type(e).__name__}: {e}")
        ctx.add_suggestion("Check the file for syntax errors and missing imports")
        ctx.add_suggestion("Add the code under test to source_paths in tpt.yaml")
        raise LoadError(f"Failed to import {path}", context=ctx) from e

    logger.debug("Loaded spec module %s from %s", spec.name, resolved)
    return module


def find_cases(module: ModuleType, marker: str = "it") -> list[type[TestCase]]:
    """TestCase subclasses defined in ``module`` that have at least one test."""
    cases = []
    for obj in vars(module).values():
        if not isinstance(obj, type) or not issubclass(obj, TestCase) or obj is TestCase:
            continue
        if obj.__module__ != module.__name__:
            continue
        if obj.discover(marker):
            cases.append(obj)
    return cases


def load_cases(paths: Iterable[Path], config: TPTConfig) -> list[type[TestCase]]:
    """Load every spec file under ``paths`` and return the cases found."""
    add_source_paths(config.source_paths)

    cases: list[type[TestCase]] = []
    for path in collect_files(paths, config.file_pattern):
        module = load_module(path)
        found = find_cases(module, config.test_marker)
        logger.debug("%s: %d test cases", path, len(found))
        cases.extend(found)
    return cases
