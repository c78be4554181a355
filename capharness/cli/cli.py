#!/usr/bin/env python3
"""
capharness CLI: run scripts against simulated or real effects.

Usage:
    capharness run [OPTIONS] SCRIPT
    capharness files [OPTIONS] [ROOT]
    capharness check [OPTIONS] CASES
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from tabulate import tabulate

from capharness.core.models import Failure
from capharness.infra.capabilities import production_capabilities
from capharness.infra.io.config import ConfigurationError, HarnessConfig
from capharness.infra.io.log_output.console import (
    Colors,
    log,
    set_verbose,
    truncate_text,
)
from capharness.infra.tools.env import load_user_env
from capharness.lang.bindings import pure_bindings, repl_bindings
from capharness.lang.evaluator import run_program
from capharness.lang.pretty import render
from capharness.testing.bindings import test_bindings
from capharness.testing.cases import CaseFileError, check_case, load_cases
from capharness.testing.discovery import source_files
from capharness.testing.runner import run_test_with_files

# Bootstrap state: tracks whether bootstrap() has been called
_bootstrapped = False

# Max width of a problem message in the check summary table
_DETAIL_WIDTH = 80


def bootstrap() -> None:
    """Initialize environment.

    Idempotent. Loads environment variables from ~/.config/capharness/.env.
    """
    global _bootstrapped

    if _bootstrapped:
        return

    load_user_env()

    _bootstrapped = True


def _load_config() -> HarnessConfig:
    try:
        return HarnessConfig.from_env()
    except ConfigurationError as e:
        log("✗", str(e), Colors.RED)
        raise typer.Exit(2) from e


def _reject_simulation_options(
    *, stdin_file: Path | None, file: list[str] | None, seed: int | None
) -> None:
    """Fail when --live is combined with options of the simulated world."""
    given = [
        name
        for name, value in (
            ("--stdin-file", stdin_file),
            ("--file", file or None),
            ("--seed", seed),
        )
        if value is not None
    ]
    if given:
        raise typer.BadParameter(
            f"{', '.join(given)} only apply to simulated runs", param_hint="--live"
        )


def _parse_file_options(values: list[str]) -> dict[str, str]:
    """Turn NAME=PATH options into a virtual file mapping."""
    files: dict[str, str] = {}
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not name or not path:
            raise typer.BadParameter(
                f"expected NAME=PATH, got '{value}'", param_hint="--file"
            )
        try:
            files[name] = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise typer.BadParameter(
                f"cannot read {path}: {e}", param_hint="--file"
            ) from e
    return files


app = typer.Typer(
    name="capharness",
    help="Deterministic capability harness for scripts",
    add_completion=False,
)


@app.command()
def run(
    script: Annotated[
        Path,
        typer.Argument(help="Script to run", exists=True, dir_okay=False),
    ],
    stdin_file: Annotated[
        Path | None,
        typer.Option(
            "--stdin-file",
            help="File whose lines are served to get-line!",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    file: Annotated[
        list[str] | None,
        typer.Option(
            "--file",
            "-f",
            help="Virtual file as NAME=PATH (repeatable)",
        ),
    ] = None,
    pure: Annotated[
        bool,
        typer.Option("--pure", help="Run without effectful primitives"),
    ] = False,
    live: Annotated[
        bool,
        typer.Option(
            "--live",
            help="Use the real console, disk and entropy instead of the simulation"
            " (not combinable with --stdin-file, --file or --seed)",
        ),
    ] = False,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed of the simulated random source"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Debug logging to stderr"),
    ] = False,
) -> None:
    """Run a script and report its value.

    By default the script runs under the test harness: stdin, files,
    randomness, ids and chains are all simulated and captured output is
    printed before the result.
    """
    set_verbose(verbose)
    if live:
        _reject_simulation_options(stdin_file=stdin_file, file=file, seed=seed)
    config = _load_config()
    source = script.read_text(encoding="utf-8")

    if live:
        bindings = pure_bindings() if pure else repl_bindings()
        outcome = run_program(
            dict(bindings.env),
            production_capabilities(script.parent),
            source,
            source_name=str(script),
        )
    else:
        inputs = (
            stdin_file.read_text(encoding="utf-8").splitlines() if stdin_file else []
        )
        virtual_files = _parse_file_options(file or [])
        bindings = pure_bindings() if pure else test_bindings()
        outcome, output = run_test_with_files(
            bindings,
            inputs,
            virtual_files,
            source,
            seed=config.seed if seed is None else seed,
        )
        for line in output:
            print(line)

    if isinstance(outcome, Failure):
        log("✗", f"{type(outcome.error).__name__}: {outcome.error}", Colors.RED)
        raise typer.Exit(1)
    log("✓", render(outcome.value), Colors.GREEN)


@app.command()
def files(
    root: Annotated[
        Path | None,
        typer.Argument(help="Directory to search (default: CAPHARNESS_SCRIPTS_DIR or .)"),
    ] = None,
    extension: Annotated[
        str | None,
        typer.Option("--extension", "-e", help="Script suffix, e.g. .rad"),
    ] = None,
) -> None:
    """List script files under a directory."""
    config = _load_config()
    search_root = root or config.scripts_dir or Path(".")
    base, paths = source_files(search_root, extension or config.script_extension)
    if not paths:
        log("○", f"No scripts found under {base}", Colors.GRAY)
        return
    print(tabulate(list(enumerate(paths, start=1)), headers=["#", "path"], tablefmt="simple"))
    log("●", f"{len(paths)} script(s) under {base}", Colors.CYAN)


@app.command()
def check(
    cases_file: Annotated[
        Path,
        typer.Argument(help="YAML case file", metavar="CASES"),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Debug logging and untruncated details"),
    ] = False,
) -> None:
    """Run every case in a YAML case file and summarize the results."""
    set_verbose(verbose)
    try:
        cases = load_cases(cases_file)
    except CaseFileError as e:
        log("✗", str(e), Colors.RED)
        raise typer.Exit(2) from e

    if not cases:
        log("○", f"No cases in {cases_file}", Colors.GRAY)
        return

    results = [check_case(case) for case in cases]
    rows = [
        (
            result.name,
            "pass" if result.passed else "FAIL",
            truncate_text("; ".join(result.problems), _DETAIL_WIDTH),
        )
        for result in results
    ]
    print(tabulate(rows, headers=["case", "status", "detail"], tablefmt="simple"))

    failed = sum(1 for result in results if not result.passed)
    if failed:
        log("✗", f"{failed} of {len(results)} case(s) failed", Colors.RED)
        raise typer.Exit(1)
    log("✓", f"All {len(results)} case(s) passed", Colors.GREEN)
