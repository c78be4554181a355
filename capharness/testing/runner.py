"""Runs programs against a fresh, fully simulated world.

Every entry point builds a new WorldState, evaluates the program's top-level
forms in order and returns only the outcome and the captured stdout. The
state itself never leaves the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from capharness.lang.bindings import pure_bindings
from capharness.lang.evaluator import run_program
from capharness.testing.capabilities import world_capabilities
from capharness.testing.world_state import WorldState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from capharness.core.models import EvalOutcome
    from capharness.lang.bindings import Bindings

logger = logging.getLogger(__name__)

# Fixed seed so every run draws the same random bytes
DEFAULT_SEED = 4

SOURCE_NAME = "[test]"


def run_test_with_files(
    bindings: Bindings,
    inputs: list[str],
    files: Mapping[str, str] | None,
    program: str,
    *,
    seed: int = DEFAULT_SEED,
) -> tuple[EvalOutcome, list[str]]:
    """Run a possibly side-effecting program with stdin lines and virtual files.

    Args:
        bindings: Starting environment; copied, never mutated.
        inputs: Lines served to get-line!, in order.
        files: Virtual files for read-file!. None means no files.
        program: Source text of the program.
        seed: Seed of the random source.

    Returns:
        (outcome, stdout lines in emission order).
    """
    world = WorldState.fresh(inputs, files, bindings.env, seed)
    outcome = run_program(
        world.env,
        world_capabilities(world),
        program,
        source_name=SOURCE_NAME,
        state=world,
    )
    logger.debug(
        "Harness run finished: ok=%s, %d line(s) of output, %d stdin line(s) unread",
        outcome.ok,
        len(world.stdout),
        len(world.stdin),
    )
    return outcome, list(world.stdout)


def run_test_with(
    bindings: Bindings, inputs: list[str], program: str
) -> tuple[EvalOutcome, list[str]]:
    """Like run_test_with_files, with no virtual files."""
    return run_test_with_files(bindings, inputs, None, program)


def run_test_with_pure(inputs: list[str], program: str) -> tuple[EvalOutcome, list[str]]:
    """Like run_test_with, using the pure bindings."""
    return run_test_with(pure_bindings(), inputs, program)


def run_test(bindings: Bindings, program: str) -> EvalOutcome:
    """Run a program with no stdin, discarding its output."""
    outcome, _ = run_test_with(bindings, [], program)
    return outcome


def run_test_pure(program: str) -> EvalOutcome:
    """Like run_test, using the pure bindings."""
    return run_test(pure_bindings(), program)
