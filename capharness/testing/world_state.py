"""The shared state of one simulated run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from capharness.testing.drg import DeterministicGenerator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from capharness.lang.values import Value


@dataclass
class WorldState:
    """Every simulated effect of one harness run.

    One instance per run, owned by the runner and dropped when the run ends.

    Attributes:
        stdin: Lines still to be read, consumed front to back.
        stdout: Lines emitted so far, in emission order.
        env: Environment of the running program. Mutated by evaluation only.
        files: Virtual files, path -> content. Read only during the run.
        drg: Current generator state, replaced after every draw.
        uuid_counter: Next id to hand out. Only ever increases.
        chain_logs: Address -> values sent to it, in send order. Append only.
    """

    stdin: list[str]
    env: dict[str, Value]
    files: dict[str, str]
    drg: DeterministicGenerator
    stdout: list[str] = field(default_factory=list)
    uuid_counter: int = 0
    chain_logs: dict[str, list[Value]] = field(default_factory=dict)

    @classmethod
    def fresh(
        cls,
        inputs: list[str],
        files: Mapping[str, str] | None,
        env: Mapping[str, Value],
        seed: int,
    ) -> WorldState:
        """Build the starting state; copies every caller-owned container."""
        return cls(
            stdin=list(inputs),
            env=dict(env),
            files=dict(files or {}),
            drg=DeterministicGenerator.from_seed(seed),
        )
