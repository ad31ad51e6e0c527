"""
Subcommand dispatch for the Cargo workspace CI actions.

Each subcommand maps to an ordered tuple of toolchain invocations. The steps
run one after another and the first failure abandons the rest; its exit
status becomes the dispatcher's own.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from ci_build.exceptions import ToolchainError, UnknownSubcommandError
from ci_build.services.toolchain import ToolchainRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    """One external program call with a fixed argument list."""

    program: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


def _cargo(*args: str) -> Invocation:
    return Invocation("cargo", args)


SUBCOMMANDS: Mapping[str, Tuple[Invocation, ...]] = MappingProxyType(
    {
        "format": (_cargo("+nightly", "fmt", "--all", "--", "--check"),),
        "build": (
            _cargo("build", "--all"),
            _cargo("test", "--all", "--all-targets"),
        ),
        "doc": (_cargo("doc", "--all"),),
    }
)


def run_steps(steps: Iterable[Invocation], runner: ToolchainRunner) -> int:
    """Run ``steps`` in order, stopping at the first failure.

    The failing step's ``ToolchainError`` propagates to the caller; later
    steps are never started. Returns 0 when every step succeeded.
    """
    for index, step in enumerate(steps, start=1):
        logger.debug("Step %d: %s", index, step)
        runner.run(step)
    return 0


class Dispatcher:
    """Resolves a subcommand against the table and runs its steps."""

    def __init__(
        self,
        runner: Optional[ToolchainRunner] = None,
        strict: bool = False,
        table: Mapping[str, Tuple[Invocation, ...]] = SUBCOMMANDS,
    ):
        self.runner = runner or ToolchainRunner()
        self.strict = strict
        self.table = table

    @property
    def subcommands(self) -> List[str]:
        return list(self.table)

    def steps_for(self, name: Optional[str]) -> Tuple[Invocation, ...]:
        """Look up the invocations for ``name``.

        Unknown or absent names resolve to no steps. In strict mode a
        non-empty unknown name raises ``UnknownSubcommandError`` instead.
        """
        if name in self.table:
            return self.table[name]

        if name:
            if self.strict:
                raise UnknownSubcommandError(name, self.subcommands)
            logger.warning(
                "Unknown subcommand '%s'; nothing to do (known: %s)",
                name,
                ", ".join(self.subcommands),
            )
        else:
            logger.debug("No subcommand given; nothing to do")
        return ()

    def dispatch(self, name: Optional[str]) -> int:
        """Run the subcommand and return its exit status."""
        steps = self.steps_for(name)
        if not steps:
            return 0

        try:
            return run_steps(steps, self.runner)
        except ToolchainError as exc:
            logger.info("Subcommand '%s' stopped: %s", name, exc)
            return exc.exit_code
