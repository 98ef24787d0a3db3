"""
Command Runner Port

Architectural Intent:
- Port interface for invoking external work units (uv, patch, auto-patchelf, ...)
- Only the exit status is observed; output is relayed, optionally filtered
- Implemented by SubprocessCommandRunner
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence


class CommandRunnerPort(ABC):
    """
    Port interface for running external commands.
    """

    @abstractmethod
    def run(
        self,
        argv: Sequence[str],
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        output_filters: Sequence[str] = (),
        quiet: bool = False,
    ) -> int:
        """
        Runs the command to completion and returns its exit status.
        Output lines containing any of `output_filters` are dropped;
        `quiet` drops all output.
        """
        pass
