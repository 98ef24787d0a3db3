"""
Venv Hook Base

Architectural Intent:
- A hook is a configured use of the checksum gate over a virtualenv
- Subclasses declare their fingerprint inputs, the parameters that change
  their outcome, and the work unit; the base class wires them to the gate
- Required settings are validated before anything is hashed or run

Checksum records live inside the venv directory, so deleting the venv
also resets every hook. uv-sync, which creates the venv, keeps its record
in the project state directory.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
import logging
import shlex
from typing import Mapping, Optional

from venvhooks.application.use_cases.ensure_checksum_gate import ChecksumGatedExecutor
from venvhooks.domain.errors import MissingConfigurationError, VenvHooksError
from venvhooks.domain.ports.command_runner_port import CommandRunnerPort
from venvhooks.domain.value_objects.ensure_outcome import EnsureOutcome
from venvhooks.domain.value_objects.fingerprint import Fingerprint
from venvhooks.infrastructure.config import HooksConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HookStatus:
    """Stored vs current fingerprint of a hook, computed without running it."""
    name: str
    checksum_path: str
    stored: Optional[Fingerprint]
    current: Optional[Fingerprint]
    error: str = ""

    @property
    def fresh(self) -> bool:
        return self.current is not None and self.stored == self.current

    @property
    def state(self) -> str:
        if self.error:
            return "error"
        if self.stored is None:
            return "never run"
        return "fresh" if self.fresh else "stale"


class VenvHook(ABC):
    name: str = ""
    shell_hook_name: str = ""

    def __init__(
        self,
        config: HooksConfig,
        executor: ChecksumGatedExecutor,
        runner: CommandRunnerPort,
    ):
        self.config = config
        self.executor = executor
        self.runner = runner

    @property
    def banner(self) -> str:
        return f"Using {self.shell_hook_name}"

    @property
    def venv_dir(self) -> Path:
        self.validate()
        return self.project_dir / self.config.venv_dir

    @property
    def project_dir(self) -> Path:
        return Path(self.config.project_dir)

    @property
    def checksum_path(self) -> Path:
        return self.venv_dir / f".{self.name}.sha256"

    @property
    def site_packages(self) -> Path:
        """The venv's site-packages, configured or discovered under lib/python*."""
        if self.config.site_packages:
            return self.venv_dir / self.config.site_packages
        candidates = sorted(self.venv_dir.glob("lib/python*/site-packages"))
        if len(candidates) != 1:
            found = ", ".join(str(c) for c in candidates) or "none"
            logger.error(
                "Cannot determine site-packages under %s (found: %s)",
                self.venv_dir,
                found,
            )
            raise MissingConfigurationError("site_packages", self.shell_hook_name)
        return candidates[0]

    def validate(self) -> None:
        """Fail fast on missing configuration."""
        if not self.config.venv_dir:
            raise MissingConfigurationError("venvDir", self.shell_hook_name)

    @abstractmethod
    def fingerprint_inputs(self) -> list[Path]:
        """Files and directories the work reads or writes."""

    @abstractmethod
    def work(self) -> int:
        """Run the external tool(s). Returns an exit status."""

    def parameters(self) -> str:
        """Every setting that changes the work's outcome, in a fixed order."""
        env = " ".join(f"{k}={v}" for k, v in sorted(self.environment().items()))
        return f"{shlex.join(self.command())}\n{env}"

    def command(self) -> list[str]:
        return []

    def environment(self) -> Mapping[str, str]:
        return {}

    def run(self) -> EnsureOutcome:
        self.validate()
        return self.executor.ensure(
            self.fingerprint_inputs,
            self.checksum_path,
            self.work,
            extra=self.parameters(),
            name=self.name,
        )

    def status(self) -> HookStatus:
        try:
            self.validate()
            checksum_path = str(self.checksum_path)
        except VenvHooksError as e:
            return HookStatus(self.name, "", None, None, error=str(e))

        try:
            stored, current = self.executor.inspect(
                self.fingerprint_inputs, checksum_path, extra=self.parameters()
            )
        except VenvHooksError as e:
            return HookStatus(self.name, checksum_path, None, None, error=str(e))
        return HookStatus(self.name, checksum_path, stored, current)


def existing(*paths: Path) -> list[Path]:
    """Optional inputs: present ones are hashed, absent ones change the digest."""
    return [p for p in paths if p.exists()]
