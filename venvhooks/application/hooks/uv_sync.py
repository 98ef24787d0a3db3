"""
uv Sync Hook

Architectural Intent:
- Brings the virtualenv in line with the lock file via `uv sync --frozen`
- Only the system (Nix-provided) interpreter may be used to create the venv
- Packages are copied rather than hard-linked when later hooks patch them,
  so patching never writes through into uv's cache
- Provides the activation line the calling shell evaluates afterwards

uv refuses to sync into a non-empty directory that is not a virtualenv, so
this hook keeps its checksum record (and lock) in the project's state
directory instead of the venv. The venv's pyvenv.cfg is an optional input:
deleting the venv changes the fingerprint and triggers a fresh sync.
"""

from pathlib import Path
import shlex
from typing import Mapping

from venvhooks.application.hooks.base import VenvHook, existing
from venvhooks.domain.errors import VenvNotFoundError

DEFAULT_VENV_DIR = ".venv"


class UvSyncHook(VenvHook):
    name = "uv-sync"
    shell_hook_name = "uvVenvShellHook"

    @property
    def venv_dir(self) -> Path:
        return self.project_dir / (self.config.venv_dir or DEFAULT_VENV_DIR)

    @property
    def checksum_path(self) -> Path:
        return self.project_dir / self.config.state_dir / f"{self.name}.sha256"

    def validate(self) -> None:
        pass

    def fingerprint_inputs(self) -> list[Path]:
        # pyproject.toml is mandatory: a missing one fails the hash, not uv
        return [self.project_dir / "pyproject.toml"] + existing(
            self.project_dir / "uv.lock",
            self.venv_dir / "pyvenv.cfg",
        )

    def command(self) -> list[str]:
        uv = self.config.uv
        return [uv.executable, "sync", "--frozen", *uv.extra_args]

    def environment(self) -> Mapping[str, str]:
        env = {"UV_PYTHON_PREFERENCE": self.config.uv.python_preference}
        if self.config.venv_dir:
            env["UV_PROJECT_ENVIRONMENT"] = self.config.venv_dir
        if self.config.patch.enabled or self.config.autopatchelf.enabled:
            env["UV_LINK_MODE"] = "copy"
        return env

    def work(self) -> int:
        return self.runner.run(
            self.command(), env=self.environment(), cwd=str(self.project_dir)
        )

    def activation(self) -> str:
        """Shell line activating the venv, for `eval` in a shellHook."""
        script = self.venv_dir / "bin" / "activate"
        if not script.is_file():
            raise VenvNotFoundError(str(self.venv_dir))
        return f"source {shlex.quote(str(script))}"
