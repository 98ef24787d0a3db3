"""
auto-patchelf Hook

Architectural Intent:
- Rewrites interpreter and RPATH of ELF files in the venv so wheels built
  for other distributions load against Nix-provided libraries
- auto-patchelf modifies the files it fingerprints, so the stored checksum
  is taken after the run
- Library search paths are store paths and therefore immutable; they are
  part of the parameters rather than hashed by content
"""

from pathlib import Path

from venvhooks.application.hooks.base import VenvHook


class AutoPatchelfHook(VenvHook):
    name = "auto-patchelf"
    shell_hook_name = "autoPatchelfVenvShellHook"

    @property
    def targets(self) -> list[Path]:
        return [self.venv_dir / "bin", self.venv_dir / "lib"]

    def fingerprint_inputs(self) -> list[Path]:
        return self.targets

    def command(self) -> list[str]:
        cfg = self.config.autopatchelf
        argv = [cfg.executable, "--paths", *(str(p) for p in self.targets)]
        argv += ["--libs", *cfg.libraries]
        if cfg.ignore_missing:
            argv += ["--ignore-missing", *cfg.ignore_missing]
        if cfg.extra_args:
            # must come last: everything after it is forwarded to patchelf
            argv += ["--extra-args", *cfg.extra_args]
        return argv

    def work(self) -> int:
        return self.runner.run(
            self.command(), output_filters=self.config.autopatchelf.output_filters
        )
