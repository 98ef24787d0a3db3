"""
Patch Venv Hook

Architectural Intent:
- Applies source patches to installed packages in site-packages
- Each patch is first checked with a reverse dry-run; patches that already
  apply in reverse are considered applied and left alone
- The first patch that fails to apply fails the hook
"""

from pathlib import Path

from venvhooks.application.hooks.base import VenvHook


class PatchVenvHook(VenvHook):
    name = "patch-venv"
    shell_hook_name = "patchVenvShellHook"

    @property
    def patches(self) -> list[Path]:
        return [self.project_dir / p for p in self.config.patch.patches]

    def fingerprint_inputs(self) -> list[Path]:
        return [*self.patches, self.site_packages]

    def command(self) -> list[str]:
        patch = self.config.patch
        return [patch.executable, "-f", f"-p{patch.strip}"]

    def _is_applied(self, patch_file: Path, site: Path) -> bool:
        dry_run = [
            self.config.patch.executable,
            "-f",
            "-R",
            f"-p{self.config.patch.strip}",
            "-s",
            "--dry-run",
            "-d",
            str(site),
            "-i",
            str(patch_file),
        ]
        return self.runner.run(dry_run, quiet=True) == 0

    def work(self) -> int:
        site = self.site_packages
        for patch_file in self.patches:
            if self._is_applied(patch_file, site):
                continue
            print(f"applying {patch_file}")
            status = self.runner.run(
                [*self.command(), "-d", str(site), "-i", str(patch_file)]
            )
            if status != 0:
                return status
        return 0
