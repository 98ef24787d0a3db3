"""
maturin Import Hook

Architectural Intent:
- Installs maturin_import_hook into the venv so Rust extension modules are
  rebuilt on import
- Writes addsite.pth so the generated sitecustomize.py is executed even by
  interpreters that do not pick it up from the venv
- Removing either generated file, or changing the interpreter, re-runs the hook
"""

from pathlib import Path

from venvhooks.application.hooks.base import VenvHook, existing

PTH_NAME = "addsite.pth"
SITECUSTOMIZE = "sitecustomize.py"
# Written into site-packages by this hook; other hooks hashing the venv skip them.
GENERATED_FILES = (SITECUSTOMIZE, PTH_NAME)


class MaturinImportHook(VenvHook):
    name = "maturin-import"
    shell_hook_name = "maturinImportShellHook"

    @property
    def python(self) -> Path:
        return self.venv_dir / "bin" / "python"

    def fingerprint_inputs(self) -> list[Path]:
        site = self.site_packages
        return [self.python] + existing(site / SITECUSTOMIZE, site / PTH_NAME)

    def command(self) -> list[str]:
        return [
            str(self.python),
            "-m",
            "maturin_import_hook",
            "site",
            "install",
            *self.config.maturin.extra_args,
        ]

    def work(self) -> int:
        status = self.runner.run(self.command())
        if status != 0:
            return status

        site = self.site_packages
        sitecustomize = (site / SITECUSTOMIZE).resolve()
        (site / PTH_NAME).write_text(
            f'import sys; exec(open("{sitecustomize}").read())\n'
        )
        return 0
