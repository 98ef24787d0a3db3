"""Global test configuration.

Shared fixtures: a fake virtualenv layout, a recording command runner that
stands in for uv/patch/auto-patchelf, and a checksum gate wired to the real
hasher and file store.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Optional

import pytest

from venvhooks.application.use_cases.ensure_checksum_gate import ChecksumGatedExecutor
from venvhooks.domain.ports.command_runner_port import CommandRunnerPort
from venvhooks.infrastructure.adapters.content_hasher import Sha256ContentHasher
from venvhooks.infrastructure.repositories.checksum_file_store import ChecksumFileStore


@dataclass
class Call:
    argv: list
    env: dict = field(default_factory=dict)
    cwd: Optional[str] = None
    output_filters: tuple = ()
    quiet: bool = False


class RecordingRunner(CommandRunnerPort):
    """Records every command; `handler(call)` decides the exit status."""

    def __init__(self, handler: Optional[Callable[[Call], int]] = None):
        self.calls: list[Call] = []
        self.handler = handler

    def run(self, argv, env=None, cwd=None, output_filters=(), quiet=False):
        call = Call(list(argv), dict(env or {}), cwd, tuple(output_filters), quiet)
        self.calls.append(call)
        return self.handler(call) if self.handler else 0


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def executor():
    return ChecksumGatedExecutor(
        hasher=Sha256ContentHasher(exclude=("__pycache__", "*.pyc")),
        store_factory=partial(ChecksumFileStore, use_lock=True),
    )


@pytest.fixture
def venv(tmp_path):
    """A minimal venv: bin/python and one installed package."""
    root = tmp_path / ".venv"
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "python").write_text("#!/bin/sh\n")
    site = root / "lib" / "python3.12" / "site-packages"
    (site / "pkg").mkdir(parents=True)
    (site / "pkg" / "__init__.py").write_text("VALUE = 1\n")
    return root
