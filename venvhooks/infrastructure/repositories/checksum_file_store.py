"""
Checksum File Store

Architectural Intent:
- Repository implementing ChecksumStorePort over a single plain-text file
- One opaque checksum per file, written with a trailing newline
- Writes are atomic (temp file + os.replace) so a crash never leaves a torn record
- Inter-process lock on "<path>.lock" guards read-compute-write across shells
"""

from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Optional
import logging
import os
import tempfile

import fasteners

from venvhooks.domain.ports.checksum_store_port import ChecksumStorePort
from venvhooks.domain.value_objects.fingerprint import Fingerprint

logger = logging.getLogger(__name__)


class ChecksumFileStore(ChecksumStorePort):
    def __init__(self, path, use_lock: bool = True):
        self.path = Path(path)
        self.lock_file = self.path.with_name(self.path.name + ".lock")
        self.use_lock = use_lock

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> Optional[Fingerprint]:
        try:
            raw = self.path.read_text().strip()
        except FileNotFoundError:
            logger.debug("No checksum record at %s", self.path)
            return None

        if not raw:
            return None
        if not Fingerprint.is_valid(raw):
            logger.warning("Ignoring malformed checksum record at %s", self.path)
            return None
        return Fingerprint(raw)

    def write(self, fingerprint: Fingerprint) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write(f"{fingerprint}\n")
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Stored checksum %s at %s", fingerprint.short, self.path)

    def locked(self) -> AbstractContextManager:
        if not self.use_lock:
            return nullcontext()
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        return fasteners.InterProcessLock(str(self.lock_file))
