"""
Content Hasher Adapter

Architectural Intent:
- Infrastructure adapter implementing ContentHasherPort with hashlib SHA-256
- Walks directories in sorted relative-path order so digests are stable across runs
- Symlinks below a directory input are hashed by target, never followed

Digest layout (fixed, do not reorder):
    for each input, in the order given:
        "input" tag, path as given
        file      -> "file" tag, content
        directory -> for each entry sorted by relative path:
                         "dir" | "link" + target | "file" + content
    "extra" tag, auxiliary string
"""

import fnmatch
import hashlib
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from venvhooks.domain.errors import HashComputationError
from venvhooks.domain.ports.content_hasher_port import ContentHasherPort, PathLike
from venvhooks.domain.value_objects.fingerprint import Fingerprint

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536  # 64 KB read chunks


class Sha256ContentHasher(ContentHasherPort):
    def __init__(self, exclude: Iterable[str] = ()):
        # fnmatch patterns matched against each entry's basename
        self.exclude = tuple(exclude)

    def fingerprint(self, paths: Sequence[PathLike], extra: str = "") -> Fingerprint:
        h = hashlib.sha256()
        for path in paths:
            path = Path(path)
            self._feed(h, b"input", os.fsencode(str(path)))
            if path.is_dir():
                self._hash_directory(h, path)
            elif path.is_file():
                self._feed(h, b"file")
                self._hash_file(h, path)
            else:
                raise HashComputationError(str(path), "no such file or directory")
        self._feed(h, b"extra", extra.encode("utf-8"))
        digest = Fingerprint(h.hexdigest())
        logger.debug("Fingerprint of %s: %s", [str(p) for p in paths], digest.short)
        return digest

    def _excluded(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude)

    def _entries(self, root: Path) -> list[Path]:
        entries = []

        def _raise(err: OSError):
            raise err

        try:
            for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
                dirnames[:] = [d for d in dirnames if not self._excluded(d)]
                for name in dirnames + filenames:
                    if not self._excluded(name):
                        entries.append(Path(dirpath, name))
        except OSError as e:
            raise HashComputationError(str(root), e.strerror or str(e)) from e
        return sorted(entries, key=lambda p: p.relative_to(root).as_posix())

    def _hash_directory(self, h, root: Path) -> None:
        for entry in self._entries(root):
            rel = os.fsencode(entry.relative_to(root).as_posix())
            if entry.is_symlink():
                self._feed(h, b"link", rel, os.fsencode(os.readlink(entry)))
            elif entry.is_dir():
                self._feed(h, b"dir", rel)
            elif entry.is_file():
                self._feed(h, b"file", rel)
                self._hash_file(h, entry)

    def _hash_file(self, h, path: Path) -> None:
        try:
            with open(path, "rb") as f:
                h.update(os.fstat(f.fileno()).st_size.to_bytes(8, "big"))
                while True:
                    chunk = f.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    h.update(chunk)
        except OSError as e:
            raise HashComputationError(str(path), e.strerror or str(e)) from e

    @staticmethod
    def _feed(h, *parts: bytes) -> None:
        for part in parts:
            h.update(len(part).to_bytes(8, "big"))
            h.update(part)
