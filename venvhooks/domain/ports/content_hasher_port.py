"""
Content Hasher Port

Architectural Intent:
- Port interface for computing fingerprints over filesystem inputs
- Keeps the checksum gate independent of how paths are walked and hashed
- Implemented by Sha256ContentHasher
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence, Union

from venvhooks.domain.value_objects.fingerprint import Fingerprint

PathLike = Union[str, Path]


class ContentHasherPort(ABC):
    """
    Port interface for deterministic content digests.
    """

    @abstractmethod
    def fingerprint(self, paths: Sequence[PathLike], extra: str = "") -> Fingerprint:
        """
        Digests the given files/directories, in order, followed by `extra`.
        Raises HashComputationError when an input cannot be read.
        """
        pass
