"""
Checksum Store Port

Architectural Intent:
- Port interface for the persisted Checksum Record of a gate
- Owns mutual exclusion around the read-compute-write sequence
- Implemented by ChecksumFileStore
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional

from venvhooks.domain.value_objects.fingerprint import Fingerprint


class ChecksumStorePort(ABC):
    """
    Port interface for reading and writing a single checksum record.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """
        Human-readable location of the record, used in logs and events.
        """
        pass

    @abstractmethod
    def read(self) -> Optional[Fingerprint]:
        """
        Returns the stored fingerprint, or None when no record exists.
        """
        pass

    @abstractmethod
    def write(self, fingerprint: Fingerprint) -> None:
        """
        Persists the fingerprint, overwriting any prior record.
        """
        pass

    @abstractmethod
    def locked(self) -> AbstractContextManager:
        """
        Context manager holding exclusive access to the record.
        """
        pass
