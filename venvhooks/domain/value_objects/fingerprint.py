from dataclasses import dataclass
import re

_SHA256_HEX = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class Fingerprint:
    """
    Value Object representing a SHA-256 content digest over hook inputs.
    Ensures that the digest is 64 lowercase hex characters.
    """
    value: str

    def __post_init__(self):
        if not self.is_valid(self.value):
            raise ValueError(f"Invalid fingerprint format: {self.value!r}")

    @staticmethod
    def is_valid(value: str) -> bool:
        return bool(_SHA256_HEX.fullmatch(value))

    @property
    def short(self) -> str:
        return self.value[:12]

    def __str__(self):
        return self.value
