"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the checksum gate needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from venvhooks.domain.ports.content_hasher_port import ContentHasherPort
from venvhooks.domain.ports.checksum_store_port import ChecksumStorePort
from venvhooks.domain.ports.command_runner_port import CommandRunnerPort
from venvhooks.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "ContentHasherPort",
    "ChecksumStorePort",
    "CommandRunnerPort",
    "EventBusPort",
]
