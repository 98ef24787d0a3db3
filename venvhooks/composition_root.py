"""
Composition Root

Architectural Intent:
- Dependency injection composition root for venvhooks
- Single place where adapters, the checksum gate and the hooks are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Logging and telemetry consume gate events from the event bus
"""

from dataclasses import dataclass
import dataclasses
from functools import partial
import logging
from typing import Optional

from venvhooks.application.hooks import HOOK_ORDER, VenvHook
from venvhooks.application.hooks.maturin_import import GENERATED_FILES
from venvhooks.application.hooks.uv_sync import DEFAULT_VENV_DIR
from venvhooks.application.use_cases.ensure_checksum_gate import ChecksumGatedExecutor
from venvhooks.domain.events.event_base import DomainEvent
from venvhooks.infrastructure.adapters.content_hasher import Sha256ContentHasher
from venvhooks.infrastructure.adapters.subprocess_runner import SubprocessCommandRunner
from venvhooks.infrastructure.config import HooksConfig, load_config
from venvhooks.infrastructure.event_bus import EventBus
from venvhooks.infrastructure.repositories.checksum_file_store import ChecksumFileStore
from venvhooks.infrastructure.telemetry.otel_exporter import OTELExporter, create_exporter

logger = logging.getLogger(__name__)


def _log_event(event: DomainEvent) -> None:
    logger.debug("%s %s", event.event_type, event.to_dict())


@dataclass
class VenvHooksContainer:
    """DI container holding all wired dependencies."""

    config: HooksConfig
    hasher: Sha256ContentHasher
    runner: SubprocessCommandRunner
    event_bus: EventBus
    telemetry: OTELExporter
    executor: ChecksumGatedExecutor
    hooks: dict[str, VenvHook]

    def enabled_hooks(self) -> list[VenvHook]:
        enabled = {
            "uv-sync": self.config.uv.enabled,
            "patch-venv": self.config.patch.enabled,
            "auto-patchelf": self.config.autopatchelf.enabled,
            "maturin-import": self.config.maturin.enabled,
        }
        return [hook for name, hook in self.hooks.items() if enabled.get(name)]


def create_container(config: Optional[HooksConfig] = None) -> VenvHooksContainer:
    """Create and wire all dependencies."""
    config = config or load_config()
    if config.uv.enabled and not config.venv_dir:
        # uv-sync creates .venv by default; the hooks after it patch that venv
        config = dataclasses.replace(config, venv_dir=DEFAULT_VENV_DIR)

    exclude = config.hash_exclude
    if config.maturin.enabled:
        exclude += GENERATED_FILES
    hasher = Sha256ContentHasher(exclude=exclude)
    runner = SubprocessCommandRunner()
    event_bus = EventBus()
    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint,
        insecure=config.telemetry.insecure,
    )

    event_bus.subscribe(DomainEvent, _log_event)
    event_bus.subscribe(DomainEvent, telemetry.on_event)

    executor = ChecksumGatedExecutor(
        hasher=hasher,
        store_factory=partial(ChecksumFileStore, use_lock=config.lock),
        event_bus=event_bus,
    )
    hooks = {cls.name: cls(config, executor, runner) for cls in HOOK_ORDER}

    return VenvHooksContainer(
        config=config,
        hasher=hasher,
        runner=runner,
        event_bus=event_bus,
        telemetry=telemetry,
        executor=executor,
        hooks=hooks,
    )
