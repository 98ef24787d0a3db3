"""
Venv Hooks Package

Architectural Intent:
- Registry of the shell hooks, in the order they must run on shell entry
- uv-sync populates the venv that the later hooks patch
"""

from venvhooks.application.hooks.base import VenvHook, HookStatus
from venvhooks.application.hooks.uv_sync import UvSyncHook
from venvhooks.application.hooks.patch_venv import PatchVenvHook
from venvhooks.application.hooks.auto_patchelf import AutoPatchelfHook
from venvhooks.application.hooks.maturin_import import MaturinImportHook

HOOK_ORDER: tuple[type[VenvHook], ...] = (
    UvSyncHook,
    PatchVenvHook,
    AutoPatchelfHook,
    MaturinImportHook,
)

HOOK_NAMES = tuple(cls.name for cls in HOOK_ORDER)

__all__ = [
    "VenvHook",
    "HookStatus",
    "UvSyncHook",
    "PatchVenvHook",
    "AutoPatchelfHook",
    "MaturinImportHook",
    "HOOK_ORDER",
    "HOOK_NAMES",
]
