"""Tests for composition root DI container."""

from venvhooks.application.hooks import HOOK_NAMES
from venvhooks.composition_root import VenvHooksContainer, create_container
from venvhooks.infrastructure.config import (
    HooksConfig,
    MaturinConfig,
    PatchConfig,
    UvConfig,
)


class TestCompositionRoot:
    def test_create_container(self):
        container = create_container(HooksConfig())

        assert isinstance(container, VenvHooksContainer)
        assert container.hasher is not None
        assert container.runner is not None
        assert container.event_bus is not None
        assert container.telemetry is not None
        assert tuple(container.hooks) == HOOK_NAMES

    def test_executor_wiring(self):
        container = create_container(HooksConfig())
        assert container.executor.hasher is container.hasher
        assert container.executor.event_bus is container.event_bus

    def test_hooks_share_executor_and_runner(self):
        container = create_container(HooksConfig())
        for hook in container.hooks.values():
            assert hook.executor is container.executor
            assert hook.runner is container.runner

    def test_hash_exclude_from_config(self):
        container = create_container(HooksConfig(hash_exclude=("*.so",)))
        assert container.hasher.exclude == ("*.so",)

    def test_lock_setting_reaches_store(self, tmp_path):
        container = create_container(HooksConfig(lock=False))
        store = container.executor.store_factory(tmp_path / "c.sha256")
        assert store.use_lock is False

    def test_enabled_hooks(self):
        config = HooksConfig(
            uv=UvConfig(enabled=False),
            patch=PatchConfig(enabled=True),
        )
        names = [hook.name for hook in create_container(config).enabled_hooks()]
        assert names == ["patch-venv"]

    def test_default_enabled_hooks(self):
        names = [h.name for h in create_container(HooksConfig()).enabled_hooks()]
        assert names == ["uv-sync"]

    def test_maturin_outputs_excluded_from_walks(self):
        config = HooksConfig(maturin=MaturinConfig(enabled=True))
        exclude = create_container(config).hasher.exclude
        assert "sitecustomize.py" in exclude
        assert "addsite.pth" in exclude

    def test_uv_sync_supplies_default_venv_dir(self, tmp_path):
        container = create_container(HooksConfig(project_dir=str(tmp_path)))
        assert container.config.venv_dir == ".venv"
        for hook in container.hooks.values():
            assert hook.venv_dir == tmp_path / ".venv"

    def test_explicit_venv_dir_kept(self):
        container = create_container(HooksConfig(venv_dir="env"))
        assert container.config.venv_dir == "env"

    def test_no_default_venv_dir_without_uv_sync(self):
        config = HooksConfig(uv=UvConfig(enabled=False), patch=PatchConfig(enabled=True))
        container = create_container(config)
        assert container.config.venv_dir == ""
