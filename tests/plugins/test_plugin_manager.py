"""Tests for PluginManager — discovery, registration, and hook relay."""

from __future__ import annotations

from pathlib import Path

from runwayctl.plugins import PluginManager, hookimpl


class _DummyPlugin:
    def __init__(self) -> None:
        self.seen: list[int] = []

    @hookimpl
    def post_simulate(self, scenario: str, months_of_runway: int, total_burn_rate: float) -> None:
        self.seen.append(months_of_runway)


_LOCAL_PLUGIN = '''
import pluggy

hookimpl = pluggy.HookimplMarker("runwayctl")


class AuditPlugin:
    @hookimpl
    def post_assign(self, entity_id, template_id, position, start, salary):
        pass


class NotAPlugin:
    pass
'''


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        for name in ("post_assign", "post_relocate", "post_resize", "post_simulate"):
            assert hasattr(pm.hook, name)

    def test_register_and_dispatch(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        assert "dummy" in pm.list_plugin_names()
        pm.hook.post_simulate(scenario="s", months_of_runway=7, total_burn_rate=1.0)
        assert plugin.seen == [7]

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_discover_without_local_dir(self) -> None:
        pm = PluginManager()
        assert not pm.is_loaded
        pm.discover_and_load()
        assert pm.is_loaded


class TestLocalDiscovery:
    def test_loads_hook_classes_only(self, tmp_path: Path) -> None:
        (tmp_path / "audit.py").write_text(_LOCAL_PLUGIN)
        (tmp_path / "_private.py").write_text(_LOCAL_PLUGIN)
        names = PluginManager().discover_and_load(local_dir=tmp_path)
        local = [n for n in names if n.startswith("runwayctl_local_plugin_")]
        assert local == ["runwayctl_local_plugin_audit.AuditPlugin"]

    def test_broken_file_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text("raise RuntimeError('nope')\n")
        names = PluginManager().discover_and_load(local_dir=tmp_path)
        assert not any("broken" in n for n in names)

    def test_missing_dir(self, tmp_path: Path) -> None:
        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path / "absent")
        assert pm.is_loaded
