"""Tests for PackageRegistry: package.json seeding, register/unregister, init."""

import json

from plugpm.plugins import PackageRegistry, PluginRegistry
from plugpm.plugins.registry import DEFAULT_PACKAGE_JSON, is_plugin_package


def _write_pkg(base, deps):
    base.mkdir(parents=True, exist_ok=True)
    (base / "package.json").write_text(json.dumps({"name": "picgo-plugins", "dependencies": deps}))


class TestIsPluginPackage:
    def test_plain(self):
        assert is_plugin_package("picgo-plugin-foo")

    def test_scoped(self):
        assert is_plugin_package("@acme/picgo-plugin-foo")

    def test_other(self):
        assert not is_plugin_package("lodash")
        assert not is_plugin_package("@acme/lodash")


class TestInit:
    def test_creates_base_dir_and_package_json(self, tmp_path):
        base = tmp_path / "home" / ".picgo"
        PackageRegistry(base).init()
        data = json.loads((base / "package.json").read_text())
        assert data == DEFAULT_PACKAGE_JSON

    def test_keeps_existing_package_json(self, tmp_path):
        _write_pkg(tmp_path, {"picgo-plugin-foo": "^1.0.0"})
        registry = PackageRegistry(tmp_path)
        registry.init()
        assert "dependencies" in json.loads((tmp_path / "package.json").read_text())
        assert registry.has_plugin("picgo-plugin-foo")


class TestLoad:
    def test_only_plugin_dependencies(self, tmp_path):
        _write_pkg(
            tmp_path,
            {"picgo-plugin-b": "1", "lodash": "4", "@acme/picgo-plugin-a": "1"},
        )
        assert PackageRegistry(tmp_path).load() == ["@acme/picgo-plugin-a", "picgo-plugin-b"]

    def test_missing_file(self, tmp_path):
        assert PackageRegistry(tmp_path).load() == []

    def test_invalid_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{nope")
        assert PackageRegistry(tmp_path).load() == []

    def test_dependencies_not_a_dict(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"dependencies": ["x"]}))
        assert PackageRegistry(tmp_path).load() == []


class TestRegister:
    def test_register_and_unregister(self, tmp_path):
        registry = PackageRegistry(tmp_path)
        registry.register_plugin("picgo-plugin-foo")
        registry.register_plugin("picgo-plugin-foo")
        assert registry.list_plugins() == ["picgo-plugin-foo"]
        registry.unregister_plugin("picgo-plugin-foo")
        assert not registry.has_plugin("picgo-plugin-foo")

    def test_unregister_unknown_is_noop(self, tmp_path):
        registry = PackageRegistry(tmp_path)
        registry.unregister_plugin("picgo-plugin-missing")
        assert registry.list_plugins() == []

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(PackageRegistry(tmp_path), PluginRegistry)
