"""Tests for the plugpm CLI against a fake npm executable."""

import json
import sys

import pytest
from click.testing import CliRunner

from plugpm.__main__ import cli

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a shebang script as npm")

FAKE_NPM = f"""#!{sys.executable}
import json, os, sys
with open("npm-args.json", "w") as f:
    json.dump(sys.argv[1:], f)
print("fake npm", " ".join(sys.argv[1:]))
sys.exit(int(os.environ.get("FAKE_NPM_EXIT", "0")))
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PLUGPM_HOME", "PLUGPM_REGISTRY", "PLUGPM_PROXY", "PLUGPM_NPM"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_dir(tmp_path):
    base = tmp_path / "picgo"
    base.mkdir()
    npm = tmp_path / "fake-npm"
    npm.write_text(FAKE_NPM)
    npm.chmod(0o755)
    (base / "config.json").write_text(
        json.dumps({"settings": {"npmCommand": str(npm), "registry": "https://r.example"}})
    )
    return base


def _invoke(*args):
    return CliRunner().invoke(cli, list(args), obj={})


class TestList:
    def test_empty(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "list")
        assert result.exit_code == 0
        assert "no plugins installed" in result.output

    def test_lists_plugins(self, base_dir):
        (base_dir / "package.json").write_text(
            json.dumps({"dependencies": {"picgo-plugin-foo": "1.0.0", "lodash": "4"}})
        )
        result = _invoke("--base-dir", str(base_dir), "list")
        assert "picgo-plugin-foo" in result.output
        assert "lodash" not in result.output


class TestInstall:
    def test_install_success(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "install", "foo", "--proxy", "http://p")
        assert result.exit_code == 0, result.output
        assert "picgo-plugin-foo" in result.output
        args = json.loads((base_dir / "npm-args.json").read_text())
        assert args == [
            "install",
            "picgo-plugin-foo",
            "--color=always",
            "--save",
            "--registry=https://r.example",
            "--proxy=http://p",
        ]
        assert (base_dir / "package.json").exists()

    def test_install_invalid_exits_nonzero(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "install", "!!!invalid")
        assert result.exit_code == 1
        assert not (base_dir / "npm-args.json").exists()

    def test_npm_failure_exits_nonzero(self, base_dir, monkeypatch):
        monkeypatch.setenv("FAKE_NPM_EXIT", "1")
        result = _invoke("--base-dir", str(base_dir), "install", "foo")
        assert result.exit_code == 1

    def test_missing_npm_exits_nonzero(self, base_dir, tmp_path):
        (base_dir / "config.json").write_text(
            json.dumps({"npmCommand": str(tmp_path / "missing-npm")})
        )
        result = _invoke("--base-dir", str(base_dir), "install", "foo")
        assert result.exit_code == 1

    def test_requires_plugins(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "install")
        assert result.exit_code != 0


class TestUninstallUpdate:
    def test_uninstall(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "uninstall", "picgo-plugin-foo")
        assert result.exit_code == 0, result.output
        args = json.loads((base_dir / "npm-args.json").read_text())
        assert args[:2] == ["uninstall", "picgo-plugin-foo"]
        assert not any(a.startswith("--proxy") for a in args)

    def test_update_dedups(self, base_dir):
        result = _invoke("--base-dir", str(base_dir), "update", "foo", "picgo-plugin-foo")
        assert result.exit_code == 0, result.output
        args = json.loads((base_dir / "npm-args.json").read_text())
        assert args[:3] == ["update", "picgo-plugin-foo", "--color=always"]
