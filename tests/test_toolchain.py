"""Tests for the wasm-tools bridge. The tool itself is never executed."""

import subprocess
from pathlib import Path

import pytest

from witdocs.errors import SubprocessError, ToolNotFoundError
from witdocs.toolchain import component_wit, find_wasm_tools


@pytest.fixture
def on_path(monkeypatch):
    monkeypatch.setattr("witdocs.toolchain.shutil.which", lambda name: f"/usr/bin/{name}")


def fake_run(monkeypatch, *, returncode=0, stdout=b"", stderr=b""):
    calls = []

    def run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    monkeypatch.setattr("witdocs.toolchain.subprocess.run", run)
    return calls


class TestFindWasmTools:
    def test_found(self, on_path):
        assert find_wasm_tools() == "/usr/bin/wasm-tools"

    def test_not_found(self, monkeypatch):
        monkeypatch.setattr("witdocs.toolchain.shutil.which", lambda name: None)
        with pytest.raises(ToolNotFoundError, match="cargo install wasm-tools") as exc_info:
            find_wasm_tools("custom-tools")
        assert exc_info.value.context.command == "custom-tools"


class TestComponentWit:
    def test_returns_stdout(self, monkeypatch, on_path):
        calls = fake_run(monkeypatch, stdout=b"package root:component;\n")
        assert component_wit(Path("app.wasm")) == "package root:component;\n"

        cmd, kwargs = calls[0]
        assert cmd == ["/usr/bin/wasm-tools", "component", "wit", "app.wasm"]
        assert kwargs["capture_output"] is True

    def test_nonzero_exit(self, monkeypatch, on_path):
        fake_run(monkeypatch, returncode=1, stderr=b"error: not a component\n")
        with pytest.raises(SubprocessError) as exc_info:
            component_wit(Path("app.wasm"))

        error = exc_info.value
        assert str(error) == "wasm-tools component wit failed: error: not a component"
        assert error.stderr == "error: not a component"
        assert error.context.returncode == 1
        assert error.context.path == "app.wasm"

    def test_non_utf8_output(self, monkeypatch, on_path):
        fake_run(monkeypatch, stdout=b"\xff\xfe")
        with pytest.raises(SubprocessError, match="not valid UTF-8"):
            component_wit(Path("app.wasm"))

    def test_start_failure(self, monkeypatch, on_path):
        def run(cmd, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr("witdocs.toolchain.subprocess.run", run)
        with pytest.raises(SubprocessError) as exc_info:
            component_wit(Path("app.wasm"))
        assert isinstance(exc_info.value.cause, PermissionError)
