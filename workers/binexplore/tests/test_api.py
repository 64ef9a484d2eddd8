"""
test_api — FastAPI surface over the runner.

The executor is swapped for the scripted fake so no process is spawned.
"""
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import app


@pytest.fixture
def client(monkeypatch, fake_objdump, gnu_executor):
    monkeypatch.setattr(settings, "OBJDUMP_PATH", str(fake_objdump))
    monkeypatch.setattr(settings, "OBJDUMP_OPTIONS", "-d -S")
    monkeypatch.setattr(settings, "OBJDUMP_FLAGS", {})
    monkeypatch.setattr("binexplore.runner.SubprocessExecutor", lambda: gnu_executor)
    monkeypatch.setattr("binexplore.core.locator.SubprocessExecutor", lambda: gnu_executor)
    with TestClient(app) as c:
        yield c


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestTool:

    def test_valid_tool(self, client, fake_objdump):
        data = client.get("/explore/tool").json()
        assert data["valid"] is True
        assert data["path"] == str(fake_objdump)
        assert data["version"].startswith("GNU objdump")

    def test_invalid_tool(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "OBJDUMP_PATH", str(tmp_path / "missing"))
        data = client.get("/explore/tool").json()
        assert data["valid"] is False
        assert data["error_kind"] == "NOT_FOUND"


class TestRun:

    def test_run_returns_tree(self, client, elf_target):
        resp = client.post("/explore/run", json={"target_path": str(elf_target), "include_text": True})
        assert resp.status_code == 200

        body = resp.json()
        report = body["report"]
        assert report["verdict"] == "ACCEPT"
        assert report["args"] == ["-d", "-S"]
        assert [s["name"] for s in report["symbols"]] == ["text", "init"]
        assert "Disassembly of section .text:" in body["disassembly"]

    def test_flags_used_when_options_blank(self, client, elf_target, gnu_executor):
        resp = client.post(
            "/explore/run",
            json={"target_path": str(elf_target), "options": "", "flags": {"wide": True}},
        )
        assert resp.json()["report"]["args"] == ["--wide"]
        assert gnu_executor.calls[-1][1] == "--wide"

    def test_missing_target_404(self, client, tmp_path):
        resp = client.post("/explore/run", json={"target_path": str(tmp_path / "nope")})
        assert resp.status_code == 404

    def test_not_object_is_reject_not_error(self, client, text_target):
        resp = client.post("/explore/run", json={"target_path": str(text_target)})
        assert resp.status_code == 200
        assert resp.json()["report"]["error"]["kind"] == "NOT_OBJECT_FILE"

    def test_write_outputs_requires_root(self, client, elf_target, monkeypatch):
        monkeypatch.setattr(settings, "OUTPUT_ROOT", None)
        resp = client.post(
            "/explore/run", json={"target_path": str(elf_target), "write_outputs": True}
        )
        assert resp.status_code == 400

    def test_write_outputs(self, client, elf_target, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "OUTPUT_ROOT", str(tmp_path / "out"))
        resp = client.post(
            "/explore/run", json={"target_path": str(elf_target), "write_outputs": True}
        )
        out_dir = resp.json()["output_dir"]
        assert out_dir == str(tmp_path / "out" / elf_target.name)
        assert (tmp_path / "out" / elf_target.name / "explore_report.json").exists()

    def test_validation_error(self, client):
        resp = client.post("/explore/run", json={})
        assert resp.status_code == 422
