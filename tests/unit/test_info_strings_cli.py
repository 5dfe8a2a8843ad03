from __future__ import annotations

import json
from pathlib import Path

import pytest

from hsa_trace.info_strings.__main__ import main
from hsa_trace.info_strings.config import FUTURE_ROCR_ENV


def test_sizes_lists_family(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv(FUTURE_ROCR_ENV, raising=False)
    assert main(["sizes", "--family", "agent"]) == 0
    out = capsys.readouterr().out
    assert "0x0\tHSA_AGENT_INFO_NAME\t64" in out
    assert "0xa000\tHSA_AMD_AGENT_INFO_CHIP_ID\t4" in out


def test_sizes_gated_family(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv(FUTURE_ROCR_ENV, raising=False)
    assert main(["sizes", "--family", "cache"]) == 2
    assert "--future-rocr" in capsys.readouterr().err

    assert main(["--future-rocr", "sizes", "--family", "cache"]) == 0
    assert "HSA_CACHE_INFO_LEVEL\t1" in capsys.readouterr().out


def test_sizes_gate_from_environment(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv(FUTURE_ROCR_ENV, "1")
    assert main(["sizes", "--family", "wavefront"]) == 0
    assert "HSA_WAVEFRONT_INFO_SIZE\t4" in capsys.readouterr().out


def test_unknown_family(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["sizes", "--family", "gpu"]) == 2
    assert "Unknown family" in capsys.readouterr().err


def test_render(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", "--family", "agent", "--attribute", "NAME", "--payload-hex", b"gfx906".hex()]) == 0
    assert capsys.readouterr().out.strip() == 'hsa_agent_get_info(HSA_AGENT_INFO_NAME) = "gfx906"'


def test_render_failed_status(capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["render", "--family", "agent", "--attribute", "0x6", "--payload-hex", "40000000", "--status", "ERROR"]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "hsa_agent_get_info(HSA_AGENT_INFO_WAVEFRONT_SIZE) = <query failed>"


def test_render_string_pointer_uses_pointee(capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["render", "--family", "system", "--attribute", "BUILD_VERSION", "--payload-hex", "0010000000000000"]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip().endswith("= <invalid payload>")

    assert main([*argv, "--pointee", "1.1.9"]) == 0
    assert capsys.readouterr().out.strip().endswith('= ["1.1.9"]')


def test_render_rejects_bad_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", "--family", "agent", "--attribute", "NAME", "--payload-hex", "zz"]) == 2
    assert main(["render", "--family", "agent", "--attribute", "BOGUS", "--payload-hex", "00"]) == 2
    err = capsys.readouterr().err
    assert "Unknown agent attribute" in err


def test_export_and_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "schema.json"
    assert main(["export", "--out", str(out)]) == 0
    doc = json.loads(out.read_text())
    assert doc["schema"] == "hsa_trace.info_strings/v1"
    assert json.loads(capsys.readouterr().out)["out"] == str(out.resolve())

    assert main(["report", "--out-dir", str(tmp_path / "md")]) == 0
    assert (tmp_path / "md" / "attributes.md").exists()
