"""CLI tests for `secutils ioc`."""

from __future__ import annotations

import json
import os
from pathlib import Path

from click.testing import CliRunner

from secutils.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def test_ioc_json_for_single_file(tmp_path: Path) -> None:
    path = tmp_path / "incident.log"
    path.write_text("outbound 203.0.113.7 -> hxxp://c2[.]example[.]net/x\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["ioc", str(path), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    indicators = payload["reports"][0]["indicators"]
    assert indicators["ipv4"] == ["203.0.113.7"]
    assert indicators["url"] == ["http://c2.example.net/x"]
    assert payload["errors"] == []


def test_ioc_summary_for_directory(tmp_path: Path) -> None:
    root = tmp_path / "logs"
    root.mkdir()
    (root / "a.log").write_text("198.51.100.4\n", encoding="utf-8")
    (root / "b.bin").write_bytes(b"\x00binary")

    runner = CliRunner()
    result = runner.invoke(cli, ["ioc", str(root)], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    assert "indicators=1" in result.output
    assert "errors=1" in result.output


def test_ioc_binary_file_fails(tmp_path: Path) -> None:
    path = tmp_path / "tool.exe"
    path.write_bytes(b"MZ\x00\x00")

    runner = CliRunner()
    result = runner.invoke(cli, ["ioc", str(path)], env=_env_with_home(tmp_path))

    assert result.exit_code == 1
    assert "binary content" in result.output
