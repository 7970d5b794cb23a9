"""CLI tests for `secutils info`."""

from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from secutils.cli import cli
from secutils.inspection import load_record, load_records


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def test_info_json_reports_digests(tmp_path: Path) -> None:
    data = b"suspicious payload"
    path = tmp_path / "sample.js"
    path.write_bytes(data)

    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(path), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["name"] == "sample.js"
    assert payload["size"] == len(data)
    assert payload["file_type"]["description"] == "JavaScript File"
    assert payload["sha256"] == hashlib.sha256(data).hexdigest()
    assert payload["is_directory"] is False


def test_info_defaults_to_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    runner = CliRunner()
    result = runner.invoke(cli, ["info", "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["absolute_path"] == os.getcwd()
    assert payload["is_directory"] is True
    assert payload["md5"] is None


def test_info_table_output(tmp_path: Path) -> None:
    path = tmp_path / "key.pem"
    path.write_text("-----BEGIN-----\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(path)], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    assert "Privacy Enhanced Mail File" in result.output
    assert "SHA-256" in result.output


def test_info_output_persists_record(tmp_path: Path) -> None:
    path = tmp_path / "dump.db"
    path.write_bytes(b"SQLite format 3\x00")
    destination = tmp_path / "record.json"

    runner = CliRunner()
    result = runner.invoke(
        cli, ["info", str(path), "--output", str(destination)], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    assert "Wrote 1 record(s)" in result.output
    record = load_record(destination)
    assert record.file_type.description == "Database File"
    assert record.sha1 == hashlib.sha1(b"SQLite format 3\x00").hexdigest()


def test_info_recursive_output_writes_array(tmp_path: Path) -> None:
    root = tmp_path / "case"
    root.mkdir()
    (root / "one.txt").write_text("1", encoding="utf-8")
    (root / "two.sh").write_text("echo 2", encoding="utf-8")
    destination = tmp_path / "batch.json"

    runner = CliRunner()
    result = runner.invoke(
        cli, ["info", str(root), "-r", "-o", str(destination)], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    records = load_records(destination)
    assert [record.name for record in records] == ["case", "one.txt", "two.sh"]


def test_info_missing_path_reports_stat_stage(tmp_path: Path) -> None:
    missing = tmp_path / "missing.bin"

    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(missing)], env=_env_with_home(tmp_path))

    assert result.exit_code == 1
    assert "stat failed" in result.output


def test_info_missing_path_json_error_payload(tmp_path: Path) -> None:
    missing = tmp_path / "missing.bin"

    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(missing), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["error"]["code"] == "stat_failed"
    assert payload["error"]["details"]["stage"] == "stat"
    assert payload["error"]["details"]["path"] == str(missing)


def test_info_output_write_failure_reports_write_stage(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_text("x", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["info", str(path), "--output", str(tmp_path / "no-such-dir" / "out.json")],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    assert "write failed" in result.output


def test_info_quiet_suppresses_output(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_text("x", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(path), "--quiet"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert result.output == ""
