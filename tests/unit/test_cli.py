"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from swatch import __version__
from swatch.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


def _invoke(cli_runner: CliRunner, *args: str):
    return cli_runner.invoke(app, list(args))


class TestVersion:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "--version")
        assert result.exit_code == 0
        assert f"swatch {__version__}" in result.stdout


class TestTokensCommands:
    def test_list_json(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "list", "--project", str(project_dir), "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert len(data) == 13
        assert data[0]["name"] == "surface"

    def test_list_filters(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(
            cli_runner,
            "tokens",
            "list",
            "-p",
            str(project_dir),
            "--type",
            "color",
            "--mode",
            "Dark",
            "--json",
        )
        assert result.exit_code == 0, result.output
        assert [t["mode"] for t in json.loads(result.stdout)] == ["Dark"] * 3

    def test_list_search(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(
            cli_runner, "tokens", "list", "-p", str(project_dir), "--search", "gap", "--json"
        )
        assert [t["name"] for t in json.loads(result.stdout)] == ["gap.small", "gap.medium"]

    def test_list_table(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "list", "-p", str(project_dir))
        assert result.exit_code == 0, result.output
        assert "13 tokens" in result.stdout
        assert "surface" in result.stdout

    def test_list_rejects_unknown_type(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "list", "-p", str(project_dir), "--type", "nope")
        assert result.exit_code != 0

    def test_tokens_override(
        self, cli_runner: CliRunner, project_dir: Path, tmp_path: Path
    ) -> None:
        (project_dir / "tokens").rename(tmp_path / "design")
        result = _invoke(
            cli_runner,
            "tokens",
            "list",
            "-p",
            str(project_dir),
            "--tokens",
            str(tmp_path / "design"),
            "--json",
        )
        assert len(json.loads(result.stdout)) == 13

    def test_missing_tokens_fall_back_to_defaults(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        result = _invoke(cli_runner, "tokens", "stats", "-p", str(tmp_path))
        assert result.exit_code == 0
        assert "built-in sample tokens" in result.output

    def test_stats_json(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "stats", "-p", str(project_dir), "--json")
        stats = json.loads(result.stdout)
        assert stats["total"] == 13
        assert stats["colors"] == 6

    def test_stats_table(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "stats", "-p", str(project_dir))
        assert result.exit_code == 0
        assert "borderRadius" in result.stdout

    def test_invalid_manifest(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "swatch.toml").write_text('[source]\nkind = "ftp"\n')
        result = _invoke(cli_runner, "tokens", "list", "-p", str(project_dir))
        assert result.exit_code == 1

    def test_manifest_value_error_is_reported(
        self, cli_runner: CliRunner, project_dir: Path
    ) -> None:
        (project_dir / "swatch.toml").write_text('[source]\ntimeout = "fast"\n')
        result = _invoke(cli_runner, "tokens", "list", "-p", str(project_dir))
        assert result.exit_code == 1
        assert "[source] timeout" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestValidateCommand:
    def test_valid(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "validate", "-p", str(project_dir))
        assert result.exit_code == 0, result.output
        assert "All references resolve" in result.stdout

    def test_json_report(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "tokens", "validate", "-p", str(project_dir), "--json")
        report = json.loads(result.stdout)
        assert report["valid"] is True
        assert report["stats"]["systemTokens"] == 13

    def test_broken_reference(self, cli_runner: CliRunner, project_dir: Path) -> None:
        radius = project_dir / "tokens" / "Sys" / "Border Radius.json"
        radius.write_text(json.dumps({"card": {"value": "{radius.nope}", "type": "borderRadius"}}))
        result = _invoke(cli_runner, "tokens", "validate", "-p", str(project_dir), "--json")
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["broken"][0]["token"] == "card"

    def test_missing_required_set(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "tokens" / "Sys" / "Spacing.json").unlink()
        result = _invoke(cli_runner, "tokens", "validate", "-p", str(project_dir))
        assert result.exit_code == 1
        assert "Sys/Spacing" in result.output


class TestExportCommand:
    def test_export_all(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "export", "-p", str(project_dir))
        assert result.exit_code == 0, result.output
        build = project_dir / "build"
        assert (build / "ios" / "DesignSystemSpacing.swift").is_file()
        assert (build / "android" / "DesignTokens.kt").is_file()
        assert (build / "web" / "tokens.css").is_file()
        stats = json.loads((build / "stats.json").read_text())
        assert stats["totalTokens"] == 13
        assert sorted(stats["platforms"]) == ["android", "ios", "web"]

    def test_export_selected_platforms(
        self, cli_runner: CliRunner, project_dir: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "out"
        result = _invoke(cli_runner, "export", "web", "-p", str(project_dir), "-o", str(out))
        assert result.exit_code == 0, result.output
        assert (out / "web" / "index.html").is_file()
        assert not (out / "ios").exists()

    def test_manifest_export_settings(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "swatch.toml").write_text(
            '[export]\noutput_dir = "dist"\nplatforms = ["android"]\n'
            'android_package = "com.acme.tokens"\n'
        )
        result = _invoke(cli_runner, "export", "-p", str(project_dir))
        assert result.exit_code == 0, result.output
        kotlin = (project_dir / "dist" / "android" / "DesignTokens.kt").read_text()
        assert "package com.acme.tokens" in kotlin

    def test_unknown_platform(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(cli_runner, "export", "flutter", "-p", str(project_dir))
        assert result.exit_code == 1
        assert "flutter" in result.output
