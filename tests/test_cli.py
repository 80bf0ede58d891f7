# SPDX-License-Identifier: MIT
"""Tests for the semrange command line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from semrange.cli import cli, main
from semrange.config import ConfigError


class TestValidate:
    """Tests for semrange validate."""

    def test_valid(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["validate", "1.2.3", "1.0.0-rc.1+build.5"])
        assert result.exit_code == 0
        assert "1.2.3: valid" in result.output
        assert "1.0.0-rc.1+build.5: valid" in result.output

    def test_invalid(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["validate", "1.2.3", "01.2.3"])
        assert result.exit_code == 1
        assert "1.2.3: valid" in result.output
        assert "Error: 01.2.3:" in result.output

    def test_requires_argument(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 2


class TestCompare:
    """Tests for semrange compare."""

    @pytest.mark.parametrize(
        "v1,v2,expected",
        [
            ("1.0.0", "2.0.0", "-1"),
            ("1.0.0+a", "1.0.0+b", "0"),
            ("1.0.0", "1.0.0-alpha", "1"),
        ],
    )
    def test_compare(self, cli_runner: CliRunner, v1, v2, expected):
        result = cli_runner.invoke(cli, ["compare", v1, v2])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_invalid_version(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["compare", "1.2", "1.0.0"])
        assert result.exit_code == 2
        assert "is not a valid semantic version" in result.output


class TestSort:
    """Tests for semrange sort."""

    def test_sort(self, cli_runner: CliRunner):
        result = cli_runner.invoke(
            cli, ["sort", "1.10.0", "1.2.0", "1.2.0-rc.1", "1.2.0-beta"]
        )
        assert result.exit_code == 0
        assert result.output.split() == [
            "1.2.0-beta",
            "1.2.0-rc.1",
            "1.2.0",
            "1.10.0",
        ]

    def test_sort_reverse(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["sort", "--reverse", "0.9.0", "2.0.0", "1.0.0"])
        assert result.exit_code == 0
        assert result.output.split() == ["2.0.0", "1.0.0", "0.9.0"]


class TestBump:
    """Tests for semrange bump."""

    @pytest.mark.parametrize(
        "part,expected",
        [
            ("major", "2.0.0"),
            ("minor", "1.5.0"),
            ("patch", "1.4.3"),
        ],
    )
    def test_bump(self, cli_runner: CliRunner, part, expected):
        result = cli_runner.invoke(cli, ["bump", part, "1.4.2-rc.1+build.9"])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_bump_from_config(self, cli_runner: CliRunner, temp_project: Path):
        result = cli_runner.invoke(cli, ["-C", str(temp_project), "bump", "minor"])
        assert result.exit_code == 0
        assert result.output.strip() == "1.5.0"

    def test_bump_without_version(self, cli_runner: CliRunner, bare_project: Path):
        result = cli_runner.invoke(cli, ["-C", str(bare_project), "bump", "patch"])
        assert result.exit_code == 1
        assert "No VERSION given" in result.output

    def test_bump_overflow(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["bump", "major", "18446744073709551615.0.0"])
        assert result.exit_code == 1
        assert "cannot increment major number" in result.output

    def test_bump_invalid_part(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["bump", "build", "1.0.0"])
        assert result.exit_code == 2


class TestMatch:
    """Tests for semrange match."""

    def test_match_range_option(self, cli_runner: CliRunner, bare_project: Path):
        result = cli_runner.invoke(
            cli,
            [
                "-C",
                str(bare_project),
                "match",
                "-r",
                ">=1.2.0 <2.0.0 || 3.x",
                "1.1.0",
                "1.5.0",
                "2.1.0",
                "3.0.1",
            ],
        )
        assert result.exit_code == 0
        assert result.output.split() == ["1.5.0", "3.0.1"]

    def test_match_config_range(self, cli_runner: CliRunner, temp_project: Path):
        """Test that the configured range and prerelease setting apply."""
        result = cli_runner.invoke(
            cli,
            ["-C", str(temp_project), "match", "1.5.0", "2.1.0", "3.1.0-rc.1", "3.2.0"],
        )
        assert result.exit_code == 0
        assert result.output.split() == ["1.5.0", "3.2.0"]

    def test_match_prerelease_flag_overrides_config(
        self, cli_runner: CliRunner, temp_project: Path
    ):
        result = cli_runner.invoke(
            cli, ["-C", str(temp_project), "match", "--prerelease", "3.1.0-rc.1"]
        )
        assert result.exit_code == 0
        assert result.output.split() == ["3.1.0-rc.1"]

    def test_match_no_prerelease(self, cli_runner: CliRunner):
        result = cli_runner.invoke(
            cli,
            ["match", "-r", "1.x", "--no-prerelease", "1.2.0-alpha", "1.2.0"],
        )
        assert result.exit_code == 0
        assert result.output.split() == ["1.2.0"]

    def test_match_none(self, cli_runner: CliRunner):
        result = cli_runner.invoke(
            cli, ["match", "-r", "<1.0.0", "--prerelease", "1.0.0", "2.0.0"]
        )
        assert result.exit_code == 1
        assert result.output == ""

    def test_match_without_range(self, cli_runner: CliRunner, bare_project: Path):
        result = cli_runner.invoke(cli, ["-C", str(bare_project), "match", "1.0.0"])
        assert result.exit_code == 1
        assert "No --range given" in result.output

    def test_match_invalid_range(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["match", "-r", ">=1.0 ||", "1.0.0"])
        assert result.exit_code == 2
        assert "is not a valid range" in result.output


class TestCompatible:
    """Tests for semrange compatible."""

    def test_compatible(self, cli_runner: CliRunner):
        result = cli_runner.invoke(cli, ["compatible", "1.2.9", "1.4.0"])
        assert result.exit_code == 0
        assert "is compatible under" in result.output

    @pytest.mark.parametrize("version", ["1.5.0", "2.0.0"])
    def test_not_compatible(self, cli_runner: CliRunner, version):
        result = cli_runner.invoke(cli, ["compatible", version, "1.4.0"])
        assert result.exit_code == 1
        assert "is not compatible under" in result.output


class TestConfigErrors:
    """Tests for invalid configuration reaching the CLI."""

    @pytest.fixture
    def broken_project(self, tmp_path: Path) -> Path:
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.0"\n')
        return tmp_path

    def test_config_error_propagates(self, cli_runner: CliRunner, broken_project: Path):
        result = cli_runner.invoke(cli, ["-C", str(broken_project), "bump", "patch"])
        assert result.exit_code == 1
        assert isinstance(result.exception, ConfigError)

    def test_main_reports_config_error(
        self,
        broken_project: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        monkeypatch.setattr(
            sys, "argv", ["semrange", "-C", str(broken_project), "bump", "patch"]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Invalid project version" in capsys.readouterr().err
