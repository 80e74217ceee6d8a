"""Tests for the coral command group."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner
from google.protobuf import descriptor_pb2

from coral.cli.main import cli

runner = CliRunner()


class TestGroup:
    """Global options and command registration."""

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("json", "debug", "summary", "report", "serve", "diff"):
            assert name in result.output

    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "coral, version 0.1.0" in result.output

    def test_unknown_command(self) -> None:
        result = runner.invoke(cli, ["graph"])

        assert result.exit_code != 0


class TestConfigLoading:
    """Config file handling at group entry."""

    def test_missing_config_file(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), "summary"])

        assert result.exit_code == 1
        assert "Error: Config file not found" in result.stderr

    def test_invalid_config_value(self, isolated_project: Path) -> None:
        (isolated_project / "coral.yaml").write_text("server:\n  port: 70000\n")

        result = runner.invoke(cli, ["summary"])

        assert result.exit_code == 1
        assert "Invalid value for 'server.port'" in result.stderr

    def test_analyzer_prefixes_from_config(
        self, isolated_project: Path, timestamp_file, descriptor_file
    ) -> None:
        """A project config can treat google/ files as project code."""
        (isolated_project / "coral.yaml").write_text(
            "analyzer:\n  external_prefixes: ['vendor/']\n"
        )
        path = descriptor_file(descriptor_pb2.FileDescriptorSet(file=[timestamp_file]))

        result = runner.invoke(cli, ["summary", "-i", str(path)])

        assert result.exit_code == 0
        assert result.stdout.startswith("1 file, 0 services, 1 message,")
