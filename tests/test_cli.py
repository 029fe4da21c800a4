"""Tests for the scmfilter command line interface."""

import json

import pytest
from click.testing import CliRunner

from scmfilter.cli import cli


@pytest.fixture(autouse=True)
def in_tmp_dir(tmp_path, monkeypatch):
    """Run every command where no configuration file exists."""
    monkeypatch.chdir(tmp_path)


class TestVersionAndHelp:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("scmfilter ")

    def test_no_heads_shows_help(self):
        result = CliRunner().invoke(cli, [])

        assert result.exit_code == 0
        assert "--regex" in result.output


class TestCheckRegex:
    """Tests for --check-regex."""

    def test_valid_regex(self):
        result = CliRunner().invoke(cli, ["--check-regex", "feature-.*"])

        assert result.exit_code == 0
        assert "OK" in result.output

    def test_invalid_regex(self):
        result = CliRunner().invoke(cli, ["--check-regex", "["])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "unterminated character set" in result.output


class TestListTraits:
    def test_lists_origin_filter(self):
        result = CliRunner().invoke(cli, ["--list-traits"])

        assert result.exit_code == 0
        assert "RegexSCMPROriginFilter" in result.output


class TestFiltering:
    """Tests for filtering heads read from a file."""

    def test_without_traits_keeps_everything(self, heads_file):
        result = CliRunner().invoke(cli, [str(heads_file)])

        assert result.exit_code == 0
        assert result.output.split() == ["main", "v1.0", "PR-1", "PR-2"]

    def test_regex_excludes_change_requests(self, heads_file):
        result = CliRunner().invoke(cli, [str(heads_file), "--regex", "feature-.*"])

        assert result.exit_code == 0
        assert result.output.split() == ["main", "v1.0", "PR-1"]

    def test_show_excluded(self, heads_file):
        result = CliRunner().invoke(
            cli, [str(heads_file), "--regex", "feature-.*", "--show-excluded"]
        )

        assert result.exit_code == 0
        assert "PR-2 (excluded)" in result.output

    def test_json_format(self, heads_file):
        result = CliRunner().invoke(
            cli,
            [str(heads_file), "--regex", "feature-.*", "--format", "json",
             "--show-excluded"],
        )

        assert result.exit_code == 0
        records = [json.loads(line) for line in result.output.splitlines()]
        assert records[2] == {"name": "PR-1", "kind": "change_request", "excluded": False}
        assert records[3] == {"name": "PR-2", "kind": "change_request", "excluded": True}
        assert records[0]["excluded"] is False

    def test_count_format(self, heads_file):
        result = CliRunner().invoke(
            cli, [str(heads_file), "--regex", "feature-.*", "--format", "count"]
        )

        assert result.exit_code == 0
        assert "3 kept, 1 excluded" in result.output

    def test_stdin(self, heads_file):
        result = CliRunner().invoke(
            cli, ["-", "--regex", "hotfix-.*"], input=heads_file.read_text()
        )

        assert result.exit_code == 0
        assert result.output.split() == ["main", "v1.0", "PR-2"]

    def test_invalid_regex_fails(self, heads_file):
        result = CliRunner().invoke(cli, [str(heads_file), "--regex", "["])

        assert result.exit_code == 1
        assert "Invalid regex pattern" in result.output

    def test_invalid_regex_without_change_requests(self, tmp_path):
        """A malformed regex is only compiled when a change request is seen."""
        heads = tmp_path / "branches.jsonl"
        heads.write_text('{"kind": "branch", "name": "main"}\n')

        result = CliRunner().invoke(cli, [str(heads), "--regex", "["])

        assert result.exit_code == 0
        assert result.output.split() == ["main"]

    def test_heads_file_not_utf8(self, tmp_path):
        heads = tmp_path / "binary.jsonl"
        heads.write_bytes(b"\xff\xfe{}\n")

        result = CliRunner().invoke(cli, [str(heads)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "UTF-8" in result.output

    def test_stdin_not_utf8(self):
        result = CliRunner().invoke(cli, ["-"], input=b"\xff\n")

        assert result.exit_code == 1
        assert "stdin is not valid UTF-8" in result.output

    def test_malformed_heads(self, tmp_path):
        heads = tmp_path / "bad.jsonl"
        heads.write_text("{oops\n")

        result = CliRunner().invoke(cli, [str(heads)])

        assert result.exit_code == 1
        assert "line 1" in result.output


class TestConfigFile:
    """Tests for traits declared in configuration files."""

    def test_explicit_config(self, tmp_path, heads_file):
        config = tmp_path / "custom.toml"
        config.write_text(
            '[[traits]]\nsymbol = "RegexSCMPROriginFilter"\n'
            'pr_origin_regex = "hotfix-.*"\n'
        )

        result = CliRunner().invoke(cli, [str(heads_file), "--config", str(config)])

        assert result.exit_code == 0
        assert result.output.split() == ["main", "v1.0", "PR-2"]

    def test_discovered_config(self, tmp_path, heads_file):
        (tmp_path / "scmfilter.toml").write_text(
            '[general]\noutput_format = "count"\n'
            '[[traits]]\nsymbol = "RegexSCMPROriginFilter"\n'
            'pr_origin_regex = "feature-.*"\n'
        )

        result = CliRunner().invoke(cli, [str(heads_file)])

        assert result.exit_code == 0
        assert "3 kept, 1 excluded" in result.output

    def test_regex_option_adds_to_config(self, tmp_path, heads_file):
        (tmp_path / "scmfilter.toml").write_text(
            '[[traits]]\nsymbol = "RegexSCMPROriginFilter"\n'
            'pr_origin_regex = "feature-.*"\n'
        )

        result = CliRunner().invoke(cli, [str(heads_file), "--regex", ".*-logout"])

        assert result.exit_code == 0
        assert result.output.split() == ["main", "v1.0"]

    def test_missing_config_file(self, tmp_path, heads_file):
        result = CliRunner().invoke(
            cli, [str(heads_file), "--config", str(tmp_path / "missing.toml")]
        )

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_regex_of_wrong_type(self, tmp_path, heads_file):
        (tmp_path / "scmfilter.toml").write_text(
            '[[traits]]\nsymbol = "RegexSCMPROriginFilter"\npr_origin_regex = 5\n'
        )

        result = CliRunner().invoke(cli, [str(heads_file)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)
        assert "Invalid options for 'RegexSCMPROriginFilter'" in result.output

    @pytest.mark.parametrize("value", ["3", '"xml"'])
    def test_invalid_output_format(self, tmp_path, heads_file, value):
        (tmp_path / "scmfilter.toml").write_text(f"[general]\noutput_format = {value}\n")

        result = CliRunner().invoke(cli, [str(heads_file)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert "output_format" in result.output

    def test_unknown_trait(self, tmp_path, heads_file):
        (tmp_path / "scmfilter.toml").write_text('[[traits]]\nsymbol = "Nope"\n')

        result = CliRunner().invoke(cli, [str(heads_file)])

        assert result.exit_code == 1
        assert "Unknown trait 'Nope'" in result.output
