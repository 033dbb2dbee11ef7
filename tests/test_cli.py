"""Tests for the honeycombio command line."""

from __future__ import annotations

import json

from click.testing import CliRunner

from honeycombio import __version__
from honeycombio.cli import cli
from honeycombio.v2 import Config

from fake_honeycomb import KEY_ID, TEAM_SLUG, make_config

runner = CliRunner()


class TestCLI:
    def test_version_flag(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_whoami(self, http) -> None:
        result = runner.invoke(cli, ["whoami"], obj=make_config(http))
        assert result.exit_code == 0, result.output
        info = json.loads(result.output)
        assert info["id"] == KEY_ID
        assert info["team"]["slug"] == TEAM_SLUG

    def test_environments_list(self, fake, http) -> None:
        fake.add_environment("Staging")
        result = runner.invoke(cli, ["environments", "list", "--page-size", "1"], obj=make_config(http))

        assert result.exit_code == 0, result.output
        assert [e["name"] for e in json.loads(result.output)] == ["Production", "Staging"]

    def test_api_keys_list(self, fake, http) -> None:
        env_id = next(iter(fake.environments))
        fake.add_api_key("ingest", env_id)
        result = runner.invoke(cli, ["api-keys", "list"], obj=make_config(http))

        assert result.exit_code == 0, result.output
        keys = json.loads(result.output)
        assert [k["name"] for k in keys] == ["ingest"]
        assert keys[0]["environment"]["id"] == env_id

    def test_bad_credentials_exit_1(self, http) -> None:
        result = runner.invoke(
            cli, ["whoami"], obj=make_config(http, api_key_id="foo", api_key_secret="bar")
        )
        assert result.exit_code == 1
        assert "401" in result.output

    def test_missing_credentials_is_usage_error(self) -> None:
        result = runner.invoke(cli, ["whoami"], obj=Config())
        assert result.exit_code == 2
        assert "missing API Key ID and Secret pair" in result.output

    def test_config_masks_secret(self, http) -> None:
        result = runner.invoke(cli, ["config"], obj=make_config(http))

        assert result.exit_code == 0, result.output
        shown = json.loads(result.output)
        assert shown["api_key_id"] == KEY_ID
        assert shown["api_key_secret"] == "***"
        assert shown["base_url"] == "http://testserver"
        assert shown["retry_max"] == 15

    def test_config_applies_api_url_option(self, http) -> None:
        result = runner.invoke(
            cli, ["--api-url", "https://api.eu1.honeycomb.io", "config"], obj=make_config(http)
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["base_url"] == "https://api.eu1.honeycomb.io"

    def test_config_without_credentials_is_usage_error(self) -> None:
        result = runner.invoke(cli, ["config"], obj=Config())
        assert result.exit_code == 2
        assert "missing API Key ID and Secret pair" in result.output
