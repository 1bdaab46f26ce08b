"""Tests for the xminds command line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tests.infrastructure.mock_api_server import (
    REFRESH_RESPONSE,
    MockAPIServer,
    error_envelope,
)
from xminds import __version__
from xminds.api_clients import XMindsClient
from xminds.cli import cli


@pytest.fixture
def server():
    return MockAPIServer()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"host": "http://localhost", "refresh_token": "refresh-0"})
    )
    return path


@pytest.fixture
def runner(server):
    """CliRunner whose clients talk to ``server``."""

    class MockedClient(XMindsClient):
        @classmethod
        def from_config(cls, config, **kwargs):
            return super().from_config(config, transport=server.transport(), **kwargs)

    with patch("xminds.cli.XMindsClient", MockedClient):
        yield CliRunner(env={"XMINDS_HOST": None, "XMINDS_REFRESH_TOKEN": None})


def invoke(runner, config_file, *args):
    return runner.invoke(cli, ["--config", str(config_file), *args])


class TestCommands:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_status_logs_in_with_refresh_token(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/databases/current/status/", {"status": "ready"})

        result = invoke(runner, config_file, "status")

        assert result.exit_code == 0, result.output
        assert '"status": "ready"' in result.output
        assert server.paths() == [
            "POST /v1/login/refresh-token/",
            "GET /v1/databases/current/status/",
        ]
        assert server.body(0) == {"refresh_token": "refresh-0"}

    def test_databases_paging_options(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/databases/", {"databases": [], "has_next": False})

        result = invoke(runner, config_file, "databases", "--amt", "5", "--page", "3")

        assert result.exit_code == 0, result.output
        assert str(server.requests[1].url) == "http://localhost/v1/databases/?amt=5&page=3"

    def test_recommend_user(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/recommendation/users/u1/items/", {"items_id": ["i1", "i2"]})

        result = invoke(runner, config_file, "recommend-user", "u1", "--scenario", "popular")

        assert result.exit_code == 0, result.output
        assert "i2" in result.output
        params = server.requests[1].url.params
        assert params["amt"] == "10"
        assert params["scenario"] == "popular"

    def test_recommend_item(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/recommendation/items/i1/items/", {"items_id": ["i9"]})

        result = invoke(runner, config_file, "recommend-item", "i1", "--amt", "3")

        assert result.exit_code == 0, result.output
        assert "i9" in result.output

    def test_scenarios(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/scenarios/", [{"name": "popular"}])

        result = invoke(runner, config_file, "scenarios")

        assert result.exit_code == 0, result.output
        assert "popular" in result.output

    def test_api_error_exits_with_failure(self, runner, server, config_file):
        server.add(
            "POST",
            "/login/refresh-token/",
            error_envelope("RefreshTokenExpired", "The refresh token has expired"),
            status=401,
        )

        result = invoke(runner, config_file, "status")

        assert result.exit_code == 1
        assert "RefreshTokenExpiredError" in result.output
        assert len(server.requests) == 1

    def test_host_option_overrides_config(self, runner, server, config_file):
        server.add("POST", "/login/refresh-token/", REFRESH_RESPONSE)
        server.add("GET", "/scenarios/", [])

        result = runner.invoke(
            cli,
            ["--config", str(config_file), "--host", "http://other.test", "scenarios"],
        )

        assert result.exit_code == 0, result.output
        assert server.requests[0].url.host == "other.test"

    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        result = invoke(runner, path, "status")

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_missing_refresh_token_warns(self, runner, server, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"host": "http://localhost"}))
        server.add("GET", "/scenarios/", [])

        result = invoke(runner, path, "scenarios")

        assert "No refresh token configured" in result.output

    def test_invalid_host_option(self, runner, server, config_file):
        result = runner.invoke(
            cli, ["--config", str(config_file), "--host", "nohost", "status"]
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid option" in result.output
        assert "'nohost'" in result.output
        assert server.requests == []
