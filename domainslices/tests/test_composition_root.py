"""Integration tests for the composition root.

These tests verify that configuration loads and validates, that the
application wires sources, services and stores together, and that CLI
commands are dispatched to the handler.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from domainslices.adapters.cli.commands import CLICommandHandler
from domainslices.adapters.mock_server.http_server import MockHTTPServer
from domainslices.config import MAX_MOCK_USERS, Settings, load_settings
from domainslices.core.models import User
from domainslices.core.posts import PostService, PostStore
from domainslices.core.users import UserService, UserStore
from domainslices.main import (
    _execute_cli_command,
    build_application,
    build_mock_server,
    configure_logging,
    parse_command_line,
    run_command_line,
)
from domainslices.tests.fakes import FakeFetchService


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        assert settings.api_base_url == "http://127.0.0.1:3000"
        assert settings.run_mode == "fetch"
        assert settings.mock_user_count == 50
        assert settings.mock_seed is None
        assert settings.log_level == "INFO"

    def test_load_settings_from_env(self) -> None:
        """Load settings from environment variables."""
        with patch.dict(
            os.environ,
            {
                "API_BASE_URL": "http://api.internal:8080/",
                "RUN_MODE": "serve",
                "MOCK_SEED": "12",
                "LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
        assert settings.api_base_url == "http://api.internal:8080"
        assert settings.run_mode == "serve"
        assert settings.mock_seed == 12
        assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text("MOCK_POST_COUNT=7\nREQUEST_TIMEOUT_SECONDS=2.5\n")

        settings = load_settings(str(env_file))

        assert settings.mock_post_count == 7
        assert settings.request_timeout_seconds == 2.5

    @pytest.mark.parametrize(
        "name,value",
        [
            ("REQUEST_TIMEOUT_SECONDS", "0"),
            ("MOCK_PORT", "70000"),
            ("MOCK_USER_COUNT", "0"),
            ("MOCK_USER_COUNT", str(MAX_MOCK_USERS + 1)),
            ("MOCK_POST_COUNT", "-3"),
            ("API_BASE_URL", "ftp://example.com"),
            ("RUN_MODE", "daemon"),
        ],
    )
    def test_invalid_values_rejected(self, name: str, value: str) -> None:
        with patch.dict(os.environ, {name: value}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_user_count_cap_is_inclusive(self) -> None:
        with patch.dict(os.environ, {"MOCK_USER_COUNT": str(MAX_MOCK_USERS)}):
            assert load_settings().mock_user_count == MAX_MOCK_USERS


class TestWiring:
    """Test that the composition root wires the slices."""

    @pytest.mark.asyncio
    async def test_build_application_shares_one_source(self) -> None:
        settings = Settings(api_base_url="http://api.test", request_timeout_seconds=3.0)

        app = build_application(settings)
        try:
            assert isinstance(app.users, UserStore)
            assert isinstance(app.posts, PostStore)
            assert isinstance(app.users.service, UserService)
            assert isinstance(app.posts.service, PostService)
            assert app.users.service.source is app.source
            assert app.posts.service.source is app.source
            assert app.source.base_url == "http://api.test"
            assert app.source.timeout == 3.0
        finally:
            await app.close()

    def test_build_mock_server_uses_settings(self) -> None:
        settings = Settings(mock_port=4010, mock_user_count=5, mock_post_count=2, mock_seed=1)

        server = build_mock_server(settings)

        assert isinstance(server, MockHTTPServer)
        assert server.port == 4010
        assert server.user_count == 5
        assert server.post_count == 2

    def test_configure_logging_accepts_both_formats(self) -> None:
        configure_logging("DEBUG", "json")
        configure_logging("INFO", "text")


class TestCLIDispatch:
    """Test CLI command routing."""

    @pytest.fixture
    def handler(self) -> CLICommandHandler:
        users = UserStore(FakeFetchService([User("johndoe", "John Doe")], domain="users"))
        posts = PostStore(FakeFetchService([], domain="posts"))
        return CLICommandHandler(users, posts)

    @pytest.mark.asyncio
    async def test_refresh_then_user(self, handler: CLICommandHandler) -> None:
        await _execute_cli_command(handler, "refresh", {})

        result = await _execute_cli_command(handler, "user", {"username": "johndoe"})

        assert result["user"]["initials"] == "JD"

    @pytest.mark.asyncio
    async def test_missing_parameter_raises(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="username"):
            await _execute_cli_command(handler, "by-author", {})

    @pytest.mark.asyncio
    async def test_unknown_command_raises(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await _execute_cli_command(handler, "delete", {})

    @pytest.mark.asyncio
    async def test_users_listing(self, handler: CLICommandHandler) -> None:
        result = await _execute_cli_command(handler, "users", {"refresh": True})
        assert result["count"] == 1

    @pytest.mark.asyncio
    async def test_command_line_shorthand(self, handler: CLICommandHandler) -> None:
        await run_command_line(handler, "refresh")

        result = await run_command_line(handler, "user johndoe")

        assert result["status"] == "success"
        assert result["user"]["username"] == "johndoe"

    @pytest.mark.asyncio
    async def test_bad_command_line_reported_as_error(
        self, handler: CLICommandHandler
    ) -> None:
        result = await run_command_line(handler, 'user {"username": ')

        assert result["status"] == "error"
        assert "Invalid JSON" in result["message"]


class TestCommandLineParsing:
    """Test splitting REPL lines into commands and arguments."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("refresh", ("refresh", {})),
            ("  USERS  ", ("users", {})),
            ("users text", ("users", {"format": "text"})),
            ("post 3", ("post", {"id": "3"})),
            ("by-author alice", ("by-author", {"username": "alice"})),
            ('posts {"refresh": true}', ("posts", {"refresh": True})),
        ],
    )
    def test_parses(self, line: str, expected: tuple) -> None:
        assert parse_command_line(line) == expected

    def test_invalid_json_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid JSON"):
            parse_command_line('user {"username"}')

    def test_bare_word_for_command_without_arguments_rejected(self) -> None:
        with pytest.raises(ValueError, match="refresh"):
            parse_command_line("refresh now")
