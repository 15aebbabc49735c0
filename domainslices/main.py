"""Composition root for the domainslices application.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Fetch service and store initialization
- Entry point selection (serve, fetch, cli)
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any

from domainslices.adapters.cli.commands import CLICommandHandler
from domainslices.adapters.http.client import HttpxJsonSource
from domainslices.adapters.mock_server.generator import MockRecordGenerator
from domainslices.adapters.mock_server.http_server import MockHTTPServer
from domainslices.config import Settings, load_settings
from domainslices.core.posts import PostService, PostStore
from domainslices.core.users import UserService, UserStore


@dataclass
class Application:
    """Wired application components."""

    source: HttpxJsonSource
    users: UserStore
    posts: PostStore

    async def close(self) -> None:
        await self.source.close()


def build_application(settings: Settings) -> Application:
    """Wire the JSON source, fetch services and stores.

    Args:
        settings: Loaded application settings.

    Returns:
        Application holding the constructed stores.
    """
    source = HttpxJsonSource(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )
    return Application(
        source=source,
        users=UserStore(UserService(source)),
        posts=PostStore(PostService(source)),
    )


def build_mock_server(settings: Settings) -> MockHTTPServer:
    """Create the mock API server from settings."""
    generator = MockRecordGenerator(seed=settings.mock_seed, locale=settings.mock_locale)
    return MockHTTPServer(
        generator=generator,
        host=settings.mock_host,
        port=settings.mock_port,
        user_count=settings.mock_user_count,
        post_count=settings.mock_post_count,
    )


async def _run_fetch(app: Application) -> dict[str, Any]:
    """Fetch both domains once and summarize the outcome."""
    handler = CLICommandHandler(app.users, app.posts)
    return await handler.refresh()


# Commands accepting one bare word, bound to this parameter.
_SHORTHAND_PARAMS = {
    "users": "format",
    "posts": "format",
    "user": "username",
    "post": "id",
    "by-author": "username",
}


def parse_command_line(line: str) -> tuple[str, dict[str, Any]]:
    """Split a REPL line into a command name and its arguments.

    Arguments are either a JSON object (``user {"username": "alice"}``) or a
    single bare word bound to the command's main parameter (``user alice``).

    Raises:
        ValueError: If the arguments are neither form.
    """
    command, _, rest = line.strip().partition(" ")
    command = command.lower()
    rest = rest.strip()
    if not rest:
        return command, {}

    if rest.startswith("{"):
        try:
            args = json.loads(rest)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON arguments: {e.msg}") from e
        return command, args

    param = _SHORTHAND_PARAMS.get(command)
    if param is None or " " in rest:
        raise ValueError(f"Cannot parse arguments for {command!r}: {rest}")
    return command, {param: rest}


async def run_command_line(cli_handler: CLICommandHandler, line: str) -> dict[str, Any]:
    """Parse and execute one REPL line, reporting bad input as an error result."""
    try:
        command, args = parse_command_line(line)
        return await _execute_cli_command(cli_handler, command, args)
    except ValueError as e:
        return {"status": "error", "message": str(e)}


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Read commands from stdin until ``exit`` or end of input."""
    loop = asyncio.get_running_loop()
    while True:
        try:
            line = await loop.run_in_executor(None, input, "slices> ")
        except EOFError:
            break

        line = line.strip()
        if line.lower() in ("exit", "quit"):
            break
        if line.lower() == "help":
            print(CLI_HELP)
        elif line:
            result = await run_command_line(cli_handler, line)
            print(json.dumps(result, indent=2, default=str))


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Raises:
        ValueError: If command is not recognized or a parameter is missing.
    """
    if command == "refresh":
        return await cli_handler.refresh()

    if command in ("users", "posts"):
        listing = cli_handler.list_users if command == "users" else cli_handler.list_posts
        return await listing(
            output_format=args.get("format", "json"),
            refresh=args.get("refresh", False),
        )

    lookups = {
        "user": ("username", cli_handler.get_user),
        "post": ("id", cli_handler.get_post),
        "by-author": ("username", cli_handler.posts_by_author),
    }
    if command not in lookups:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
    param, operation = lookups[command]
    if param not in args:
        raise ValueError(f"Missing required parameter: {param}")
    return await operation(args[param])


CLI_HELP = """\
Commands:
  refresh              fetch users and posts from the API
  users [json|text]    list users held by the store
  posts [json|text]    list posts held by the store
  user <username>      show one user
  post <id>            show one post
  by-author <username> list posts written by a user
  help | exit

Arguments may also be given as a JSON object, e.g.
  users {"format": "text", "refresh": true}"""


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the application.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Run the selected mode (mock server, one-shot fetch or CLI)
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting in {settings.run_mode} mode...")

    if settings.run_mode == "serve":
        server = build_mock_server(settings)
        await server.start()
        try:
            await server.serve_until_cancelled()
        finally:
            await server.stop()
        return

    app = build_application(settings)
    try:
        if settings.run_mode == "fetch":
            summary = await _run_fetch(app)
            print(json.dumps(summary, indent=2, default=str))
            if summary["status"] != "success":
                sys.exit(1)

        elif settings.run_mode == "cli":
            cli_handler = CLICommandHandler(app.users, app.posts)
            await _run_cli_interactive(cli_handler)

        else:
            logger.error(f"Unknown run mode: {settings.run_mode}")
            sys.exit(1)
    finally:
        await app.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error, or a failed fetch
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
