"""HTTP server adapter for the mock API.

Provides a simple HTTP server using Python's built-in http.server module,
driven from asyncio, that answers the read endpoints of every domain with
freshly generated records:

- GET /api/users -> JSON array of users
- GET /api/posts -> JSON array of posts
- GET /health    -> {"status": "healthy"}
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from domainslices.adapters.mock_server.generator import MockRecordGenerator
from domainslices.core.posts import POSTS_PATH
from domainslices.core.users import USERS_PATH

logger = logging.getLogger(__name__)

POST_AUTHOR_POOL = 10


def make_mock_handler(
    generator: MockRecordGenerator,
    user_count: int,
    post_count: int,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create a MockAPIHandler class with instance-specific state.

    Dependencies are captured in a closure instead of class-level
    mutable state, so several servers can run side by side.

    Args:
        generator: Record generator used for every response.
        user_count: Number of users returned by GET /api/users.
        post_count: Number of posts returned by GET /api/posts.

    Returns:
        A MockAPIHandler class configured with the provided dependencies.
    """

    class MockAPIHandler(BaseHTTPRequestHandler):
        """HTTP request handler for the mock read endpoints."""

        def do_GET(self) -> None:
            """Handle GET requests, routing on the path without query string."""
            path = self.path.split("?", 1)[0].rstrip("/") or "/"

            try:
                if path == USERS_PATH:
                    users = generator.generate_users(user_count)
                    self._send_json([user.to_dict() for user in users])
                elif path == POSTS_PATH:
                    authors = generator.generate_users(
                        min(user_count, POST_AUTHOR_POOL) or 1
                    )
                    posts = generator.generate_posts(post_count, authors=authors)
                    self._send_json([post.to_dict() for post in posts])
                elif path == "/health":
                    self._send_json({"status": "healthy"})
                else:
                    self.send_error(404, "Not found")
            except Exception as e:
                # Log full exception server-side for debugging
                logger.error(f"Error handling {path}: {e}", exc_info=True)
                self.send_error(500, "Internal server error")

        def do_POST(self) -> None:
            self.send_error(405, "Method not allowed")

        do_PUT = do_POST
        do_PATCH = do_POST
        do_DELETE = do_POST

        def _send_json(self, data: Any) -> None:
            """Send JSON response."""
            body = json.dumps(data).encode()
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return MockAPIHandler


class MockHTTPServer:
    """Mock API HTTP server adapter.

    Serves randomly generated users and posts. Nothing is persisted and
    every request yields a different collection.
    """

    def __init__(
        self,
        generator: MockRecordGenerator,
        host: str = "127.0.0.1",
        port: int = 3000,
        user_count: int = 50,
        post_count: int = 20,
    ):
        """Initialize the HTTP server.

        Args:
            generator: Record generator used to build responses.
            host: Host to listen on (default 127.0.0.1).
            port: Port to listen on (default 3000). Use 0 for an
                ephemeral port, readable from bound_port after start().
            user_count: Users per GET /api/users response.
            post_count: Posts per GET /api/posts response.
        """
        if user_count < 0 or post_count < 0:
            raise ValueError("user_count and post_count must be non-negative")

        self.generator = generator
        self.host = host
        self.port = port
        self.user_count = user_count
        self.post_count = post_count
        self.server: HTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def bound_port(self) -> int:
        """Port the server is actually listening on."""
        if self.server is None:
            return self.port
        return self.server.server_address[1]

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.bound_port}"

    async def start(self) -> None:
        """Start the HTTP server."""
        if self.server is not None:
            raise RuntimeError("Mock HTTP server is already running")

        handler_class = make_mock_handler(
            generator=self.generator,
            user_count=self.user_count,
            post_count=self.post_count,
        )

        # Create the HTTP server (binds immediately)
        self.server = HTTPServer((self.host, self.port), handler_class)

        # Run server in a separate thread to avoid blocking
        self._server_task = asyncio.create_task(self._run_server())
        logger.info(f"Mock HTTP server started on {self.host}:{self.bound_port}")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            # Run the blocking server loop in a thread pool to avoid blocking the event loop
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            # Normal shutdown
            pass
        except Exception as e:
            logger.error(f"Mock HTTP server error: {e}", exc_info=True)

    async def serve_until_cancelled(self) -> None:
        """Block until the surrounding task is cancelled."""
        if self._server_task is None:
            raise RuntimeError("Mock HTTP server is not running")
        await asyncio.shield(self._server_task)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
            self.server = None
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
            self._server_task = None
        logger.info("Mock HTTP server stopped")
