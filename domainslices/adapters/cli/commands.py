"""CLI command implementations for browsing the domain stores.

This adapter is a presentation layer: it reads collections and flags from
the UserStore and PostStore, asks them to fetch, and formats results for
the terminal. It never writes store state directly.
"""

import asyncio
import logging
from typing import Any

from domainslices.core.models import Post, User
from domainslices.core.posts import PostStore, generate_excerpt
from domainslices.core.users import UserStore, get_user_initials

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to the domain stores."""

    def __init__(self, users: UserStore, posts: PostStore):
        """Initialize the CLI command handler.

        Args:
            users: Store for the users domain.
            posts: Store for the posts domain.
        """
        self.users = users
        self.posts = posts

    async def refresh(self) -> dict[str, Any]:
        """Fetch both domains concurrently.

        Returns:
            Dictionary with per-domain counts and errors.
        """
        await asyncio.gather(self.users.fetch(), self.posts.fetch())

        result: dict[str, Any] = {
            "status": "success",
            "operation": "refresh",
            "users": {"count": self.users.count, "error": self.users.error},
            "posts": {"count": self.posts.count, "error": self.posts.error},
        }
        if self.users.error or self.posts.error:
            result["status"] = "error"
            logger.warning(
                f"Refresh incomplete (users: {self.users.error}, posts: {self.posts.error})"
            )
        return result

    async def list_users(
        self, output_format: str = "json", refresh: bool = False
    ) -> dict[str, Any]:
        """List users currently held by the store.

        Args:
            output_format: "json" or "text".
            refresh: Fetch before listing.
        """
        if output_format not in {"json", "text"}:
            raise ValueError(f"Unsupported output format: {output_format}")
        if refresh:
            await self.users.fetch()

        users = self.users.users
        result: dict[str, Any] = {
            "status": "error" if self.users.error else "success",
            "operation": "list_users",
            "count": len(users),
        }
        if self.users.error:
            result["message"] = self.users.error

        if output_format == "text":
            result["output"] = "\n\n".join(self._format_user(u) for u in users)
        else:
            result["users"] = [
                {**u.to_dict(), "initials": get_user_initials(u)} for u in users
            ]
        return result

    async def list_posts(
        self, output_format: str = "json", refresh: bool = False
    ) -> dict[str, Any]:
        """List posts currently held by the store.

        Args:
            output_format: "json" or "text".
            refresh: Fetch before listing.
        """
        if output_format not in {"json", "text"}:
            raise ValueError(f"Unsupported output format: {output_format}")
        if refresh:
            await self.posts.fetch()

        posts = self.posts.posts
        result: dict[str, Any] = {
            "status": "error" if self.posts.error else "success",
            "operation": "list_posts",
            "count": len(posts),
        }
        if self.posts.error:
            result["message"] = self.posts.error

        if output_format == "text":
            result["output"] = "\n\n".join(self._format_post(p) for p in posts)
        else:
            result["posts"] = [p.to_dict() for p in posts]
        return result

    async def get_user(self, username: str) -> dict[str, Any]:
        """Look up one user by username in the current collection."""
        user = self.users.find_by_username(username)
        if user is None:
            return {
                "status": "error",
                "operation": "get_user",
                "message": f"User {username} not found",
            }
        return {
            "status": "success",
            "operation": "get_user",
            "user": {**user.to_dict(), "initials": get_user_initials(user)},
        }

    async def get_post(self, post_id: int | str) -> dict[str, Any]:
        """Look up one post by id in the current collection."""
        post = self.posts.find_post_by_id(post_id)
        if post is None:
            return {
                "status": "error",
                "operation": "get_post",
                "message": f"Post {post_id} not found",
            }
        return {"status": "success", "operation": "get_post", "post": post.to_dict()}

    async def posts_by_author(self, username: str) -> dict[str, Any]:
        """List posts written by the given username."""
        posts = self.posts.posts_by_author(username)
        return {
            "status": "success",
            "operation": "posts_by_author",
            "username": username,
            "count": len(posts),
            "posts": [p.to_dict() for p in posts],
        }

    @staticmethod
    def _format_user(user: User) -> str:
        return (
            f"Username: {user.username}\n"
            f"Name: {user.name}\n"
            f"Email: {user.email}\n"
            f"initials: {get_user_initials(user)}"
        )

    @staticmethod
    def _format_post(post: Post) -> str:
        author = (post.author.name or post.author.username) if post.author else "unknown"
        summary = post.snippet or generate_excerpt(post.body)
        return f"#{post.id} {post.title}\nBy {author}\n{summary}"
