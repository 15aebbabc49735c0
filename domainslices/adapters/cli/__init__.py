"""Command-line interface adapters.

Provides read-only commands over the domain stores:
- refresh: Fetch users and posts
- users / posts: List the current collections
- user / post: Look up one record
- by-author: List posts written by a user
"""

from .commands import CLICommandHandler

__all__ = ["CLICommandHandler"]
