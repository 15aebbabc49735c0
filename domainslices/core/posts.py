"""Posts domain: fetch service, store and helpers."""

from collections.abc import Mapping
from typing import Any

from .fetch_service import FetchService, check_required
from .models import Post, ValidationResult
from .ports import FetchServicePort, JsonSourcePort
from .store import DomainStore

POSTS_PATH = "/api/posts"
POST_REQUIRED_FIELDS = ("title", "snippet", "author")
DEFAULT_EXCERPT_LENGTH = 150


def validate_post(post: Mapping[str, Any]) -> ValidationResult:
    """Check that a post carries a title, a snippet and an author.

    An author that is present but has no username is reported as
    ``author.username``.
    """
    result = check_required(post, POST_REQUIRED_FIELDS)
    if "author" in result.missing_fields:
        return result
    nested = check_required(post, ("author.username",))
    return ValidationResult(result.missing_fields + nested.missing_fields)


def generate_excerpt(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Shorten content to max_length characters followed by "...".

    Content that already fits is returned unchanged.
    """
    if max_length < 0:
        raise ValueError(f"max_length must be non-negative, got {max_length}")
    if len(content) <= max_length:
        return content
    return content[:max_length].strip() + "..."


def _post_id(post: Post) -> int:
    return post.id


class PostService(FetchService[Post]):
    """Fetch service for ``GET /api/posts``."""

    def __init__(self, source: JsonSourcePort, path: str = POSTS_PATH):
        super().__init__(
            source=source,
            path=path,
            domain="posts",
            item_label="post",
            decoder=Post.from_dict,
            identity=_post_id,
            required_fields=POST_REQUIRED_FIELDS,
        )

    async def fetch_posts(self) -> list[Post]:
        return await self.fetch_all()

    async def fetch_by_author(self, author_username: str) -> list[Post]:
        return await self.fetch_by_field("author.username", author_username)

    def validate(self, partial: Mapping[str, Any]) -> ValidationResult:
        return validate_post(partial)


class PostStore(DomainStore[Post]):
    """Domain store for posts, keyed by integer id."""

    def __init__(self, service: FetchServicePort[Post]):
        super().__init__(service=service, identity=_post_id)

    @property
    def posts(self) -> tuple[Post, ...]:
        return self.collection

    def find_post_by_id(self, post_id: int | str) -> Post | None:
        """Find a post, accepting the id as an int or its string form."""
        wanted = str(post_id)
        for post in self.collection:
            if str(post.id) == wanted:
                return post
        return None

    def posts_by_author(self, author_username: str) -> list[Post]:
        """Posts whose embedded author has this username, in original order."""
        return self.filter_by_field("author.username", author_username)
