"""Domain models for the domainslices demo application.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

R = TypeVar("R")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _integer_id(raw: Any) -> int:
    """Accept ints, integral floats and integral numeric strings."""
    if isinstance(raw, bool):
        raise ValueError("id must be an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"id must be an integer, got {raw!r}")
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            raise ValueError(f"id must be an integer, got {raw!r}") from None
    raise ValueError(f"id must be an integer, got {type(raw).__name__}")


@dataclass(frozen=True)
class User:
    """A user record as served by ``GET /api/users``.

    The username is the identity of a user within one fetched collection.
    """

    username: str
    name: str = ""
    email: str = ""

    def __post_init__(self) -> None:
        """Validate user invariants on creation."""
        if not self.username or not self.username.strip():
            raise ValueError("username must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        """Build a User from its wire representation."""
        return cls(
            username=_text(data, "username"),
            name=_text(data, "name"),
            email=_text(data, "email"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        return {"username": self.username, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class PostAuthor:
    """Author embedded in a post.

    A denormalized, User-shaped value copied into the post at fetch time,
    not a reference resolved against the users collection. Only the
    username is mandatory.
    """

    username: str
    name: str = ""
    email: str = ""

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise ValueError("author username must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PostAuthor":
        return cls(
            username=_text(data, "username"),
            name=_text(data, "name"),
            email=_text(data, "email"),
        )

    @classmethod
    def from_user(cls, user: User) -> "PostAuthor":
        return cls(username=user.username, name=user.name, email=user.email)

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class Post:
    """A post record as served by ``GET /api/posts``."""

    id: int
    title: str
    body: str = ""
    snippet: str | None = None
    author: PostAuthor | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Post":
        """Build a Post from its wire representation.

        Raises:
            KeyError: If the id is missing.
            ValueError: If the id is not an integer or the author is malformed.
        """
        raw_author = data.get("author")
        if raw_author is None:
            author = None
        elif isinstance(raw_author, Mapping):
            author = PostAuthor.from_dict(raw_author)
        else:
            raise ValueError(f"author must be an object, got {type(raw_author).__name__}")

        post_id = _integer_id(data["id"])

        snippet = data.get("snippet")
        return cls(
            id=post_id,
            title=_text(data, "title"),
            body=_text(data, "body"),
            snippet=None if snippet is None else str(snippet),
            author=author,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "author": self.author.to_dict() if self.author else None,
        }
        if self.snippet is not None:
            data["snippet"] = self.snippet
        return data


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a record shape check.

    Lists every required field that was missing or empty, in the order the
    fields are declared for the domain.
    """

    missing_fields: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.missing_fields

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass(frozen=True)
class StoreState(Generic[R]):
    """Immutable snapshot of a domain store handed to subscribers."""

    collection: tuple[R, ...] = field(default_factory=tuple)
    loading: bool = False
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.collection)
