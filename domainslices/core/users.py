"""Users domain: fetch service, store and helpers."""

from collections.abc import Mapping
from typing import Any

from .fetch_service import FetchService, check_required
from .models import User, ValidationResult
from .ports import FetchServicePort, JsonSourcePort
from .store import DomainStore

USERS_PATH = "/api/users"
USER_REQUIRED_FIELDS = ("username", "name", "email")


def validate_user(user: Mapping[str, Any]) -> ValidationResult:
    """Check that a user carries a username, name and email."""
    return check_required(user, USER_REQUIRED_FIELDS)


def get_user_initials(user: User) -> str:
    """Return the upper-cased first letter of each part of the user's name.

    >>> get_user_initials(User(username="jd", name="John Doe"))
    'JD'
    """
    return "".join(part[0] for part in user.name.split()).upper()


def _username(user: User) -> str:
    return user.username


class UserService(FetchService[User]):
    """Fetch service for ``GET /api/users``."""

    def __init__(self, source: JsonSourcePort, path: str = USERS_PATH):
        super().__init__(
            source=source,
            path=path,
            domain="users",
            item_label="user",
            decoder=User.from_dict,
            identity=_username,
            required_fields=USER_REQUIRED_FIELDS,
        )

    async def fetch_users(self) -> list[User]:
        return await self.fetch_all()

    async def fetch_by_username(self, username: str) -> User | None:
        return await self.fetch_by_id(username)


class UserStore(DomainStore[User]):
    """Domain store for users, keyed by username."""

    def __init__(self, service: FetchServicePort[User]):
        super().__init__(service=service, identity=_username)

    @property
    def users(self) -> tuple[User, ...]:
        return self.collection

    def find_by_username(self, username: str) -> User | None:
        return self.find_by_id(username)
