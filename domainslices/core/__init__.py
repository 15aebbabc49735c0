"""Core domain logic for the domainslices application.

This package contains zero external dependencies and represents
the pure business logic of the application: record types, the generic
fetch service and domain store, and the users and posts slices built
from them. All network and server integrations live in the adapters
package.
"""

from .errors import DecodeError, FetchError, TransportError
from .models import Post, PostAuthor, StoreState, User, ValidationResult

__all__ = [
    "DecodeError",
    "FetchError",
    "Post",
    "PostAuthor",
    "StoreState",
    "TransportError",
    "User",
    "ValidationResult",
]
