"""Mock API adapters.

Serves freshly generated records for every domain:
- GET /api/users
- GET /api/posts
"""

from .generator import MockRecordGenerator
from .http_server import MockHTTPServer

__all__ = ["MockHTTPServer", "MockRecordGenerator"]
