"""External adapters for the domainslices application.

This package contains all external dependencies (httpx, Faker, HTTP
servers) and provides implementations of the core port interfaces.

Adapter Organization:

- http/: JSON source reading the application API over HTTP
- mock_server/: Mock API serving generated users and posts
- cli/: Command-line presentation over the domain stores
"""
