"""domainslices: users and posts as self-contained domain slices.

Each domain bundles a record type, a stateless fetch service, a domain
store holding the fetched collection with loading/error state, and a
mock endpoint that serves generated records.
"""

__version__ = "0.1.0"
