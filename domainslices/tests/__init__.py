"""Test suite for the domainslices application.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No network, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - httpx MockTransport and a real local mock server
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementations of JsonSourcePort and FetchServicePort
"""
