"""Integration tests for adapter implementations.

These tests exercise adapters against mocked transports and a local
mock server to validate translation between core domain models and
wire formats.
"""
