"""
Tests for the restaurant service: search, lookup, identity resolution and
health endpoints. Run with ``pytest restaurant_platform_tests``.
"""
