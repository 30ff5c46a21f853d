"""Unit tests for API components.

This package contains isolated unit tests for:
- Dependency injection and the session registry
- Error handling
"""
