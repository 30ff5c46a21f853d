"""Test fixtures for the terminal simulator.

This package provides reusable test fixtures:
- sessions: deterministic session states, terminal hosts and file helpers
- api: FastAPI TestClient wired to an isolated session registry
"""
