"""Pytest configuration and shared fixtures."""

# Load environment variables from .env file at test startup
# so assistant endpoint settings are visible before fixtures are created
from dotenv import load_dotenv
load_dotenv()

pytest_plugins = [
    "tests.fixtures.sessions",
    "tests.fixtures.api",
]
