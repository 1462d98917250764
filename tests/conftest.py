"""Root test fixtures shared across all test types.

Environment variables must be set before any application import: settings
are cached and the rate limiter is created at import time.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.docsite.core.config import get_settings
from src.docsite.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep structlog contextvars from leaking between tests."""
    clear_request_context()
    yield
    clear_request_context()
