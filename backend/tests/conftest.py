"""Root conftest — shared test configuration."""

import os

# Settings are read once per process; these must be set before any app import
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Minimum bcrypt cost keeps hashing fast in tests
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
