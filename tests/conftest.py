"""
Test environment: must run before any book_network import.

Settings are cached at import time, so the database URL, JWT secret and a
cheap bcrypt cost are forced here. "sqlite://" is an in-memory database that
book_network.core.database pins to one shared connection.
"""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-book-network-tests"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
