"""
Shared test setup.

DATABASE_URL must point at SQLite before any devflow import: the engine is
created at import time and the API tests never reach a real database
(stores are replaced through dependency overrides).
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "dev")
