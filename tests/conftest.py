"""Shared test setup.

config.settings requires JWT_SECRET at import time; provide a throwaway
value before any src module is imported.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
