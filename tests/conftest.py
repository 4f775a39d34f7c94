"""
Pytest configuration: keep the app offline, in-memory and unthrottled.
"""

import os

os.environ.setdefault("RECORDS_DB_PATH", ":memory:")
os.environ.setdefault("TOOLS_LLM_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("AUTH_MODE", "public")
