"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach the public catalog by accident
os.environ.setdefault("CATALOG_BASE_URL", "https://catalog.test")
os.environ.setdefault("LOG_FORMAT", "text")
