"""
Configuration for the topic catalog.

Values come from environment variables, after loading a ``.env`` file from
the project root when one exists. Every function that uses them also accepts
an explicit argument, so these are defaults only.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = BASE_DIR / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)

# ============================================================================
# Content
# ============================================================================

CONTENT_DIR = Path(os.environ.get("CATALOG_CONTENT_DIR", str(BASE_DIR / "content")))
ARTICLE_EXTENSIONS = tuple(
    ext.strip().lower()
    for ext in os.environ.get("CATALOG_EXTENSIONS", ".md,.markdown").split(",")
    if ext.strip()
)
LOAD_WORKERS = int(os.environ.get("CATALOG_LOAD_WORKERS", "8"))

# ============================================================================
# Logging and server
# ============================================================================

LOG_LEVEL = os.environ.get("CATALOG_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_HOST = os.environ.get("CATALOG_HOST", "0.0.0.0")
DEFAULT_PORT = int(os.environ.get("CATALOG_PORT", "8800"))
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
