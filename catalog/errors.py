"""
Error taxonomy for the topic catalog.

NotFound is recoverable and surfaced to callers. MalformedArticle and
DuplicateArticle abort catalog initialization; a partial catalog is never
served.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class CatalogError(RuntimeError):
    """Base exception for catalog errors."""
    pass


class NotFound(CatalogError):
    """Raised when a requested category, article or content root is absent."""

    def __init__(self, message: str, category: Optional[str] = None, slug: Optional[str] = None):
        super().__init__(message)
        self.category = category
        self.slug = slug


class MalformedArticle(CatalogError, ValueError):
    """Raised when an article has no extractable title."""

    def __init__(self, message: str, path: Optional[Path] = None):
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
        self.path = path


class DuplicateArticle(CatalogError):
    """Raised when two source files map to the same (category, slug)."""

    def __init__(self, category: str, slug: str, paths: Sequence[Optional[Path]] = ()):
        self.category = category
        self.slug = slug
        self.paths = tuple(paths)
        locations = ", ".join(str(p) for p in self.paths if p is not None)
        message = f"Duplicate article '{category}/{slug}'"
        if locations:
            message = f"{message}: {locations}"
        super().__init__(message)
