"""
Query service for the topic catalog.

Answers the three catalog lookups (categories, articles in a category, one
article) over an immutable CatalogIndex. Build one service at startup and
pass it to every caller; it holds no mutable state, so any number of
threads may query it without locking.

Usage:
    from retrieval import QueryService

    service = QueryService.from_directory(Path("content"))
    service.list_categories()              # frozenset({'git', 'python', ...})
    service.list_articles("git")           # (CatalogEntry(...), ...)
    service.get_article("git", "rebase")   # Article(...)
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

from catalog import Article, CatalogEntry, CatalogIndex, config, load_catalog

EMPTY: Tuple[CatalogEntry, ...] = ()


class QueryService:
    """Read-only lookups over a built catalog."""

    def __init__(self, index: CatalogIndex):
        self.index = index

    @classmethod
    def from_directory(
        cls,
        root: Optional[Path] = None,
        max_workers: Optional[int] = None,
        extensions: Optional[Sequence[str]] = None,
    ) -> "QueryService":
        """Load the content directory and return a service over it.

        Args:
            root: Content directory (default: config.CONTENT_DIR)
            max_workers: Thread pool size for the initial load
            extensions: Accepted article file extensions
        """
        index = load_catalog(
            root if root is not None else config.CONTENT_DIR,
            max_workers=max_workers,
            extensions=extensions,
        )
        return cls(index)

    def list_categories(self) -> FrozenSet[str]:
        """Return every category name, as found on disk."""
        return frozenset(self.index)

    def list_articles(self, category: str) -> Tuple[CatalogEntry, ...]:
        """Return a category's entries ordered by slug.

        An unknown category has no articles; this is not an error.
        """
        return self.index.get(category, EMPTY)

    def get_article(self, category: str, slug: str) -> Article:
        """Return one article with its content and derived metadata.

        Raises:
            NotFound: If the article does not exist
        """
        return self.index.article(category, slug)

    def get_entry(self, category: str, slug: str) -> CatalogEntry:
        """Return the summary entry for one article.

        Raises:
            NotFound: If the article does not exist
        """
        return self.get_article(category, slug).to_entry()

    def stats(self) -> Dict:
        return self.index.stats()
