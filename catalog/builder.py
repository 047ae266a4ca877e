"""
Catalog index for the topic catalog.

Builds an immutable in-memory directory of {category -> article summaries}
from loaded articles. The index is built once at startup and shared by
reference with every reader; nothing in it changes afterwards.

Usage:
    from catalog import load_catalog

    index = load_catalog(Path("content"))
    for entry in index["git"]:
        print(entry.slug, entry.title)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .article_store import ArticleStore
from .errors import DuplicateArticle, NotFound
from .models import Article, CatalogEntry

logger = logging.getLogger(__name__)

CATALOG_FORMAT_VERSION = "1.0"


class CatalogIndex(Mapping):
    """Read-only mapping of category to entries ordered by slug."""

    def __init__(self, articles: Dict[Tuple[str, str], Article]):
        by_category: Dict[str, list] = {}
        for article in articles.values():
            by_category.setdefault(article.category, []).append(article.to_entry())

        self._articles = MappingProxyType(dict(articles))
        self._entries = MappingProxyType({
            category: tuple(sorted(entries, key=lambda entry: entry.slug))
            for category, entries in sorted(by_category.items())
        })

    def __getitem__(self, category: str) -> Tuple[CatalogEntry, ...]:
        return self._entries[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CatalogIndex(categories={len(self._entries)}, articles={len(self._articles)})"

    @property
    def total_articles(self) -> int:
        return len(self._articles)

    def article(self, category: str, slug: str) -> Article:
        """Return the full article for (category, slug).

        Raises:
            NotFound: If the article is not in the index
        """
        try:
            return self._articles[(category, slug)]
        except KeyError:
            raise NotFound(
                f"Article '{category}/{slug}' not found", category=category, slug=slug
            ) from None

    def stats(self) -> Dict:
        """Return article and word counts, overall and per category."""
        by_category: Dict[str, int] = {}
        words_by_category: Dict[str, int] = {}
        for article in self._articles.values():
            by_category[article.category] = by_category.get(article.category, 0) + 1
            words_by_category[article.category] = (
                words_by_category.get(article.category, 0) + article.word_count
            )

        return {
            "total_categories": len(self._entries),
            "total_articles": len(self._articles),
            "total_words": sum(words_by_category.values()),
            "by_category": dict(sorted(by_category.items())),
            "words_by_category": dict(sorted(words_by_category.items())),
        }

    def to_dict(self) -> Dict:
        """Build a JSON-ready snapshot of the catalog.

        The snapshot is for people and other tools; the catalog itself is
        always rebuilt from the content directory.
        """
        catalog = {
            "version": CATALOG_FORMAT_VERSION,
            "created_at": datetime.now().isoformat(),
            "total_articles": len(self._articles),
            "categories": {},
        }

        for category, entries in self._entries.items():
            catalog["categories"][category] = []
            for entry in entries:
                article = self._articles[(category, entry.slug)]
                catalog["categories"][category].append({
                    **entry.to_dict(),
                    "sections": [
                        {"text": section.text, "level": section.level}
                        for section in article.sections
                    ],
                    "file": str(article.path) if article.path else None,
                    "word_count": article.word_count,
                    "char_count": len(article.raw_content),
                })

        return catalog

    def save(self, output_path: Path) -> None:
        """Write the JSON snapshot to output_path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(self.to_dict(), indent=2, ensure_ascii=False),
            encoding='utf-8'
        )


def build_index(articles: Iterable[Article]) -> CatalogIndex:
    """Build the catalog index from loaded articles.

    Args:
        articles: Articles to index

    Returns:
        CatalogIndex with entries ordered by slug within each category

    Raises:
        DuplicateArticle: If two articles share (category, slug)

    Example:
        >>> index = build_index([
        ...     Article("git", "rebase", "# Git Rebase", "Git Rebase"),
        ...     Article("git", "merge", "# Git Merge", "Git Merge"),
        ... ])
        >>> [entry.slug for entry in index["git"]]
        ['merge', 'rebase']
    """
    by_key: Dict[Tuple[str, str], Article] = {}
    for article in articles:
        existing = by_key.get(article.key)
        if existing is not None:
            raise DuplicateArticle(article.category, article.slug, (existing.path, article.path))
        by_key[article.key] = article

    return CatalogIndex(by_key)


def load_catalog(
    root: Path,
    max_workers: Optional[int] = None,
    extensions: Optional[Sequence[str]] = None,
) -> CatalogIndex:
    """Load every article under root and build the index.

    All files are read (in parallel) before indexing starts. Any failure
    aborts the whole load.

    Args:
        root: Content directory
        max_workers: Thread pool size for reading files
        extensions: Accepted article file extensions

    Returns:
        The built CatalogIndex

    Raises:
        NotFound: If root does not exist
        MalformedArticle: If an article has no title
        DuplicateArticle: If two files map to the same (category, slug)
    """
    store = ArticleStore(root, extensions=extensions)
    articles = store.preload(max_workers=max_workers)
    index = build_index(articles)

    logger.info(
        f"✓ Catalog built: {index.total_articles} articles in {len(index)} categories"
    )
    return index
