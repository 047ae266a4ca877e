"""
Article store for the topic catalog.

Discovers article files under a content root and loads them on demand.

Layout:
    content/
        git/
            rebase.md           -> category "git", slug "rebase"
        python/
            generators.md       -> category "python", slug "generators"

Rules:
1. Each visible top-level directory is a category (name kept as found)
2. Each visible file inside it with an accepted extension is an article
3. Files directly under the root, hidden entries and nested directories
   are ignored
4. Content is read at most once per article, even under concurrent access
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import config
from .errors import DuplicateArticle, NotFound
from .metadata_parser import extract_metadata
from .models import Article, ArticleSource

logger = logging.getLogger(__name__)


class ArticleStore:
    """Read-only store of articles keyed by (category, slug)."""

    def __init__(
        self,
        root: Path,
        extensions: Optional[Sequence[str]] = None,
        encoding: str = "utf-8",
    ):
        """Scan the content root for article files.

        No article content is read here; see ``get`` and ``preload``.

        Args:
            root: Content directory with one sub-directory per category
            extensions: Accepted file extensions (default: config.ARTICLE_EXTENSIONS)
            encoding: Text encoding of article files

        Raises:
            NotFound: If root does not exist or is not a directory
            DuplicateArticle: If two files map to the same (category, slug)
        """
        self.root = Path(root)
        self.extensions = tuple(
            ext.lower() for ext in (extensions if extensions is not None else config.ARTICLE_EXTENSIONS)
        )
        self.encoding = encoding

        self._sources: Dict[Tuple[str, str], ArticleSource] = {}
        self._loaded: Dict[Tuple[str, str], Article] = {}
        self._locks: Dict[Tuple[str, str], threading.Lock] = {}

        for source in _discover(self.root, self.extensions):
            key = (source.category, source.slug)
            existing = self._sources.get(key)
            if existing is not None:
                raise DuplicateArticle(source.category, source.slug, (existing.path, source.path))
            self._sources[key] = source
            self._locks[key] = threading.Lock()

        logger.info(f"Discovered {len(self._sources)} articles under {self.root}")

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, key: object) -> bool:
        return key in self._sources

    def list(self) -> List[Tuple[str, str]]:
        """Return all (category, slug) pairs, sorted by category then slug."""
        return sorted(self._sources)

    def source(self, category: str, slug: str) -> ArticleSource:
        """Return the discovered file for an article.

        Raises:
            NotFound: If the article does not exist
        """
        try:
            return self._sources[(category, slug)]
        except KeyError:
            raise NotFound(
                f"Article '{category}/{slug}' not found", category=category, slug=slug
            ) from None

    def get(self, category: str, slug: str) -> Article:
        """Return an article, reading it on first access.

        Args:
            category: Category name
            slug: Article slug within the category

        Returns:
            The loaded Article

        Raises:
            NotFound: If the article does not exist
            MalformedArticle: If the article has no title heading
        """
        source = self.source(category, slug)
        key = (category, slug)

        article = self._loaded.get(key)
        if article is not None:
            return article

        with self._locks[key]:
            article = self._loaded.get(key)
            if article is None:
                article = self._read(source)
                self._loaded[key] = article
        return article

    def preload(self, max_workers: Optional[int] = None) -> List[Article]:
        """Read every article in parallel and wait for all reads to finish.

        The first failure cancels reads that have not started yet and is
        re-raised.

        Args:
            max_workers: Thread pool size (default: config.LOAD_WORKERS)

        Returns:
            All articles in ``list()`` order
        """
        keys = self.list()
        if not keys:
            return []

        workers = max(1, min(max_workers or config.LOAD_WORKERS, len(keys)))
        logger.debug(f"Loading {len(keys)} articles with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.get, category, slug) for category, slug in keys]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            for future in done:
                exc = future.exception()
                if exc is not None:
                    for other in pending:
                        other.cancel()
                    logger.error(f"Failed to load articles: {exc}")
                    raise exc

        return [future.result() for future in futures]

    def articles(self) -> List[Article]:
        """Return every article that has been loaded so far, in ``list()`` order."""
        return [self._loaded[key] for key in self.list() if key in self._loaded]

    def _read(self, source: ArticleSource) -> Article:
        # Decode bytes directly so line endings are kept exactly as stored
        raw_content = source.path.read_bytes().decode(self.encoding)
        metadata = extract_metadata(raw_content, source=source.path)
        logger.debug(f"Loaded {source.category}/{source.slug}: '{metadata.title}'")

        return Article(
            category=source.category,
            slug=source.slug,
            raw_content=raw_content,
            title=metadata.title,
            sections=metadata.sections,
            description=metadata.description,
            path=source.path,
        )


def _discover(root: Path, extensions: Iterable[str]) -> List[ArticleSource]:
    """Find article files under root, one category per top-level directory."""
    if not root.is_dir():
        raise NotFound(f"Content directory not found: {root}")

    extensions = tuple(extensions)
    sources: List[ArticleSource] = []

    for category_dir in sorted(root.iterdir()):
        if _is_hidden(category_dir):
            continue
        if not category_dir.is_dir():
            logger.debug(f"Skipping file outside any category: {category_dir}")
            continue

        for path in sorted(category_dir.iterdir()):
            if _is_hidden(path):
                continue
            if path.is_dir():
                logger.debug(f"Skipping nested directory: {path}")
                continue
            if path.suffix.lower() not in extensions:
                logger.debug(f"Skipping non-article file: {path}")
                continue
            sources.append(ArticleSource(category=category_dir.name, slug=path.stem, path=path))

    return sources


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")
