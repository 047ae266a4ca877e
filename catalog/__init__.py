"""
Catalog module for topic article management.

This module provides functionality for:
- Discovering and loading articles from a content directory
- Extracting title, section outline and description from headings
- Building an immutable category index

Content layout:
    content/
        <category>/
            <slug>.md       - One article per file

Article conventions (in markdown):
    # Article Title         - required, first level-1 heading
    ## Overview             - optional, first paragraph becomes the description
    First paragraph here.

Usage:
    from catalog import load_catalog

    index = load_catalog(Path("content"))
    entries = index["git"]
    article = index.article("git", "rebase")
"""

from . import config
from .errors import CatalogError, NotFound, MalformedArticle, DuplicateArticle
from .models import Article, ArticleSource, CatalogEntry, Section
from .metadata_parser import ArticleMetadata, extract_metadata, parse_headings
from .article_store import ArticleStore
from .builder import CatalogIndex, build_index, load_catalog

__all__ = [
    "config",
    "CatalogError",
    "NotFound",
    "MalformedArticle",
    "DuplicateArticle",
    "Article",
    "ArticleSource",
    "CatalogEntry",
    "Section",
    "ArticleMetadata",
    "extract_metadata",
    "parse_headings",
    "ArticleStore",
    "CatalogIndex",
    "build_index",
    "load_catalog",
]

__version__ = "1.0.0"
