"""
Data model for the topic catalog.

Articles are created once when their file is read and never mutated.
CatalogEntry is the summary view used for listings.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple


class Section(NamedTuple):
    """One heading of an article, in document order."""
    text: str
    level: int


class ArticleSource(NamedTuple):
    """A discovered article file that has not necessarily been read yet."""
    category: str
    slug: str
    path: Path


@dataclass(frozen=True)
class CatalogEntry:
    """Summary of an article for category listings."""
    category: str
    slug: str
    title: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "category": self.category,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
        }


@dataclass(frozen=True)
class Article:
    """A loaded article with its derived metadata."""
    category: str
    slug: str
    raw_content: str
    title: str
    sections: Tuple[Section, ...] = ()
    description: str = ""
    path: Optional[Path] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.category, self.slug)

    @property
    def word_count(self) -> int:
        return len(self.raw_content.split())

    def to_entry(self) -> CatalogEntry:
        return CatalogEntry(
            category=self.category,
            slug=self.slug,
            title=self.title,
            description=self.description,
        )
