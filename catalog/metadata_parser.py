"""
Metadata extractor for topic articles.

Derives an article's title, heading outline and short description from its
Markdown heading structure. Embedded code samples are never interpreted:
lines inside fenced code blocks are skipped, so a ``# comment`` in a shell or
Python sample is not mistaken for a heading.

Conventions:
    # Title                 - first level-1 heading is the title
    ## Overview             - first paragraph below it is the description
    ## Any other heading    - appended to the section outline

Limits of the description heuristic:
    - only ATX headings (``#`` markers) are recognised, not setext underlines
      or HTML ``<h1>`` tags
    - only the first "Overview" heading is considered
    - only the first paragraph is used; lists and tables count as paragraphs
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from .errors import MalformedArticle
from .models import Section

HEADING_PATTERN = re.compile(r'^(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$')
CLOSING_ONLY_PATTERN = re.compile(r'^#+$')
FENCE_PATTERN =re.compile(r'^ {0,3}(`{3,}|~{3,})')
OVERVIEW_HEADING = "overview"


class ArticleMetadata(NamedTuple):
    """Metadata derived from an article's text."""
    title: str
    sections: Tuple[Section, ...]
    description: str


def extract_metadata(text: str, source: Optional[Union[str, Path]] = None) -> ArticleMetadata:
    """Extract title, sections and description from article text.

    Args:
        text: Raw article content
        source: Optional path or name of the article, used in error messages

    Returns:
        ArticleMetadata with title, sections and description

    Raises:
        MalformedArticle: If the text has no level-1 heading with text

    Example:
        >>> meta = extract_metadata('''# Git Rebase
        ...
        ... ## Overview
        ... Rebase moves commits onto a new base.
        ...
        ... ## Usage
        ... ''')
        >>> meta.title
        'Git Rebase'
        >>> meta.description
        'Rebase moves commits onto a new base.'
        >>> [s.text for s in meta.sections]
        ['Git Rebase', 'Overview', 'Usage']
    """
    title: Optional[str] = None
    sections: List[Section] = []

    overview_level: Optional[int] = None
    paragraph: List[str] = []
    description_done = False

    for section, line in _scan(text):
        if section is not None:
            sections.append(section)

            if title is None and section.level == 1 and section.text:
                title = section.text

            if description_done:
                continue

            if overview_level is None:
                if section.text.lower() == OVERVIEW_HEADING:
                    overview_level = section.level
                continue

            # Heading inside the overview: the paragraph ends here, and a
            # sibling or parent heading closes the overview entirely.
            if paragraph or section.level <= overview_level:
                description_done = True
            continue

        if overview_level is None or description_done:
            continue

        if line is None:
            # Fenced code block boundary
            if paragraph:
                description_done = True
            continue

        stripped = line.strip()
        if stripped:
            paragraph.append(stripped)
        elif paragraph:
            description_done = True

    if title is None:
        raise MalformedArticle("Article has no level-1 title heading", path=_as_path(source))

    return ArticleMetadata(
        title=title,
        sections=tuple(sections),
        description=" ".join(paragraph),
    )


def parse_headings(text: str) -> List[Section]:
    """Return every heading in document order, ignoring fenced code.

    Example:
        >>> parse_headings("# A\\n```sh\\n# not a heading\\n```\\n## B")
        [Section(text='A', level=1), Section(text='B', level=2)]
    """
    return [section for section, _ in _scan(text) if section is not None]


def parse_heading(line: str) -> Optional[Section]:
    """Parse a single line as an ATX heading, or return None."""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    text = (match.group(2) or "").strip()
    # "## #" is an empty heading followed by its closing sequence
    if CLOSING_ONLY_PATTERN.match(text):
        text = ""
    return Section(text=text, level=len(match.group(1)))


def _scan(text: str) -> Iterator[Tuple[Optional[Section], Optional[str]]]:
    """Yield (heading, None) for headings and (None, line) for body lines.

    Lines inside fenced code blocks are not yielded; each fence boundary
    yields (None, None) so callers can end a paragraph there.
    """
    fence: Optional[str] = None

    for line in text.lstrip('\ufeff').splitlines():
        fence_match = FENCE_PATTERN.match(line)

        if fence is not None:
            if fence_match and _closes_fence(fence, fence_match.group(1), line):
                fence = None
                yield None, None
            continue

        if fence_match:
            fence = fence_match.group(1)
            yield None, None
            continue

        section = parse_heading(line)
        if section is not None:
            yield section, None
        else:
            yield None, line


def _closes_fence(opening: str, candidate: str, line: str) -> bool:
    if candidate[0] != opening[0] or len(candidate) < len(opening):
        return False
    # A closing fence carries no info string
    return not line.strip()[len(candidate):].strip()


def _as_path(source: Optional[Union[str, Path]]) -> Optional[Path]:
    if source is None:
        return None
    return Path(source)
