"""Unit tests for heading-based metadata extraction."""

import pytest

from catalog import MalformedArticle, Section, extract_metadata, parse_headings
from catalog.metadata_parser import parse_heading


class TestTitle:
    """Tests for title extraction."""

    def test_first_level_one_heading_is_title(self):
        """The first single-marker heading becomes the title."""
        meta = extract_metadata("# Git Rebase\n\nBody\n\n# Second Title\n")
        assert meta.title == "Git Rebase"

    def test_title_after_deeper_headings(self):
        """A level-2 heading before the title does not become the title."""
        meta = extract_metadata("## Preface\n\n# Real Title\n")
        assert meta.title == "Real Title"

    def test_missing_title_raises(self):
        """Text with no level-1 heading is malformed."""
        with pytest.raises(MalformedArticle):
            extract_metadata("## Only a subsection\n\nSome text.\n")

    def test_empty_text_raises(self):
        with pytest.raises(MalformedArticle):
            extract_metadata("")

    def test_error_names_source(self):
        """The offending path is included in the error."""
        with pytest.raises(MalformedArticle) as exc_info:
            extract_metadata("no headings here", source="content/git/broken.md")
        assert "content/git/broken.md" in str(exc_info.value)
        assert str(exc_info.value.path) == "content/git/broken.md"

    def test_empty_level_one_heading_is_skipped(self):
        """A bare '#' line has no text and cannot be the title."""
        meta = extract_metadata("#\n\n# Named\n")
        assert meta.title == "Named"

    def test_closing_markers_are_stripped(self):
        meta = extract_metadata("# Git Rebase #\n")
        assert meta.title == "Git Rebase"

    def test_hashtag_is_not_a_heading(self):
        """A marker must be followed by whitespace."""
        with pytest.raises(MalformedArticle):
            extract_metadata("#hashtag\n")

    def test_byte_order_mark_is_ignored(self):
        meta = extract_metadata("\ufeff# Title\n")
        assert meta.title == "Title"

    def test_title_inside_code_fence_is_ignored(self):
        """A '# comment' in a code sample is not a title."""
        text = "```python\n# comment\n```\n\n# Actual Title\n"
        assert extract_metadata(text).title == "Actual Title"


class TestSections:
    """Tests for the section outline."""

    def test_sections_in_document_order_with_levels(self):
        text = "# Title\n## One\n### One A\n## Two\n"
        meta = extract_metadata(text)
        assert meta.sections == (
            Section("Title", 1),
            Section("One", 2),
            Section("One A", 3),
            Section("Two", 2),
        )

    def test_headings_in_fenced_code_are_skipped(self):
        text = """# Title

```bash
# Update main
git fetch
```

~~~
## also code
~~~

## After Code
"""
        assert [s.text for s in extract_metadata(text).sections] == ["Title", "After Code"]

    def test_longer_fence_needs_matching_close(self):
        """A shorter fence inside a longer one does not close it."""
        text = "# Title\n````\n```\n# inside\n```\n````\n## Outside\n"
        assert [s.text for s in parse_headings(text)] == ["Title", "Outside"]

    def test_seven_markers_is_not_a_heading(self):
        assert parse_heading("####### too deep") is None

    def test_indented_heading_is_body_text(self):
        assert parse_heading("    # indented code") is None

    def test_windows_line_endings(self):
        meta = extract_metadata("# Title\r\n## Part\r\n")
        assert meta.sections == (Section("Title", 1), Section("Part", 2))

    def test_closing_sequence_alone_is_empty_heading(self):
        """'## #' is an empty level-2 heading, not a heading named '#'."""
        assert parse_heading("## #") == Section("", 2)
        assert parse_heading("### ###") == Section("", 3)
        assert parse_heading("## C#") == Section("C#", 2)


class TestDescription:
    """Tests for the Overview description heuristic."""

    def test_first_paragraph_after_overview(self):
        text = "# T\n\n## Overview\n\nFirst line.\n\nSecond paragraph.\n"
        assert extract_metadata(text).description == "First line."

    def test_wrapped_paragraph_is_joined(self):
        text = "# T\n## Overview\nLine one\nline two\n\nNext.\n"
        assert extract_metadata(text).description == "Line one line two"

    def test_overview_is_case_insensitive(self):
        text = "# T\n## OVERVIEW\nShouting.\n"
        assert extract_metadata(text).description == "Shouting."

    def test_no_overview_gives_empty_description(self):
        text = "# T\n\nIntro paragraph.\n\n## Usage\n"
        assert extract_metadata(text).description == ""

    def test_empty_overview_stops_at_next_section(self):
        """Text under a sibling heading does not leak into the description."""
        text = "# T\n## Overview\n\n## Usage\nUsage text.\n"
        assert extract_metadata(text).description == ""

    def test_subheading_inside_overview_is_skipped(self):
        text = "# T\n## Overview\n### Summary\nNested text.\n## Next\n"
        assert extract_metadata(text).description == "Nested text."

    def test_code_block_is_not_description(self):
        text = "# T\n## Overview\n```\ncode()\n```\nProse after code.\n"
        assert extract_metadata(text).description == "Prose after code."

    def test_only_first_overview_counts(self):
        text = "# T\n## Overview\nFirst.\n## Overview\nSecond.\n"
        assert extract_metadata(text).description == "First."

    def test_extraction_is_deterministic(self):
        text = "# T\n## Overview\nSame.\n"
        assert extract_metadata(text) == extract_metadata(text)
