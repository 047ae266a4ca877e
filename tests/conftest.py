"""Shared fixtures for catalog tests."""

from pathlib import Path

import pytest

REPO_CONTENT_DIR = Path(__file__).resolve().parent.parent / "content"


REBASE_MD = """# Git Rebase

## Overview

Rebase replays commits on top of another branch.

## Usage

```bash
# not a heading
git rebase main
```
"""

MERGE_MD = """# Git Merge

Merging joins two histories.
"""

GENERATORS_MD = """# Python Generators

## Overview
Generators produce values lazily.

## Examples
"""


def write_article(root: Path, category: str, filename: str, content: str) -> Path:
    """Write an article file under root/category/filename."""
    path = root / category / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path


@pytest.fixture
def content_dir(tmp_path):
    """A small content tree with two categories and three articles."""
    root = tmp_path / "content"
    write_article(root, "git", "rebase.md", REBASE_MD)
    write_article(root, "git", "merge.md", MERGE_MD)
    write_article(root, "python", "generators.md", GENERATORS_MD)
    return root
