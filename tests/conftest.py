"""Shared fixtures: a throwaway public root with a secret file next to it."""
from pathlib import Path

import pytest

INDEX_HTML = b"<!DOCTYPE html><title>Calculator</title>"
SECRET = b"TOP SECRET"


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """Create a public root holding one file of each served type."""
    root = tmp_path / "public"
    (root / "nested").mkdir(parents=True)
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "style.css").write_text("body { margin: 0; }")
    (root / "app.js").write_text("console.log('hi');")
    (root / "data.json").write_text('{"answer": 42}')
    (root / "notes.md").write_text("# notes")
    (root / "nested" / "page.HTML").write_text("<p>nested</p>")

    # Must never be reachable from the public root
    (tmp_path / "secret.txt").write_bytes(SECRET)
    return root
