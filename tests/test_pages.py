"""Unit tests for page resolution, titles and sidebar headers."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from vpsite.pages import (
    PageHeader,
    derive_label,
    is_external,
    page_headers,
    page_title,
    resolve_page_file,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

PAGE = dedent(
    """
    # Basic *usage*

    ## Running as an object

    ```php
    ## not a header
    ```

    ### From the container

    ## Running as a controller
    """
).lstrip()


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("/", "README.md"),
        ("/2.x/", "2.x/README.md"),
        ("/2.x/installation", "2.x/installation.md"),
        ("/2.x/installation.html", "2.x/installation.md"),
        ("/2.x/installation.md#setup", "2.x/installation.md"),
    ],
)
def test_resolve_page_file(tmp_path: Path, link: str, expected: str) -> None:
    """Links map to markdown files the way the generator routes them."""
    assert resolve_page_file(link, tmp_path) == tmp_path / expected


def test_is_external() -> None:
    """Only absolute URLs with a scheme are external."""
    assert is_external("https://github.com/lorisleiva/laravel-actions")
    assert not is_external("/installation")


def test_page_title_prefers_frontmatter() -> None:
    """Front matter titles win over headings."""
    text = "---\ntitle: Getting started\nlang: en\n---\n# Other\n"
    assert page_title(text) == "Getting started"


def test_page_title_falls_back_to_heading() -> None:
    """Without front matter the first top-level heading is used."""
    assert page_title(PAGE) == "Basic usage", "expected emphasis to be stripped"
    assert page_title("Just text\n") is None, "expected None without a heading"


def test_bare_heading_markers_do_not_span_lines() -> None:
    """A lone ``#`` or ``##`` line never borrows the following line."""
    text = "#\nNot a title\n\n##\nNot a header\n\n# Real title\n"
    assert page_title(text) == "Real title", "expected the bare marker to be skipped"
    assert page_headers(text, 2) == [], "expected no headers from bare markers"


def test_derive_label_reads_target_page(tmp_path: Path) -> None:
    """Bare entries are labelled from the page they link to."""
    (tmp_path / "basic-usage.md").write_text(PAGE, encoding="utf-8")
    assert derive_label("/basic-usage", tmp_path) == "Basic usage"


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("/basic-usage", "Basic Usage"),
        ("/2.x/", "2.x"),
        ("/", "Home"),
        ("/guide/README.md", "Guide"),
        ("/how_to/use-it.html", "Use It"),
    ],
)
def test_derive_label_falls_back_to_path(
    tmp_path: Path, link: str, expected: str
) -> None:
    """Missing pages still get a non-empty label built from the path."""
    label = derive_label(link, tmp_path)
    assert label == expected, f"expected {expected!r} for {link!r}, got {label!r}"


def test_page_headers_respect_depth() -> None:
    """Depth 1 lists ``##`` headers, depth 2 adds ``###`` headers."""
    assert page_headers(PAGE, 0) == [], "depth 0 shows no headers"
    assert [header.title for header in page_headers(PAGE, 1)] == [
        "Running as an object",
        "Running as a controller",
    ]
    assert page_headers(PAGE, 2) == [
        PageHeader(2, "Running as an object", "running-as-an-object"),
        PageHeader(3, "From the container", "from-the-container"),
        PageHeader(2, "Running as a controller", "running-as-a-controller"),
    ], "expected fenced code to be ignored"


def test_page_headers_deduplicate_slugs() -> None:
    """Repeated headers receive numbered anchors."""
    headers = page_headers("## Usage\n\n## Usage\n", 1)
    assert [header.slug for header in headers] == ["usage", "usage-1"]
