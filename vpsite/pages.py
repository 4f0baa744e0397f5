r"""Resolve sidebar link targets to markdown pages and read their titles.

Bare sidebar entries such as ``/installation`` carry no label; the generator
shows the target page's title instead. This module mirrors that lookup so
labels can be previewed and validated without running the generator:

* :func:`resolve_page_file` maps a link path onto the markdown file it targets.
* :func:`page_title` reads the title from front matter or the first heading.
* :func:`derive_label` combines both and falls back to a title built from the
  path, so the result is never empty.
* :func:`page_headers` lists the ``##``/``###`` headers shown beneath a
  sidebar link for a given depth.

Example
-------
>>> page_title("---\ntitle: Basic usage\n---\n# Ignored\n")
'Basic usage'
>>> derive_label("/basic-usage")
'Basic Usage'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
import typing as typ
from urllib.parse import urlsplit

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONTMATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)
TITLE_PATTERN = re.compile(r"^#[ \t]+(.*)", re.MULTILINE)
HEADER_PATTERN = re.compile(r"^(##|###)[ \t]+(.*)", re.MULTILINE)
FENCE_PATTERN = re.compile(r"^(```|~~~).*?^\1", re.MULTILINE | re.DOTALL)
EXTERNAL_SCHEMES = ("http", "https", "mailto", "tel")


@dc.dataclass(frozen=True, slots=True)
class PageHeader:
    """Header listed beneath a sidebar link.

    Attributes
    ----------
    level : int
        Heading level, 2 or 3.
    title : str
        Heading text without markup characters.
    slug : str
        Anchor the generator assigns to the heading.
    """

    level: int
    title: str
    slug: str


def is_external(link: str) -> bool:
    """Return True when ``link`` points outside the documentation tree."""
    return urlsplit(link).scheme in EXTERNAL_SCHEMES


def resolve_page_file(link: str, docs_root: Path) -> Path:
    """Return the markdown file a site-relative link points at.

    ``/`` and ``/guide/`` resolve to ``README.md`` inside the directory;
    ``/guide/intro``, ``/guide/intro.html`` and ``/guide/intro.md`` all
    resolve to ``guide/intro.md``. Query strings and fragments are ignored.
    """
    path = urlsplit(link).path or "/"
    relative = posixpath.normpath(path).lstrip("/") if path != "/" else ""
    if relative in ("", "."):
        return docs_root / "README.md"
    if path.endswith("/"):
        return docs_root / relative / "README.md"
    stem, extension = posixpath.splitext(relative)
    if extension in (".html", ".md"):
        relative = stem
    return docs_root / f"{relative}.md"


def split_frontmatter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter mapping and the remaining body."""
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    try:
        data = loader.load(match.group(1)) or {}
    except YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text[match.end() :]
    return data, text[match.end() :]


def page_title(text: str) -> str | None:
    """Return the page title from front matter or the first ``#`` heading."""
    frontmatter, body = split_frontmatter(text)
    title = str(frontmatter.get("title") or "").strip()
    if title:
        return title
    heading = TITLE_PATTERN.search(_strip_fences(body))
    if heading:
        cleaned = _clean_heading(heading.group(1))
        return cleaned or None
    return None


def derive_label(link: str, docs_root: Path | None = None) -> str:
    """Return the label shown for a bare sidebar entry.

    When ``docs_root`` is provided and the target page exists, its title is
    used; otherwise the label is built from the last path segment.
    """
    if docs_root is not None and not is_external(link):
        target = resolve_page_file(link, docs_root)
        if target.is_file():
            title = page_title(target.read_text(encoding="utf-8"))
            if title:
                return title
    return _label_from_path(link)


def page_headers(text: str, depth: int) -> list[PageHeader]:
    """Return the headers shown below a sidebar link for ``depth``.

    A depth of 0 shows nothing, 1 shows ``##`` headers, 2 and above also
    show ``###`` headers.
    """
    if depth <= 0:
        return []
    _, body = split_frontmatter(text)
    headers: list[PageHeader] = []
    used: set[str] = set()
    for match in HEADER_PATTERN.finditer(_strip_fences(body)):
        level = len(match.group(1))
        if level > depth + 1:
            continue
        title = _clean_heading(match.group(2))
        if not title:
            continue
        headers.append(
            PageHeader(
                level=level, title=title, slug=_unique_slug(_slugify(title), used)
            )
        )
    return headers


def _label_from_path(link: str) -> str:
    path = urlsplit(link).path.strip("/")
    segment = posixpath.basename(path) if path else ""
    stem, extension = posixpath.splitext(segment)
    if extension in (".html", ".md"):
        segment = stem
    if not segment or segment.lower() in ("readme", "index"):
        parent = posixpath.basename(posixpath.dirname(path)) if path else ""
        segment = parent or "Home"
    words = re.split(r"[-_\s]+", segment)
    return " ".join(word.capitalize() for word in words if word) or "Home"


def _strip_fences(text: str) -> str:
    return FENCE_PATTERN.sub("", text)


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes, anchors and emphasis."""
    cleaned = re.sub(r"\s*\{#[^}]*\}\s*$", "", text)
    cleaned = re.sub(r"[*_`]", "", cleaned.replace("\\", ""))
    return cleaned.strip().rstrip("#").strip()


def _slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "section"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 1
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "PageHeader",
    "derive_label",
    "is_external",
    "page_headers",
    "page_title",
    "resolve_page_file",
    "split_frontmatter",
]
