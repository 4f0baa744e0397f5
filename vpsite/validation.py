"""Schema checks for site configurations.

The loader rejects payloads with the wrong shape; this module checks the
properties a well-formed configuration must additionally satisfy before it is
handed to the generator:

* the site title and every head tag name are non-empty;
* top navigation ``text`` values are unique and every link target is set;
* sidebar paths are site-relative (start with ``/``) and explicit labels are
  non-empty;
* group titles are unique within their scope (the flat sidebar, or one branch
  of a versioned sidebar), and versioned prefixes are directory paths;
* sidebar depths are non-negative.

:func:`find_dangling_links` additionally checks every internal link against a
docs directory on disk.

Examples
--------
>>> from vpsite.config import SiteConfig
>>> validate_site_config(SiteConfig(title=""))
[ValidationIssue(location='title', message='title must be non-empty')]
"""

from __future__ import annotations

import collections
import dataclasses as dc
import typing as typ

from .config.models import NavDropdown, NavLink, SiteConfigError, VersionedSidebar
from .pages import is_external, resolve_page_file

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config.models import SidebarGroup, SiteConfig


@dc.dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found in a site configuration."""

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


def validate_site_config(site: SiteConfig) -> list[ValidationIssue]:
    """Return every schema problem found in ``site``, in document order."""
    issues: list[ValidationIssue] = []
    if not site.title.strip():
        issues.append(ValidationIssue("title", "title must be non-empty"))
    for index, tag in enumerate(site.head):
        if not tag.tag.strip():
            issues.append(
                ValidationIssue(f"head[{index}]", "tag name must be non-empty")
            )
    if site.theme.sidebar_depth is not None and site.theme.sidebar_depth < 0:
        issues.append(
            ValidationIssue("sidebarDepth", "sidebar depth must be non-negative")
        )
    issues.extend(_check_nav(site))
    issues.extend(_check_sidebar(site))
    return issues


def ensure_valid(site: SiteConfig) -> SiteConfig:
    """Return ``site`` unchanged or raise listing every problem found.

    Raises
    ------
    SiteConfigError
        If :func:`validate_site_config` reports at least one issue.
    """
    issues = validate_site_config(site)
    if issues:
        details = "\n".join(f"  - {issue}" for issue in issues)
        msg = f"Invalid site configuration:\n{details}"
        raise SiteConfigError(msg)
    return site


def find_dangling_links(site: SiteConfig, docs_root: Path) -> list[ValidationIssue]:
    """Return issues for internal links whose markdown page does not exist."""
    issues: list[ValidationIssue] = []
    for location, link in _iter_links(site):
        if is_external(link):
            continue
        target = resolve_page_file(link, docs_root)
        if not target.is_file():
            issues.append(
                ValidationIssue(location, f"'{link}' does not resolve to {target}")
            )
    return issues


def _check_nav(site: SiteConfig) -> typ.Iterator[ValidationIssue]:
    counts = collections.Counter(site.nav_texts())
    for index, item in enumerate(site.theme.nav):
        location = f"nav[{index}]"
        if not item.text.strip():
            yield ValidationIssue(location, "text must be non-empty")
        elif counts[item.text] > 1:
            yield ValidationIssue(location, f"duplicate nav text '{item.text}'")
        match item:
            case NavLink(link=link):
                if not link.strip():
                    yield ValidationIssue(location, "link must be non-empty")
            case NavDropdown(items=items):
                if not items:
                    yield ValidationIssue(location, "dropdown has no items")
                for position, child in enumerate(items):
                    child_location = f"{location}.items[{position}]"
                    if not isinstance(child, NavLink):
                        yield ValidationIssue(
                            child_location, "dropdown items cannot nest"
                        )
                    elif not child.text.strip() or not child.link.strip():
                        yield ValidationIssue(
                            child_location, "text and link must be non-empty"
                        )


def _check_sidebar(site: SiteConfig) -> typ.Iterator[ValidationIssue]:
    sidebar = site.theme.sidebar
    if sidebar is None:
        return
    if isinstance(sidebar, VersionedSidebar):
        for prefix in sidebar.branches:
            if not (prefix.startswith("/") and prefix.endswith("/")):
                yield ValidationIssue(
                    f"sidebar[{prefix}]", "path prefix must start and end with '/'"
                )
    for scope, groups in sidebar.scopes():
        yield from _check_groups(scope, groups)


def _check_groups(
    scope: str, groups: tuple[SidebarGroup, ...]
) -> typ.Iterator[ValidationIssue]:
    seen: set[str] = set()
    for index, group in enumerate(groups):
        location = f"{scope}[{index}]"
        if not group.title.strip():
            yield ValidationIssue(location, "group title must be non-empty")
        elif group.title in seen:
            yield ValidationIssue(location, f"duplicate group title '{group.title}'")
        seen.add(group.title)
        if group.sidebar_depth is not None and group.sidebar_depth < 0:
            yield ValidationIssue(location, "sidebar depth must be non-negative")
        for position, child in enumerate(group.children):
            child_location = f"{location}.children[{position}]"
            if not child.path.startswith("/"):
                yield ValidationIssue(
                    child_location, f"path '{child.path}' must start with '/'"
                )
            if child.label is not None and not child.label.strip():
                yield ValidationIssue(child_location, "label must be non-empty")


def _iter_links(site: SiteConfig) -> typ.Iterator[tuple[str, str]]:
    for index, item in enumerate(site.theme.nav):
        match item:
            case NavLink(link=link):
                yield f"nav[{index}]", link
            case NavDropdown(items=items):
                for position, child in enumerate(items):
                    yield f"nav[{index}].items[{position}]", child.link
    if site.theme.sidebar is not None:
        for scope, groups in site.theme.sidebar.scopes():
            for index, group in enumerate(groups):
                for position, child in enumerate(group.children):
                    yield f"{scope}[{index}].children[{position}]", child.path


__all__ = [
    "ValidationIssue",
    "ensure_valid",
    "find_dangling_links",
    "validate_site_config",
]
