"""Typed dataclasses describing a documentation site configuration.

Records normalise their own string fields and freeze their mappings when
constructed, so a configuration built by hand and one parsed from storage
compare equal and neither can be changed in place.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from vpsite.plugins import DerivedOption

DEFAULT_DOCS_BRANCH = "master"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


def _freeze(mapping: cabc.Mapping[str, typ.Any]) -> cabc.Mapping[str, typ.Any]:
    """Return a read-only copy of ``mapping``."""
    return MappingProxyType(dict(mapping))


def _clean(value: str | None) -> str | None:
    """Return ``value`` stripped, or None when it is unset or blank."""
    if value is None:
        return None
    return value.strip() or None


def _set(record: object, name: str, value: object) -> None:
    object.__setattr__(record, name, value)


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """A tag injected into the ``<head>`` of every generated page."""

    tag: str
    attributes: cabc.Mapping[str, str] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Strip the tag name and freeze the attributes."""
        _set(self, "tag", self.tag.strip())
        _set(self, "attributes", _freeze(self.attributes))


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """Top navigation entry pointing directly at a page or URL."""

    text: str
    link: str

    def __post_init__(self) -> None:
        """Strip surrounding whitespace from the text and link."""
        _set(self, "text", self.text.strip())
        _set(self, "link", self.link.strip())


@dc.dataclass(frozen=True, slots=True)
class NavDropdown:
    """Top navigation entry expanding into a flat list of links."""

    text: str
    items: tuple[NavLink, ...] = ()

    def __post_init__(self) -> None:
        """Strip the text and store the items as a tuple."""
        _set(self, "text", self.text.strip())
        _set(self, "items", tuple(self.items))


NavItem = NavLink | NavDropdown


@dc.dataclass(frozen=True, slots=True)
class SidebarLink:
    """Sidebar entry; ``label`` is ``None`` when derived from the target page."""

    path: str
    label: str | None = None

    def __post_init__(self) -> None:
        """Strip the path; labels are kept verbatim."""
        _set(self, "path", self.path.strip())

    @property
    def is_bare(self) -> bool:
        """Return True when the label must be derived from the target page."""
        return self.label is None


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """Titled, collapsible cluster of sidebar links."""

    title: str
    children: tuple[SidebarLink, ...] = ()
    collapsable: bool = True
    sidebar_depth: int | None = None

    def __post_init__(self) -> None:
        """Strip the title and store the children as a tuple."""
        _set(self, "title", self.title.strip())
        _set(self, "children", tuple(self.children))


@dc.dataclass(frozen=True, slots=True)
class FlatSidebar:
    """Single sidebar shared by every page of the site."""

    groups: tuple[SidebarGroup, ...] = ()

    def __post_init__(self) -> None:
        """Store the groups as a tuple."""
        _set(self, "groups", tuple(self.groups))

    def groups_for(self, path: str) -> tuple[SidebarGroup, ...]:  # noqa: ARG002
        """Return the groups shown on ``path``; always the full list."""
        return self.groups

    def scopes(self) -> typ.Iterator[tuple[str, tuple[SidebarGroup, ...]]]:
        """Yield ``(location, groups)`` pairs for validation and reporting."""
        yield "sidebar", self.groups


@dc.dataclass(frozen=True, slots=True)
class VersionedSidebar:
    """Sidebars keyed by URL path prefix, one branch per docs version."""

    branches: cabc.Mapping[str, tuple[SidebarGroup, ...]] = dc.field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Freeze the prefix mapping."""
        branches = {prefix: tuple(groups) for prefix, groups in self.branches.items()}
        _set(self, "branches", _freeze(branches))

    def groups_for(self, path: str) -> tuple[SidebarGroup, ...]:
        """Return the branch whose prefix is the longest prefix of ``path``."""
        matches = [prefix for prefix in self.branches if path.startswith(prefix)]
        if not matches:
            return ()
        return self.branches[max(matches, key=len)]

    def scopes(self) -> typ.Iterator[tuple[str, tuple[SidebarGroup, ...]]]:
        """Yield ``(location, groups)`` pairs for validation and reporting."""
        for prefix, groups in self.branches.items():
            yield f"sidebar[{prefix}]", groups


Sidebar = FlatSidebar | VersionedSidebar


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Options consumed by the default documentation theme.

    Blank optional strings are stored as ``None`` and a blank
    ``docs_branch`` falls back to ``master``.
    """

    logo: str | None = None
    last_updated: str | None = None
    repo: str | None = None
    repo_label: str | None = None
    docs_repo: str | None = None
    docs_branch: str = DEFAULT_DOCS_BRANCH
    docs_dir: str = ""
    edit_links: bool = False
    edit_link_text: str | None = None
    display_all_headers: bool = False
    sidebar_depth: int | None = None
    nav: tuple[NavItem, ...] = ()
    sidebar: Sidebar | None = None

    def __post_init__(self) -> None:
        """Normalise the string options and store ``nav`` as a tuple."""
        for name in (
            "logo",
            "last_updated",
            "repo",
            "repo_label",
            "docs_repo",
            "edit_link_text",
        ):
            _set(self, name, _clean(getattr(self, name)))
        _set(self, "docs_branch", _clean(self.docs_branch) or DEFAULT_DOCS_BRANCH)
        _set(self, "docs_dir", self.docs_dir.strip())
        _set(self, "nav", tuple(self.nav))

    def sidebar_for(self, path: str) -> tuple[SidebarGroup, ...]:
        """Return the sidebar groups active on the page at ``path``."""
        if self.sidebar is None:
            return ()
        return self.sidebar.groups_for(path)


@dc.dataclass(frozen=True, slots=True)
class PluginConfig:
    """Options passed to a named generator plugin.

    Option values are literal data or :class:`~vpsite.plugins.DerivedOption`
    callbacks evaluated against the page and site context.
    """

    name: str
    options: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Strip the name and freeze the options."""
        _set(self, "name", self.name.strip())
        _set(self, "options", _freeze(self.options))

    @property
    def derived_options(self) -> dict[str, DerivedOption]:
        """Return only the function-valued options."""
        return {key: value for key, value in self.options.items() if callable(value)}


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Root record handed to the static-site generator at build start."""

    title: str
    description: str = ""
    head: tuple[HeadTag, ...] = ()
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    domain: str | None = None
    base: str | None = None
    dest: str | None = None
    plugins: cabc.Mapping[str, PluginConfig] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalise strings and key plugins by their stripped names."""
        _set(self, "title", self.title.strip())
        _set(self, "head", tuple(self.head))
        for name in ("domain", "base", "dest"):
            _set(self, name, _clean(getattr(self, name)))
        _set(
            self,
            "plugins",
            _freeze({name.strip(): plugin for name, plugin in self.plugins.items()}),
        )

    def get_plugin(self, name: str) -> PluginConfig:
        """Return the named plugin configuration."""
        try:
            return self.plugins[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.plugins)) or "none"
            msg = f"Unknown plugin '{name}'. Known plugins: {available}"
            raise KeyError(msg) from exc

    def nav_texts(self) -> list[str]:
        """Return the ``text`` of every top navigation entry in order."""
        return [item.text for item in self.theme.nav]


__all__ = [
    "DEFAULT_DOCS_BRANCH",
    "FlatSidebar",
    "HeadTag",
    "NavDropdown",
    "NavItem",
    "NavLink",
    "PluginConfig",
    "SiteConfig",
    "SiteConfigError",
    "Sidebar",
    "SidebarGroup",
    "SidebarLink",
    "ThemeConfig",
    "VersionedSidebar",
]
