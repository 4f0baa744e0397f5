"""Load and model the configuration record of a documentation site.

This subpackage parses the site's YAML storage file, which mirrors the keys a
VuePress ``config.js`` exports (``title``, ``head``, ``themeConfig``,
``plugins`` and so on), and produces immutable dataclasses
(:class:`SiteConfig`, :class:`ThemeConfig`, :class:`SidebarGroup`, etc.) that
the validator, serializer and exporter consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from vpsite.config import load_site_config
>>> site = load_site_config(Path("docs/.vuepress/site.yaml"))  # doctest: +SKIP
>>> [group.title for group in site.theme.sidebar_for("/2.x/")]  # doctest: +SKIP
['Getting Started', 'Advanced']
"""

from .loader import load_site_config, parse_site_config
from .models import (
    FlatSidebar,
    HeadTag,
    NavDropdown,
    NavItem,
    NavLink,
    PluginConfig,
    Sidebar,
    SidebarGroup,
    SidebarLink,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
    VersionedSidebar,
)

__all__ = [
    "FlatSidebar",
    "HeadTag",
    "NavDropdown",
    "NavItem",
    "NavLink",
    "PluginConfig",
    "Sidebar",
    "SidebarGroup",
    "SidebarLink",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "VersionedSidebar",
    "load_site_config",
    "parse_site_config",
]
