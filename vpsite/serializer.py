"""Write site configurations back to their storage forms.

:func:`site_config_to_mapping` turns a :class:`~vpsite.config.SiteConfig`
into the plain mapping the loader accepts, using the generator's key names.
:func:`dump_site_config` persists that mapping as YAML with the same
round-trip dumper settings used when editing configuration files in place,
and :func:`dumps_json` / :func:`loads_json` provide a JSON storage form.

Function-valued plugin options are not data. Built-in derivations are written
as their ``{$derive: ...}`` mapping; arbitrary callables are dropped and must
be re-attached with :func:`vpsite.plugins.attach_derivations` after loading.

Example
-------
.. code-block:: python

    from pathlib import Path
    from vpsite.config import load_site_config
    from vpsite.serializer import dump_site_config

    site = load_site_config(Path("docs/.vuepress/site.yaml"))
    dump_site_config(site, Path("docs/.vuepress/site.yaml"))
"""

from __future__ import annotations

import logging
import typing as typ

import msgspec.json
from ruamel.yaml import YAML

from .config.helpers import THEME_KEYS
from .config.loader import parse_site_config
from .config.models import (
    FlatSidebar,
    NavDropdown,
    NavLink,
    SiteConfigError,
    ThemeConfig,
    VersionedSidebar,
)
from .plugins import DerivedOption

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config.models import (
        NavItem,
        PluginConfig,
        Sidebar,
        SidebarGroup,
        SidebarLink,
        SiteConfig,
    )

logger = logging.getLogger(__name__)


def site_config_to_mapping(site: SiteConfig) -> dict[str, typ.Any]:
    """Return the storage mapping for ``site``.

    Optional fields left unset are omitted so that the output stays close to
    a hand-written configuration.
    """
    payload: dict[str, typ.Any] = {"title": site.title}
    if site.description:
        payload["description"] = site.description
    for key in ("base", "dest", "domain"):
        value = getattr(site, key)
        if value is not None:
            payload[key] = value
    if site.head:
        payload["head"] = [[tag.tag, dict(tag.attributes)] for tag in site.head]
    theme = _theme_to_mapping(site.theme)
    if theme:
        payload["themeConfig"] = theme
    plugins = {
        name: _plugin_options(plugin) for name, plugin in site.plugins.items()
    }
    if plugins:
        payload["plugins"] = plugins
    return payload


def dump_site_config(site: SiteConfig, path: Path) -> Path:
    """Write ``site`` to ``path`` as YAML and return the path."""
    yaml = _build_roundtrip_yaml()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(site_config_to_mapping(site), handle)
    logger.debug("wrote site configuration to %s", path)
    return path


def dumps_json(site: SiteConfig) -> bytes:
    """Return the JSON storage form of ``site``."""
    return msgspec.json.format(msgspec.json.encode(site_config_to_mapping(site)))


def loads_json(data: bytes | str) -> SiteConfig:
    """Parse the JSON storage form produced by :func:`dumps_json`."""
    try:
        payload = msgspec.json.decode(data)
    except msgspec.DecodeError as exc:
        msg = f"Invalid JSON site configuration: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(payload, dict):
        msg = "Top-level JSON structure must be an object."
        raise TypeError(msg)
    return parse_site_config(payload)


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _theme_to_mapping(theme: ThemeConfig) -> dict[str, typ.Any]:
    defaults = ThemeConfig()
    payload: dict[str, typ.Any] = {}
    for key, attribute in THEME_KEYS.items():
        value = getattr(theme, attribute)
        if value != getattr(defaults, attribute):
            payload[key] = value
    if theme.nav:
        payload["nav"] = [_nav_item(item) for item in theme.nav]
    if theme.sidebar is not None:
        payload["sidebar"] = _sidebar(theme.sidebar)
    return payload


def _nav_item(item: NavItem) -> dict[str, typ.Any]:
    match item:
        case NavDropdown(text=text, items=items):
            return {"text": text, "items": [_nav_item(child) for child in items]}
        case NavLink(text=text, link=link):
            return {"text": text, "link": link}
        case _:  # pragma: no cover - exhaustive over NavItem
            msg = f"Unsupported nav entry {item!r}."
            raise SiteConfigError(msg)


def _sidebar(sidebar: Sidebar) -> list[typ.Any] | dict[str, typ.Any]:
    match sidebar:
        case FlatSidebar(groups=groups):
            return [_group(group) for group in groups]
        case VersionedSidebar(branches=branches):
            return {
                prefix: [_group(group) for group in groups]
                for prefix, groups in branches.items()
            }
        case _:  # pragma: no cover - exhaustive over Sidebar
            msg = f"Unsupported sidebar {sidebar!r}."
            raise SiteConfigError(msg)


def _group(group: SidebarGroup) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "title": group.title,
        "collapsable": group.collapsable,
    }
    if group.sidebar_depth is not None:
        payload["sidebarDepth"] = group.sidebar_depth
    payload["children"] = [_link(child) for child in group.children]
    return payload


def _link(link: SidebarLink) -> str | list[str]:
    if link.label is None:
        return link.path
    return [link.path, link.label]


def _plugin_options(plugin: PluginConfig) -> dict[str, typ.Any]:
    options: dict[str, typ.Any] = {}
    for key, value in plugin.options.items():
        if isinstance(value, DerivedOption):
            if value.payload is None:
                logger.debug("omitting callable option %s.%s", plugin.name, key)
                continue
            value = dict(value.payload)  # noqa: PLW2901
        options[key] = value
    return options


__all__ = ["dump_site_config", "dumps_json", "loads_json", "site_config_to_mapping"]
