"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML

from .._constants import DERIVE_KEY
from ..plugins import DerivedOption, build_derived_option
from .helpers import (
    THEME_KEYS,
    _as_mapping,
    _last_updated,
    _optional_bool,
    _optional_int,
    _optional_str,
    _require_str,
)
from .models import PluginConfig, SiteConfig, SiteConfigError, ThemeConfig
from .navigation import _build_head, _build_nav
from .sidebar import _build_sidebar

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML file describing a documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``docs/.vuepress/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed, immutable site configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or a block has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from vpsite.config import load_site_config
    >>> site = load_site_config(Path("docs/.vuepress/site.yaml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'Laravel Actions'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    logger.debug("loaded site configuration from %s", path)
    return parse_site_config(loaded)


def parse_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a :class:`SiteConfig` from its storage mapping.

    The mapping uses the generator's own key names (``themeConfig``,
    ``lastUpdated``, ``sidebarDepth`` and so on). Plugin option mappings
    carrying the reserved ``$derive`` key become built-in derivations.
    """
    title = _require_str(raw, "title", where="Site configuration")
    theme = _build_theme(_as_mapping(raw.get("themeConfig"), where="'themeConfig'"))
    return SiteConfig(
        title=title,
        description=str(raw.get("description") or ""),
        head=_build_head(raw.get("head")),
        theme=theme,
        domain=_optional_str(raw.get("domain")),
        base=_optional_str(raw.get("base")),
        dest=_optional_str(raw.get("dest")),
        plugins=_build_plugins(raw.get("plugins")),
    )


def _build_theme(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build the theme options, falling back to ThemeConfig defaults."""
    base = ThemeConfig()
    values: dict[str, typ.Any] = {}
    for key, attribute in THEME_KEYS.items():
        if key not in payload:
            continue
        value = payload[key]
        match getattr(base, attribute):
            case bool() as default:
                values[attribute] = _optional_bool(value, key=key, default=default)
            case _ if attribute == "sidebar_depth":
                values[attribute] = _optional_int(value, key=key)
            case _ if attribute == "last_updated":
                values[attribute] = _last_updated(value)
            case str() as default:
                values[attribute] = _optional_str(value) or default
            case _:
                values[attribute] = _optional_str(value)
    return ThemeConfig(
        **values,
        nav=_build_nav(payload.get("nav")),
        sidebar=_build_sidebar(payload.get("sidebar")),
    )


def _build_plugins(payload: object | None) -> dict[str, PluginConfig]:
    """Build plugin configs from a mapping or a list of ``[name, options]``."""
    match payload:
        case None:
            return {}
        case dict() as mapping:
            entries = list(mapping.items())
        case list() as items:
            entries = [_plugin_entry(item, index) for index, item in enumerate(items)]
        case _:
            msg = "'plugins' must be a mapping or a list of [name, options] pairs."
            raise SiteConfigError(msg)

    plugins: dict[str, PluginConfig] = {}
    for name, options in entries:
        key = str(name).strip()
        if not key:
            msg = "Plugin names must be non-empty."
            raise SiteConfigError(msg)
        if key in plugins:
            msg = f"Plugin '{key}' is configured more than once."
            raise SiteConfigError(msg)
        mapping = _as_mapping(options, where=f"Options of plugin '{key}'")
        plugins[key] = PluginConfig(
            name=key,
            options={
                option: _build_option(value, where=f"plugins.{key}.{option}")
                for option, value in mapping.items()
            },
        )
    return plugins


def _plugin_entry(item: object, index: int) -> tuple[str, object | None]:
    match item:
        case str() as name:
            return name, None
        case [str() as name]:
            return name, None
        case [str() as name, options]:
            return name, options
        case _:
            msg = f"plugins[{index}] must be a name or a [name, options] pair."
            raise SiteConfigError(msg)


def _build_option(value: object, *, where: str) -> DerivedOption | object:
    """Return a built-in derivation for ``{$derive: ...}`` mappings, else value.

    ``$derive`` is reserved as an option mapping key; any other mapping,
    including one with a plain ``derive`` key, is passed to the plugin as-is.
    """
    match value:
        case dict() if DERIVE_KEY in value:
            return build_derived_option(value, where=where)
        case _:
            return value


__all__ = ["load_site_config", "parse_site_config"]
