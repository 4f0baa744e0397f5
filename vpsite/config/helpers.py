"""Utility helpers shared by the site configuration builders."""

from __future__ import annotations

import typing as typ

from .._constants import LAST_UPDATED_LABEL
from .models import SiteConfigError

THEME_KEYS: dict[str, str] = {
    "logo": "logo",
    "lastUpdated": "last_updated",
    "repo": "repo",
    "repoLabel": "repo_label",
    "docsRepo": "docs_repo",
    "docsBranch": "docs_branch",
    "docsDir": "docs_dir",
    "editLinks": "edit_links",
    "editLinkText": "edit_link_text",
    "displayAllHeaders": "display_all_headers",
    "sidebarDepth": "sidebar_depth",
}
"""Storage key to :class:`ThemeConfig` attribute for scalar theme options."""


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, *, where: str) -> str:
    """Return the non-empty string stored under ``key`` or raise."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{where} requires a non-empty '{key}'."
        raise SiteConfigError(msg)
    return value


def _optional_bool(value: object | None, *, key: str, default: bool) -> bool:
    """Return ``value`` as a bool, rejecting non-boolean scalars."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{key}' must be a boolean, got {value!r}."
            raise SiteConfigError(msg)


def _optional_int(value: object | None, *, key: str) -> int | None:
    """Return ``value`` as a non-negative int or None when unset."""
    match value:
        case None:
            return None
        case bool():
            pass
        case int() if value >= 0:
            return value
    msg = f"'{key}' must be a non-negative integer, got {value!r}."
    raise SiteConfigError(msg)


def _last_updated(value: object | None) -> str | None:
    """Return the last-updated label; ``true`` selects the theme's default."""
    match value:
        case True:
            return LAST_UPDATED_LABEL
        case False:
            return None
        case _:
            return _optional_str(value)


def _as_mapping(value: object | None, *, where: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` when it is a mapping, an empty dict when unset."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"{where} must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = [
    "THEME_KEYS",
    "_as_mapping",
    "_last_updated",
    "_optional_bool",
    "_optional_int",
    "_optional_str",
    "_require_str",
]
