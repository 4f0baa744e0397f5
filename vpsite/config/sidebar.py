"""Builders for the flat and path-keyed sidebar variants."""

from __future__ import annotations

from .helpers import _optional_bool, _optional_int, _require_str
from .models import (
    FlatSidebar,
    Sidebar,
    SidebarGroup,
    SidebarLink,
    SiteConfigError,
    VersionedSidebar,
)


def _build_sidebar(payload: object | None) -> Sidebar | None:
    """Build a flat sidebar from a list or a versioned one from a mapping."""
    match payload:
        case None:
            return None
        case list() as groups:
            return FlatSidebar(groups=_build_groups(groups, where="sidebar"))
        case dict() as branches:
            return VersionedSidebar(
                branches={
                    str(prefix): _build_groups(groups, where=f"sidebar[{prefix}]")
                    for prefix, groups in branches.items()
                }
            )
        case _:
            msg = "'sidebar' must be a list of groups or a mapping of path prefixes."
            raise SiteConfigError(msg)


def _build_groups(entries: object, *, where: str) -> tuple[SidebarGroup, ...]:
    """Build the ordered groups of one sidebar scope."""
    if not isinstance(entries, list):
        msg = f"{where} must be a list of groups."
        raise SiteConfigError(msg)
    groups: list[SidebarGroup] = []
    for index, entry in enumerate(entries):
        location = f"{where}[{index}]"
        if not isinstance(entry, dict):
            msg = f"{location} must be a mapping with 'title' and 'children'."
            raise SiteConfigError(msg)
        children = entry.get("children") or []
        if not isinstance(children, list):
            msg = f"{location}.children must be a list."
            raise SiteConfigError(msg)
        groups.append(
            SidebarGroup(
                title=_require_str(entry, "title", where=location),
                children=tuple(
                    _build_link(child, where=f"{location}.children[{position}]")
                    for position, child in enumerate(children)
                ),
                collapsable=_optional_bool(
                    entry.get("collapsable"), key="collapsable", default=True
                ),
                sidebar_depth=_optional_int(
                    entry.get("sidebarDepth"), key="sidebarDepth"
                ),
            )
        )
    return tuple(groups)


def _build_link(entry: object, *, where: str) -> SidebarLink:
    """Build a sidebar link from a bare path or a ``[path, label]`` pair."""
    match entry:
        case str() as path:
            return SidebarLink(path=path.strip())
        case [str() as path, str() as label]:
            return SidebarLink(path=path.strip(), label=label)
        case _:
            msg = f"{where} must be a path string or a [path, label] pair, got {entry!r}."
            raise SiteConfigError(msg)


__all__ = ["_build_sidebar"]
