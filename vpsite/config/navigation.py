"""Builders for head injections and top navigation entries."""

from __future__ import annotations

import typing as typ

from .helpers import _require_str
from .models import HeadTag, NavDropdown, NavItem, NavLink, SiteConfigError


def _build_head(entries: object | None) -> tuple[HeadTag, ...]:
    """Build head-tag directives from ``[tag, {attribute: value}]`` pairs."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        msg = "'head' must be a list of [tag, attributes] pairs."
        raise SiteConfigError(msg)
    tags: list[HeadTag] = []
    for index, entry in enumerate(entries):
        match entry:
            case [str() as tag]:
                attributes: typ.Mapping[str, object] = {}
            case [str() as tag, dict() as attributes]:
                pass
            case _:
                msg = f"head[{index}] must be a [tag, attributes] pair, got {entry!r}."
                raise SiteConfigError(msg)
        if not tag.strip():
            msg = f"head[{index}] has an empty tag name."
            raise SiteConfigError(msg)
        tags.append(
            HeadTag(
                tag=tag.strip(),
                attributes={str(key): str(value) for key, value in attributes.items()},
            )
        )
    return tuple(tags)


def _build_nav(entries: object | None) -> tuple[NavItem, ...]:
    """Build the ordered top navigation from its list payload."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        msg = "'nav' must be a list of entries."
        raise SiteConfigError(msg)
    return tuple(
        _build_nav_item(entry, where=f"nav[{index}]")
        for index, entry in enumerate(entries)
    )


def _build_nav_item(entry: object, *, where: str) -> NavItem:
    """Build a link or a one-level dropdown entry."""
    match entry:
        case {"items": list() as items, **rest}:
            if "link" in rest:
                msg = f"{where} cannot declare both 'link' and 'items'."
                raise SiteConfigError(msg)
            text = _require_str(entry, "text", where=where)
            links = tuple(
                _build_dropdown_link(item, where=f"{where}.items[{index}]")
                for index, item in enumerate(items)
            )
            return NavDropdown(text=text, items=links)
        case {"link": _}:
            return NavLink(
                text=_require_str(entry, "text", where=where),
                link=_require_str(entry, "link", where=where),
            )
        case _:
            msg = f"{where} must be a mapping with 'text' and 'link' or 'items'."
            raise SiteConfigError(msg)


def _build_dropdown_link(entry: object, *, where: str) -> NavLink:
    """Build a dropdown item; dropdowns do not nest."""
    match entry:
        case {"items": _}:
            msg = f"{where} is nested too deeply; dropdown items cannot have 'items'."
            raise SiteConfigError(msg)
        case {"link": _}:
            return NavLink(
                text=_require_str(entry, "text", where=where),
                link=_require_str(entry, "link", where=where),
            )
        case _:
            msg = f"{where} must be a mapping with 'text' and 'link'."
            raise SiteConfigError(msg)


__all__ = ["_build_head", "_build_nav"]
