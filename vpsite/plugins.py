"""Derived plugin options evaluated against the page and site context.

Generator plugins such as an SEO plugin accept options that are either
literal values or small pure callbacks ``(page, site) -> value``. Callbacks
exist only to avoid repeating literals already present in the site record,
for example reusing the site description or building an image URL from the
canonical domain.

This module models those callbacks as :class:`DerivedOption` values that can
be stored inside :class:`~vpsite.config.PluginConfig` options, evaluated with
:func:`resolve_plugin_options`, and re-attached after a storage round trip
with :func:`attach_derivations`.

Examples
--------
>>> from vpsite.config import SiteConfig
>>> site = SiteConfig(title="Docs", domain="https://example.com/")
>>> domain_join("hero.png")(PageContext(path="/"), site)
'https://example.com/hero.png'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from types import MappingProxyType

from ._constants import DERIVE_KEY
from .config.models import PluginConfig, SiteConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import SiteConfig

logger = logging.getLogger(__name__)

DerivationFunc = typ.Callable[["PageContext", "SiteConfig"], typ.Any]


@dc.dataclass(frozen=True, slots=True)
class PageContext:
    """Resolved page data handed to derived options as their first argument."""

    path: str
    title: str | None = None
    frontmatter: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        frontmatter = MappingProxyType(dict(self.frontmatter))
        object.__setattr__(self, "frontmatter", frontmatter)


@dc.dataclass(frozen=True, slots=True)
class DerivedOption:
    """Pure plugin option computed from the page and site context.

    Attributes
    ----------
    func : DerivationFunc
        Side-effect-free callable receiving ``(page, site)``.
    js : str or None
        Equivalent JavaScript arrow function used when exporting the
        configuration; ``None`` when the option cannot be exported.
    payload : Mapping or None
        Storage mapping describing a built-in derivation; ``None`` for
        arbitrary callables, which are omitted from serialized output.
    """

    func: DerivationFunc
    js: str | None = None
    payload: cabc.Mapping[str, str] | None = dc.field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.payload is not None:
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def __call__(self, page: PageContext, site: SiteConfig) -> typ.Any:  # noqa: ANN401
        """Evaluate the option for ``page`` within ``site``."""
        return self.func(page, site)


@dc.dataclass(frozen=True, slots=True)
class _SiteField:
    field: str

    def __call__(self, page: PageContext, site: SiteConfig) -> typ.Any:  # noqa: ANN401, ARG002
        try:
            return getattr(site, self.field)
        except AttributeError as exc:
            msg = f"Site configuration has no field '{self.field}'."
            raise SiteConfigError(msg) from exc


@dc.dataclass(frozen=True, slots=True)
class _DomainJoin:
    suffix: str

    def __call__(self, page: PageContext, site: SiteConfig) -> str:  # noqa: ARG002
        if site.domain is None:
            msg = f"Cannot derive '{self.suffix}' URL: the site has no domain."
            raise SiteConfigError(msg)
        return site.domain + self.suffix


def site_field(field: str) -> DerivedOption:
    """Return an option passing the named site field through unchanged."""
    return DerivedOption(
        func=_SiteField(field),
        js=f"(_, site) => site.{field}",
        payload={DERIVE_KEY: "site_field", "field": field},
    )


def domain_join(suffix: str) -> DerivedOption:
    """Return an option concatenating the site domain and ``suffix``.

    No slash normalisation happens: ``https://a.com/`` joined with
    ``hero.png`` gives ``https://a.com/hero.png``.
    """
    return DerivedOption(
        func=_DomainJoin(suffix),
        js=f"(_, site) => site.domain + {_js_string(suffix)}",
        payload={DERIVE_KEY: "domain_join", "suffix": suffix},
    )


BUILTIN_DERIVATIONS: dict[str, tuple[str, typ.Callable[[str], DerivedOption]]] = {
    "site_field": ("field", site_field),
    "domain_join": ("suffix", domain_join),
}


def build_derived_option(
    payload: cabc.Mapping[str, typ.Any], *, where: str
) -> DerivedOption:
    """Build a built-in derivation from its ``{$derive: name, ...}`` mapping."""
    name = payload.get(DERIVE_KEY)
    try:
        argument, factory = BUILTIN_DERIVATIONS[str(name)]
    except KeyError as exc:
        known = ", ".join(sorted(BUILTIN_DERIVATIONS))
        msg = f"{where} uses unknown derivation {name!r}. Known derivations: {known}"
        raise SiteConfigError(msg) from exc
    value = payload.get(argument)
    if not isinstance(value, str) or not value:
        msg = f"{where} derivation '{name}' requires a string '{argument}'."
        raise SiteConfigError(msg)
    return factory(value)


def resolve_plugin_options(
    site: SiteConfig, page: PageContext
) -> dict[str, dict[str, typ.Any]]:
    """Return every plugin's options with derived values evaluated.

    Parameters
    ----------
    site : SiteConfig
        Site whose plugin options are resolved.
    page : PageContext
        Page being rendered.

    Returns
    -------
    dict[str, dict[str, Any]]
        Plugin name to option mapping containing only literal values.
    """
    resolved: dict[str, dict[str, typ.Any]] = {}
    for name, plugin in site.plugins.items():
        options: dict[str, typ.Any] = {}
        for key, value in plugin.options.items():
            if isinstance(value, DerivedOption):
                value = value(page, site)  # noqa: PLW2901
                logger.debug("derived %s.%s for %s", name, key, page.path)
            options[key] = value
        resolved[name] = options
    return resolved


def attach_derivations(
    site: SiteConfig, plugin: str, **options: DerivedOption | DerivationFunc
) -> SiteConfig:
    """Return a copy of ``site`` with derived options attached to ``plugin``.

    Plain callables are wrapped in a :class:`DerivedOption` without a
    JavaScript form. Passing the same callables used before serialization
    restores an equal configuration after reparsing.
    """
    wrapped = {
        key: value if isinstance(value, DerivedOption) else DerivedOption(func=value)
        for key, value in options.items()
    }
    current = site.plugins.get(plugin, PluginConfig(name=plugin))
    updated = dc.replace(current, options={**current.options, **wrapped})
    return dc.replace(site, plugins={**site.plugins, plugin: updated})


def _js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


__all__ = [
    "BUILTIN_DERIVATIONS",
    "DerivationFunc",
    "DerivedOption",
    "PageContext",
    "attach_derivations",
    "build_derived_option",
    "domain_join",
    "resolve_plugin_options",
    "site_field",
]
