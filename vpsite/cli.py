"""Cyclopts CLI entrypoint for checking and exporting site configurations.

The ``vpsite`` console script defined here loads the YAML description of a
documentation site, validates it, and renders the ``config.js`` module the
static-site generator reads. Typical usage runs ``vpsite check`` in CI and
``vpsite export`` before building the docs.

Examples
--------
Validate the default configuration and its link targets:

>>> from vpsite.cli import app
>>> app(["check", "--docs-root", "docs"])  # doctest: +SKIP
ok docs/.vuepress/site.yaml

Show the sidebar a page of the 1.x docs would get:

>>> app(["sidebar", "/1.x/installation"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG, DEFAULT_SIDEBAR_DEPTH, EXPORT_FILENAME
from .config import load_site_config
from .exporter import VuePressConfigExporter
from .pages import derive_label, is_external, page_headers, resolve_page_file
from .serializer import dump_site_config, dumps_json
from .validation import ensure_valid, find_dangling_links, validate_site_config

if typ.TYPE_CHECKING:
    from .config import SidebarGroup, SiteConfig

logger = logging.getLogger(__name__)

app = App(name="vpsite", config=cyclopts.config.Env("VPSITE_", command=False))

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site YAML file", env_var="VPSITE_CONFIG")
]
DocsRootOption = typ.Annotated[
    Path | None,
    Parameter(help="Docs source directory holding the markdown pages"),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


@app.command(help="Validate the site configuration and optionally its links.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_root: DocsRootOption = None,
) -> None:
    """Report schema problems and dangling links.

    Parameters
    ----------
    config : Path, optional
        Path to the site YAML file (overridable via ``VPSITE_CONFIG``).
    docs_root : Path or None, optional
        Markdown source directory; when given, every internal link must
        resolve to a page inside it.

    Raises
    ------
    SystemExit
        With status 1 when at least one problem is found.
    """
    site = load_site_config(config)
    issues = validate_site_config(site)
    if docs_root is not None:
        issues.extend(find_dangling_links(site, docs_root))
    if issues:
        for issue in issues:
            print(issue)
        raise SystemExit(1)
    print(f"ok {_format_path(config)}")


@app.command(help="Render the generator's config.js from the site YAML file.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Where to write config.js (defaults next to the YAML file)"),
    ] = None,
) -> None:
    """Validate the configuration and write the JavaScript module.

    Parameters
    ----------
    config : Path, optional
        Path to the site YAML file (overridable via ``VPSITE_CONFIG``).
    output : Path or None, optional
        Destination file; defaults to ``config.js`` beside ``config``.

    Raises
    ------
    SiteConfigError
        If the configuration fails validation or holds an option that has no
        JavaScript form.
    """
    site = ensure_valid(load_site_config(config))
    target = output or config.with_name(EXPORT_FILENAME)
    written = VuePressConfigExporter(site, source=config).run(target)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the sidebar shown on a page path.")
def sidebar(
    path: str,
    /,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_root: DocsRootOption = None,
) -> None:
    """Print the active sidebar groups, links, and headers for ``path``.

    Bare entries are labelled from the target page when ``docs_root`` is
    given, otherwise from the link path.
    """
    site = load_site_config(config)
    groups = site.theme.sidebar_for(path)
    if not groups:
        print(f"no sidebar for {path}")
        return
    for group in groups:
        print(group.title)
        for line in _group_lines(site, group, docs_root):
            print(line)


@app.command(help="Rewrite the site YAML file in canonical form.")
def normalize(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    json: typ.Annotated[
        bool, Parameter(help="Print the JSON storage form instead of rewriting")
    ] = False,
) -> None:
    """Re-serialize the configuration, in place or as JSON on stdout."""
    site = load_site_config(config)
    if json:
        print(dumps_json(site).decode("utf-8"))
        return
    written = dump_site_config(site, config)
    print(f"wrote {_format_path(written)}")


def _group_lines(
    site: SiteConfig, group: SidebarGroup, docs_root: Path | None
) -> typ.Iterator[str]:
    depth = group.sidebar_depth
    if depth is None:
        depth = site.theme.sidebar_depth
    if depth is None:
        depth = DEFAULT_SIDEBAR_DEPTH
    for link in group.children:
        label = link.label or derive_label(link.path, docs_root)
        yield f"  {label} -> {link.path}"
        if docs_root is None or is_external(link.path):
            continue
        target = resolve_page_file(link.path, docs_root)
        if not target.is_file():
            logger.debug("no page for %s at %s", link.path, target)
            continue
        for header in page_headers(target.read_text(encoding="utf-8"), depth):
            indent = "    " * (header.level - 1)
            yield f"{indent}{header.title} -> {link.path}#{header.slug}"


def main() -> None:
    """Invoke the Cyclopts application that powers the ``vpsite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
