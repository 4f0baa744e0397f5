"""Unit tests for rendering the generator's ``config.js`` module."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from vpsite.config import SiteConfig, SiteConfigError, load_site_config
from vpsite.exporter import JsExpression, VuePressConfigExporter, render_js
from vpsite.plugins import attach_derivations

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def test_minimal_module() -> None:
    """A bare site renders as a one-key CommonJS module."""
    rendered = VuePressConfigExporter(SiteConfig(title="Docs")).render()
    assert rendered == 'module.exports = {\n    title: "Docs",\n}\n', (
        f"unexpected module source {rendered!r}"
    )


def test_versioned_module_contents(
    write_config: cabc.Callable[[str], Path], versioned_yaml: str
) -> None:
    """Theme keys, sidebar pairs and derived options appear as JavaScript."""
    config_path = write_config(versioned_yaml)
    site = load_site_config(config_path)
    rendered = VuePressConfigExporter(site, source=config_path).render()

    assert rendered.startswith("// Generated by vpsite from "), rendered[:80]
    assert "    themeConfig: {\n" in rendered, "expected a nested themeConfig block"
    assert '        editLinks: true,\n' in rendered, "expected JS booleans"
    assert '"/1.x/": [\n' in rendered, "expected quoted path-prefix keys"
    assert '["/1.x/", "Introduction"],' in rendered, "expected inline label pairs"
    assert "description: (_, site) => site.description," in rendered, (
        "expected the description derivation as an arrow function"
    )
    assert "image: (_, site) => site.domain + 'hero.png'," in rendered, (
        "expected the image derivation as an arrow function"
    )
    assert "$derive" not in rendered, "derivation mappings must not leak into JS"


def test_callable_without_js_form_cannot_be_exported() -> None:
    """Python-only callbacks have no JavaScript equivalent."""
    site = attach_derivations(
        SiteConfig(title="Docs"), "seo", title=lambda page, site: site.title
    )
    with pytest.raises(SiteConfigError, match="'seo.title'"):
        VuePressConfigExporter(site).render()


def test_run_writes_module(tmp_path: Path) -> None:
    """run() creates parent directories and returns the written path."""
    target = tmp_path / "docs" / ".vuepress" / "config.js"
    written = VuePressConfigExporter(SiteConfig(title="Docs")).run(target)
    assert written == target, f"expected {target}, got {written}"
    assert target.read_text(encoding="utf-8").startswith("module.exports = {")


def test_render_js_layout() -> None:
    """Nested structures are indented four spaces per level."""
    value = {
        "head": [["link", {"rel": "icon"}]],
        "flags": [True, None, 2],
        "empty": {},
        "fn": JsExpression("() => 1"),
    }
    assert render_js(value) == dedent(
        """\
        {
            head: [
                [
                    "link",
                    {
                        rel: "icon",
                    },
                ],
            ],
            flags: [true, null, 2],
            empty: {},
            fn: () => 1,
        }"""
    )


def test_render_js_rejects_unknown_types() -> None:
    """Values without a JavaScript literal form are rejected."""
    with pytest.raises(SiteConfigError, match="type object"):
        render_js(object())
