"""Tests for the ``vpsite`` command functions.

The commands are called directly, as plain functions, and their printed
output is captured with ``capsys``.
"""

from __future__ import annotations

import typing as typ

import pytest

from vpsite import cli
from vpsite.config import load_site_config

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from pytest_mock import MockerFixture


def _write_pages(docs_root: Path) -> None:
    pages = {
        "1.x/README.md": "# Introduction\n",
        "1.x/installation.md": "# Installation\n\n## Composer\n\n### Laravel\n",
        "2.x/README.md": "# Introduction\n",
        "2.x/installation.md": "---\ntitle: Install it\n---\n\n## Composer\n",
        "2.x/basic-usage.md": "# Basic usage\n",
    }
    for relative, text in pages.items():
        path = docs_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def test_check_reports_ok(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A valid configuration with resolvable links prints an ok line."""
    config_path = write_config(versioned_yaml)
    _write_pages(tmp_path / "docs")

    cli.check(config=config_path, docs_root=tmp_path / "docs")

    out = capsys.readouterr().out
    assert out.startswith("ok "), f"unexpected output {out!r}"


def test_check_exits_with_issues(
    write_config: cabc.Callable[[str], Path],
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Problems are printed one per line and the command exits with 1."""
    config_path = write_config(
        """
        title: Docs
        themeConfig:
          nav:
            - {text: Guide, link: /guide/}
            - {text: Guide, link: /other/}
        """
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config_path, docs_root=tmp_path)

    assert excinfo.value.code == 1, f"unexpected exit code {excinfo.value.code!r}"
    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == [
        "nav[0]: duplicate nav text 'Guide'",
        "nav[1]: duplicate nav text 'Guide'",
    ], f"unexpected issue lines {lines!r}"
    assert len(lines) == 4, "expected both nav links to be reported as dangling"


def test_export_writes_config_js(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Export writes config.js beside the YAML file by default."""
    config_path = write_config(versioned_yaml)

    cli.export(config=config_path)

    target = config_path.with_name("config.js")
    assert target.exists(), "expected config.js next to site.yaml"
    assert "module.exports = {" in target.read_text(encoding="utf-8")
    assert capsys.readouterr().out.strip().endswith("config.js"), (
        "expected the written path to be reported"
    )


def test_sidebar_prints_active_branch(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Bare entries are labelled from pages and headers follow the depth."""
    config_path = write_config(versioned_yaml)
    _write_pages(tmp_path / "docs")

    cli.sidebar("/1.x/installation", config=config_path, docs_root=tmp_path / "docs")

    assert capsys.readouterr().out.splitlines() == [
        "Getting Started",
        "  Introduction -> /1.x/",
        "  Installation -> /1.x/installation",
        "    Composer -> /1.x/installation#composer",
        "        Laravel -> /1.x/installation#laravel",
    ]


def test_sidebar_uses_default_depth(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Groups without a depth show only second-level headers."""
    config_path = write_config(versioned_yaml)
    _write_pages(tmp_path / "docs")

    cli.sidebar("/2.x/", config=config_path, docs_root=tmp_path / "docs")

    assert capsys.readouterr().out.splitlines() == [
        "Getting Started",
        "  Introduction -> /2.x/",
        "  Install it -> /2.x/installation",
        "    Composer -> /2.x/installation#composer",
        "  Basic usage -> /2.x/basic-usage",
    ]


def test_sidebar_without_branch(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Paths outside every branch report that no sidebar applies."""
    cli.sidebar("/blog/", config=write_config(versioned_yaml))
    assert capsys.readouterr().out == "no sidebar for /blog/\n"


def test_normalize_rewrites_yaml(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Normalizing in place keeps the configuration unchanged."""
    config_path = write_config(versioned_yaml)
    before = load_site_config(config_path)

    cli.normalize(config=config_path)

    assert load_site_config(config_path) == before, "expected an equal configuration"
    assert "wrote" in capsys.readouterr().out


def test_normalize_json_prints_storage_form(
    write_config: cabc.Callable[[str], Path],
    versioned_yaml: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """The JSON form is printed to stdout without touching the file."""
    config_path = write_config(versioned_yaml)
    original = config_path.read_text(encoding="utf-8")

    cli.normalize(config=config_path, json=True)

    out = capsys.readouterr().out
    assert '"title": "Laravel Actions"' in out, f"unexpected JSON output {out!r}"
    assert config_path.read_text(encoding="utf-8") == original, (
        "expected the YAML file to be left untouched"
    )


def test_main_dispatches_to_cyclopts(mocker: MockerFixture) -> None:
    """main() hands control to the Cyclopts application."""
    app = mocker.patch.object(cli, "app")
    cli.main()
    app.assert_called_once_with()
