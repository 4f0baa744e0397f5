"""Shared fixtures for the vpsite test suite.

``versioned_yaml`` is a representative two-version configuration modelled on
a real documentation site; ``write_config`` writes any YAML text to a
temporary ``site.yaml`` and returns its path.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

VERSIONED_YAML = dedent(
    """
    title: Laravel Actions
    description: Run your plain PHP classes as anything you want.
    domain: https://laravelactions.com/
    head:
      - [link, {rel: icon, href: /icon.png}]
    themeConfig:
      logo: /logo.svg
      lastUpdated: Last Updated
      repo: lorisleiva/laravel-actions
      repoLabel: GitHub
      docsRepo: lorisleiva/laravel-actions-docs
      docsBranch: main
      editLinks: true
      editLinkText: Edit this page
      nav:
        - text: Version
          items:
            - text: "2.x"
              link: /2.x/
            - text: "1.x"
              link: /1.x/
      sidebar:
        /1.x/:
          - title: Getting Started
            collapsable: false
            sidebarDepth: 2
            children:
              - [/1.x/, Introduction]
              - /1.x/installation
        /2.x/:
          - title: Getting Started
            collapsable: false
            children:
              - [/2.x/, Introduction]
              - /2.x/installation
              - /2.x/basic-usage
    plugins:
      seo:
        description: {$derive: site_field, field: description}
        image: {$derive: domain_join, suffix: hero.png}
        twitterCard: summary_large_image
    """
).strip()


@pytest.fixture
def versioned_yaml() -> str:
    """Return the two-version site configuration as YAML text."""
    return VERSIONED_YAML + "\n"


@pytest.fixture
def write_config(tmp_path: Path) -> cabc.Callable[[str], Path]:
    """Return a helper writing YAML text to ``site.yaml`` under ``tmp_path``."""

    def _write(text: str) -> Path:
        path = tmp_path / "docs" / ".vuepress" / "site.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
        return path

    return _write
