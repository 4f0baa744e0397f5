"""Render a site configuration as the generator's ``config.js`` module.

The static-site generator reads its configuration from
``docs/.vuepress/config.js``. :class:`VuePressConfigExporter` renders that
module from a :class:`~vpsite.config.SiteConfig` so the YAML file stays the
single source of truth:

>>> from vpsite.config import SiteConfig
>>> print(VuePressConfigExporter(SiteConfig(title="Docs")).render())  # doctest: +SKIP
module.exports = {
    title: "Docs",
}

Literal values are emitted as JSON literals. Derived plugin options are
emitted as the JavaScript arrow function they carry; an option without a
JavaScript form cannot be exported and raises
:class:`~vpsite.config.SiteConfigError`.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

import msgspec.json
from jinja2 import Environment, FileSystemLoader

from .config.models import SiteConfigError
from .plugins import DerivedOption
from .serializer import site_config_to_mapping

if typ.TYPE_CHECKING:
    from .config.models import SiteConfig

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
INDENT = "    "


@dc.dataclass(frozen=True, slots=True)
class JsExpression:
    """Raw JavaScript source emitted verbatim."""

    source: str


class VuePressConfigExporter:
    """Render the ``config.js`` module for a site configuration."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        source: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the exporter and its Jinja environment.

        Parameters
        ----------
        site : SiteConfig
            Configuration to export.
        source : Path, optional
            YAML file the configuration was loaded from; named in the
            generated header comment when provided.
        templates_dir : Path, optional
            Directory containing ``config.js.jinja``. Defaults to the
            ``vpsite/templates`` directory when ``None``.
        """
        self.site = site
        self.source = source
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,  # noqa: S701 - renders JavaScript, not HTML
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["js"] = render_js
        self.template = self.env.get_template("config.js.jinja")

    def render(self) -> str:
        """Return the JavaScript module source."""
        payload = site_config_to_mapping(self.site)
        plugins = self._plugin_payload()
        if plugins:
            payload["plugins"] = plugins
        return self.template.render(
            entries=[(_js_key(key), value) for key, value in payload.items()],
            source=self.source.as_posix() if self.source else None,
        )

    def run(self, output: Path) -> Path:
        """Render and write the module to ``output``, returning the path."""
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.render(), encoding="utf-8")
        return output

    def _plugin_payload(self) -> dict[str, dict[str, typ.Any]]:
        plugins: dict[str, dict[str, typ.Any]] = {}
        for name, plugin in self.site.plugins.items():
            options: dict[str, typ.Any] = {}
            for key, value in plugin.options.items():
                if isinstance(value, DerivedOption):
                    if value.js is None:
                        msg = (
                            f"Plugin option '{name}.{key}' is a Python callable "
                            "without a JavaScript form and cannot be exported."
                        )
                        raise SiteConfigError(msg)
                    value = JsExpression(value.js)  # noqa: PLW2901
                options[key] = value
            plugins[name] = options
        return plugins


def render_js(value: object, level: int = 0) -> str:
    """Return ``value`` as a JavaScript literal indented for ``level``."""
    match value:
        case JsExpression(source=source):
            return source
        case None | bool() | int() | float() | str():
            return msgspec.json.encode(value).decode("utf-8")
        case list() | tuple() if all(_is_scalar(item) for item in value):
            return "[" + ", ".join(render_js(item) for item in value) + "]"
        case list() | tuple():
            inner = INDENT * (level + 1)
            lines = [f"{inner}{render_js(item, level + 1)}," for item in value]
            return "[\n" + "\n".join(lines) + f"\n{INDENT * level}]"
        case dict() if not value:
            return "{}"
        case dict():
            inner = INDENT * (level + 1)
            lines = [
                f"{inner}{_js_key(str(key))}: {render_js(item, level + 1)},"
                for key, item in value.items()
            ]
            return "{\n" + "\n".join(lines) + f"\n{INDENT * level}}}"
        case _:
            msg = f"Cannot export value of type {type(value).__name__} to JavaScript."
            raise SiteConfigError(msg)


def _is_scalar(value: object) -> bool:
    return value is None or isinstance(value, bool | int | float | str | JsExpression)


def _js_key(key: str) -> str:
    if IDENTIFIER_PATTERN.match(key):
        return key
    return msgspec.json.encode(key).decode("utf-8")


__all__ = ["JsExpression", "VuePressConfigExporter", "render_js"]
