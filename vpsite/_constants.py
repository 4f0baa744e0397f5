"""Common literal values used across vpsite.

These constants keep default file locations in one place so the CLI, the
exporter, and tests agree on them. Intended for internal use within the
vpsite package.

Examples
--------
>>> from vpsite import _constants
>>> _constants.DEFAULT_CONFIG.name
'site.yaml'
>>> _constants.EXPORT_FILENAME
'config.js'
"""

from pathlib import Path

DEFAULT_CONFIG = Path("docs/.vuepress/site.yaml")
EXPORT_FILENAME = "config.js"
DEFAULT_SIDEBAR_DEPTH = 1
LAST_UPDATED_LABEL = "Last Updated"
DERIVE_KEY = "$derive"
