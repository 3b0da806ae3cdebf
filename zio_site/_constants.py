"""Common literal values used across zio_site.

These constants keep filenames and directories centralized so the CLI, the
build step, plugins, and tests can import the same values without drifting.
Intended for internal use within the zio_site package.

Examples
--------
>>> from zio_site import _constants
>>> _constants.ENGINE_CONFIG_FILENAME
'docusaurus.config.json'
>>> _constants.TEMPLATES_DIR.name
'templates'
"""

from pathlib import Path

DEFAULT_CONFIG = Path("config/site.yaml")
ENGINE_CONFIG_FILENAME = "docusaurus.config.json"
TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
MANIFEST_FILENAME = "build-manifest.json"
STATIC_DIR = "static"
