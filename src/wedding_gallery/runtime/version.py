"""Helpers for reporting the installed package version."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from wedding_gallery.logging_utils import logger

DISTRIBUTION_NAMES = ("wedding-gallery-layouts", "wedding_gallery_layouts")
FALLBACK_VERSION = "0.0.0"


def _version_from_pyproject(start: Path) -> str | None:
    """Nearest ``project.version`` above ``start``, if any."""
    for parent in start.resolve().parents:
        pyproject_path = parent / "pyproject.toml"
        if not pyproject_path.is_file():
            continue
        try:
            doc = tomlkit.parse(pyproject_path.read_text(encoding="utf-8"))
        except (OSError, TOMLKitError) as exc:
            logger.warning("Error reading %s: %s", pyproject_path, exc)
            return None
        version = doc.unwrap().get("project", {}).get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
        return None
    return None


def resolve_project_version() -> str:
    """
    Return the best-guess project version.

    Installed distribution metadata wins; a source checkout falls back
    to the nearest pyproject.toml, and anything else reports "0.0.0".
    """
    for distribution_name in DISTRIBUTION_NAMES:
        try:
            return importlib_metadata.version(distribution_name)
        except importlib_metadata.PackageNotFoundError:
            continue
    return _version_from_pyproject(Path(__file__)) or FALLBACK_VERSION
