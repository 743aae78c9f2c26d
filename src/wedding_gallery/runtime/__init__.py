"""Runtime utilities: version lookup."""

from .version import resolve_project_version

__all__ = ["resolve_project_version"]
