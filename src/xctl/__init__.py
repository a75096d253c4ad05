"""Client for the Xray/V2Ray gRPC control API."""

import pathlib
import sys
from importlib import metadata

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from xctl.core import (
    CallResult,
    ControlCallError,
    ControlConnectionError,
    ServiceClient,
    UnknownMessageTypeError,
    XctlError,
)
from xctl.core.utils.utils import generate_uuid


def _pyproject_version(start: pathlib.Path) -> str | None:
    """Read the xctl version from the nearest pyproject.toml above ``start``."""
    for parent in [start] + list(start.parents):
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                try:
                    project = tomllib.load(f).get("project", {})
                except tomllib.TOMLDecodeError:
                    continue
            # Skip files of enclosing projects
            if project.get("name") == "xctl" and "version" in project:
                return project["version"]
    return None


def get_version() -> str:
    """Return the installed version, or the source checkout version."""
    try:
        return metadata.version("xctl")
    except metadata.PackageNotFoundError:
        pass

    # Fallback version if no pyproject.toml belongs to xctl
    return _pyproject_version(pathlib.Path(__file__).parent) or "0.0.0"


__version__ = get_version()

__all__ = [
    "CallResult",
    "ControlCallError",
    "ControlConnectionError",
    "generate_uuid",
    "ServiceClient",
    "UnknownMessageTypeError",
    "XctlError",
    "__version__",
]
