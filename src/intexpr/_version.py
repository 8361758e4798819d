"""Version lookup for intexpr.

``pyproject.toml`` holds the version. A source checkout reads it directly so
that bumping the file is picked up without reinstalling; an installed copy
asks the package metadata.
"""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_DIST_NAME = "intexpr"
_VERSION_LINE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """Return the intexpr version string, or ``0.0.0`` when it cannot be found."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        if match := _VERSION_LINE.search(pyproject.read_text()):
            return match.group(1)
    try:
        return _metadata_version(_DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
