"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """
    Return the sfzparse version.

    A source checkout reads ``[project].version`` from pyproject.toml so the
    number is current without reinstalling; an installed copy asks the
    distribution metadata.
    """
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "sfzparse" and "version" in project:
            return str(project["version"])
    try:
        return version("sfzparse")
    except PackageNotFoundError:
        return "0.0.0"
