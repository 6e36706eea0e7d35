"""hylo-intgen - generator for the Hylo standard library integer types."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hylo-intgen")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True
