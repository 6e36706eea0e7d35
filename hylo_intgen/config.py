"""Generator configuration (intgen.toml) loading and validation."""
from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hylo_intgen.errors import ERR, ConfigError
from hylo_intgen.generator import Selection
from hylo_intgen.writer import DEFAULT_EXTENSION

CONFIG_NAME = "intgen.toml"
DEFAULT_OUTPUT_DIR = Path("StandardLibrary/Sources/Core/Numbers/Integers")


@dataclass
class GeneratorConfig:
    output_dir: Path = DEFAULT_OUTPUT_DIR
    extension: str = DEFAULT_EXTENSION
    selection: Selection = Selection.ALL
    workers: int = 1

    def validate(self) -> None:
        if not isinstance(self.extension, str) or not self.extension.startswith("."):
            raise ConfigError(ERR.GE0402, value=self.extension)
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigError(ERR.GE0403, value=self.workers)


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load and validate the config file (default: ./intgen.toml).

    A missing default file yields the defaults; an explicitly named file
    must exist.
    """
    explicit = path is not None
    if path is None:
        path = Path.cwd() / CONFIG_NAME
    if not path.exists():
        if explicit:
            raise ConfigError(ERR.GE0404, path=path, reason="file not found")
        return GeneratorConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(ERR.GE0404, path=path, reason=e) from e
    config = _parse_config(data, base_dir=path.parent)
    return config


def load_config_from_string(text: str, base_dir: Optional[Path] = None) -> GeneratorConfig:
    return _parse_config(tomllib.loads(text), base_dir=base_dir or Path.cwd())


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(ERR.GE0406, key=name, expected="a table", value=section)
    return section


def _string(section: dict, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(ERR.GE0406, key=key, expected="a string", value=value)
    return value


def _parse_config(data: dict, base_dir: Path) -> GeneratorConfig:
    output = _section(data, "output")
    generate = _section(data, "generate")

    output_dir = Path(_string(output, "directory", str(DEFAULT_OUTPUT_DIR)))
    if not output_dir.is_absolute():
        output_dir = base_dir / output_dir

    config = GeneratorConfig(
        output_dir=output_dir,
        extension=_string(output, "extension", DEFAULT_EXTENSION),
        selection=Selection.parse(generate.get("selection", Selection.ALL.value)),
        workers=generate.get("workers", 1),
    )
    config.validate()
    return config
