# hylo_intgen/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict


class Severity(str, Enum):
    ERROR = "error"


class Category(str, Enum):
    GENERAL = "general"
    OUTPUT  = "output"
    WRITE   = "write"
    STORE   = "store"
    CONFIG  = "config"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)


#
# --- Exceptions
#

class IntGenError(Exception):
    """Base class for every error raised by the generator.

    Carries the catalog entry it was raised for, so callers (and the CLI
    reporter) can show the code next to the formatted text.
    """

    def __init__(self, em: ErrorMessage, **kwargs) -> None:
        self.error = em
        self.text = _fmt(em.code, **kwargs)
        super().__init__(f"{em.code}: {self.text}")

    @property
    def code(self) -> str:
        return self.error.code


class ConstructionError(IntGenError):
    """The writer destination is missing or is not a directory."""

    def __init__(self, em: ErrorMessage, path: Path) -> None:
        self.path = path
        super().__init__(em, path=path)


class WriteError(IntGenError):
    """A single generated file could not be persisted."""

    def __init__(self, kind_name: str, path: Path, reason: str) -> None:
        self.kind_name = kind_name
        self.path = path
        super().__init__(ERR.GE0201, kind=kind_name, path=path, reason=reason)


class StoreError(IntGenError):
    pass


class ConfigError(IntGenError):
    pass


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None


#
# --- Registry population
#

# Output directory (writer construction) - GE01xx range
_add(ErrorMessage("GE0101", Severity.ERROR,
    "output directory '{path}' does not exist",
    Category.OUTPUT, "The writer validates its destination once, before anything is generated."))

_add(ErrorMessage("GE0102", Severity.ERROR,
    "output path '{path}' is not a directory",
    Category.OUTPUT, "The writer destination must be an existing directory, not a regular file."))

# Persistence - GE02xx range
_add(ErrorMessage("GE0201", Severity.ERROR,
    "failed to write {kind} to '{path}': {reason}",
    Category.WRITE, "Files written earlier in the same batch are kept; nothing is retried."))

# Generation store - GE03xx range
_add(ErrorMessage("GE0301", Severity.ERROR,
    "kind '{kind}' was already generated in this build",
    Category.STORE, "A store holds exactly one entry per kind."))

_add(ErrorMessage("GE0302", Severity.ERROR,
    "cannot add '{kind}': the store was already drained",
    Category.STORE, "A drained store belongs to a finished build; start a new build instead."))

# Configuration - GE04xx range
_add(ErrorMessage("GE0401", Severity.ERROR,
    "invalid selection '{value}' (expected one of: {expected})",
    Category.CONFIG))

_add(ErrorMessage("GE0402", Severity.ERROR,
    "invalid file extension '{value}' (must start with '.')",
    Category.CONFIG))

_add(ErrorMessage("GE0403", Severity.ERROR,
    "invalid worker count '{value}' (must be a positive integer)",
    Category.CONFIG))

_add(ErrorMessage("GE0404", Severity.ERROR,
    "cannot read config file '{path}': {reason}",
    Category.CONFIG))

_add(ErrorMessage("GE0405", Severity.ERROR,
    "unknown integer kind '{value}' (expected one of: {expected})",
    Category.CONFIG))

_add(ErrorMessage("GE0406", Severity.ERROR,
    "invalid config value for '{key}': expected {expected}, got '{value}'",
    Category.CONFIG, "Sections must be tables; `directory` and `extension` must be strings."))
