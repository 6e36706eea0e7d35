"""Persist generated sources, one file per kind."""
from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import List, Union

from hylo_intgen import kinds
from hylo_intgen.errors import ERR, ConstructionError, WriteError
from hylo_intgen.store import GenerationStore

DEFAULT_EXTENSION = ".hylo"


class Writer:
    """Writes `<kind name><extension>` files into an existing directory.

    The directory is validated once, here; individual writes do not check it
    again. Each file is written atomically (temporary file in the same
    directory, then `os.replace`), but a batch is not: when one file fails,
    the files already written stay in place. New files get the mode a plain
    write would give them; replaced files keep their mode.

    Two writers must not target the same directory at the same time.
    """

    def __init__(self, directory: Union[str, Path], extension: str = DEFAULT_EXTENSION) -> None:
        directory = Path(directory)
        if not directory.exists():
            raise ConstructionError(ERR.GE0101, directory)
        if not directory.is_dir():
            raise ConstructionError(ERR.GE0102, directory)
        self.directory = directory
        self.extension = extension

    def path_for(self, kind_name: str) -> Path:
        return self.directory / f"{kind_name}{self.extension}"

    def persist(self, store: GenerationStore) -> List[Path]:
        """Drain `store` and write each entry. Returns the written paths.

        Raises `WriteError` for the first file that cannot be written.
        """
        entries = store.drain()
        written: List[Path] = []
        for name in _write_order(entries):
            written.append(self.write_one(name, entries[name]))
        return written

    def write_one(self, kind_name: str, source_text: str) -> Path:
        path = self.path_for(kind_name)
        try:
            _atomic_write(path, source_text.encode("utf-8"))
        except OSError as e:
            raise WriteError(kind_name, path, e.strerror or str(e)) from e
        return path


def _write_order(entries: dict) -> List[str]:
    """Catalog order first, then anything else by name."""
    known = [name for name in kinds.kind_names() if name in entries]
    extra = sorted(name for name in entries if name not in known)
    return known + extra


def _file_mode(path: Path) -> int:
    """Mode for a new file: the existing target's, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(path: Path, data: bytes) -> None:
    mode = _file_mode(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fchmod(f.fileno(), mode)
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
