"""Per-build accumulator of generated sources."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, KeysView, ItemsView, Optional

from hylo_intgen.errors import ERR, StoreError


@dataclass(frozen=True)
class GeneratedArtifact:
    kind_name: str
    source_text: str


class GenerationStore:
    """Maps kind names to generated source text for a single build.

    A store is owned by one build. `drain()` hands every entry over to the
    caller (usually the writer) and leaves the store empty for good: reads
    after a drain see nothing and `add()` is refused.

    Not thread-safe; gather results on one thread.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}
        self._drained = False

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add(self, artifact: GeneratedArtifact) -> None:
        if self._drained:
            raise StoreError(ERR.GE0302, kind=artifact.kind_name)
        if artifact.kind_name in self._entries:
            raise StoreError(ERR.GE0301, kind=artifact.kind_name)
        self._entries[artifact.kind_name] = artifact.source_text

    def drain(self) -> Dict[str, str]:
        """Transfer all entries to the caller and leave the store empty."""
        entries, self._entries = self._entries, {}
        self._drained = True
        return entries

    @property
    def drained(self) -> bool:
        return self._drained

    # ------------------------------------------------------------------
    # Keyed read access
    # ------------------------------------------------------------------

    def __getitem__(self, kind_name: str) -> str:
        return self._entries[kind_name]

    def get(self, kind_name: str, default: Optional[str] = None) -> Optional[str]:
        return self._entries.get(kind_name, default)

    def __contains__(self, kind_name: object) -> bool:
        return kind_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def items(self) -> ItemsView[str, str]:
        return self._entries.items()

    def __repr__(self) -> str:
        state = "drained" if self._drained else f"{len(self)} entries"
        return f"<GenerationStore {state}>"
