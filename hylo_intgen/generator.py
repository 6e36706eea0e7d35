"""
Selection API

Builds a fresh `GenerationStore` for a selection of the catalog:

    store = build(Selection.SIGNED)
    store["Int8"]                      # keyed inspection
    Writer(out_dir).persist(store)     # or drain it into a writer

`generate()` is the one-shot form returning a plain dict.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Dict, Optional, Union

from hylo_intgen import kinds
from hylo_intgen.composer import compose
from hylo_intgen.errors import ERR, ConfigError
from hylo_intgen.store import GeneratedArtifact, GenerationStore


class Selection(str, Enum):
    ALL = "all"
    SIGNED = "signed"
    UNSIGNED = "unsigned"

    @property
    def predicate(self) -> kinds.Predicate:
        return _PREDICATES[self]

    @classmethod
    def parse(cls, value: Union[str, "Selection"]) -> "Selection":
        try:
            return cls(value)
        except ValueError:
            expected = ", ".join(s.value for s in cls)
            raise ConfigError(ERR.GE0401, value=value, expected=expected) from None


_PREDICATES = {
    Selection.ALL: kinds.all_kinds,
    Selection.SIGNED: kinds.signed,
    Selection.UNSIGNED: kinds.unsigned,
}


def build(selection: Union[str, Selection] = Selection.ALL,
          workers: Optional[int] = None) -> GenerationStore:
    """Compose every kind of `selection` into a new store.

    With `workers` > 1 the kinds are composed on a thread pool; composition
    only reads the immutable catalog, and results are added to the store
    from this thread.
    """
    selected = kinds.select(Selection.parse(selection).predicate)
    store = GenerationStore()

    if workers and workers > 1 and len(selected) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            texts = list(executor.map(compose, selected))
    else:
        texts = [compose(kind) for kind in selected]

    for kind, text in zip(selected, texts):
        store.add(GeneratedArtifact(kind.name, text))
    return store


def generate(selection: Union[str, Selection] = Selection.ALL) -> Dict[str, str]:
    """Return `{kind name: source text}` for `selection`."""
    return build(selection).drain()


def generate_all() -> Dict[str, str]:
    return generate(Selection.ALL)


def generate_signed() -> Dict[str, str]:
    return generate(Selection.SIGNED)


def generate_unsigned() -> Dict[str, str]:
    return generate(Selection.UNSIGNED)
