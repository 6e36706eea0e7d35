"""
Integer Kind Catalog

The five integer types of the Hylo standard library and the attributes the
fragment library keys on. Fixed-width representations are described with
llvmlite IR types, so the `Builtin.*` suffixes and bit widths come from a
single place.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import llvmlite.ir as ir


class Family(str, Enum):
    SIGNED = "signed"
    UNSIGNED = "unsigned"


class Representation(str, Enum):
    """Native storage of a kind."""
    WORD = "word"   # platform word, no fixed width
    I8 = "i8"
    I32 = "i32"

    @property
    def llvm_type(self) -> Optional[ir.IntType]:
        return _FIXED_TYPES.get(self)

    @property
    def bit_width(self) -> Optional[int]:
        t = self.llvm_type
        return t.width if t is not None else None


_FIXED_TYPES = {
    Representation.I8: ir.IntType(8),
    Representation.I32: ir.IntType(32),
}


@dataclass(frozen=True)
class IntKind:
    name: str
    family: Family
    representation: Representation

    @property
    def is_signed(self) -> bool:
        return self.family is Family.SIGNED

    @property
    def is_word_sized(self) -> bool:
        return self.representation is Representation.WORD

    @property
    def is_8bit(self) -> bool:
        return self.representation is Representation.I8

    @property
    def is_32bit(self) -> bool:
        return self.representation is Representation.I32

    @property
    def builtin(self) -> str:
        """Suffix of the `Builtin.*` type and operations for this kind (`word`, `i8`, `i32`)."""
        t = self.representation.llvm_type
        return str(t) if t is not None else self.representation.value

    @property
    def counterpart(self) -> str:
        """Name of the kind with the opposite signedness (`Int8` <-> `UInt8`)."""
        if self.name.startswith("U"):
            return self.name[1:]
        return f"U{self.name}"

    def __str__(self) -> str:
        return self.name


INT = IntKind("Int", Family.SIGNED, Representation.WORD)
INT8 = IntKind("Int8", Family.SIGNED, Representation.I8)
INT32 = IntKind("Int32", Family.SIGNED, Representation.I32)
UINT = IntKind("UInt", Family.UNSIGNED, Representation.WORD)
UINT8 = IntKind("UInt8", Family.UNSIGNED, Representation.I8)

CATALOG: Tuple[IntKind, ...] = (INT, INT8, INT32, UINT, UINT8)

Predicate = Callable[[IntKind], bool]


def all_kinds(kind: IntKind) -> bool:
    return True


def signed(kind: IntKind) -> bool:
    return kind.family is Family.SIGNED


def unsigned(kind: IntKind) -> bool:
    return kind.family is Family.UNSIGNED


def select(predicate: Predicate) -> Tuple[IntKind, ...]:
    """Return the catalog kinds matching `predicate`, in catalog order."""
    return tuple(kind for kind in CATALOG if predicate(kind))


def kind_named(name: str) -> IntKind:
    for kind in CATALOG:
        if kind.name == name:
            return kind
    raise KeyError(name)


def kind_names() -> Tuple[str, ...]:
    return tuple(kind.name for kind in CATALOG)
