"""Assemble the fragments of one integer kind into a complete Hylo source file."""
from __future__ import annotations

from typing import Callable, Tuple

from hylo_intgen import fragments as f
from hylo_intgen.kinds import IntKind

Fragment = Callable[[IntKind], str]

SEPARATOR = "\n\n"

# Assembly order. Inapplicable fragments render as "" and are skipped.
ORDER: Tuple[Fragment, ...] = (
    # type declaration
    f.declaration,
    f.bit_pattern_initializer,
    f.zero_value_initializer,
    f.address_initializer,
    f.narrowing_initializer,
    f.absolute_value,
    f.round_up_helper,
    f.unary_plus,
    f.bitwise_complement,
    f.wrapping_multiply,
    f.declaration_close,
    # conformances
    f.marker_conformances,
    f.copyable,
    f.equatable,
    f.regular,
    f.hashable,
    f.comparable,
    f.additive_arithmetic,
    f.numeric,
    f.signed_numeric,
    f.binary_integer,
    f.fixed_width_integer,
    f.foreign_convertible,
)


def fragments_of(kind: IntKind) -> Tuple[str, ...]:
    """Return the non-empty fragments of `kind`, in assembly order."""
    rendered = (fragment(kind) for fragment in ORDER)
    return tuple(text for text in rendered if text)


def compose(kind: IntKind) -> str:
    """Return the source text of `kind`.

    Fragments are separated by exactly one blank line and the file ends with
    a single newline. The result depends on `kind` only.
    """
    return SEPARATOR.join(fragments_of(kind)) + "\n"
