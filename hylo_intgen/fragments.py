"""
Fragment Library

Pure text builders for the pieces of a Hylo integer type definition. Every
builder takes an `IntKind` and returns one block of Hylo source, or an empty
string when the block does not apply to that kind. Builders never end with a
newline; the composer owns the separators between blocks.

Builders for members of the type declaration (initializers and operators
declared inside `public type ... { }`) return text already indented by one
level. Conformance builders return top-level text.
"""
from __future__ import annotations

import textwrap
from typing import Iterable, Optional, Tuple

from hylo_intgen.kinds import IntKind

INDENT = "  "

# (operator, comparison predicate)
COMPARISONS: Tuple[Tuple[str, str], ...] = (
    ("<", "lt"),
    ("<=", "le"),
    (">", "gt"),
    (">=", "ge"),
)

# (method prefix, argument label, builtin operation)
OVERFLOW_OPERATIONS: Tuple[Tuple[str, str, str], ...] = (
    ("adding", "_", "add"),
    ("subtracting", "_", "sub"),
    ("multiplied", "by", "mul"),
)

OVERFLOW_RESULT = "{partial_value: Self, overflow: Bool}"


# ==============================================================================
# Text helpers
# ==============================================================================

def _lines(*lines: str) -> str:
    return "\n".join(lines)


def _fun(signature: str, *body: str, doc: Optional[str] = None) -> str:
    """Render a function-like declaration: optional doc line, signature, indented body."""
    out = []
    if doc:
        out.append(f"/// {doc}")
    out.append(f"{signature} {{")
    out.extend(f"{INDENT}{line}" if line else "" for line in body)
    out.append("}")
    return "\n".join(out)


def _member(text: str) -> str:
    return textwrap.indent(text, INDENT)


def _conformance(kind: IntKind, trait: str, members: Iterable[str] = ()) -> str:
    head = f"public conformance {kind.name}: {trait}"
    members = list(members)
    if not members:
        return f"{head} {{}}"
    body = "\n\n".join(_member(m) for m in members)
    return f"{head} {{\n\n{body}\n\n}}"


def _builtin(kind: IntKind, operation: str) -> str:
    return f"Builtin.{operation}_{kind.builtin}"


def _sign_prefix(kind: IntKind) -> str:
    """`s` or `u`, the signedness prefix of LLVM comparison and division builtins."""
    return "s" if kind.is_signed else "u"


def _as_word(kind: IntKind, expression: str) -> str:
    """Zero-extend an expression of the kind's native type to `Builtin.word`."""
    if kind.is_word_sized:
        return expression
    return f"Builtin.zext_{kind.builtin}_word({expression})"


def _zero_value(kind: IntKind) -> str:
    return f"{kind.name}(value: {_builtin(kind, 'zeroinitializer')}())"


def _assignment_operators(kind: IntKind, symbol: str, operation: str,
                          operand: str = "other") -> Tuple[str, str]:
    """Return the `infix<op>` and `infix<op>=` members for one builtin operation."""
    call = f"{_builtin(kind, operation)}(value, {operand}.value)"
    return (
        _fun(f"public fun infix{symbol} (_ {operand}: Self) -> Self",
             f"{kind.name}(value: {call})"),
        _fun(f"public fun infix{symbol}= (_ {operand}: Self) inout",
             f"&self.value = {call}"),
    )


# ==============================================================================
# Declaration and its members
# ==============================================================================

def declaration(kind: IntKind) -> str:
    """Opening of the type declaration with its storage field (left open)."""
    article = "An" if kind.family.value[0] in "aeiou" else "A"
    return _lines(
        f"/// {article} {kind.family.value} integer value.",
        f"public type {kind.name} {{",
        "",
        f"{INDENT}var value: Builtin.{kind.builtin}",
        "",
        f"{INDENT}memberwise init",
    )


def bit_pattern_initializer(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    return _member(_fun(
        f"public init(bit_pattern other: {kind.counterpart})",
        "&self.value = other.value",
        doc="Creates an instance with the same memory representation as `other`."))


def zero_value_initializer(kind: IntKind) -> str:
    # Kinds with a BinaryInteger conformance get `init()` from there.
    if not kind.is_32bit:
        return ""
    return _member(_fun(
        "public init()",
        f"&self.value = {_builtin(kind, 'zeroinitializer')}()",
        doc="Creates an instance with value zero."))


def address_initializer(kind: IntKind) -> str:
    if not kind.is_word_sized:
        return ""
    return _member(_fun(
        "public init(bit_pattern address: MemoryAddress)",
        "&self.value = Builtin.ptrtoint_word(address.base)",
        doc="Creates an instance with the same memory representation as `address`."))


def narrowing_initializer(kind: IntKind) -> str:
    if not ((kind.is_8bit and kind.is_signed) or kind.is_32bit):
        return ""
    return _member(_fun(
        "public init(truncating source: Int)",
        f"&self.value = Builtin.trunc_word_{kind.builtin}(source.value)",
        doc="Creates an instance from the low-order bits of `source`, discarding the others."))


def absolute_value(kind: IntKind) -> str:
    if not kind.is_signed:
        return ""
    return _member(_fun(
        f"public fun abs() -> {kind.name}",
        "if self < 0 { -self } else { +self }",
        doc="Returns the absolute value of `self`."))


def round_up_helper(kind: IntKind) -> str:
    if not (kind.is_signed and kind.is_word_sized):
        return ""
    return _member(_fun(
        "public fun round(up_to_nearest_multiple_of stride: Int) -> Int",
        "(self + stride - 1) / stride * stride",
        doc="Returns `self` rounded up to the nearest multiple of `stride`."))


def unary_plus(kind: IntKind) -> str:
    if not kind.is_signed:
        return ""
    return _member(_fun(
        "public fun prefix+ () -> Self",
        "self.copy()",
        doc="Returns `self`."))


def bitwise_complement(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    return _member(_fun(
        "public fun prefix~ () -> Self",
        f"let all_ones = Builtin.sext_i1_{kind.builtin}({_builtin(kind, 'icmp_eq')}(value, value))",
        f"return {kind.name}(value: {_builtin(kind, 'xor')}(value, all_ones))",
        doc="Returns the bitwise inverse of `self`."))


def wrapping_multiply(kind: IntKind) -> str:
    if not (kind.is_signed and kind.is_word_sized):
        return ""
    return _member(_fun(
        "public fun infix&* (_ other: Self) -> Self",
        f"{kind.name}(value: {_builtin(kind, 'mul')}(value, other.value))",
        doc="Returns the product of `self` and `other`, wrapping around on overflow."))


def declaration_close(kind: IntKind) -> str:
    return "}"


# ==============================================================================
# Conformances present on every kind
# ==============================================================================

def marker_conformances(kind: IntKind) -> str:
    return "\n\n".join(
        _conformance(kind, trait)
        for trait in ("ExpressibleByIntegerLiteral", "Deinitializable", "Movable"))


def copyable(kind: IntKind) -> str:
    return _conformance(kind, "Copyable", [
        _fun("public fun copy() -> Self", f"{kind.name}(value: value)"),
    ])


def equatable(kind: IntKind) -> str:
    return _conformance(kind, "Equatable", [
        _fun(f"public fun infix{symbol} (_ other: Self) -> Bool",
             f"Bool(value: {_builtin(kind, 'icmp_' + predicate)}(value, other.value))")
        for symbol, predicate in (("==", "eq"), ("!=", "ne"))
    ])


def regular(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    return _conformance(kind, "Regular")


def hash_body(kind: IntKind) -> Tuple[str, ...]:
    """Statements feeding `self` into `hasher`; the strategy depends on the kind."""
    if kind.is_word_sized:
        return ("&hasher.unsafe_combine(bytes: pointer_to_bytes[of: self])",)
    if kind.is_8bit and kind.is_signed:
        return ("&hasher.combine(byte: self)",)
    if kind.is_8bit:
        return (f"&hasher.combine(byte: {kind.counterpart}(bit_pattern: self))",)

    # Fixed width wider than a byte: one combine per byte, lowest address first.
    lines = ["let p = Pointer<Int8>(type_punning: pointer[to: self])",
             "&hasher.combine(byte: p.unsafe[])"]
    for offset in range(1, kind.representation.bit_width // 8):
        lines.append(f"&hasher.combine(byte: p.advance(by: {offset}).unsafe[])")
    return tuple(lines)


def hashable(kind: IntKind) -> str:
    return _conformance(kind, "Hashable", [
        _fun("public fun hash(into hasher: inout Hasher)", *hash_body(kind)),
    ])


# ==============================================================================
# Arithmetic conformances (every kind but the 32-bit one)
# ==============================================================================

def comparable(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    prefix = _sign_prefix(kind)
    return _conformance(kind, "Comparable", [
        _fun(f"public fun infix{symbol} (_ other: Self) -> Bool",
             f"Bool(value: {_builtin(kind, f'icmp_{prefix}{predicate}')}(value, other.value))")
        for symbol, predicate in COMPARISONS
    ])


def additive_arithmetic(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    zero = f"{kind.name}()" if kind.is_word_sized else "0"
    return _conformance(kind, "AdditiveArithmetic", [
        *_assignment_operators(kind, "+", "add"),
        *_assignment_operators(kind, "-", "sub"),
        _fun("public static fun zero() -> Self", zero),
    ])


def numeric(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    if kind.is_signed:
        magnitude = kind.counterpart
        body = f"{magnitude}(bit_pattern: self.abs())"
    else:
        magnitude = kind.name
        body = "self.copy()"
    return _conformance(kind, "Numeric", [
        f"public typealias Magnitude = {magnitude}",
        _fun(f"public fun magnitude() -> {magnitude}", body),
        *_assignment_operators(kind, "*", "mul"),
    ])


def signed_numeric(kind: IntKind) -> str:
    if not kind.is_signed:
        return ""
    return _conformance(kind, "SignedNumeric", [
        _fun("public fun prefix- () -> Self", f"{kind.name}() - self"),
        _fun("public fun negate() inout", "&self = -self"),
    ])


# ==============================================================================
# Bit manipulation (every kind but the 32-bit one)
# ==============================================================================

def truncating_or_extending_initializer(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    first_word = "w[w.start_position()].value"
    if kind.is_8bit:
        first_word = f"Builtin.trunc_word_{kind.builtin}({first_word})"
    return _fun(
        "public init<T: BinaryInteger>(truncating_or_extending source: T)",
        "let w = source.words()",
        f"&self.value = {first_word}")


def signum_body(kind: IntKind) -> Tuple[str, ...]:
    """Statements of `signum()`; each kind has its own formula."""
    def indicator(condition: str) -> str:
        return f"Int(value: Builtin.zext_i1_word(({condition}).value))"

    if kind.is_signed and kind.is_word_sized:
        return (f"let positive = {indicator('self > 0')}",
                "return positive | (self >> (Self.bit_width() - 1))")
    if kind.is_signed:
        return (f"let positive = {indicator('self > 0')}",
                f"let negative = {indicator('self < 0')}",
                "return positive - negative")
    if kind.is_word_sized:
        return (indicator(f"self > {kind.name}()"),)
    return (indicator("self > 0"),)


def words_body(kind: IntKind) -> str:
    if kind.is_word_sized:
        word = "UInt(bit_pattern: self)" if kind.is_signed else "self.copy()"
    else:
        extension = "sext" if kind.is_signed else "zext"
        word = f"UInt(value: Builtin.{extension}_{kind.builtin}_word(value))"
    return f"CollectionOfOne({word})"


def binary_integer(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    prefix = _sign_prefix(kind)
    shift_right = "ashr" if kind.is_signed else "lshr"
    return _conformance(kind, "BinaryInteger", [
        _fun("public init()", f"&self.value = {_builtin(kind, 'zeroinitializer')}()"),
        truncating_or_extending_initializer(kind),
        _fun("public fun instance_bit_width() -> Int", "Self.bit_width()"),
        _fun("public fun signum() -> Int", *signum_body(kind)),
        _fun("public fun trailing_zeros() -> Int",
             f"Int(value: {_as_word(kind, _builtin(kind, 'cttz') + '(value)')})"),
        _fun("public fun quotient_and_remainder(dividing_by other: Self)"
             " -> {quotient: Self, remainder: Self}",
             "(quotient: self / other, remainder: self % other)"),
        _fun("public fun words() -> CollectionOfOne<UInt>", words_body(kind)),
        *_assignment_operators(kind, "/", f"{prefix}div"),
        *_assignment_operators(kind, "%", f"{prefix}rem"),
        *_assignment_operators(kind, "&", "and"),
        *_assignment_operators(kind, "|", "or"),
        *_assignment_operators(kind, "^", "xor"),
        *_assignment_operators(kind, "<<", "shl", operand="n"),
        *_assignment_operators(kind, ">>", shift_right, operand="n"),
        _fun("public static fun is_signed() -> Bool", "true" if kind.is_signed else "false"),
    ])


def _reporting_overflow(kind: IntKind, name: str, label: str, operation: str) -> str:
    return _fun(
        f"public fun {name}_reporting_overflow({label} other: Self) -> {OVERFLOW_RESULT}",
        f"let r = {_builtin(kind, _sign_prefix(kind) + operation + '_with_overflow')}(value, other.value)",
        f"return (partial_value: {kind.name}(value: r.0), overflow: Bool(value: r.1))")


def _checked_division(name: str, label: str, symbol: str) -> str:
    return _fun(
        f"public fun {name}_reporting_overflow({label} other: Self) -> {OVERFLOW_RESULT}",
        "if other == 0 {",
        f"{INDENT}(partial_value: self.copy(), overflow: true)",
        "} else {",
        f"{INDENT}(partial_value: self {symbol} other, overflow: false)",
        "}")


def bit_width_expression(kind: IntKind) -> str:
    width = kind.representation.bit_width
    if width is None:
        return "MemoryLayout<Self>.size() * 8"
    return str(width)


def fixed_width_integer(kind: IntKind) -> str:
    if kind.is_32bit:
        return ""
    return _conformance(kind, "FixedWidthInteger", [
        _fun("public fun matches(_ mask: Self) -> Bool", "(self & mask) == mask"),
        *(_reporting_overflow(kind, *operation) for operation in OVERFLOW_OPERATIONS),
        _checked_division("divided", "by", "/"),
        _checked_division("remainder", "dividing_by", "%"),
        _fun("public fun nonzero_bit_count() -> Int",
             f"Int(value: {_as_word(kind, _builtin(kind, 'ctpop') + '(value)')})"),
        _fun("public fun leading_zeros() -> Int",
             f"Int(value: {_as_word(kind, _builtin(kind, 'ctlz') + '(value)')})"),
        _fun("public static fun bit_width() -> Int", bit_width_expression(kind)),
        _fun("public static fun max() -> Self", f"~{_zero_value(kind)}"),
        _fun("public static fun min() -> Self", _zero_value(kind)),
    ])


# ==============================================================================
# Foreign interop
# ==============================================================================

def foreign_convertible(kind: IntKind) -> str:
    if not (kind.is_signed and kind.is_word_sized):
        return ""
    native = f"Builtin.{kind.builtin}"
    return _conformance(kind, "ForeignConvertible", [
        f"public typealias ForeignRepresentation = {native}",
        _fun(f"public init(foreign_value: sink {native})", "&self.value = foreign_value"),
        _fun(f"public fun foreign_value() -> {native}", "value"),
    ])
