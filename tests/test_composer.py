import pytest

from hylo_intgen.composer import ORDER, compose, fragments_of
from hylo_intgen.kinds import CATALOG, INT, INT32, UINT8


@pytest.mark.parametrize("kind", CATALOG, ids=str)
def test_matches_fixture_byte_for_byte(kind, fixture_text):
    assert compose(kind).encode("utf-8") == fixture_text(kind.name).encode("utf-8")


@pytest.mark.parametrize("kind", CATALOG, ids=str)
def test_is_deterministic(kind):
    assert compose(kind) == compose(kind)


@pytest.mark.parametrize("kind", CATALOG, ids=str)
def test_no_stray_blank_lines(kind):
    text = compose(kind)
    assert "\n\n\n" not in text
    assert text.endswith("}\n") and not text.endswith("\n\n")
    assert "\r" not in text


def test_fragments_are_joined_by_one_blank_line():
    assert compose(UINT8) == "\n\n".join(fragments_of(UINT8)) + "\n"


def test_int32_example():
    text = compose(INT32)
    assert "prefix~" not in text
    assert "bit_pattern" not in text
    assert "public init() {\n    &self.value = Builtin.zeroinitializer_i32()\n  }" in text
    for trait in ("Regular", "Comparable", "AdditiveArithmetic", "Numeric {",
                  "BinaryInteger", "FixedWidthInteger"):
        assert f"Int32: {trait}" not in text
    for trait in ("Copyable", "Equatable", "Hashable"):
        assert f"public conformance Int32: {trait}" in text
    assert text.count("&hasher.combine(byte:") == 4


def test_int_only_members():
    markers = ("round(up_to_nearest_multiple_of", "infix&*", "ForeignConvertible")
    text = compose(INT)
    for marker in markers:
        assert marker in text
    for kind in CATALOG:
        if kind is INT:
            continue
        for marker in markers:
            assert marker not in compose(kind)


def test_assembly_order_for_int():
    text = compose(INT)
    landmarks = [
        "public type Int {",
        "init(bit_pattern other: UInt)",
        "init(bit_pattern address: MemoryAddress)",
        "public fun abs()",
        "public fun round(",
        "public fun prefix+ ()",
        "public fun prefix~ ()",
        "public fun infix&* (",
        "\n}\n",
        "Int: Copyable",
        "Int: Equatable",
        "Int: Regular",
        "Int: Hashable",
        "Int: Comparable",
        "Int: AdditiveArithmetic",
        "Int: Numeric",
        "Int: SignedNumeric",
        "Int: BinaryInteger",
        "Int: FixedWidthInteger",
        "Int: ForeignConvertible",
    ]
    positions = [text.index(landmark) for landmark in landmarks]
    assert positions == sorted(positions)


def test_order_has_no_duplicates():
    assert len(set(ORDER)) == len(ORDER)
