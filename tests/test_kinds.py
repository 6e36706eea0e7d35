import pytest

from hylo_intgen import kinds
from hylo_intgen.kinds import CATALOG, Family, Representation


def test_catalog_has_five_kinds_with_unique_names():
    names = [k.name for k in CATALOG]
    assert names == ["Int", "Int8", "Int32", "UInt", "UInt8"]
    assert len(set(names)) == 5


@pytest.mark.parametrize("kind", CATALOG, ids=str)
def test_representation_flags_are_exclusive(kind):
    flags = [kind.is_word_sized, kind.is_8bit, kind.is_32bit]
    assert flags.count(True) == 1


def test_signed_and_unsigned_partition_the_catalog():
    signed = set(kinds.select(kinds.signed))
    unsigned = set(kinds.select(kinds.unsigned))
    assert signed.isdisjoint(unsigned)
    assert signed | unsigned == set(kinds.select(kinds.all_kinds))
    assert len(kinds.select(kinds.signed)) + len(kinds.select(kinds.unsigned)) == len(CATALOG)


def test_predicates_match_family_names():
    assert [k.name for k in kinds.select(kinds.signed)] == ["Int", "Int8", "Int32"]
    assert [k.name for k in kinds.select(kinds.unsigned)] == ["UInt", "UInt8"]
    assert all(k.family is Family.SIGNED for k in kinds.select(kinds.signed))
    assert all(k.family is Family.UNSIGNED for k in kinds.select(kinds.unsigned))


def test_select_keeps_catalog_order():
    assert kinds.select(kinds.all_kinds) == CATALOG


@pytest.mark.parametrize("name, counterpart", [
    ("Int", "UInt"),
    ("UInt", "Int"),
    ("Int8", "UInt8"),
    ("UInt8", "Int8"),
])
def test_counterpart_toggles_unsigned_prefix(name, counterpart):
    assert kinds.kind_named(name).counterpart == counterpart


def test_builtin_suffixes_come_from_representation():
    assert kinds.INT.builtin == "word"
    assert kinds.UINT.builtin == "word"
    assert kinds.INT8.builtin == "i8"
    assert kinds.UINT8.builtin == "i8"
    assert kinds.INT32.builtin == "i32"


def test_fixed_representations_have_bit_widths():
    assert Representation.I8.bit_width == 8
    assert Representation.I32.bit_width == 32
    assert Representation.WORD.bit_width is None


def test_kind_named_rejects_unknown_names():
    with pytest.raises(KeyError):
        kinds.kind_named("Int64")


def test_kinds_are_immutable():
    with pytest.raises(AttributeError):
        kinds.INT.name = "Other"
