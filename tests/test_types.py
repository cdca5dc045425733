import pytest

from dbschema.postgres.types import (
    ArbitraryPrecisionNumericAttr,
    BitAttr,
    EnumDef,
    IntervalAttr,
    StringAttr,
    TimeAttr,
    Type,
    TypeKind,
)


@pytest.mark.parametrize(
    "name, kind",
    [
        ("smallint", TypeKind.SMALL_INT),
        ("int2", TypeKind.SMALL_INT),
        ("int4", TypeKind.INTEGER),
        ("int", TypeKind.INTEGER),
        ("int8", TypeKind.BIG_INT),
        ("float8", TypeKind.DOUBLE_PRECISION),
        ("double precision", TypeKind.DOUBLE_PRECISION),
        ("serial4", TypeKind.SERIAL),
        ("jsonb", TypeKind.JSON_BINARY),
        ("pg_lsn", TypeKind.PG_LSN),
        ("timestamp without time zone", TypeKind.TIMESTAMP),
        ("timestamp with time zone", TypeKind.TIMESTAMP_WITH_TIME_ZONE),
        ("user-defined", TypeKind.ENUM),
    ],
)
def test_from_str_known(name, kind):
    assert Type.from_str(name).kind is kind


def test_from_str_is_case_insensitive():
    assert Type.from_str("CHARACTER VARYING") == Type.from_str("varchar")
    assert Type.from_str("Boolean") == Type(TypeKind.BOOLEAN)


def test_from_str_unknown_keeps_original_name():
    result = Type.from_str("MyType")
    assert result.kind is TypeKind.UNKNOWN
    assert result.attr == "MyType"


def test_default_attributes():
    assert Type.from_str("numeric").attr == ArbitraryPrecisionNumericAttr()
    assert Type.from_str("char").attr == StringAttr()
    assert Type.from_str("time").attr == TimeAttr()
    assert Type.from_str("interval").attr == IntervalAttr()
    assert Type.from_str("bit").attr == BitAttr()
    assert Type.from_str("user-defined").attr == EnumDef()
    assert Type.from_str("text").attr is None


def test_attribute_predicates():
    assert Type.from_str("decimal").has_numeric_attr()
    assert not Type.from_str("integer").has_numeric_attr()
    assert Type.from_str("varchar").has_string_attr()
    assert not Type.from_str("text").has_string_attr()
    assert Type.from_str("time with time zone").has_time_attr()
    assert not Type.from_str("date").has_time_attr()
    assert Type.from_str("interval").has_interval_attr()
    assert Type.from_str("bit").has_bit_attr()
    assert Type.from_str("user-defined").has_enum_attr()
    assert not Type.from_str("uuid").has_enum_attr()


def test_unknown_requires_name():
    with pytest.raises(ValueError):
        Type(TypeKind.UNKNOWN)


def test_wrong_attribute_rejected():
    with pytest.raises(TypeError):
        Type(TypeKind.VARCHAR, TimeAttr())
    with pytest.raises(TypeError):
        Type(TypeKind.INTEGER, StringAttr())


def test_attributes_not_shared_between_instances():
    first = Type.from_str("varchar")
    second = Type.from_str("varchar")
    first.attr.length = 10
    assert second.attr.length is None
    assert first != second