"""PostgreSQL built-in column types and their attributes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


@dataclass
class ArbitraryPrecisionNumericAttr:
    """Precision and scale of a numeric or decimal column."""

    precision: int | None = None
    scale: int | None = None


@dataclass
class StringAttr:
    length: int | None = None


@dataclass
class TimeAttr:
    precision: int | None = None


@dataclass
class IntervalAttr:
    field: str | None = None
    precision: int | None = None


@dataclass
class BitAttr:
    length: int | None = None


@dataclass
class EnumDef:
    """A PostgreSQL enum type: its name and its labels."""

    values: list[str] = field(default_factory=list)
    typename: str = ""


class TypeKind(enum.Enum):
    """All built-in PostgreSQL types, excluding synonyms."""

    SMALL_INT = "smallint"
    INTEGER = "integer"
    BIG_INT = "bigint"
    DECIMAL = "decimal"
    NUMERIC = "numeric"
    REAL = "real"
    DOUBLE_PRECISION = "double precision"
    SMALL_SERIAL = "smallserial"
    SERIAL = "serial"
    BIG_SERIAL = "bigserial"
    MONEY = "money"
    VARCHAR = "character varying"
    CHAR = "character"
    TEXT = "text"
    BYTEA = "bytea"
    TIMESTAMP = "timestamp"
    TIMESTAMP_WITH_TIME_ZONE = "timestamp with time zone"
    DATE = "date"
    TIME = "time"
    TIME_WITH_TIME_ZONE = "time with time zone"
    INTERVAL = "interval"
    BOOLEAN = "boolean"
    POINT = "point"
    LINE = "line"
    LSEG = "lseg"
    BOX = "box"
    PATH = "path"
    POLYGON = "polygon"
    CIRCLE = "circle"
    CIDR = "cidr"
    INET = "inet"
    MAC_ADDR = "macaddr"
    MAC_ADDR8 = "macaddr8"
    BIT = "bit"
    TS_VECTOR = "tsvector"
    TS_QUERY = "tsquery"
    UUID = "uuid"
    XML = "xml"
    JSON = "json"
    JSON_BINARY = "jsonb"
    ARRAY = "array"
    INT4_RANGE = "int4range"
    INT8_RANGE = "int8range"
    NUM_RANGE = "numrange"
    TS_RANGE = "tsrange"
    TS_TZ_RANGE = "tstzrange"
    DATE_RANGE = "daterange"
    PG_LSN = "pg_lsn"
    UNKNOWN = "unknown"
    ENUM = "enum"


_ATTR_CLASSES: dict[TypeKind, type] = {
    TypeKind.DECIMAL: ArbitraryPrecisionNumericAttr,
    TypeKind.NUMERIC: ArbitraryPrecisionNumericAttr,
    TypeKind.VARCHAR: StringAttr,
    TypeKind.CHAR: StringAttr,
    TypeKind.TIMESTAMP: TimeAttr,
    TypeKind.TIMESTAMP_WITH_TIME_ZONE: TimeAttr,
    TypeKind.TIME: TimeAttr,
    TypeKind.TIME_WITH_TIME_ZONE: TimeAttr,
    TypeKind.INTERVAL: IntervalAttr,
    TypeKind.BIT: BitAttr,
    TypeKind.ENUM: EnumDef,
}

_NAMES: dict[str, TypeKind] = {
    "smallint": TypeKind.SMALL_INT,
    "int2": TypeKind.SMALL_INT,
    "integer": TypeKind.INTEGER,
    "int": TypeKind.INTEGER,
    "int4": TypeKind.INTEGER,
    "bigint": TypeKind.BIG_INT,
    "int8": TypeKind.BIG_INT,
    "decimal": TypeKind.DECIMAL,
    "numeric": TypeKind.NUMERIC,
    "real": TypeKind.REAL,
    "float4": TypeKind.REAL,
    "double precision": TypeKind.DOUBLE_PRECISION,
    "double": TypeKind.DOUBLE_PRECISION,
    "float8": TypeKind.DOUBLE_PRECISION,
    "smallserial": TypeKind.SMALL_SERIAL,
    "serial2": TypeKind.SMALL_SERIAL,
    "serial": TypeKind.SERIAL,
    "serial4": TypeKind.SERIAL,
    "bigserial": TypeKind.BIG_SERIAL,
    "serial8": TypeKind.BIG_SERIAL,
    "money": TypeKind.MONEY,
    "character varying": TypeKind.VARCHAR,
    "varchar": TypeKind.VARCHAR,
    "character": TypeKind.CHAR,
    "char": TypeKind.CHAR,
    "text": TypeKind.TEXT,
    "bytea": TypeKind.BYTEA,
    "timestamp": TypeKind.TIMESTAMP,
    "timestamp without time zone": TypeKind.TIMESTAMP,
    "timestamp with time zone": TypeKind.TIMESTAMP_WITH_TIME_ZONE,
    "date": TypeKind.DATE,
    "time": TypeKind.TIME,
    "time without time zone": TypeKind.TIME,
    "time with time zone": TypeKind.TIME_WITH_TIME_ZONE,
    "interval": TypeKind.INTERVAL,
    "boolean": TypeKind.BOOLEAN,
    "point": TypeKind.POINT,
    "line": TypeKind.LINE,
    "lseg": TypeKind.LSEG,
    "box": TypeKind.BOX,
    "path": TypeKind.PATH,
    "polygon": TypeKind.POLYGON,
    "circle": TypeKind.CIRCLE,
    "cidr": TypeKind.CIDR,
    "inet": TypeKind.INET,
    "macaddr": TypeKind.MAC_ADDR,
    "macaddr8": TypeKind.MAC_ADDR8,
    "bit": TypeKind.BIT,
    "tsvector": TypeKind.TS_VECTOR,
    "tsquery": TypeKind.TS_QUERY,
    "uuid": TypeKind.UUID,
    "xml": TypeKind.XML,
    "json": TypeKind.JSON,
    "jsonb": TypeKind.JSON_BINARY,
    "array": TypeKind.ARRAY,
    "int4range": TypeKind.INT4_RANGE,
    "int8range": TypeKind.INT8_RANGE,
    "numrange": TypeKind.NUM_RANGE,
    "tsrange": TypeKind.TS_RANGE,
    "tstzrange": TypeKind.TS_TZ_RANGE,
    "daterange": TypeKind.DATE_RANGE,
    "pg_lsn": TypeKind.PG_LSN,
    "user-defined": TypeKind.ENUM,
}

TypeAttr = Union[
    ArbitraryPrecisionNumericAttr, StringAttr, TimeAttr, IntervalAttr, BitAttr, EnumDef, str, None
]


@dataclass
class Type:
    """A column type.

    ``attr`` holds the attribute object belonging to the kind (filled with a
    default when omitted), the raw type name for ``UNKNOWN``, and ``None``
    for kinds that take no attributes.
    """

    kind: TypeKind
    attr: TypeAttr = None

    def __post_init__(self) -> None:
        if self.kind is TypeKind.UNKNOWN:
            if not isinstance(self.attr, str):
                raise ValueError("an unknown type needs its name as a string")
            return
        attr_class = _ATTR_CLASSES.get(self.kind)
        if attr_class is None:
            if self.attr is not None:
                raise TypeError(f"type {self.kind.value} takes no attributes")
        elif self.attr is None:
            self.attr = attr_class()
        elif not isinstance(self.attr, attr_class):
            raise TypeError(
                f"type {self.kind.value} needs {attr_class.__name__}, "
                f"got {type(self.attr).__name__}"
            )

    @classmethod
    def from_str(cls, name: str) -> Type:
        """Map a type name, case-insensitively, to a type with default attributes."""
        kind = _NAMES.get(name.lower())
        if kind is None:
            return cls(TypeKind.UNKNOWN, name)
        return cls(kind)

    def has_numeric_attr(self) -> bool:
        return self.kind in (TypeKind.NUMERIC, TypeKind.DECIMAL)

    def has_string_attr(self) -> bool:
        return self.kind in (TypeKind.VARCHAR, TypeKind.CHAR)

    def has_time_attr(self) -> bool:
        return self.kind in (
            TypeKind.TIMESTAMP,
            TypeKind.TIMESTAMP_WITH_TIME_ZONE,
            TypeKind.TIME,
            TypeKind.TIME_WITH_TIME_ZONE,
        )

    def has_interval_attr(self) -> bool:
        return self.kind is TypeKind.INTERVAL

    def has_bit_attr(self) -> bool:
        return self.kind is TypeKind.BIT

    def has_enum_attr(self) -> bool:
        return self.kind is TypeKind.ENUM