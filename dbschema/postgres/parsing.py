"""Turn rows from PostgreSQL's information schema into schema definitions."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, Mapping, Sequence, TypeVar

from dbschema.postgres.definitions import (
    Check,
    ColumnExpression,
    ColumnInfo,
    ColumnType,
    Constraint,
    ForeignKeyAction,
    PrimaryKey,
    References,
    TableInfo,
    Unique,
    not_null_from_bool,
)
from dbschema.postgres.queries import (
    ColumnQueryResult,
    TableConstraintsQueryResult,
    TableQueryResult,
)
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

_U16_MAX = 0xFFFF
_T = TypeVar("_T")


def yes_or_no_to_bool(value: str) -> bool:
    """True exactly when ``value`` is "YES", ignoring case."""
    return value.upper() == "YES"


def _to_u16(value: int | None) -> int | None:
    """Keep ``value`` only if it fits in an unsigned 16-bit integer."""
    if value is None or not 0 <= value <= _U16_MAX:
        return None
    return value


def _require(value: _T | None, what: str) -> _T:
    if value is None:
        raise ValueError(f"missing {what}")
    return value


def parse_column_query_result(result: ColumnQueryResult) -> ColumnInfo:
    """Build a column definition from one row of the columns query."""
    return ColumnInfo(
        name=result.column_name,
        col_type=parse_column_type(result),
        default=ColumnExpression.from_optional(result.column_default),
        generated=ColumnExpression.from_optional(result.column_generated),
        not_null=not_null_from_bool(not yes_or_no_to_bool(result.is_nullable)),
        is_identity=yes_or_no_to_bool(result.is_identity),
    )


def parse_column_type(result: ColumnQueryResult) -> ColumnType:
    """The column's type with the attributes that the row carries for it."""
    ctype = Type.from_str(result.column_type)
    if ctype.has_numeric_attr():
        ctype = parse_numeric_attributes(
            result.numeric_precision,
            result.numeric_precision_radix,
            result.numeric_scale,
            ctype,
        )
    if ctype.has_string_attr():
        ctype = parse_string_attributes(result.character_maximum_length, ctype)
    if ctype.has_time_attr():
        ctype = parse_time_attributes(result.datetime_precision, ctype)
    if ctype.has_interval_attr():
        ctype = parse_interval_attributes(
            result.interval_type, result.interval_precision, ctype
        )
    if ctype.has_bit_attr():
        ctype = parse_bit_attributes(result.character_maximum_length, ctype)
    if ctype.has_enum_attr():
        ctype = parse_enum_attributes(result.udt_name, ctype)
    return ctype


def parse_numeric_attributes(
    precision: int | None,
    precision_radix: int | None,
    scale: int | None,
    ctype: ColumnType,
) -> ColumnType:
    """Set precision and scale on a decimal or numeric type."""
    if not ctype.has_numeric_attr():
        raise ValueError("numeric attributes need a decimal or numeric type")
    attr = ArbitraryPrecisionNumericAttr(precision=_to_u16(precision), scale=_to_u16(scale))
    return Type(ctype.kind, attr)


def parse_string_attributes(
    character_maximum_length: int | None, ctype: ColumnType
) -> ColumnType:
    """Set the length on a varchar or char type."""
    if not ctype.has_string_attr():
        raise ValueError("string attributes need a varchar or char type")
    return Type(ctype.kind, StringAttr(length=_to_u16(character_maximum_length)))


def parse_time_attributes(datetime_precision: int | None, ctype: ColumnType) -> ColumnType:
    """Set the fractional-seconds precision on a time or timestamp type."""
    if not ctype.has_time_attr():
        raise ValueError("time attributes need a time or timestamp type")
    return Type(ctype.kind, TimeAttr(precision=_to_u16(datetime_precision)))


def parse_interval_attributes(
    interval_type: str | None, interval_precision: int | None, ctype: ColumnType
) -> ColumnType:
    """Set the field and precision on an interval type."""
    if not ctype.has_interval_attr():
        raise ValueError("interval attributes need an interval type")
    attr = IntervalAttr(field=interval_type, precision=_to_u16(interval_precision))
    return Type(ctype.kind, attr)


def parse_bit_attributes(character_maximum_length: int | None, ctype: ColumnType) -> ColumnType:
    """Set the length on a bit type."""
    if not ctype.has_bit_attr():
        raise ValueError("bit attributes need a bit type")
    return Type(ctype.kind, BitAttr(length=_to_u16(character_maximum_length)))


def parse_enum_attributes(udt_name: str | None, ctype: ColumnType) -> ColumnType:
    """Set the enum type name from the column's user-defined type name."""
    if not ctype.has_enum_attr():
        raise ValueError("enum attributes need a user-defined enum type")
    if udt_name is None:
        raise ValueError("an enum column needs its udt_name")
    values = list(ctype.attr.values) if isinstance(ctype.attr, EnumDef) else []
    return Type(ctype.kind, EnumDef(values=values, typename=udt_name))


def parse_enum_variants(column: ColumnInfo, enums: Mapping[str, Sequence[str]]) -> ColumnInfo:
    """The column with its enum labels filled in from ``enums``, keyed by type name."""
    ctype = column.col_type
    if ctype.kind is not TypeKind.ENUM or not isinstance(ctype.attr, EnumDef):
        return column
    values = enums.get(ctype.attr.typename)
    if values is None:
        return column
    new_type = Type(TypeKind.ENUM, EnumDef(values=list(values), typename=ctype.attr.typename))
    return replace(column, col_type=new_type)


def parse_table_query_result(result: TableQueryResult) -> TableInfo:
    """Build the table information from one row of the tables query."""
    of_type = (
        None
        if result.user_defined_type_name is None
        else Type.from_str(result.user_defined_type_name)
    )
    return TableInfo(name=result.table_name, of_type=of_type)


def parse_table_constraint_query_results(
    results: Iterable[TableConstraintsQueryResult],
) -> Iterator[Constraint]:
    """Group constraint rows into constraints.

    The rows are assumed to be ordered by table name, constraint name and
    ordinal position. Iteration stops at the first row of an unsupported
    constraint type.
    """
    rows = iter(results)
    pending: TableConstraintsQueryResult | None = None

    def rest_of(name: str) -> Iterator[TableConstraintsQueryResult]:
        nonlocal pending
        for row in rows:
            if row.constraint_name != name:
                pending = row
                return
            yield row

    while True:
        if pending is not None:
            result, pending = pending, None
        else:
            result = next(rows, None)
            if result is None:
                return

        name = result.constraint_name
        kind = result.constraint_type

        if kind == "CHECK":
            yield Check(
                name=name,
                expr=_require(result.check_clause, "check clause"),
                no_inherit=False,
            )
        elif kind == "FOREIGN KEY":
            columns = [_require(result.column_name, "column name")]
            table = _require(result.referential_key_table_name, "referenced table")
            foreign_columns = [
                _require(result.referential_key_column_name, "referenced column")
            ]
            on_update = ForeignKeyAction.from_name(result.update_rule or "")
            on_delete = ForeignKeyAction.from_name(result.delete_rule or "")
            for row in rest_of(name):
                if row.column_name is not None and row.referential_key_column_name is not None:
                    columns.append(row.column_name)
                    foreign_columns.append(row.referential_key_column_name)
            yield References(
                name=name,
                columns=columns,
                table=table,
                foreign_columns=foreign_columns,
                on_update=on_update,
                on_delete=on_delete,
            )
        elif kind in ("PRIMARY KEY", "UNIQUE"):
            columns = [_require(result.column_name, "column name")]
            columns.extend(_require(row.column_name, "column name") for row in rest_of(name))
            if kind == "PRIMARY KEY":
                yield PrimaryKey(name=name, columns=columns)
            else:
                yield Unique(name=name, columns=columns)
        else:
            return