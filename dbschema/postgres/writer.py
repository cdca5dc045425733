"""Render PostgreSQL schema definitions as SQL statements."""

from __future__ import annotations

from dbschema.postgres.definitions import (
    ColumnInfo,
    PrimaryKey,
    References,
    Schema,
    TableDef,
    Unique,
)
from dbschema.postgres.queries import _ident
from dbschema.postgres.types import EnumDef, Type, TypeKind

_INTERVAL_FIELDS = frozenset(
    {
        "YEAR",
        "MONTH",
        "DAY",
        "HOUR",
        "MINUTE",
        "SECOND",
        "YEAR TO MONTH",
        "DAY TO HOUR",
        "DAY TO MINUTE",
        "DAY TO SECOND",
        "HOUR TO MINUTE",
        "HOUR TO SECOND",
        "MINUTE TO SECOND",
    }
)

_PLAIN: dict[TypeKind, str] = {
    TypeKind.SMALL_INT: "smallint",
    TypeKind.INTEGER: "integer",
    TypeKind.BIG_INT: "bigint",
    TypeKind.REAL: "real",
    TypeKind.DOUBLE_PRECISION: "double precision",
    TypeKind.SMALL_SERIAL: "smallserial",
    TypeKind.SERIAL: "serial",
    TypeKind.BIG_SERIAL: "bigserial",
    TypeKind.MONEY: "money",
    TypeKind.TEXT: "text",
    TypeKind.BYTEA: "bytea",
    TypeKind.DATE: "date",
    TypeKind.BOOLEAN: "bool",
    TypeKind.UUID: "uuid",
    TypeKind.JSON: "json",
    TypeKind.JSON_BINARY: "jsonb",
    TypeKind.POINT: "point",
    TypeKind.LINE: "line",
    TypeKind.LSEG: "lseg",
    TypeKind.BOX: "box",
    TypeKind.PATH: "path",
    TypeKind.POLYGON: "polygon",
    TypeKind.CIRCLE: "circle",
    TypeKind.CIDR: "cidr",
    TypeKind.INET: "inet",
    TypeKind.MAC_ADDR: "macaddr",
    TypeKind.MAC_ADDR8: "macaddr8",
    TypeKind.TS_VECTOR: "tsvector",
    TypeKind.TS_QUERY: "tsquery",
    TypeKind.XML: "xml",
    TypeKind.ARRAY: "array",
    TypeKind.INT4_RANGE: "int4range",
    TypeKind.INT8_RANGE: "int8range",
    TypeKind.NUM_RANGE: "numrange",
    TypeKind.TS_RANGE: "tsrange",
    TypeKind.TS_TZ_RANGE: "tstzrange",
    TypeKind.DATE_RANGE: "daterange",
    TypeKind.PG_LSN: "pg_lsn",
}

_SERIAL_OF = {
    TypeKind.SMALL_INT: TypeKind.SMALL_SERIAL,
    TypeKind.INTEGER: TypeKind.SERIAL,
    TypeKind.BIG_INT: TypeKind.BIG_SERIAL,
}


def _string_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _with_len(name: str, length: int | None) -> str:
    return name if length is None else f"{name}({length})"


def column_type_sql(col_type: Type) -> str:
    """The SQL spelling of a column type."""
    kind, attr = col_type.kind, col_type.attr
    plain = _PLAIN.get(kind)
    if plain is not None:
        return plain
    if kind in (TypeKind.DECIMAL, TypeKind.NUMERIC):
        if attr.precision is None and attr.scale is None:
            return "decimal"
        return f"decimal({attr.precision or 0}, {attr.scale or 0})"
    if kind is TypeKind.VARCHAR:
        return _with_len("varchar", attr.length)
    if kind is TypeKind.CHAR:
        return _with_len("char", attr.length)
    if kind is TypeKind.TIMESTAMP:
        return _with_len("timestamp", attr.precision)
    if kind is TypeKind.TIMESTAMP_WITH_TIME_ZONE:
        return _with_len("timestamp", attr.precision) + " with time zone"
    if kind in (TypeKind.TIME, TypeKind.TIME_WITH_TIME_ZONE):
        return _with_len("time", attr.precision)
    if kind is TypeKind.INTERVAL:
        sql = "interval"
        if attr.field is not None and attr.field.upper() in _INTERVAL_FIELDS:
            sql += f" {attr.field.upper()}"
        if attr.precision is not None:
            sql += f"({attr.precision})"
        return sql
    if kind is TypeKind.BIT:
        return _with_len("bit", attr.length)
    if kind is TypeKind.ENUM:
        return _ident(attr.typename)
    if kind is TypeKind.UNKNOWN:
        return attr
    raise ValueError(f"unsupported column type {kind.value}")


def write_column(column: ColumnInfo) -> str:
    """The column definition as it appears inside CREATE TABLE."""
    col_type = column.col_type
    extras: list[str] = []
    to_serial = column.is_identity
    if column.default is not None:
        if column.default.value.startswith("nextval"):
            to_serial = True
        else:
            extras.append(f"DEFAULT {column.default.value}")
    if to_serial and col_type.kind in _SERIAL_OF:
        col_type = Type(_SERIAL_OF[col_type.kind])
    parts = [_ident(column.name), column_type_sql(col_type)]
    if column.not_null is not None:
        parts.append("NOT NULL")
    if extras:
        parts.append(" ".join(extras))
    return " ".join(parts)


def _column_list(columns: list[str]) -> str:
    return "(" + ", ".join(_ident(c) for c in columns) + ")"


def write_primary_key(key: PrimaryKey) -> str:
    """The primary key as a table constraint."""
    return f"CONSTRAINT {_ident(key.name)} PRIMARY KEY {_column_list(key.columns)}"


def write_unique(unique: Unique) -> str:
    """The unique constraint as a table constraint."""
    return f"CONSTRAINT {_ident(unique.name)} UNIQUE {_column_list(unique.columns)}"


def write_references(references: References) -> str:
    """The foreign key as a table constraint."""
    sql = (
        f"CONSTRAINT {_ident(references.name)}"
        f" FOREIGN KEY {_column_list(references.columns)}"
        f" REFERENCES {_ident(references.table)} {_column_list(references.foreign_columns)}"
    )
    if references.on_delete is not None:
        sql += f" ON DELETE {references.on_delete.value}"
    if references.on_update is not None:
        sql += f" ON UPDATE {references.on_update.value}"
    return sql


def write_enum(enum_def: EnumDef) -> str:
    """A CREATE TYPE statement for the enum."""
    values = ", ".join(_string_literal(v) for v in enum_def.values)
    return f"CREATE TYPE {_ident(enum_def.typename)} AS ENUM ({values})"


def write_table(table: TableDef) -> str:
    """A CREATE TABLE statement with columns, keys and foreign keys."""
    items = [write_column(c) for c in table.columns]
    items += [write_primary_key(k) for k in table.primary_key_constraints]
    items += [write_unique(u) for u in table.unique_constraints]
    items += [write_references(r) for r in table.reference_constraints]
    return f"CREATE TABLE {_ident(table.info.name)} ( " + ", ".join(items) + " )"


def write_schema(schema: Schema) -> list[str]:
    """One CREATE TABLE statement for each table of the schema."""
    return [write_table(table) for table in schema.tables]