"""Queries against PostgreSQL's information schema and catalogs, and their result rows."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Mapping, Sequence, TypeVar, Union

INFORMATION_SCHEMA = "information_schema"
BASE_TABLE = "BASE TABLE"

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")

Row = Union[Sequence[Any], Mapping[str, Any]]
_R = TypeVar("_R")


def _ident(*parts: str) -> str:
    """Quote an identifier, optionally qualified, the PostgreSQL way."""
    return ".".join('"' + part.replace('"', '""') + '"' for part in parts)


def _literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


class _Params:
    """Collects bound values and hands out numbered placeholders."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


@dataclass(frozen=True)
class Statement:
    """A SQL statement with ``$n`` placeholders and the values bound to them."""

    sql: str
    values: tuple[Any, ...] = ()

    def to_string(self) -> str:
        """The statement with every placeholder replaced by its quoted value."""

        def substitute(match: re.Match[str]) -> str:
            index = int(match.group(1)) - 1
            if not 0 <= index < len(self.values):
                raise ValueError(f"no value bound to placeholder {match.group()}")
            return _literal(self.values[index])

        return _PLACEHOLDER_RE.sub(substitute, self.sql)

    def __str__(self) -> str:
        return self.to_string()


def _from_row(cls: type[_R], row: Row) -> _R:
    names = [f.name for f in fields(cls)]  # type: ignore[arg-type]
    if isinstance(row, Mapping):
        unknown = set(row) - set(names)
        if unknown:
            raise ValueError(f"unknown columns for {cls.__name__}: {sorted(unknown)}")
        return cls(**row)
    values = tuple(row)
    if len(values) != len(names):
        raise ValueError(
            f"{cls.__name__} expects {len(names)} columns, got {len(values)}"
        )
    return cls(**dict(zip(names, values)))


@dataclass
class TableQueryResult:
    table_name: str = ""
    user_defined_type_schema: str | None = None
    user_defined_type_name: str | None = None

    @classmethod
    def from_row(cls, row: Row) -> TableQueryResult:
        """Build from a row in the column order of ``query_tables``, or a mapping."""
        return _from_row(cls, row)


@dataclass
class ColumnQueryResult:
    column_name: str = ""
    column_type: str = ""
    column_default: str | None = None
    column_generated: str | None = None
    is_nullable: str = ""
    is_identity: str = ""
    numeric_precision: int | None = None
    numeric_precision_radix: int | None = None
    numeric_scale: int | None = None
    character_maximum_length: int | None = None
    character_octet_length: int | None = None
    datetime_precision: int | None = None
    interval_type: str | None = None
    interval_precision: int | None = None
    udt_name: str | None = None

    @classmethod
    def from_row(cls, row: Row) -> ColumnQueryResult:
        """Build from a row in the column order of ``query_columns``, or a mapping."""
        return _from_row(cls, row)


@dataclass
class TableConstraintsQueryResult:
    constraint_schema: str = ""
    constraint_name: str = ""
    table_schema: str = ""
    table_name: str = ""
    constraint_type: str = ""
    is_deferrable: str = ""
    initially_deferred: str = ""
    check_clause: str | None = None
    column_name: str | None = None
    ordinal_position: int | None = None
    position_in_unique_constraint: int | None = None
    unique_constraint_schema: str | None = None
    unique_constraint_name: str | None = None
    match_option: str | None = None
    update_rule: str | None = None
    delete_rule: str | None = None
    referential_key_table_name: str | None = None
    referential_key_column_name: str | None = None

    @classmethod
    def from_row(cls, row: Row) -> TableConstraintsQueryResult:
        """Build from a row in the column order of ``query_table_constraints``."""
        return _from_row(cls, row)


@dataclass
class EnumQueryResult:
    typename: str = ""
    enumlabel: str = ""

    @classmethod
    def from_row(cls, row: Row) -> EnumQueryResult:
        """Build from a row in the column order of ``query_enums``, or a mapping."""
        return _from_row(cls, row)


_TABLES_COLUMNS = ("table_name", "user_defined_type_schema", "user_defined_type_name")

_COLUMNS_COLUMNS = (
    "column_name",
    "data_type",
    "column_default",
    "generation_expression",
    "is_nullable",
    "is_identity",
    "numeric_precision",
    "numeric_precision_radix",
    "numeric_scale",
    "character_maximum_length",
    "character_octet_length",
    "datetime_precision",
    "interval_type",
    "interval_precision",
    "udt_name",
)

_TC = "table_constraints"
_CC = "check_constraints"
_KCU = "key_column_usage"
_RC = "referential_constraints"
_CCU = "constraint_column_usage"
_RCSQ = "referential_constraints_subquery"


def _all(*conditions: str) -> str:
    return " AND ".join(conditions)


class SchemaQueryBuilder:
    """Builds the statements that discover a schema."""

    def query_tables(self, schema: str) -> Statement:
        params = _Params()
        columns = ", ".join(_ident(c) for c in _TABLES_COLUMNS)
        sql = (
            f"SELECT {columns} FROM {_ident(INFORMATION_SCHEMA, 'tables')} WHERE "
            + _all(
                f"{_ident('table_schema')} = {params.bind(schema)}",
                f"{_ident('table_type')} = {params.bind(BASE_TABLE)}",
            )
        )
        return Statement(sql, tuple(params.values))

    def query_columns(self, schema: str, table: str) -> Statement:
        params = _Params()
        columns = ", ".join(_ident(c) for c in _COLUMNS_COLUMNS)
        sql = (
            f"SELECT {columns} FROM {_ident(INFORMATION_SCHEMA, 'columns')} WHERE "
            + _all(
                f"{_ident('table_schema')} = {params.bind(schema)}",
                f"{_ident('table_name')} = {params.bind(table)}",
            )
        )
        return Statement(sql, tuple(params.values))

    def query_table_constraints(self, schema: str, table: str) -> Statement:
        params = _Params()
        selected = [
            (_TC, "constraint_schema"),
            (_TC, "constraint_name"),
            (_TC, "table_schema"),
            (_TC, "table_name"),
            (_TC, "constraint_type"),
            (_TC, "is_deferrable"),
            (_TC, "initially_deferred"),
            (_CC, "check_clause"),
            (_KCU, "column_name"),
            (_KCU, "ordinal_position"),
            (_KCU, "position_in_unique_constraint"),
            (_RCSQ, "unique_constraint_schema"),
            (_RCSQ, "unique_constraint_name"),
            (_RCSQ, "match_option"),
            (_RCSQ, "update_rule"),
            (_RCSQ, "delete_rule"),
            (_RCSQ, "table_name"),
            (_RCSQ, "column_name"),
        ]

        def eq(left: str, right: str, column_left: str, column_right: str | None = None) -> str:
            return f"{_ident(left, column_left)} = {_ident(right, column_right or column_left)}"

        check_join = _all(
            eq(_TC, _CC, "constraint_name"),
            eq(_TC, _CC, "constraint_catalog"),
            eq(_TC, _CC, "constraint_schema"),
        )
        key_join = _all(
            *(
                eq(_TC, _KCU, column)
                for column in (
                    "constraint_name",
                    "constraint_catalog",
                    "constraint_schema",
                    "table_catalog",
                    "table_schema",
                    "table_name",
                )
            )
        )
        sub_columns = [
            (_RC, "constraint_name"),
            (_RC, "unique_constraint_schema"),
            (_RC, "unique_constraint_name"),
            (_RC, "match_option"),
            (_RC, "update_rule"),
            (_RC, "delete_rule"),
            (_CCU, "table_name"),
            (_CCU, "column_name"),
        ]
        subquery = (
            "SELECT DISTINCT "
            + ", ".join(_ident(*c) for c in sub_columns)
            + f" FROM {_ident(INFORMATION_SCHEMA, _RC)}"
            + f" LEFT JOIN {_ident(INFORMATION_SCHEMA, _CCU)}"
            + f" ON {eq(_RC, _CCU, 'constraint_name')}"
        )
        sql = (
            "SELECT "
            + ", ".join(_ident(*c) for c in selected)
            + f" FROM {_ident(INFORMATION_SCHEMA, _TC)}"
            + f" LEFT JOIN {_ident(INFORMATION_SCHEMA, _CC)} ON {check_join}"
            + f" LEFT JOIN {_ident(INFORMATION_SCHEMA, _KCU)} ON {key_join}"
            + f" LEFT JOIN ({subquery}) AS {_ident(_RCSQ)}"
            + f" ON {eq(_TC, _RCSQ, 'constraint_name')}"
            + " WHERE "
            + _all(
                f"{_ident(_TC, 'table_schema')} = {params.bind(schema)}",
                f"{_ident(_TC, 'table_name')} = {params.bind(table)}",
            )
            + " ORDER BY "
            + ", ".join(
                f"{_ident(*c)} ASC"
                for c in (
                    (_TC, "constraint_name"),
                    (_KCU, "ordinal_position"),
                    (_RCSQ, "unique_constraint_name"),
                    (_RCSQ, "constraint_name"),
                )
            )
        )
        return Statement(sql, tuple(params.values))

    def query_enums(self) -> Statement:
        sql = (
            f"SELECT {_ident('pg_type', 'typname')}, {_ident('pg_enum', 'enumlabel')}"
            f" FROM {_ident('pg_type')}"
            f" INNER JOIN {_ident('pg_enum')}"
            f" ON {_ident('pg_enum', 'enumtypid')} = {_ident('pg_type', 'oid')}"
            f" ORDER BY {_ident('pg_type', 'typname')} ASC,"
            f" {_ident('pg_enum', 'enumlabel')} ASC"
        )
        return Statement(sql)