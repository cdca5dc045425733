"""Definitions describing a discovered PostgreSQL schema."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from dbschema.postgres.types import Type

ColumnType = Type


@dataclass(frozen=True)
class ColumnExpression:
    """A SQL expression attached to a column, such as a default."""

    value: str

    @classmethod
    def from_optional(cls, value: str | None) -> ColumnExpression | None:
        return None if value is None else cls(value)


@dataclass(frozen=True)
class NotNull:
    """The constraint that a value must not be null."""


def not_null_from_bool(value: bool) -> NotNull | None:
    return NotNull() if value else None


@dataclass
class ColumnInfo:
    name: str
    col_type: ColumnType
    default: ColumnExpression | None = None
    generated: ColumnExpression | None = None
    not_null: NotNull | None = None
    is_identity: bool = False


@dataclass
class Check:
    """A Boolean expression every row must satisfy."""

    name: str
    expr: str
    no_inherit: bool = False


@dataclass
class Unique:
    name: str
    columns: list[str] = field(default_factory=list)


@dataclass
class PrimaryKey:
    name: str
    columns: list[str] = field(default_factory=list)


class ForeignKeyAction(enum.Enum):
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO ACTION"

    @classmethod
    def from_name(cls, name: str) -> ForeignKeyAction | None:
        """The action with the given SQL name, or None if there is none."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class References:
    """A foreign key from columns of this table to columns of another."""

    name: str
    columns: list[str]
    table: str
    foreign_columns: list[str]
    on_update: ForeignKeyAction | None = None
    on_delete: ForeignKeyAction | None = None


@dataclass
class Exclusion:
    name: str
    using: str
    columns: list[str]
    operation: str


Constraint = Union[Check, NotNull, Unique, PrimaryKey, References, Exclusion]


@dataclass
class TableInfo:
    name: str
    of_type: Type | None = None


@dataclass
class TableDef:
    info: TableInfo
    columns: list[ColumnInfo] = field(default_factory=list)
    check_constraints: list[Check] = field(default_factory=list)
    not_null_constraints: list[NotNull] = field(default_factory=list)
    unique_constraints: list[Unique] = field(default_factory=list)
    primary_key_constraints: list[PrimaryKey] = field(default_factory=list)
    reference_constraints: list[References] = field(default_factory=list)
    exclusion_constraints: list[Exclusion] = field(default_factory=list)


@dataclass
class Schema:
    schema: str
    tables: list[TableDef] = field(default_factory=list)