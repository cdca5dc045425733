"""Discover a PostgreSQL schema by querying its information schema."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, Union

from dbschema.postgres.definitions import (
    Check,
    ColumnInfo,
    Exclusion,
    NotNull,
    PrimaryKey,
    References,
    Schema,
    TableDef,
    TableInfo,
    Unique,
)
from dbschema.postgres.definitions import Constraint
from dbschema.postgres.parsing import (
    parse_column_query_result,
    parse_enum_variants,
    parse_table_constraint_query_results,
    parse_table_query_result,
)
from dbschema.postgres.queries import (
    ColumnQueryResult,
    EnumQueryResult,
    Row,
    SchemaQueryBuilder,
    Statement,
    TableConstraintsQueryResult,
    TableQueryResult,
)
from dbschema.postgres.types import EnumDef

log = logging.getLogger(__name__)

FetchResult = Union[Iterable[Row], Awaitable[Iterable[Row]]]
Fetch = Callable[[Statement], FetchResult]


class Executor:
    """Runs statements through a caller-supplied fetch function.

    ``fetch`` takes a :class:`Statement` and returns its rows, either directly
    or as an awaitable. Each row is a sequence in the statement's column order
    or a mapping of column names to values.
    """

    def __init__(self, fetch: Fetch) -> None:
        self._fetch = fetch

    async def fetch_all(self, statement: Statement) -> list[Row]:
        """All rows that ``statement`` yields."""
        log.debug("%s, %r", statement.sql, statement.values)
        rows = self._fetch(statement)
        if inspect.isawaitable(rows):
            rows = await rows
        return list(rows)


class SchemaDiscovery:
    """Queries a database and assembles the definitions of one schema."""

    def __init__(self, executor: Executor | Fetch, schema: str) -> None:
        self.query = SchemaQueryBuilder()
        self.executor = executor if isinstance(executor, Executor) else Executor(executor)
        self.schema = schema

    async def discover(self) -> Schema:
        """The whole schema: its tables with columns, constraints and enum labels."""
        enums = {enum_def.typename: enum_def.values for enum_def in await self.discover_enums()}
        infos = await self.discover_tables()
        tables = await asyncio.gather(*(self.discover_table(info) for info in infos))
        for table in tables:
            table.columns = [parse_enum_variants(col, enums) for col in table.columns]
        return Schema(schema=self.schema, tables=list(tables))

    async def discover_tables(self) -> list[TableInfo]:
        """The base tables of the schema."""
        rows = await self.executor.fetch_all(self.query.query_tables(self.schema))
        tables = []
        for row in rows:
            result = TableQueryResult.from_row(row)
            log.debug("%r", result)
            table = parse_table_query_result(result)
            log.debug("%r", table)
            tables.append(table)
        return tables

    async def discover_table(self, info: TableInfo) -> TableDef:
        """The columns and constraints of one table."""
        columns = await self.discover_columns(self.schema, info.name)
        constraints = await self.discover_constraints(self.schema, info.name)
        table = TableDef(info=info, columns=columns)
        for constraint in constraints:
            if isinstance(constraint, Check):
                table.check_constraints.append(constraint)
            elif isinstance(constraint, NotNull):
                table.not_null_constraints.append(constraint)
            elif isinstance(constraint, Unique):
                table.unique_constraints.append(constraint)
            elif isinstance(constraint, PrimaryKey):
                table.primary_key_constraints.append(constraint)
            elif isinstance(constraint, References):
                table.reference_constraints.append(constraint)
            elif isinstance(constraint, Exclusion):
                table.exclusion_constraints.append(constraint)
        return table

    async def discover_columns(self, schema: str, table: str) -> list[ColumnInfo]:
        """The columns of ``table`` in ``schema``."""
        rows = await self.executor.fetch_all(self.query.query_columns(schema, table))
        columns = []
        for row in rows:
            result = ColumnQueryResult.from_row(row)
            log.debug("%r", result)
            column = parse_column_query_result(result)
            log.debug("%r", column)
            columns.append(column)
        return columns

    async def discover_constraints(self, schema: str, table: str) -> list[Constraint]:
        """The constraints of ``table`` in ``schema``."""
        rows = await self.executor.fetch_all(self.query.query_table_constraints(schema, table))
        results = [TableConstraintsQueryResult.from_row(row) for row in rows]
        for result in results:
            log.debug("%r", result)
        constraints: list[Any] = list(parse_table_constraint_query_results(results))
        for constraint in constraints:
            log.debug("%r", constraint)
        return constraints

    async def discover_enums(self) -> list[EnumDef]:
        """Every enum type in the database with its labels."""
        rows = await self.executor.fetch_all(self.query.query_enums())
        grouped: dict[str, list[str]] = {}
        for row in rows:
            result = EnumQueryResult.from_row(row)
            log.debug("%r", result)
            grouped.setdefault(result.typename, []).append(result.enumlabel)
        return [EnumDef(values=values, typename=name) for name, values in grouped.items()]