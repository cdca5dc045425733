"""Statements that probe a PostgreSQL database for tables and columns."""

from __future__ import annotations

from dbschema.postgres.queries import (
    BASE_TABLE,
    INFORMATION_SCHEMA,
    Statement,
    _ident,
    _Params,
)


class PostgresProbe:
    """Builds statements asking whether a table or column exists in the current schema."""

    def current_schema(self) -> str:
        """The SQL expression naming the current schema."""
        return "CURRENT_SCHEMA()"

    def _tables_sql(self, params: _Params, filters: list[tuple[str, str]]) -> str:
        conditions = [
            f"{self.current_schema()} = {_ident('tables', 'table_schema')}",
            f"{_ident('table_type')} = {params.bind(BASE_TABLE)}",
        ]
        conditions += [f"{_ident(column)} = {params.bind(value)}" for column, value in filters]
        return (
            f"SELECT {_ident('table_name')} AS {_ident('table_name')}"
            f" FROM {_ident(INFORMATION_SCHEMA, 'tables')}"
            " WHERE " + " AND ".join(conditions)
        )

    def query_tables(self) -> Statement:
        """List the base tables of the current schema."""
        params = _Params()
        sql = self._tables_sql(params, [])
        return Statement(sql, tuple(params.values))

    def has_table(self, table: str) -> Statement:
        """A statement yielding one boolean: whether ``table`` exists."""
        params = _Params()
        inner = self._tables_sql(params, [("table_name", table)])
        sql = (
            f"SELECT COUNT(*) > 0 AS {_ident('has_table')}"
            f" FROM ({inner}) AS {_ident('subquery')}"
        )
        return Statement(sql, tuple(params.values))

    def has_column(self, table: str, column: str) -> Statement:
        """A statement yielding one boolean: whether ``table`` has ``column``."""
        params = _Params()
        conditions = [
            f"{self.current_schema()} = {_ident('columns', 'table_schema')}",
            f"{_ident('table_name')} = {params.bind(table)}",
            f"{_ident('column_name')} = {params.bind(column)}",
        ]
        sql = (
            f"SELECT COUNT(*) > 0 AS {_ident('has_column')}"
            f" FROM {_ident(INFORMATION_SCHEMA, 'columns')}"
            " WHERE " + " AND ".join(conditions)
        )
        return Statement(sql, tuple(params.values))