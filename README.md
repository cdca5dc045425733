# dbschema

Read the structure of a PostgreSQL schema through `information_schema` and
`pg_catalog`, hold it as plain Python dataclasses, and render it as
`CREATE TABLE` and `CREATE TYPE ... AS ENUM` SQL.

The package has no dependencies outside the standard library. The test suite
uses pytest and pytest-asyncio, available through the `test` extra.

## Modules

- `dbschema.postgres.types`: `Type`, made of a `TypeKind` and an attribute
  record (`ArbitraryPrecisionNumericAttr`, `StringAttr`, `TimeAttr`,
  `IntervalAttr`, `BitAttr`, `EnumDef`). `Type.from_str` maps a type name,
  ignoring case and accepting the usual synonyms (`int4`, `varchar`,
  `float8`, ...), to a `Type`; unrecognised names become
  `TypeKind.UNKNOWN` carrying the name.
- `dbschema.postgres.definitions`: `Schema`, `TableDef`, `TableInfo`,
  `ColumnInfo`, `ColumnExpression`, `NotNull` and the constraints `Check`,
  `Unique`, `PrimaryKey`, `References` and `Exclusion`, plus
  `ForeignKeyAction` (`ForeignKeyAction.from_name("SET NULL")`).
- `dbschema.postgres.queries`: `SchemaQueryBuilder` builds the `Statement`s
  that list base tables, columns, table constraints and enum labels. A
  `Statement` holds SQL with `$1`, `$2`, ... placeholders and the bound
  `values`; `Statement.to_string()` inlines the values as SQL literals. The
  `TableQueryResult`, `ColumnQueryResult`, `TableConstraintsQueryResult` and
  `EnumQueryResult` classes build records from result rows with `from_row`,
  taking either a sequence in the query's column order or a mapping of
  field names to values.
- `dbschema.postgres.parsing`: turns those records into definitions
  (`parse_column_query_result`, `parse_table_query_result`,
  `parse_table_constraint_query_results`, `parse_enum_variants`, ...).
- `dbschema.postgres.writer`: `write_schema`, `write_table`, `write_column`,
  `write_primary_key`, `write_unique`, `write_references`, `write_enum` and
  `column_type_sql` render definitions as SQL strings. Integer columns that
  are identity columns or whose default starts with `nextval` are written as
  `smallserial`, `serial` or `bigserial`.
- `dbschema.postgres.discovery`: `SchemaDiscovery` runs the queries through
  an `Executor` and assembles a `Schema`, filling in enum labels.
- `dbschema.probe`: `PostgresProbe` builds statements that ask whether a table
  (`has_table`) or a column (`has_column`) exists in the current schema.
- `dbschema.tokenizer`: `tokenize` splits SQL text into `Token`s of a
  `TokenKind` (quoted, unquoted, space, punctuation), and `Parser` walks them
  as a cursor, skipping whitespace.

## Discovering a schema

Give `SchemaDiscovery` a fetch function, or an `Executor` wrapping one. The
function receives a `Statement` and returns its rows, either directly or
from a coroutine; each row is a sequence in the statement's column order or a
mapping of field names.

```python
import asyncio

from dbschema.postgres.discovery import Executor, SchemaDiscovery
from dbschema.postgres.writer import write_enum, write_schema


async def fetch(statement):
    # run statement.sql with statement.values on your connection
    # and return the rows as tuples
    ...


async def main():
    discovery = SchemaDiscovery(Executor(fetch), "public")
    for enum_def in await discovery.discover_enums():
        print(write_enum(enum_def) + ";")
    schema = await discovery.discover()
    for sql in write_schema(schema):
        print(sql + ";")


asyncio.run(main())
```

## Writing tables by hand

```python
from dbschema.postgres.definitions import (
    ColumnInfo, PrimaryKey, TableDef, TableInfo, not_null_from_bool,
)
from dbschema.postgres.types import Type
from dbschema.postgres.writer import write_table

table = TableDef(
    info=TableInfo(name="actor"),
    columns=[
        ColumnInfo(name="actor_id", col_type=Type.from_str("integer"),
                   not_null=not_null_from_bool(True), is_identity=True),
        ColumnInfo(name="first_name", col_type=Type.from_str("text")),
    ],
    primary_key_constraints=[PrimaryKey(name="actor_pkey", columns=["actor_id"])],
)
print(write_table(table))
# CREATE TABLE "actor" ( "actor_id" serial NOT NULL, "first_name" text,
#   CONSTRAINT "actor_pkey" PRIMARY KEY ("actor_id") )
```

## What it does not do

- It opens no database connections; every query goes through the fetch
  function you supply.
- It covers PostgreSQL only.
- It has no command-line tool.
- The writer renders primary keys, unique constraints and foreign keys;
  check and exclusion constraints are discovered but not written out.
- `dbschema.tokenizer` splits text into tokens; it does not parse SQL
  statements into definitions.

## Tests

The tests live in `tests/` and run with pytest once the `test` extra is
installed.