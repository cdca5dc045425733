import pytest

from dbschema.postgres.definitions import (
    ColumnExpression,
    ColumnInfo,
    ForeignKeyAction,
    NotNull,
    PrimaryKey,
    References,
    Schema,
    TableDef,
    TableInfo,
    Unique,
)
from dbschema.postgres.types import (
    ArbitraryPrecisionNumericAttr,
    EnumDef,
    IntervalAttr,
    StringAttr,
    Type,
    TypeKind,
)
from dbschema.postgres.writer import (
    column_type_sql,
    write_column,
    write_enum,
    write_primary_key,
    write_references,
    write_schema,
    write_table,
    write_unique,
)


@pytest.mark.parametrize(
    "name",
    ["point", "line", "lseg", "box", "path", "polygon", "circle", "cidr", "inet",
     "macaddr", "macaddr8", "tsvector", "tsquery", "xml", "int4range", "int8range",
     "numrange", "tsrange", "tstzrange", "daterange", "pg_lsn", "uuid", "json", "jsonb"],
)
def test_custom_type_names_round_trip(name):
    assert column_type_sql(Type.from_str(name)) == name


def test_unknown_type_written_verbatim():
    assert column_type_sql(Type(TypeKind.UNKNOWN, "hello")) == "hello"


def test_varchar_length():
    assert column_type_sql(Type(TypeKind.VARCHAR, StringAttr(length=45))) == "varchar(45)"


def test_decimal_without_attrs_differs_from_with():
    plain = column_type_sql(Type(TypeKind.NUMERIC))
    sized = column_type_sql(
        Type(TypeKind.NUMERIC, ArbitraryPrecisionNumericAttr(precision=10, scale=2))
    )
    assert plain == column_type_sql(Type(TypeKind.DECIMAL))
    assert "10" in sized and "2" in sized
    assert sized.startswith(plain)


def test_invalid_interval_field_ignored():
    bad = Type(TypeKind.INTERVAL, IntervalAttr(field="FORTNIGHT"))
    assert column_type_sql(bad) == column_type_sql(Type(TypeKind.INTERVAL))


def test_time_with_time_zone_written_as_time():
    assert column_type_sql(Type(TypeKind.TIME_WITH_TIME_ZONE)) == column_type_sql(
        Type(TypeKind.TIME)
    )


def test_nextval_default_becomes_serial():
    with_seq = ColumnInfo(
        "id", Type.from_str("integer"), default=ColumnExpression("nextval('id_seq')"),
        not_null=NotNull(),
    )
    serial = ColumnInfo("id", Type.from_str("serial"), not_null=NotNull())
    assert write_column(with_seq) == write_column(serial)
    assert "nextval" not in write_column(with_seq)


def test_identity_becomes_big_serial():
    ident = ColumnInfo("id", Type.from_str("bigint"), is_identity=True)
    assert write_column(ident) == write_column(ColumnInfo("id", Type.from_str("bigserial")))


def test_default_and_not_null():
    col = ColumnInfo("n", Type.from_str("integer"), default=ColumnExpression("0"),
                     not_null=NotNull())
    out = write_column(col)
    assert out.endswith("DEFAULT 0")
    assert "NOT NULL" in out
    assert "NOT NULL" not in write_column(ColumnInfo("n", Type.from_str("integer")))


def test_enum_statement_quotes_values():
    out = write_enum(EnumDef(values=["a", "it's"], typename="mood"))
    assert "'it''s'" in out
    assert '"mood"' in out


def test_constraints_mention_names_and_columns():
    pk = write_primary_key(PrimaryKey("pk", ["a", "b"]))
    uq = write_unique(Unique("uq", ["c"]))
    assert '"pk"' in pk and '("a", "b")' in pk
    assert '"uq"' in uq and '("c")' in uq


def test_references_actions_order():
    out = write_references(
        References("fk", ["actor_id"], "actor", ["actor_id"],
                   on_update=ForeignKeyAction.CASCADE, on_delete=ForeignKeyAction.RESTRICT)
    )
    assert out.endswith("ON DELETE RESTRICT ON UPDATE CASCADE")
    no_actions = write_references(References("fk", ["actor_id"], "actor", ["actor_id"]))
    assert "ON" not in no_actions.split("REFERENCES")[1]


def test_table_and_schema():
    table = TableDef(
        info=TableInfo("t"),
        columns=[ColumnInfo("a", Type.from_str("text"))],
        primary_key_constraints=[PrimaryKey("pk", ["a"])],
    )
    sql = write_table(table)
    assert sql.startswith('CREATE TABLE "t" ( ')
    assert sql.endswith(" )")
    assert write_column(table.columns[0]) in sql
    assert write_primary_key(table.primary_key_constraints[0]) in sql
    assert write_schema(Schema("public", [table, table])) == [sql, sql]