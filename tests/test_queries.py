import pytest

from dbschema.postgres.queries import (
    ColumnQueryResult,
    EnumQueryResult,
    SchemaQueryBuilder,
    Statement,
    TableConstraintsQueryResult,
    TableQueryResult,
)


@pytest.fixture
def builder():
    return SchemaQueryBuilder()


def test_query_tables_binds_schema_and_table_type(builder):
    stmt = builder.query_tables("public")
    assert stmt.values == ("public", "BASE TABLE")
    assert '"information_schema"."tables"' in stmt.sql
    assert stmt.sql.startswith('SELECT "table_name", "user_defined_type_schema"')


def test_query_tables_to_string_inlines_values(builder):
    text = builder.query_tables("public").to_string()
    assert "'public'" in text
    assert "'BASE TABLE'" in text
    assert "$1" not in text and "$2" not in text


def test_query_columns_selects_all_fields_in_order(builder):
    stmt = builder.query_columns("public", "actor")
    assert stmt.values == ("public", "actor")
    select_part = stmt.sql.split(" FROM ")[0]
    names = [n.strip().strip('"') for n in select_part[len("SELECT "):].split(",")]
    assert names[0] == "column_name"
    assert names[1] == "data_type"
    assert names[-1] == "udt_name"
    assert len(names) == len(ColumnQueryResult.__dataclass_fields__)


def test_query_table_constraints_columns_match_result(builder):
    stmt = builder.query_table_constraints("s", "t")
    select_part = stmt.sql.split(" FROM ")[0]
    assert select_part.count(",") + 1 == len(
        TableConstraintsQueryResult.__dataclass_fields__
    )


def test_query_enums(builder):
    stmt = builder.query_enums()
    assert stmt.values == ()
    assert '"pg_enum"."enumtypid" = "pg_type"."oid"' in stmt.sql
    assert stmt.to_string() == stmt.sql


def test_statement_quotes_values():
    stmt = Statement("SELECT $1, $2, $3", ("O'Brien", None, 5))
    assert stmt.to_string() == "SELECT 'O''Brien', NULL, 5"
    assert str(stmt) == stmt.to_string()


def test_statement_missing_value():
    with pytest.raises(ValueError):
        Statement("SELECT $2", ("a",)).to_string()


def test_table_result_from_row():
    result = TableQueryResult.from_row(("actor", None, None))
    assert result == TableQueryResult(table_name="actor")


def test_enum_result_from_mapping():
    result = EnumQueryResult.from_row({"typename": "mood", "enumlabel": "happy"})
    assert (result.typename, result.enumlabel) == ("mood", "happy")


def test_column_result_from_row_round_trip():
    row = ("id", "integer", None, None, "NO", "YES", 32, 2, 0,
           None, None, None, None, None, "int4")
    result = ColumnQueryResult.from_row(row)
    assert result.column_type == "integer"
    assert result.numeric_precision == 32
    assert result.udt_name == "int4"
    assert tuple(vars(result).values()) == row


def test_constraint_result_from_row_round_trip():
    row = tuple(f"v{i}" for i in range(18))
    result = TableConstraintsQueryResult.from_row(row)
    assert result.constraint_name == "v1"
    assert result.referential_key_column_name == "v17"


def test_from_row_wrong_length():
    with pytest.raises(ValueError):
        TableQueryResult.from_row(("actor",))


def test_from_row_unknown_key():
    with pytest.raises(ValueError):
        EnumQueryResult.from_row({"typename": "mood", "bogus": 1})