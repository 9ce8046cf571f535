"""
Unit tests for statement rendering across dialects.
"""
import pytest
from sqldialect.dialect import get_available_dialects, get_dialect
from sqldialect.sql import parse_named_statement

FIELDS = ['id', 'name', 'age']
KEYS = ['id']


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('ansi', 'INSERT INTO "users"("id", "name", "age") VALUES (:id, :name, :age)'),
    ('derby', 'INSERT INTO "users"("id", "name", "age") VALUES (:id, :name, :age)'),
    ('postgresql', 'INSERT INTO "users"("id", "name", "age") VALUES (:id, :name, :age)'),
    ('oracle', 'INSERT INTO "users"("id", "name", "age") VALUES (:id, :name, :age)'),
    ('mysql', 'INSERT INTO `users`(`id`, `name`, `age`) VALUES (:id, :name, :age)'),
    ('sqlserver', 'INSERT INTO [users]([id], [name], [age]) VALUES (:id, :name, :age)'),
], ids=['ansi', 'derby', 'postgresql', 'oracle', 'mysql', 'sqlserver'])
def test_insert_sql(dialect, expected):
    """Test INSERT quoting per dialect"""
    assert get_dialect(dialect).build_insert_sql('users', FIELDS) == expected


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('ansi', 'UPDATE "users" SET "id" = :id, "name" = :name, "age" = :age WHERE "id" = :id'),
    ('mysql', 'UPDATE `users` SET `id` = :id, `name` = :name, `age` = :age WHERE `id` = :id'),
    ('sqlserver', 'UPDATE [users] SET [id] = :id, [name] = :name, [age] = :age WHERE [id] = :id'),
], ids=['ansi', 'mysql', 'sqlserver'])
def test_update_sql(dialect, expected):
    """Test UPDATE quoting per dialect"""
    assert get_dialect(dialect).build_update_sql('users', FIELDS, KEYS) == expected


def test_update_example_round_trip():
    """Test the key field is bound at its SET and WHERE positions"""
    sql = get_dialect('ansi').build_update_sql('tbl', ['id', 'name'], ['id'])
    assert sql == 'UPDATE "tbl" SET "id" = :id, "name" = :name WHERE "id" = :id'

    parsed = parse_named_statement(sql)
    assert parsed.sql == 'UPDATE "tbl" SET "id" = ?, "name" = ? WHERE "id" = ?'
    assert parsed.parameter_map() == {'id': [1, 3], 'name': [2]}


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('ansi', 'DELETE FROM "users" WHERE "id" = :id AND "name" = :name'),
    ('mysql', 'DELETE FROM `users` WHERE `id` = :id AND `name` = :name'),
    ('sqlserver', 'DELETE FROM [users] WHERE [id] = :id AND [name] = :name'),
], ids=['ansi', 'mysql', 'sqlserver'])
def test_delete_sql(dialect, expected):
    assert get_dialect(dialect).build_delete_sql('users', ['id', 'name']) == expected


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('derby', 'SELECT 1 FROM "users" WHERE "id" = :id'),
    ('mysql', 'SELECT 1 FROM `users` WHERE `id` = :id'),
    ('sqlserver', 'SELECT 1 FROM [users] WHERE [id] = :id'),
], ids=['derby', 'mysql', 'sqlserver'])
def test_row_exists_sql(dialect, expected):
    assert get_dialect(dialect).build_row_exists_sql('users', KEYS) == expected


def test_select_sql():
    """Test SELECT with and without condition fields"""
    dialect = get_dialect('postgresql')
    assert dialect.build_select_sql('users', FIELDS, KEYS) == \
        'SELECT "id", "name", "age" FROM "users" WHERE "id" = :id'
    assert dialect.build_select_sql('users', FIELDS) == 'SELECT "id", "name", "age" FROM "users"'
    assert get_dialect('mysql').build_select_sql('users', ['name'], ['age', 'id']) == \
        'SELECT `name` FROM `users` WHERE `age` = :age AND `id` = :id'


class TestUpsert:
    """Tests for native upsert rendering"""

    @pytest.mark.parametrize('dialect', ['ansi', 'derby'])
    def test_unsupported_returns_none(self, dialect):
        """Test dialects without native upsert return None"""
        assert get_dialect(dialect).build_upsert_sql('users', FIELDS, KEYS) is None

    def test_postgres_on_conflict(self):
        sql = get_dialect('postgresql').build_upsert_sql('users', FIELDS, KEYS)
        assert sql == (
            'INSERT INTO "users"("id", "name", "age") VALUES (:id, :name, :age) '
            'ON CONFLICT ("id") DO UPDATE SET "name"=EXCLUDED."name", "age"=EXCLUDED."age"')

    def test_postgres_composite_key(self, field_names, key_fields):
        sql = get_dialect('postgresql').build_upsert_sql('tbl', field_names, key_fields)
        assert sql == (
            'INSERT INTO "tbl"("id", "name", "email", "ts", "field1", "field_2", "__field_3__") '
            'VALUES (:id, :name, :email, :ts, :field1, :field_2, :__field_3__) '
            'ON CONFLICT ("id", "__field_3__") DO UPDATE SET "name"=EXCLUDED."name", '
            '"email"=EXCLUDED."email", "ts"=EXCLUDED."ts", "field1"=EXCLUDED."field1", '
            '"field_2"=EXCLUDED."field_2"')

    def test_postgres_all_keys_does_nothing(self):
        sql = get_dialect('postgresql').build_upsert_sql('users', ['id'], ['id'])
        assert sql == 'INSERT INTO "users"("id") VALUES (:id) ON CONFLICT ("id") DO NOTHING'

    def test_mysql_on_duplicate_key(self):
        sql = get_dialect('mysql').build_upsert_sql('users', FIELDS, KEYS)
        assert sql == (
            'INSERT INTO `users`(`id`, `name`, `age`) VALUES (:id, :name, :age) '
            'ON DUPLICATE KEY UPDATE `name`=VALUES(`name`), `age`=VALUES(`age`)')

    def test_mysql_all_keys_assigns_keys(self):
        sql = get_dialect('mysql').build_upsert_sql('users', ['id'], ['id'])
        assert sql == 'INSERT INTO `users`(`id`) VALUES (:id) ON DUPLICATE KEY UPDATE `id`=VALUES(`id`)'

    def test_sqlserver_merge(self):
        sql = get_dialect('sqlserver').build_upsert_sql('users', FIELDS, KEYS)
        assert sql == (
            'MERGE INTO [users] T1 USING (SELECT :id [id], :name [name], :age [age]) T2 '
            'ON (T1.[id]=T2.[id]) '
            'WHEN MATCHED THEN UPDATE SET T1.[name]=T2.[name], T1.[age]=T2.[age] '
            'WHEN NOT MATCHED THEN INSERT ([id], [name], [age]) VALUES (T2.[id], T2.[name], T2.[age]);')

    def test_sqlserver_merge_all_keys(self):
        sql = get_dialect('sqlserver').build_upsert_sql('users', ['a', 'b'], ['a', 'b'])
        assert sql == (
            'MERGE INTO [users] T1 USING (SELECT :a [a], :b [b]) T2 '
            'ON (T1.[a]=T2.[a] AND T1.[b]=T2.[b]) '
            'WHEN NOT MATCHED THEN INSERT ([a], [b]) VALUES (T2.[a], T2.[b]);')

    @pytest.mark.parametrize('dialect', ['postgresql', 'mysql', 'oracle', 'sqlserver'])
    def test_each_field_bound_once(self, dialect, field_names, key_fields):
        """Test native upserts bind every field exactly once"""
        sql = get_dialect(dialect).build_upsert_sql('tbl', field_names, key_fields)
        parsed = parse_named_statement(sql)
        assert list(parsed.parameters) == field_names
        assert parsed.parameter_map() == {name: [i] for i, name in enumerate(field_names, 1)}


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('ansi', 'FETCH FIRST 5 ROWS ONLY'),
    ('derby', 'FETCH FIRST 5 ROWS ONLY'),
    ('oracle', 'FETCH FIRST 5 ROWS ONLY'),
    ('postgresql', 'LIMIT 5'),
    ('mysql', 'LIMIT 5'),
    ('sqlserver', 'OFFSET 0 ROWS FETCH NEXT 5 ROWS ONLY'),
])
def test_limit_clause(dialect, expected):
    assert get_dialect(dialect).get_limit_clause(5) == expected


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('ansi', '"we""ird"'),
    ('mysql', '`we``ird`'),
    ('sqlserver', '[we]]ird]'),
])
def test_quote_identifier_escapes_closing_quote(dialect, expected):
    """Test embedded closing quote characters are doubled"""
    name = {'ansi': 'we"ird', 'mysql': 'we`ird', 'sqlserver': 'we]ird'}[dialect]
    assert get_dialect(dialect).quote_identifier(name) == expected


@pytest.mark.parametrize('table', ['a:b', "o'neil", 'a?b', 'x]:y'],
                         ids=['colon', 'quote', 'qmark', 'escaped_bracket'])
@pytest.mark.parametrize('dialect', ['ansi', 'mysql', 'sqlserver'])
def test_quoted_table_name_not_parsed(dialect, table):
    """Test characters inside a quoted table name are never placeholders"""
    d = get_dialect(dialect)
    sql = d.build_delete_sql(table, ['id'])
    parsed = parse_named_statement(sql)
    assert parsed.sql == f'DELETE FROM {d.quote_identifier(table)} WHERE {d.quote_identifier("id")} = ?'
    assert parsed.parameter_map() == {'id': [1]}


def test_sqlserver_colon_in_table_name():
    parsed = parse_named_statement(get_dialect('sqlserver').build_delete_sql('a:b', ['id']))
    assert parsed.sql == 'DELETE FROM [a:b] WHERE [id] = ?'
    assert parsed.parameter_map() == {'id': [1]}


@pytest.mark.parametrize('dialect', get_available_dialects())
def test_rendered_statements_keep_position_invariants(dialect, field_names, key_fields):
    """Test every statement's placeholders parse to positions 1..n"""
    d = get_dialect(dialect)
    statements = [
        d.build_insert_sql('tbl', field_names),
        d.build_update_sql('tbl', field_names, key_fields),
        d.build_delete_sql('tbl', key_fields),
        d.build_row_exists_sql('tbl', key_fields),
        d.build_select_sql('tbl', field_names, key_fields),
        d.build_upsert_sql('tbl', field_names, key_fields),
    ]
    for sql in filter(None, statements):
        parsed = parse_named_statement(sql)
        n = sql.count(':') - sql.count('::')
        assert parsed.sql.count('?') == n
        assert parsed.parameter_count == n
        positions = sorted(p for ps in parsed.parameters.values() for p in ps)
        assert positions == list(range(1, n + 1))
        for ps in parsed.parameters.values():
            assert list(ps) == sorted(set(ps))
