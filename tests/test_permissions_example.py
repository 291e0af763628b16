"""
Tests for the permissions example.

These tests verify:
- Columns defined in all three styles read and write correctly
- Predicates filter the in-memory rows as a query layer would
- Updating a row through a view stores the new integer
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import bitwise_flags as bf
from examples.permissions import FeaturesCast, UserTable, build_columns, main, seed


@pytest.fixture
def table():
    table = UserTable(build_columns())
    seed(table)
    return table


def names(rows):
    return [row['name'] for row in rows]


class TestPermissionsExample:

    def test_stored_values(self, table):
        alice, bob, carol, dave = table.rows
        assert alice['permissions'] == 15
        assert bob['permissions'] == 3
        assert bob['features'] == 4
        assert carol['features'] == 3
        assert carol['roles'] == 3
        assert dave['permissions'] == 0
        assert dave['roles'] == 1

    def test_features_cast(self, table):
        assert isinstance(table.columns.cast_for('features'), FeaturesCast)

    def test_reads(self, table):
        carol = table.rows[2]
        assert table.flags(carol, 'features').names() == ['notifications', 'dark_mode']
        assert str(table.flags(carol, 'roles')) == 'user, moderator'

    def test_filter_has(self, table):
        perms = table.columns.translator('permissions')
        assert names(table.filter('permissions', perms.where_has('write'))) == ['alice', 'bob']

    def test_filter_equals(self, table):
        perms = table.columns.translator('permissions')
        assert names(table.filter('permissions', perms.where_equals('read'))) == ['carol']

    def test_filter_or(self, table):
        perms = table.columns.translator('permissions')
        rows = table.filter('permissions', perms.where_has('admin'), perms.or_where_equals([]))
        assert names(rows) == ['alice', 'dave']

    def test_filter_not_in(self, table):
        roles = table.columns.translator('roles')
        assert names(table.filter('roles', roles.where_not_in(['admin', 'moderator']))) == ['bob', 'dave']

    def test_empty_in_does_not_filter(self, table):
        perms = table.columns.translator('permissions')
        assert len(table.filter('permissions', perms.where_in([]))) == 4

    def test_insert_unknown_flag(self, table):
        with pytest.raises(bf.UnknownFlag):
            table.insert('eve', permissions=['superuser'])

    def test_main_runs(self, capsys):
        main()
        out = capsys.readouterr().out
        assert "Can write:" in out
        assert "permissions=[read, write, delete] value=7" in out
