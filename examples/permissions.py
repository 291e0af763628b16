#!/usr/bin/env python3
"""
Permissions Example - bitmask columns without a database

A tiny in-memory user table with two bitmask columns. Rows store plain
integers; the registry turns them into flag views on read, back into
integers on write, and builds predicates that filter the rows.

Run with: python examples/permissions.py
"""

import sys
import os

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import bitwise_flags as bf


class FeaturesCast(bf.BitwiseCast):
    """Feature toggles with fixed, explicit bits."""
    definition = {'notifications': 1, 'dark_mode': 2, 'beta': 4}


def build_columns() -> bf.ColumnRegistry:
    columns = bf.ColumnRegistry()
    columns['permissions'] = bf.BitwiseCast.auto(['read', 'write', 'delete', 'admin'])
    columns['features'] = FeaturesCast
    columns['roles'] = 'bitwise:user,moderator,admin'
    return columns


class UserTable:
    """Rows of plain dicts, as a storage layer would hand them over."""

    def __init__(self, columns: bf.ColumnRegistry):
        self.columns = columns
        self.rows = []

    def insert(self, name: str, **flags) -> dict:
        row = {'name': name}
        for column in ('permissions', 'features', 'roles'):
            row[column] = self.columns.write(column, flags.get(column))
        self.rows.append(row)
        return row

    def flags(self, row: dict, column: str) -> bf.FlagSetView:
        return self.columns.read(column, row.get(column))

    def filter(self, column: str, *predicates) -> list:
        """Apply predicates in order, joining each by its boolean."""
        result = []
        for row in self.rows:
            matched = None
            for predicate in predicates:
                if predicate is None:
                    continue
                hit = predicate.matches(row.get(column))
                if matched is None:
                    matched = hit
                elif predicate.boolean == bf.OR:
                    matched = matched or hit
                else:
                    matched = matched and hit
            if matched is None or matched:
                result.append(row)
        return result


def seed(table: UserTable) -> None:
    table.insert('alice', permissions=['read', 'write', 'delete', 'admin'], roles=['admin'])
    table.insert('bob', permissions=['read', 'write'], features=['beta'], roles=['user'])
    table.insert('carol', permissions=['read'], features=['dark_mode', 'notifications'], roles=['user', 'moderator'])
    table.insert('dave', roles='user')


def main():
    columns = build_columns()
    table = UserTable(columns)
    seed(table)

    perms = columns.translator('permissions')

    print("Users:")
    for row in table.rows:
        print(f"  {row['name']:<6} permissions=[{table.flags(row, 'permissions')}] "
              f"features=[{table.flags(row, 'features')}] roles=[{table.flags(row, 'roles')}]")

    print("\nCan write:")
    for row in table.filter('permissions', perms.where_has('write')):
        print(f"  {row['name']}")

    print("\nRead-only:")
    for row in table.filter('permissions', perms.where_equals('read')):
        print(f"  {row['name']}")

    print("\nAdmins or no permissions at all:")
    for row in table.filter('permissions', perms.where_has('admin'), perms.or_where_equals([])):
        print(f"  {row['name']}")

    print("\nPromote bob:")
    bob = table.rows[1]
    promoted = table.flags(bob, 'permissions').add('delete')
    bob['permissions'] = columns.write('permissions', promoted)
    print(f"  permissions=[{table.flags(bob, 'permissions')}] value={bob['permissions']}")


if __name__ == "__main__":
    main()
