# -*- coding: utf-8 -*-
"""
RDBMS-specific SQL.

The defaults are written for PostgreSQL; other databases override
what differs.
"""

from zope.interface import implementer

from .interfaces import IDBDialect

TEXT = 'text'
SERIAL = 'serial'


@implementer(IDBDialect)
class DefaultDialect(object):

    datatype_map = {
        TEXT: 'TEXT',
        SERIAL: 'BIGSERIAL PRIMARY KEY',
    }

    STMT_TRUNCATE = 'TRUNCATE TABLE'
    STMT_IF_NOT_EXISTS = 'IF NOT EXISTS'
    STMT_TABLE_TRAILER = ''

    def quote_identifier(self, name):
        # Statements always go to the driver with parameters,
        # so a literal percent must be doubled.
        return '"%s"' % (
            name.replace('"', '""').replace('%', '%%'),
        )

    def datatype(self, type_name):
        return self.datatype_map[type_name]

    def create_table(self, table, *column_defs):
        return 'CREATE TABLE %s %s (%s)%s' % (
            self.STMT_IF_NOT_EXISTS,
            self.quote_identifier(table),
            ', '.join(column_defs),
            self.STMT_TABLE_TRAILER,
        )

    def drop_table(self, table):
        return 'DROP TABLE IF EXISTS %s' % (self.quote_identifier(table),)

    def truncate_table(self, table):
        return '%s %s' % (self.STMT_TRUNCATE, self.quote_identifier(table))

    def upsert(self, table, key_column, value_column):
        return (
            'INSERT INTO {table} ({key}, {value}) VALUES (%s, %s) '
            'ON CONFLICT ({key}) DO UPDATE SET {value} = excluded.{value}'
        ).format(
            table=self.quote_identifier(table),
            key=key_column,
            value=value_column,
        )

    def insert_ignore(self, table, column):
        return 'INSERT INTO {table} ({col}) VALUES (%s) ON CONFLICT ({col}) DO NOTHING'.format(
            table=self.quote_identifier(table),
            col=column,
        )

    def __eq__(self, other):
        if isinstance(other, DefaultDialect):
            return type(other) is type(self)
        return NotImplemented # pragma: no cover

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return "<%s at %x>" % (
            type(self).__name__,
            id(self),
        )
