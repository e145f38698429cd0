# -*- coding: utf-8 -*-
##############################################################################
#
# Copyright (c) 2019 Zope Foundation and Contributors.
# All Rights Reserved.
#
# This software is subject to the provisions of the Zope Public License,
# Version 2.1 (ZPL).  A copy of the ZPL should accompany this distribution.
# THIS SOFTWARE IS PROVIDED "AS IS" AND ANY AND ALL EXPRESS OR IMPLIED
# WARRANTIES ARE DISCLAIMED, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF TITLE, MERCHANTABILITY, AGAINST INFRINGEMENT, AND FITNESS
# FOR A PARTICULAR PURPOSE.
#
##############################################################################
"""
sqlite3 dialect.

There are a number of variations, depending what is supported by the
version of sqlite.

Statements are written with ``%s`` placeholders; the driver's cursor
turns them into ``?``.
"""

from sqlite3 import sqlite_version_info as sq3_version

from ..dialect import DefaultDialect
from ..dialect import TEXT
from ..dialect import SERIAL

SQ3_SUPPORTS_UPSERT = sq3_version >= (3, 24) # 2018-06-04


class Sqlite3Dialect(DefaultDialect):
    datatype_map = {
        TEXT: 'TEXT',
        SERIAL: 'INTEGER PRIMARY KEY AUTOINCREMENT',
    }

    STMT_TRUNCATE = 'DELETE FROM'

    supports_upsert = SQ3_SUPPORTS_UPSERT

    def upsert(self, table, key_column, value_column):
        if self.supports_upsert:
            return super(Sqlite3Dialect, self).upsert(table, key_column, value_column)
        # The old syntax, supported from 3.0.0 forward. It deletes the
        # conflicting row and inserts a new one; for a two column
        # table that's the same thing.
        return 'INSERT OR REPLACE INTO {table} ({key}, {value}) VALUES (%s, %s)'.format(
            table=self.quote_identifier(table),
            key=key_column,
            value=value_column,
        )

    def insert_ignore(self, table, column):
        if self.supports_upsert:
            return super(Sqlite3Dialect, self).insert_ignore(table, column)
        return 'INSERT OR IGNORE INTO {table} ({col}) VALUES (%s)'.format(
            table=self.quote_identifier(table),
            col=column,
        )
