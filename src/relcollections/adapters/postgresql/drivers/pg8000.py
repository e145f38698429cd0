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
pg8000 IDBDriver implementations.
"""

from zope.interface import implementer

from ...interfaces import IDBDriver

from . import AbstractPostgreSQLDriver


__all__ = [
    'PG8000Driver',
]


def _parse_dsn(dsn):
    # A real DSN supports more options than we do; we only
    # handle space separated ``key=value`` pairs.
    kwds = {}
    for part in dsn.split():
        key, value = part.split('=', 1)
        value = value.strip("'\"")
        key = 'database' if key == 'dbname' else key
        value = int(value) if key == 'port' else value
        kwds[key] = value
    return kwds


@implementer(IDBDriver)
class PG8000Driver(AbstractPostgreSQLDriver):
    __name__ = 'pg8000'
    # The DB-API 2.0 interface; the top-level module is the
    # legacy interface.
    MODULE_NAME = 'pg8000.dbapi'
    REQUIREMENTS = (
        'pg8000 >= 1.16',
    )
    PRIORITY = 3
    PRIORITY_PYPY = 1

    def connect(self, dsn, application_name=None): # pylint:disable=arguments-differ
        # Parse the DSN into parts to pass as keywords.
        # We don't do this psycopg2 because a real DSN supports more options than
        # we do and we don't want to limit it.
        kwds = _parse_dsn(dsn)
        if application_name:
            kwds['application_name'] = application_name
        return self._connect(**kwds)

    connect_with_application_name = connect

    def connection_may_need_rollback(self, conn):
        # We can't reliably tell across versions.
        return True

    def connection_may_need_commit(self, conn):
        return getattr(conn, 'in_transaction', True)
