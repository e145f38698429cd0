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
"""
The psycopg2 driver.
"""

from zope.interface import implementer

from ...interfaces import IDBDriver

from . import AbstractPostgreSQLDriver

__all__ = [
    'Psycopg2Driver',
]


@implementer(IDBDriver)
class Psycopg2Driver(AbstractPostgreSQLDriver):
    __name__ = 'psycopg2'
    MODULE_NAME = __name__

    PRIORITY = 1
    PRIORITY_PYPY = 2

    def __init__(self):
        super(Psycopg2Driver, self).__init__()
        ext = self.driver_module.extensions
        self._idle = ext.TRANSACTION_STATUS_IDLE
        self._uncommitted = (ext.TRANSACTION_STATUS_ACTIVE, ext.TRANSACTION_STATUS_INTRANS)

    def connect_with_application_name(self, dsn, application_name=None):
        # psycopg2 rejects application_name as a keyword; it has to
        # be in the dsn.
        if application_name and 'application_name' not in dsn:
            dsn = "%s application_name='%s'" % (dsn, application_name)
        conn = self.connect(dsn)
        assert not conn.autocommit
        return conn

    def connection_may_need_rollback(self, conn):
        return conn.info.transaction_status != self._idle

    def connection_may_need_commit(self, conn):
        return conn.info.transaction_status in self._uncommitted
