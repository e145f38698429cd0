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
The PostgreSQL drivers; this module provides ``IDBDriverOptions``.
"""

from ...drivers import implement_db_driver_options
from ...drivers import AbstractModuleDriver
from ...dialect import DefaultDialect

logger = __import__('logging').getLogger(__name__)


class PostgreSQLDialect(DefaultDialect):
    """
    :class:`DefaultDialect` already writes PostgreSQL's SQL.
    """


class AbstractPostgreSQLDriver(AbstractModuleDriver):
    dialect = PostgreSQLDialect()

    # NOTICE messages from the server show up under this module's name.
    message_logger = logger

    def connect_with_application_name(self, dsn, application_name=None):
        """
        Connect to *dsn*, sending *application_name* in the startup
        packet unless the dsn names one already.
        """
        raise NotImplementedError

    def set_lock_timeout(self, cursor, timeout):
        # SET can't take a bound parameter.
        cursor.execute('SET lock_timeout = %d' % (int(timeout),))

    def get_messages(self, conn):
        """
        Return and forget the notices collected on *conn*.

        psycopg2 keeps a list of strings; pg8000 a deque of field
        dicts, from which we take the message field.
        """
        notices = conn.notices
        if not notices:
            return ()
        messages = list(notices)
        if isinstance(messages[0], dict):
            messages = [d.get('M', d.get(b'M', '')) for d in messages]
        notices.clear()
        return messages


database_type = 'postgresql'

implement_db_driver_options(
    __name__,
    'pg8000', 'psycopg2',
)
