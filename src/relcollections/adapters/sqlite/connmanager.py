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

import os.path

from ..connmanager import AbstractConnectionManager

logger = __import__('logging').getLogger(__name__)


class Sqlite3ConnectionManager(AbstractConnectionManager):
    """
    SQLite doesn't really have isolation levels in the traditional
    sense; as far as that goes, it always operates in SERIALIZABLE
    mode. Instead, the connection's ``isolation_level`` parameter
    determines how autocommit behaves and the interaction between it
    at the SQLite and Python levels.

    We open connections with an ``isolation_level`` of ``None``, so
    the Python Connection object has nothing to do with transactions,
    and begin each one ourself (:meth:`begin`). We ask for an
    IMMEDIATE transaction: it takes the write lock at the start,
    instead of at the first write, so a transaction that reads and
    then writes can't be refused the lock after it has already read.
    """

    begin_statement = 'BEGIN IMMEDIATE TRANSACTION'

    def __init__(self, driver, pragmas, path, options):
        """
        :param dict pragmas: A map from string pragma name to string
            pragma value. These will be executed at connection open
            time.
        """
        self.path = path
        self.pragmas = dict(pragmas or {})
        super(Sqlite3ConnectionManager, self).__init__(options, driver)

    def _do_open(self):
        if self.path != ':memory:':
            dirname = os.path.dirname(os.path.abspath(self.path))
            if not os.path.exists(dirname) and self.options.create_tables:
                os.makedirs(dirname)

        conn = self.driver.connect_to_file(
            self.path,
            timeout=self.options.commit_lock_timeout,
            quick_check=False,
            isolation_level=None,
            extra_pragmas=self.pragmas)
        cur = self.cursor_for_connection(conn)
        return conn, cur

    def begin(self, conn, cursor):
        cursor.execute(self.begin_statement)
