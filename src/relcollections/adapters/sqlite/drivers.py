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
import re
import sqlite3

from zope.interface import implementer

from ..drivers import implement_db_driver_options
from ..drivers import AbstractModuleDriver
from ..interfaces import IDBDriver

from .dialect import Sqlite3Dialect

__all__ = [
    'Sqlite3Driver',
]

database_type = 'sqlite3'
logger = __import__('logging').getLogger(__name__)

# How long before we get 'OperationalError: database is locked'
DEFAULT_TIMEOUT = 15

# ``%s`` becomes ``?``; ``%%`` becomes ``%``.
_FORMAT_PARAM = re.compile(r'%([%s])')

def _format_to_qmark(stmt):
    return _FORMAT_PARAM.sub(lambda m: '?' if m.group(1) == 's' else '%', stmt)


class UnableToConnect(sqlite3.OperationalError):
    """
    The database file couldn't be opened. The message includes its
    path.
    """
    filename = None

    def with_filename(self, f):
        self.filename = f
        return self

    def __str__(self):
        s = super(UnableToConnect, self).__str__()
        if self.filename:
            s += " (At: %r)" % self.filename
        return s


class Cursor(sqlite3.Cursor):
    """
    Accepts the ``%s`` placeholders every statement is written with.
    """

    def execute(self, stmt, params=None):
        if params is None:
            return sqlite3.Cursor.execute(self, stmt)
        return sqlite3.Cursor.execute(self, _format_to_qmark(stmt), params)

    def executemany(self, stmt, params):
        return sqlite3.Cursor.executemany(self, _format_to_qmark(stmt), params)

    def close(self):
        try:
            sqlite3.Cursor.close(self)
        except sqlite3.ProgrammingError:
            # The connection went first.
            pass


class Connection(sqlite3.Connection):
    CURSOR_FACTORY = Cursor
    _rc_closed = False

    def __init__(self, rc_db_filename, *args, **kwargs):
        self.rc_db_filename = rc_db_filename
        try:
            super(Connection, self).__init__(*args, **kwargs)
        except sqlite3.OperationalError as e:
            raise UnableToConnect(e).with_filename(rc_db_filename)

    def __repr__(self):
        try:
            state = 'in_transaction=%s' % (self.in_transaction,)
        except sqlite3.ProgrammingError:
            state = 'closed'
        return '<%s at 0x%x to %r %s>' % (
            type(self).__name__, id(self), self.rc_db_filename, state
        )

    def cursor(self): # pylint:disable=arguments-differ
        return sqlite3.Connection.cursor(self, self.CURSOR_FACTORY)

    def _pragma(self, name):
        row = self.execute('PRAGMA %s' % (name,)).fetchone()
        return row[0] if row else None

    def execute_pragmas(self, **pragmas):
        """
        Set each pragma whose value isn't None; those that are None
        are only read.

        Returns ``{name: value}`` as found before any change.
        """
        found = {}
        for name, desired in sorted(pragmas.items()):
            found[name] = current = self._pragma(name)
            if desired is not None and desired != current:
                # PRAGMA doesn't take placeholders. Fetch the result so
                # the statement is finished before the next begins.
                self.execute('PRAGMA %s = %s' % (name, desired)).fetchall()
                logger.debug("PRAGMA %s: %r -> %r (wanted %r) on %r",
                             name, current, self._pragma(name), desired, self)
        return found

    def close(self):
        if self._rc_closed:
            return
        self._rc_closed = True
        # Lets sqlite update its statistics for the tables this
        # connection used.
        try:
            self.executescript('PRAGMA busy_timeout = 3000; PRAGMA optimize;')
        except sqlite3.DatabaseError:
            logger.debug("Failed to optimize %r", self, exc_info=True)
        super(Connection, self).close()


@implementer(IDBDriver)
class Sqlite3Driver(AbstractModuleDriver):
    dialect = Sqlite3Dialect()
    __name__ = 'sqlite3'
    MODULE_NAME = __name__
    PRIORITY = 1
    PRIORITY_PYPY = 1
    STATIC_AVAILABLE = (
        # The oldest version we expect to find.
        sqlite3.sqlite_version_info[:2] >= (3, 11)
    )

    CONNECTION_FACTORY = Connection

    def __init__(self):
        super(Sqlite3Driver, self).__init__()
        # If a connection is closed out from under it,
        # sqlite3 throws ProgrammingError, which is not very helpful.
        self.disconnected_exceptions += (self.driver_module.ProgrammingError,)
        # Make our usual connect() method call our connect_to_file method instead of the
        # module's connect() method so we get our preferred goodies.
        self._connect = self.connect_to_file

    def connection_may_need_rollback(self, conn):
        try:
            return conn.in_transaction
        except sqlite3.ProgrammingError:
            # we're closed. We do need to attempt the rollback so
            # we catch the error and know to drop the connection.
            return True

    connection_may_need_commit = connection_may_need_rollback

    def connect_to_file(self, fname,
                        timeout=DEFAULT_TIMEOUT,
                        quick_check=True,
                        isolation_level=None,
                        extra_pragmas=None):
        """
        Open *fname* (which may be ``:memory:``) and return the
        connection.

        With the default *isolation_level* of None, the connection is
        in sqlite's autocommit mode; transactions must be begun
        explicitly. The connection may be shared between threads;
        the adapter serializes its use.
        """
        if fname and fname != ':memory:':
            fname = os.path.abspath(fname)

        connection = sqlite3.connect(
            fname,
            isolation_level=isolation_level,
            factory=lambda *args, **kwargs: self.CONNECTION_FACTORY(fname, *args, **kwargs),
            check_same_thread=False,
            timeout=timeout,
        )

        pragmas = {
            # Safe with WAL; a crash may lose the last transaction.
            'synchronous': 1,
            'busy_timeout': None,
        }
        pragmas.update(extra_pragmas or {})
        # In-memory databases ignore this.
        pragmas['journal_mode'] = 'wal'

        try:
            connection.execute_pragmas(**pragmas)
            if quick_check:
                rows = connection.execute('PRAGMA quick_check').fetchall()
                if rows != [('ok',)]:
                    raise sqlite3.DatabaseError(
                        'Quick integrity check failed: %s' % (
                            '\n'.join(str(row[0]) for row in rows),
                        ))
        except sqlite3.Error:
            logger.exception("Failed to prepare %r", connection)
            connection.close()
            raise

        return connection


implement_db_driver_options(
    __name__,
    '.drivers'
)
