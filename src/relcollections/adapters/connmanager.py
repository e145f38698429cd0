##############################################################################
#
# Copyright (c) 2009 Zope Foundation and Contributors.
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
Opening, ending and closing the adapter's connection.
"""

from zope.interface import implementer

from .._util import metricmethod
from .interfaces import IConnectionManager

logger = __import__('logging').getLogger(__name__)


@implementer(IConnectionManager)
class AbstractConnectionManager(object):
    """
    Database specific subclasses implement :meth:`_do_open`; the
    rest works for any driver.
    """

    # Callables ``(conn, cursor)`` run by :meth:`open`.
    _on_opened = ()

    def __init__(self, options, driver):
        """
        :param options: A :class:`relcollections.options.Options`.
        :param driver: The
            :class:`~relcollections.adapters.interfaces.IDBDriver` whose
            exceptions and transaction methods are used.
        """
        self.driver = driver
        self.options = options
        # Errors that mean the connection is unusable anyway; closing
        # and quiet rollbacks report them instead of raising.
        self._ignored_exceptions = tuple(set(
            driver.close_exceptions + driver.disconnected_exceptions
        ))

    def add_on_opened(self, f):
        """
        Run ``f(conn, cursor)`` each time a connection is opened,
        after the hooks already added.
        """
        self._on_opened += (f,)

    def _do_open(self):
        """Return a new ``(conn, cursor)``."""
        raise NotImplementedError()

    def open(self):
        conn, cursor = self._do_open()
        try:
            for hook in self._on_opened:
                hook(conn, cursor)
        except BaseException:
            self.close(conn, cursor)
            raise
        return conn, cursor

    @metricmethod
    def close(self, conn=None, cursor=None):
        """
        Close *cursor* and then *conn*, either of which may be None.

        Returns False if closing either raised one of the ignored
        errors.
        """
        clean = True
        for obj in (cursor, conn):
            if obj is None:
                continue
            try:
                obj.close()
            except self._ignored_exceptions: # pylint:disable=catching-non-exception
                clean = False
        return clean

    def _rollback(self, conn, cursor, quietly):
        """
        Roll back *conn* if the driver thinks it needs it. A failure
        closes both *conn* and *cursor*; it is raised unless
        *quietly*, in which case the result is False.
        """
        if conn is None or not self.driver.connection_may_need_rollback(conn):
            return True
        try:
            self.driver.rollback(conn)
        except self._ignored_exceptions if quietly else (): # pylint:disable=catching-non-exception
            self.close(conn, cursor)
            return False
        except BaseException:
            self.close(conn, cursor)
            raise
        return True

    def rollback_and_close(self, conn, cursor):
        return self._rollback(conn, cursor, True) and self.close(conn, cursor)

    def rollback(self, conn, cursor):
        return self._rollback(conn, cursor, False)

    def rollback_quietly(self, conn, cursor):
        return self._rollback(conn, cursor, True)

    def commit(self, conn, cursor=None, force=False):
        if force or self.driver.connection_may_need_commit(conn):
            self.driver.commit(conn, cursor)

    def begin(self, conn, cursor):
        "Drivers start transactions implicitly unless a subclass says otherwise."

    def cursor_for_connection(self, conn):
        return self.driver.cursor(conn)
