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
Beginning, committing and rolling back transactions.

:class:`GenericTransactionControl` talks to the connection manager and
reports driver failures as :class:`~relcollections.interfaces.TransactionError`.
:class:`Transaction` is what :meth:`IRelCollectionsAdapter.begin` returns;
structures run their statements through it.
"""

from zope.interface import implementer

from relcollections.interfaces import ITransaction
from relcollections.interfaces import BackingStoreError
from relcollections.interfaces import TransactionError

logger = __import__('logging').getLogger(__name__)


class GenericTransactionControl(object):
    """
    Transaction boundaries for any connection manager.
    """

    def __init__(self, connmanager):
        self.connmanager = connmanager
        self.database_exceptions = connmanager.driver.database_exceptions

    def begin(self, conn, cursor):
        try:
            self.connmanager.begin(conn, cursor)
        except self.database_exceptions as ex:
            raise TransactionError("Failed to begin a transaction: %s" % (ex,)) from ex

    def commit(self, conn, cursor):
        try:
            self.connmanager.commit(conn, cursor)
        except self.database_exceptions as ex:
            raise TransactionError("Failed to commit: %s" % (ex,)) from ex

    def rollback(self, conn, cursor):
        """
        Roll back, letting the driver's errors pass as
        :class:`TransactionError`.

        If the rollback fails, the connection and cursor are closed.
        """
        try:
            self.connmanager.rollback(conn, cursor)
        except self.database_exceptions as ex:
            raise TransactionError("Failed to roll back: %s" % (ex,)) from ex

    def abort(self, conn, cursor):
        """
        Roll back, ignoring certain exceptions.

        The connection is rolled back quietly using
        :meth:`~IConnectionManager.rollback_quietly` and the boolean
        result of that function is returned.
        """
        return self.connmanager.rollback_quietly(conn, cursor)


@implementer(ITransaction)
class Transaction(object):
    """
    A transaction on the connection of an adapter.

    Created by the adapter with its lock held; ending the transaction
    (:meth:`commit` or :meth:`rollback`) hands the lock back.
    """

    def __init__(self, adapter, txncontrol, conn, cursor):
        self.adapter = adapter
        self.txncontrol = txncontrol
        self.connection = conn
        self.cursor = cursor
        self._database_exceptions = txncontrol.database_exceptions
        self.active = True

    def __repr__(self):
        return '<%s at 0x%x active=%s adapter=%r>' % (
            type(self).__name__,
            id(self),
            self.active,
            self.adapter,
        )

    def _check_active(self):
        if not self.active:
            raise TransactionError("%r has already ended" % (self,))

    def execute(self, stmt, params=()):
        """
        Run *stmt* with the ordered *params* and return the cursor.

        :raises BackingStoreError: If the driver raises.
        """
        self._check_active()
        __traceback_info__ = stmt, params
        try:
            self.cursor.execute(stmt, params)
        except self._database_exceptions as ex:
            raise BackingStoreError("Failed to execute %r: %s" % (stmt, ex)) from ex
        return self.cursor

    def fetchone(self, stmt, params=()):
        cursor = self.execute(stmt, params)
        try:
            return cursor.fetchone()
        except self._database_exceptions as ex:
            raise BackingStoreError("Failed to fetch from %r: %s" % (stmt, ex)) from ex

    def fetchall(self, stmt, params=()):
        cursor = self.execute(stmt, params)
        try:
            return cursor.fetchall()
        except self._database_exceptions as ex:
            raise BackingStoreError("Failed to fetch from %r: %s" % (stmt, ex)) from ex

    def commit(self):
        self._check_active()
        committed = False
        try:
            self.txncontrol.commit(self.connection, self.cursor)
            committed = True
        finally:
            if committed:
                self.__end(True)
            else:
                # Don't leave a half-finished transaction on the connection
                # for the next caller.
                clean = False
                try:
                    clean = self.txncontrol.abort(self.connection, self.cursor)
                finally:
                    self.__end(clean)

    def rollback(self):
        self._check_active()
        clean = False
        try:
            self.txncontrol.rollback(self.connection, self.cursor)
            clean = True
        finally:
            self.__end(clean)

    def __end(self, clean):
        self.active = False
        self.adapter._end_transaction(self, clean) # pylint:disable=protected-access

    def __enter__(self):
        return self

    def __exit__(self, t, v, tb):
        if not self.active:
            # Ended inside the block.
            return
        if t is None:
            self.commit()
            return
        try:
            self.rollback()
        except TransactionError:
            # The original exception is more interesting; it
            # propagates when we return.
            logger.exception("Failed to roll back %r after %s", self, t.__name__)
