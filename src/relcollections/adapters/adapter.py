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
Base class for ``IRelCollectionsAdapter``.

"""
import threading

from zope.interface import implementer

from .._util import metricmethod
from .._util import TRACE
from ..interfaces import TransactionError
from ..options import Options

from .drivers import _select_driver
from .interfaces import IRelCollectionsAdapter
from .txncontrol import GenericTransactionControl
from .txncontrol import Transaction

logger = __import__('logging').getLogger(__name__)

@implementer(IRelCollectionsAdapter)
class AbstractAdapter(object):

    options = None # type: Options
    driver_options = None # type: IDBDriverOptions
    txncontrol = None # type: GenericTransactionControl
    connmanager = None # type: IConnectionManager

    def __init__(self, options=None):
        if options is None:
            options = Options()
        self.options = options

        self.driver = self._select_driver()
        self.dialect = self.driver.dialect

        self._create()
        if self.txncontrol is None:
            self.txncontrol = GenericTransactionControl(self.connmanager)

        # Held from begin() until the transaction ends.
        self._lock = threading.RLock()
        self._conn = None
        self._txn = None

    def _create(self):
        raise NotImplementedError

    @property
    def raw_utf8(self):
        return self.options.raw_utf8

    def _select_driver(self, options=None):
        return _select_driver(
            options or self.options or Options(),
            self.driver_options
        )

    def _get_connection(self):
        if self._conn is None:
            conn, cursor = self.connmanager.open()
            self.connmanager.close(None, cursor)
            logger.debug("Opened %r for %r", conn, self)
            self._conn = conn
        return self._conn

    @metricmethod
    def begin(self):
        self._lock.acquire()
        try:
            if self._txn is not None:
                raise TransactionError(
                    "%r is already in a transaction (%r)" % (self, self._txn))

            try:
                conn = self._get_connection()
                cursor = self.connmanager.cursor_for_connection(conn)
            except self.driver.database_exceptions as ex:
                raise TransactionError("Failed to connect: %s" % (ex,)) from ex

            try:
                self.txncontrol.begin(conn, cursor)
            except TransactionError:
                if not self.txncontrol.abort(conn, cursor):
                    # It closed the connection.
                    self._conn = None
                else:
                    self.connmanager.close(None, cursor)
                raise
        except BaseException:
            self._lock.release()
            raise

        txn = self._txn = Transaction(self, self.txncontrol, conn, cursor)
        logger.log(TRACE, "Began %r", txn)
        return txn

    def _end_transaction(self, txn, clean):
        assert txn is self._txn
        try:
            if clean:
                self.connmanager.close(None, txn.cursor)
            else:
                # The connection manager closed the connection.
                self._conn = None
        finally:
            self._txn = None
            self._lock.release()
        logger.log(TRACE, "Ended %r (clean=%s)", txn, clean)

    def close(self):
        with self._lock:
            if self._txn is not None:
                # The transaction can't be used after we close.
                txn = self._txn
                txn.active = False
                self._txn = None
                self.connmanager.rollback_and_close(self._conn, txn.cursor)
                # The transaction held the lock too.
                self._lock.release()
            elif self._conn is not None:
                self.connmanager.close(self._conn)
            self._conn = None

    def __repr__(self):
        return "<%s.%s at 0x%x name=%s driver=%s>" % (
            self.__class__.__module__,
            self.__class__.__name__,
            id(self),
            self.options.name,
            self.driver,
        )
