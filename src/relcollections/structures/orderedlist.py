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
An append-only list of strings in one table.
"""

from zope.interface import implementer

from relcollections._util import metricmethod_sampled
from relcollections.adapters.dialect import SERIAL
from relcollections.adapters.dialect import TEXT
from relcollections.interfaces import IList
from relcollections.interfaces import NotFound

from ._base import AbstractTableStructure


@implementer(IList)
class List(AbstractTableStructure):
    """
    Rows of ``(id, value)``. The database assigns increasing ids,
    so id order is the order values were added.

    Reading from the end uses the id index in reverse; it doesn't
    scan the whole table.
    """

    def _column_defs(self, dialect):
        return (
            'id %s' % (dialect.datatype(SERIAL),),
            'value %s' % (dialect.datatype(TEXT),),
        )

    def _prepare(self, dialect):
        self._stmt_add = 'INSERT INTO %s (value) VALUES (%%s)' % (self._table,)
        self._stmt_all = 'SELECT value FROM %s ORDER BY id' % (self._table,)
        self._stmt_last_n = 'SELECT value FROM %s ORDER BY id DESC LIMIT %%s' % (
            self._table,
        )

    @metricmethod_sampled
    def add(self, value, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_add, (self._encode(value),)))

    def get_all(self, txn=None):
        return self._run(
            txn,
            lambda txn: [self._decode(row[0]) for row in txn.fetchall(self._stmt_all)]
        )

    all = get_all

    def get_last(self, txn=None):
        values = self.get_last_n(1, txn)
        if not values:
            raise NotFound("%r is empty" % (self.table_name,))
        return values[0]

    def get_last_n(self, n, txn=None):
        n = int(n)
        def _last_n(txn):
            if n <= 0:
                return []
            rows = txn.fetchall(self._stmt_last_n, (n,))
            # Newest first.
            return [self._decode(row[0]) for row in reversed(rows)]
        return self._run(txn, _last_n)
