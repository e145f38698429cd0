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
A set of strings in one table.
"""

from zope.interface import implementer

from relcollections._util import metricmethod_sampled
from relcollections.adapters.dialect import TEXT
from relcollections.interfaces import ISet

from ._base import AbstractTableStructure


@implementer(ISet)
class Set(AbstractTableStructure):
    """
    One ``value`` column, which is the primary key.
    """

    def _column_defs(self, dialect):
        return (
            'value %s PRIMARY KEY' % (dialect.datatype(TEXT),),
        )

    def _prepare(self, dialect):
        self._stmt_add = dialect.insert_ignore(self.table_name, 'value')
        self._stmt_has = 'SELECT 1 FROM %s WHERE value = %%s' % (self._table,)
        self._stmt_delete = 'DELETE FROM %s WHERE value = %%s' % (self._table,)
        self._stmt_all = 'SELECT value FROM %s' % (self._table,)

    @metricmethod_sampled
    def add(self, value, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_add, (self._encode(value),)))

    @metricmethod_sampled
    def has(self, value, txn=None):
        return self._run(
            txn,
            lambda txn: txn.fetchone(self._stmt_has, (self._encode(value),)) is not None
        )

    def get_all(self, txn=None):
        return self._run(
            txn,
            lambda txn: [self._decode(row[0]) for row in txn.fetchall(self._stmt_all)]
        )

    all = get_all

    def delete(self, value, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_delete, (self._encode(value),)))
