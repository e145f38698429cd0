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
A string to string mapping in one table.
"""

from zope.interface import implementer

from relcollections._util import metricmethod_sampled
from relcollections.adapters.dialect import TEXT
from relcollections.interfaces import IKeyValue
from relcollections.interfaces import NotFound

from ._base import AbstractTableStructure


@implementer(IKeyValue)
class KeyValue(AbstractTableStructure):
    """
    Rows of ``(key, value)``; ``key`` is the primary key.

    Setting an existing key replaces its value. Values are encoded
    if the adapter doesn't handle raw UTF-8; keys never are.
    """

    def _column_defs(self, dialect):
        return (
            'key %s PRIMARY KEY' % (dialect.datatype(TEXT),),
            'value %s' % (dialect.datatype(TEXT),),
        )

    def _prepare(self, dialect):
        self._stmt_set = dialect.upsert(self.table_name, 'key', 'value')
        self._stmt_get = 'SELECT value FROM %s WHERE key = %%s' % (self._table,)
        self._stmt_delete = 'DELETE FROM %s WHERE key = %%s' % (self._table,)
        self._stmt_keys = 'SELECT key FROM %s' % (self._table,)

    def _set(self, txn, key, value):
        txn.execute(self._stmt_set, (key, self._encode(value)))

    def _get(self, txn, key):
        row = txn.fetchone(self._stmt_get, (key,))
        if row is None:
            raise NotFound("No key %r in %r" % (key, self.table_name))
        return self._decode(row[0])

    @metricmethod_sampled
    def set(self, key, value, txn=None):
        self._run(txn, self._set, key, value)

    @metricmethod_sampled
    def get(self, key, txn=None):
        return self._run(txn, self._get, key)

    def delete(self, key, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_delete, (key,)))

    def keys(self, txn=None):
        return self._run(
            txn,
            lambda txn: [row[0] for row in txn.fetchall(self._stmt_keys)]
        )

    def inc(self, key, txn=None):
        def _inc(txn):
            try:
                current = int(self._get(txn, key))
            except NotFound:
                current = 0
            new_value = str(current + 1)
            self._set(txn, key, new_value)
            return new_value
        return self._run(txn, _inc)
