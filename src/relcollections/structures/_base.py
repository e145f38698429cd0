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
Shared implementation of the single-table structures.
"""

import logging

from relcollections import encoding
from relcollections.interfaces import StructureRemovedError


class AbstractTableStructure(object):
    """
    A structure stored in the single table *name* of *adapter*.

    Subclasses list their column definitions in :meth:`_column_defs`
    and prepare their statements in :meth:`_prepare`.

    Every public method either takes the ``txn`` it is given or runs
    in a transaction of its own (see :meth:`_run`).
    """

    def __init__(self, adapter, name, logger=None):
        self.adapter = adapter
        self.table_name = name
        if logger is None:
            logger = logging.getLogger(type(self).__module__)
        self.logger = logger
        self._removed = False

        dialect = adapter.dialect
        self._table = dialect.quote_identifier(name)
        self._stmt_truncate = dialect.truncate_table(name)
        self._stmt_drop = dialect.drop_table(name)
        self._prepare(dialect)

        if adapter.options.create_tables:
            self.create()

    def _column_defs(self, dialect):
        raise NotImplementedError

    def _prepare(self, dialect):
        raise NotImplementedError

    def __repr__(self):
        return "<%s %r%s adapter=%r>" % (
            type(self).__name__,
            self.table_name,
            ' (removed)' if self._removed else '',
            self.adapter,
        )

    def _check_removed(self):
        if self._removed:
            raise StructureRemovedError("%r has been removed" % (self,))

    def _run(self, txn, func, *args):
        """
        Call ``func(txn, *args)`` and return its result.

        If *txn* is None, a transaction is begun for the call and
        committed when it returns (or rolled back if it raises).
        """
        self._check_removed()
        if txn is not None:
            return func(txn, *args)
        with self.adapter.begin() as new_txn:
            return func(new_txn, *args)

    def _encode(self, value):
        if self.adapter.raw_utf8:
            return value
        return encoding.encode(value)

    def _decode(self, value):
        if self.adapter.raw_utf8:
            return value
        return encoding.decode(value)

    def create(self, txn=None):
        """
        Create the table if it doesn't already exist.
        """
        stmt = self.adapter.dialect.create_table(
            self.table_name,
            *self._column_defs(self.adapter.dialect)
        )
        self._run(txn, lambda txn: txn.execute(stmt))

    def count(self, txn=None):
        def _count(txn):
            row = txn.fetchone('SELECT COUNT(*) FROM %s' % (self._table,))
            return int(row[0])
        return self._run(txn, _count)

    def clear(self, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_truncate))

    def remove(self, txn=None):
        self._run(txn, lambda txn: txn.execute(self._stmt_drop))
        self._removed = True
        self.logger.debug("Dropped %r", self.table_name)
