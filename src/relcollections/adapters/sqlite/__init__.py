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
sqlite3 adapter for RelCollections.

General Design Notes
====================

Each adapter holds one connection, opened with ``isolation_level=None``
so the Python ``sqlite3`` module never begins transactions on its own.
Every transaction is started explicitly with ``BEGIN IMMEDIATE``, which
takes the database write lock up front. Two adapters on the same file
therefore wait on each other (up to ``commit_lock_timeout``) instead of
failing to upgrade a read lock half way through a transaction.

An ``:memory:`` database lives only as long as its connection. If a
failed rollback forces the adapter to drop its connection, the contents
are gone.

Tables
======

The ``List`` table's ``id`` is an ``INTEGER PRIMARY KEY AUTOINCREMENT``,
an alias for the ROWID that is never reused, so ordering by it is the
order of insertion even after rows are deleted.
"""

from .adapter import Sqlite3Adapter

__all__ = [
    'Sqlite3Adapter',
]
