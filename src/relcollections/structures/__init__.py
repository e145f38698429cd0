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
The table-backed structures.

Each is constructed from an adapter and a base name::

    from relcollections.adapters.sqlite import Sqlite3Adapter
    from relcollections.structures import NestedMap

    users = NestedMap(Sqlite3Adapter('users.sqlite3'), 'users')
    users.set('bob', 'password', 'hunter1')
"""

from .keyvalue import KeyValue
from .nestedmap import HashMap2
from .nestedmap import NestedMap
from .nestedmap import SEPARATOR
from .orderedlist import List
from .uniqueset import Set

__all__ = [
    'KeyValue',
    'Set',
    'List',
    'NestedMap',
    'HashMap2',
    'SEPARATOR',
]
