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
Lists, sets, key-value maps and nested maps stored in relational
database tables.
"""

from relcollections.options import Options
from relcollections.structures import HashMap2
from relcollections.structures import KeyValue
from relcollections.structures import List
from relcollections.structures import NestedMap
from relcollections.structures import SEPARATOR
from relcollections.structures import Set

__all__ = [
    'Options',
    'KeyValue',
    'Set',
    'List',
    'NestedMap',
    'HashMap2',
    'SEPARATOR',
]
