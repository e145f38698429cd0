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
Reversible encoding of stored values.

Databases (or drivers) that can't be trusted with arbitrary UTF-8 text
get the hex digits of the UTF-8 bytes instead. The result is plain
ASCII, so it survives any text column.
"""

from relcollections._util import to_utf8

__all__ = [
    'encode',
    'decode',
]


def encode(value):
    """
    Return the lowercase hex digits of the UTF-8 encoding of *value*.

        >>> encode('hunter2')
        '68756e74657232'
        >>> encode('')
        ''
    """
    return to_utf8(value).hex()


def decode(value):
    """
    Reverse :func:`encode`.

        >>> decode('68756e74657232')
        'hunter2'

    :raises ValueError: If *value* isn't the hex encoding of UTF-8 text.
    """
    return bytes.fromhex(value).decode('utf-8')
