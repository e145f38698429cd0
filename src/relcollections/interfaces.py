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
Interfaces and exceptions for the table-backed structures.

Each structure stores its contents in one (or, for nested maps, two)
database tables whose names are derived from a caller-supplied base
name. Nothing is cached in memory: two structures constructed with the
same name on the same database see the same data.
"""

from zope.interface import Interface
from zope.interface import Attribute

# pylint:disable=inherit-non-class, no-self-argument, no-method-argument

__all__ = [
    'IStructure',
    'IList',
    'ISet',
    'IKeyValue',
    'IHashMap',
    'INestedMap',
    'ITransaction',

    'RelCollectionsError',
    'NotFound',
    'ValidationError',
    'TransactionError',
    'BackingStoreError',
    'StructureRemovedError',
]


class IStructure(Interface):
    """
    Something stored in one or more database tables.
    """

    adapter = Attribute("The database adapter the tables live in.")

    def clear():
        """
        Delete every entry, leaving the table(s) in place and usable.
        """

    def remove():
        """
        Drop the table(s).

        Any further use of this object raises
        :class:`StructureRemovedError`.
        """


class IList(IStructure):
    """
    An append-only sequence of strings that remembers insertion order.
    """

    table_name = Attribute("The name of the backing table.")

    def add(value):
        """
        Append *value* to the end of the list.
        """

    def get_all():
        """
        Return every value, in the order they were added.
        """

    def get_last():
        """
        Return the most recently added value.

        :raises NotFound: If the list is empty.
        """

    def get_last_n(n):
        """
        Return up to *n* of the most recently added values, in the
        order they were added.

        Asking for more values than are present returns the whole list.
        """

    def count():
        """
        Return the number of values.
        """


class ISet(IStructure):
    """
    A collection of distinct strings, with no particular order.
    """

    table_name = Attribute("The name of the backing table.")

    def add(value):
        """
        Add *value*. Adding a value that is already present does nothing.
        """

    def has(value):
        """
        Answer whether *value* is present.

        Absence is reported as ``False``, never as an exception.
        """

    def get_all():
        """
        Return a list of every value, in no particular order.
        """

    def delete(value):
        """
        Remove *value*, if present.
        """

    def count():
        """
        Return the number of values.
        """


class IKeyValue(IStructure):
    """
    A flat mapping from string keys to string values.

    Every method accepts an optional *txn*, an :class:`ITransaction`
    obtained from the adapter. When given, the statement runs inside
    that transaction and is not committed; the caller commits or rolls
    back.
    """

    table_name = Attribute("The name of the backing table.")

    def set(key, value, txn=None):
        """
        Store *value* under *key*, replacing any previous value.
        """

    def get(key, txn=None):
        """
        Return the value stored under *key*.

        :raises NotFound: If there is no such key. A key holding
            the empty string is present.
        """

    def delete(key, txn=None):
        """
        Remove *key*. Removing an absent key does nothing.
        """

    def keys():
        """
        Return a list of every key, in no particular order.
        """

    def count():
        """
        Return the number of keys.
        """

    def inc(key):
        """
        Add one to the integer stored under *key* and return the result
        as a string. An absent key counts as ``"0"``.

        :raises ValueError: If the stored value isn't an integer.
        """


class IHashMap(IStructure):
    """
    A map of maps: each *owner* holds a mapping of property keys
    to string values.
    """

    def set(owner, key, value):
        """
        Store *value* as the *key* property of *owner*.

        :raises ValidationError: If either *owner* or *key* contains
            the separator.
        """

    def get(owner, key):
        """
        Return the *key* property of *owner*.

        :raises NotFound: If *owner* does not hold *key*.
        """

    def has(owner, key):
        """
        Answer whether *owner* holds the property *key*.
        """

    def exists(owner):
        """
        Answer whether *owner* holds any property at all.
        """

    def get_all():
        """
        Return the distinct owners.
        """

    def del_key(owner, key):
        """
        Remove one property of *owner*.
        """

    def delete(owner):
        """
        Remove every property of *owner*.
        """


class INestedMap(IHashMap):
    """
    The full surface of a nested map.
    """

    key_value = Attribute("The :class:`IKeyValue` holding the data.")
    property_set = Attribute(
        "The :class:`ISet` of every property key name ever written. "
        "It can hold names no owner holds anymore, but never lacks a "
        "name some owner holds.")

    def set_map(owner, properties):
        """
        Store every item of the mapping *properties* for *owner*, in a
        single transaction.

        Every owner and key is checked before anything is written. New
        property names are added to :attr:`property_set` before the
        transaction begins, and stay there even if it is rolled back.

        :raises ValidationError: If *owner* or any key contains the
            separator. Nothing is written in that case.
        """

    def set_large_map(all_properties):
        """
        Store a mapping of ``owner -> {key: value}`` in a single
        transaction, without checking for the separator.

        The owners are expected to be new; this is not verified.
        """

    def get_map(owner, keys):
        """
        Return a dictionary of the *keys* properties of *owner*, read in
        a single transaction.

        If any read fails, the transaction is rolled back and the
        exception propagates; the values read so far are available as
        its ``partial_result`` attribute.
        """

    def keys(owner):
        """
        Return the property keys *owner* holds.
        """

    def all_where(key, value):
        """
        Return the owners whose *key* property equals *value*.
        """

    def all_encountered_keys():
        """
        Return every property key name ever written.
        """

    def count():
        """
        Return the number of distinct owners.
        """


class ITransaction(Interface):
    """
    A database transaction on the adapter's connection.

    While a transaction is open, other threads using the same adapter
    block. Used as a context manager, it commits when the block exits
    normally and rolls back when the block raises.
    """

    cursor = Attribute("The cursor statements in the transaction run on.")
    active = Attribute("Is the transaction still open?")

    def commit():
        """
        Commit and end the transaction.

        :raises TransactionError: If the commit fails. The transaction
            is rolled back and ended.
        """

    def rollback():
        """
        Roll back and end the transaction.

        :raises TransactionError: If the rollback fails.
        """


class RelCollectionsError(Exception):
    """
    Base class for the exceptions raised by this package.
    """


class NotFound(RelCollectionsError, KeyError):
    """
    Raised when a key, value or owner is absent.
    """

    def __str__(self):
        # KeyError quotes its argument; we want the message.
        return Exception.__str__(self)


class ValidationError(RelCollectionsError, ValueError):
    """
    Raised when an owner or property key contains the separator.
    """


class TransactionError(RelCollectionsError):
    """
    Raised when beginning, committing or rolling back a transaction
    fails.
    """


class BackingStoreError(RelCollectionsError):
    """
    Raised when the database driver fails a statement.

    The driver's exception is available as ``__cause__``.
    """


class StructureRemovedError(RelCollectionsError):
    """
    Raised when a structure is used after :meth:`IStructure.remove`.
    """
