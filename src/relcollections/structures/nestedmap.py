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
A map of maps, stored as a flat :class:`KeyValue`.

Each ``(owner, key) -> value`` entry is a row of the key-value table
named ``<name>_properties_map`` whose key is ``owner + SEPARATOR +
key``. Every property key ever written is also remembered in the set
``<name>_encountered_property_keys``; lookups by owner walk that set.

The set is only ever added to (until :meth:`NestedMap.clear` or
:meth:`NestedMap.remove`), and names are added before the data using
them is committed. It can therefore hold names that no owner has, but
it never lacks a name that some owner has.
"""

import logging

from zope.interface import implementer

from relcollections._util import log_timed
from relcollections._util import metricmethod_sampled
from relcollections.interfaces import INestedMap
from relcollections.interfaces import NotFound
from relcollections.interfaces import ValidationError

from .keyvalue import KeyValue
from .uniqueset import Set

__all__ = [
    'SEPARATOR',
    'NestedMap',
    'HashMap2',
]

#: Joins an owner and a property key. Neither may contain it.
SEPARATOR = '\u00a4' # CURRENCY SIGN


@implementer(INestedMap)
class NestedMap(object):

    key_value_suffix = '_properties_map'
    property_set_suffix = '_encountered_property_keys'

    def __init__(self, adapter, name, logger=None):
        """
        :keyword logger: Where :meth:`set_large_map` writes its
            progress, at DEBUG level. Defaults to this module's logger.
        """
        self.adapter = adapter
        self.name = name
        if logger is None:
            logger = logging.getLogger(__name__)
        self.logger = logger
        self.key_value = KeyValue(adapter, name + self.key_value_suffix, logger=logger)
        self.property_set = Set(adapter, name + self.property_set_suffix, logger=logger)

    def __repr__(self):
        return "<%s %r adapter=%r>" % (
            type(self).__name__,
            self.name,
            self.adapter,
        )

    @staticmethod
    def _check_component(kind, value):
        if SEPARATOR in value:
            raise ValidationError("%s can not contain %s: %r" % (kind, SEPARATOR, value))

    @staticmethod
    def _composite_key(owner, key):
        return owner + SEPARATOR + key

    def _add_new_keys(self, keys, log=False):
        known = set(self.property_set.get_all())
        for key in keys:
            if key in known:
                continue
            if log:
                self.logger.debug("ADDING %s", key)
            self.property_set.add(key)
            known.add(key)

    def set(self, owner, key, value):
        self.set_map(owner, {key: value})

    @metricmethod_sampled
    def set_map(self, owner, properties):
        self._check_component('owner', owner)
        for key in properties:
            self._check_component('key', key)

        # Outside the transaction; a rollback leaves these in place.
        self._add_new_keys(properties)

        with self.adapter.begin() as txn:
            for key, value in properties.items():
                self.key_value.set(self._composite_key(owner, key), value, txn=txn)

    @log_timed
    def set_large_map(self, all_properties):
        """
        Store every ``owner -> {key: value}`` of *all_properties* in one
        transaction.

        Nothing is validated: the owners and keys must not contain
        :data:`SEPARATOR`, and the owners should not already be
        present.
        """
        logger = self.logger
        self._add_new_keys(
            (key for properties in all_properties.values() for key in properties),
            log=True
        )

        logger.debug("Starting transaction")
        with self.adapter.begin() as txn:
            for owner, properties in all_properties.items():
                for key, value in properties.items():
                    logger.debug("SETTING %s %s->%s", owner, key, value)
                    self.key_value.set(self._composite_key(owner, key), value, txn=txn)
            logger.debug("Committing transaction")
            txn.commit()
        logger.debug("Transaction complete")

    @metricmethod_sampled
    def get(self, owner, key):
        return self.key_value.get(self._composite_key(owner, key))

    @metricmethod_sampled
    def get_map(self, owner, keys):
        result = {}
        with self.adapter.begin() as txn:
            try:
                for key in keys:
                    result[key] = self.key_value.get(self._composite_key(owner, key), txn=txn)
            except Exception as ex:
                ex.partial_result = result
                raise
        return result

    def has(self, owner, key):
        try:
            self.get(owner, key)
        except NotFound:
            return False
        return True

    def exists(self, owner):
        for key in self.property_set.get_all():
            if self.has(owner, key):
                return True
        return False

    def keys(self, owner):
        return [key for key in self.property_set.get_all() if self.has(owner, key)]

    def get_all(self):
        owners = []
        seen = set()
        for composite in self.key_value.keys():
            owner, sep, _ = composite.partition(SEPARATOR)
            if sep and owner not in seen:
                seen.add(owner)
                owners.append(owner)
        return owners

    all = get_all

    def all_where(self, key, value):
        found = []
        for owner in self.get_all():
            try:
                if self.get(owner, key) == value:
                    found.append(owner)
            except NotFound:
                continue
        return found

    def all_encountered_keys(self):
        return self.property_set.get_all()

    def count(self):
        # Not the row count; that counts every property of every owner.
        return len(self.get_all())

    def del_key(self, owner, key):
        # The name stays in the property set even if no owner has it now.
        self.key_value.delete(self._composite_key(owner, key))

    def delete(self, owner):
        keys = self.property_set.get_all()
        with self.adapter.begin() as txn:
            for key in keys:
                self.key_value.delete(self._composite_key(owner, key), txn=txn)

    def clear(self):
        # The index is emptied last so a failure never leaves a
        # stored property it doesn't list.
        self.key_value.clear()
        self.property_set.clear()

    def remove(self):
        self.key_value.remove()
        self.property_set.remove()


#: The older name.
HashMap2 = NestedMap
