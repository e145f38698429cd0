##############################################################################
#
# Copyright (c) 2008 Zope Foundation and Contributors.
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

from relcollections._util import get_boolean_from_environ

#: Default for :attr:`Options.raw_utf8`. Setting ``RC_RAW_UTF8`` to a
#: false value makes every adapter hex-encode stored values unless
#: told otherwise.
RAW_UTF8_DEFAULT = get_boolean_from_environ(
    'RC_RAW_UTF8',
    True
)

class Options(object):
    """Options for configuring a database adapter.

    These parameters can be provided as keyword options to the adapter
    constructors. For example::

        adapter = Sqlite3Adapter('data.sqlite3', options=Options(driver='sqlite3'))

    Unknown keyword arguments are rejected with a :exc:`TypeError`.
    """

    #: A name for the adapter, used in its ``repr``.
    name = None

    #: Which database driver to use. ``auto`` picks the highest
    #: priority driver that can be imported.
    driver = 'auto'

    #: Can the database safely hold arbitrary UTF-8 text? When false,
    #: values are encoded with :mod:`relcollections.encoding` before
    #: they are written and decoded after they are read.
    raw_utf8 = RAW_UTF8_DEFAULT

    #: How long to wait for a lock held by another connection, in seconds.
    commit_lock_timeout = 30

    #: Create each structure's table when the structure is constructed.
    create_tables = True

    def __init__(self, **kwoptions):
        for key, value in kwoptions.items():
            if not hasattr(self, key):
                raise TypeError("Unknown parameter: %s (Known: %s)" % (
                    key,
                    self.valid_option_names()
                ))
            setattr(self, key, value)

    @classmethod
    def copy_valid_options(cls, other_options):
        """
        Produce a new options featuring only the valid settings from
        *other_options*.
        """
        option_dict = {}
        for key in cls.valid_option_names():
            value = getattr(other_options, key, None)
            if value is not None:
                option_dict[key] = value
        return cls(**option_dict)

    @classmethod
    def valid_option_names(cls):
        return sorted(
            x
            for x in vars(cls)
            if not callable(getattr(cls, x)) and not x.startswith('_')
        )

    def __repr__(self):
        opts = []
        for k, v in sorted(self.__dict__.items()):
            opt = '%s=%r' % (k, v)
            opts.append(opt)
        opts = ', '.join(opts)
        return 'relcollections.options.Options(%s)' % (opts,)

    def __eq__(self, other):
        if not isinstance(other, Options):
            return NotImplemented
        return all(getattr(self, key) == getattr(other, key)
                   for key in self.valid_option_names())

    def __hash__(self):
        # Equal objects must have equal hashes; our values
        # need not be hashable.
        return 42

    def copy(self, **kw):
        """
        Produce a copy of these options, with keyword arguments overriding.
        """
        options = dict(self.__dict__)
        options.update(kw)
        return self.__class__(**options)
