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
"""sqlite3 adapter for RelCollections."""

import os.path

from ..adapter import AbstractAdapter

from . import drivers
from .connmanager import Sqlite3ConnectionManager


class Sqlite3Adapter(AbstractAdapter):
    """
    Structures stored in the SQLite database at *path*.

    The default *path*, ``:memory:``, is a private in-memory database
    that lasts until :meth:`close`.
    """
    driver_options = drivers

    def __init__(self, path=':memory:', pragmas=None, options=None):
        self.path = path if path == ':memory:' else os.path.abspath(path)
        self.pragmas = pragmas
        super(Sqlite3Adapter, self).__init__(options)

    def _create(self):
        self.connmanager = Sqlite3ConnectionManager(
            self.driver,
            path=self.path,
            pragmas=self.pragmas,
            options=self.options
        )

    def __repr__(self):
        return "<%s.%s at 0x%x path=%r driver=%s>" % (
            self.__class__.__module__,
            self.__class__.__name__,
            id(self),
            self.path,
            self.driver,
        )
