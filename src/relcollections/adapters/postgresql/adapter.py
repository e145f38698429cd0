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
"""PostgreSQL adapter for RelCollections."""

from ..adapter import AbstractAdapter

from . import drivers
from .connmanager import PostgreSQLConnectionManager


class PostgreSQLAdapter(AbstractAdapter):
    """PostgreSQL adapter for RelCollections."""

    driver_options = drivers

    def __init__(self, dsn='', options=None):
        # options is a relcollections.options.Options or None
        self._dsn = dsn
        super(PostgreSQLAdapter, self).__init__(options)

    def _create(self):
        self.connmanager = PostgreSQLConnectionManager(
            self.driver,
            dsn=self._dsn,
            options=self.options,
        )
