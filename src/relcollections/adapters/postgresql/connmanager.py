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
"""PostgreSQL connection management."""

import logging

from ..._util import metricmethod
from ..connmanager import AbstractConnectionManager

logger = logging.getLogger(__name__)


class PostgreSQLConnectionManager(AbstractConnectionManager):
    """
    Connections are not in autocommit mode, so the first statement
    after a commit or rollback implicitly begins the next transaction
    and :meth:`begin` has nothing to do.
    """

    application_name = 'RelCollections'

    def __init__(self, driver, dsn, options):
        self._dsn = dsn
        super(PostgreSQLConnectionManager, self).__init__(options, driver)
        self.add_on_opened(self._on_opened_set_lock_timeout)

    @metricmethod
    def _do_open(self):
        """Open a database connection and return (conn, cursor)."""
        try:
            conn = self.driver.connect_with_application_name(
                self._dsn,
                application_name=self.application_name,
            )
            cursor = self.cursor_for_connection(conn)
        except self.driver.disconnected_exceptions as e:
            logger.warning("Unable to connect: %s", e)
            raise
        return conn, cursor

    def _on_opened_set_lock_timeout(self, conn, cursor):
        # In milliseconds.
        timeout_ms = int(self.options.commit_lock_timeout * 1000)
        self.driver.set_lock_timeout(cursor, timeout_ms)
        self.commit(conn, cursor, force=True)
