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

import unittest
from collections import deque

from hamcrest import assert_that
from nti.testing.matchers import validly_provides

from relcollections.adapters.interfaces import IDBDriverOptions
from relcollections.adapters.interfaces import DriverNotAvailableError
from relcollections.adapters.interfaces import UnknownDriverError
from relcollections.tests import MockCursor

from .. import drivers
from ..drivers import AbstractPostgreSQLDriver
from ..drivers import PostgreSQLDialect
from ..drivers.pg8000 import PG8000Driver
from ..drivers.pg8000 import _parse_dsn
from ..drivers.psycopg2 import Psycopg2Driver


class TestDriverOptions(unittest.TestCase):

    def test_provides(self):
        assert_that(drivers, validly_provides(IDBDriverOptions))
        self.assertEqual(drivers.database_type, 'postgresql')

    def test_known_drivers_in_priority_order(self):
        names = [f.driver_name for f in drivers.known_driver_factories()]
        self.assertEqual(sorted(names), ['pg8000', 'psycopg2'])

    def test_unknown(self):
        with self.assertRaises(UnknownDriverError):
            drivers.select_driver('mysqlclient')


class TestParseDSN(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(
            _parse_dsn("dbname=relcollections user='rc' password=secret host=localhost port=5433"),
            {
                'database': 'relcollections',
                'user': 'rc',
                'password': 'secret',
                'host': 'localhost',
                'port': 5433,
            })

    def test_empty(self):
        self.assertEqual(_parse_dsn(''), {})


class MockNoticeConnection(object):

    def __init__(self, notices):
        self.notices = notices


class TestAbstractPostgreSQLDriver(unittest.TestCase):

    def _makeOne(self):
        # Skip the module checks; these methods don't use it.
        return AbstractPostgreSQLDriver.__new__(AbstractPostgreSQLDriver)

    def test_dialect(self):
        self.assertIsInstance(AbstractPostgreSQLDriver.dialect, PostgreSQLDialect)

    def test_set_lock_timeout(self):
        cursor = MockCursor()
        self._makeOne().set_lock_timeout(cursor, 1500.0)
        self.assertEqual(cursor.executed, [('SET lock_timeout = 1500', None)])

    def test_get_messages_psycopg2(self):
        conn = MockNoticeConnection(['NOTICE: one\n', 'NOTICE: two\n'])
        self.assertEqual(self._makeOne().get_messages(conn),
                         ['NOTICE: one\n', 'NOTICE: two\n'])
        self.assertEqual(conn.notices, [])

    def test_get_messages_pg8000(self):
        conn = MockNoticeConnection(deque([{'M': 'one'}, {b'M': 'two'}]))
        self.assertEqual(self._makeOne().get_messages(conn), ['one', 'two'])
        self.assertEqual(len(conn.notices), 0)

    def test_get_messages_none(self):
        self.assertEqual(self._makeOne().get_messages(MockNoticeConnection([])), ())


def _driver_or_skip(kind):
    try:
        return kind()
    except DriverNotAvailableError as ex:
        raise unittest.SkipTest(str(ex))


class TestPsycopg2Driver(unittest.TestCase):

    def test_connect_with_application_name(self):
        driver = _driver_or_skip(Psycopg2Driver)
        dsns = []
        class Conn(object):
            autocommit = False
        def connect(dsn):
            dsns.append(dsn)
            return Conn()
        driver._connect = connect

        driver.connect_with_application_name('dbname=rc', 'RelCollections')
        driver.connect_with_application_name("dbname=rc application_name='mine'", 'RelCollections')
        self.assertEqual(dsns, [
            "dbname=rc application_name='RelCollections'",
            "dbname=rc application_name='mine'",
        ])


class TestPG8000Driver(unittest.TestCase):

    def test_connect_with_application_name(self):
        driver = _driver_or_skip(PG8000Driver)
        calls = []
        driver._connect = lambda **kw: calls.append(kw)

        driver.connect_with_application_name('dbname=rc port=5432', 'RelCollections')
        self.assertEqual(calls, [{
            'database': 'rc',
            'port': 5432,
            'application_name': 'RelCollections',
        }])
