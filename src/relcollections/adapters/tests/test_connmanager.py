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

from hamcrest import assert_that
from nti.testing.matchers import validly_provides

from relcollections.tests import TestCase
from relcollections.tests import MockCursor
from relcollections.tests import MockConnection
from relcollections.tests import MockOptions
from relcollections.tests import MockDriver
from relcollections.tests import DisconnectedException
from relcollections.tests import CloseException

from relcollections.adapters.connmanager import AbstractConnectionManager
from relcollections.adapters import interfaces


class FailingObject(object):
    closed = False
    fetched = False
    ex = CloseException

    def rollback(self):
        raise self.ex

    def close(self):
        self.closed = True
        raise CloseException

    def fetchall(self):
        self.fetched = True


class OpeningConnectionManager(AbstractConnectionManager):

    def _do_open(self):
        conn = MockConnection()
        return conn, conn.cursor()


class TestAbstractConnectionManager(TestCase):

    def _makeOne(self, kind=AbstractConnectionManager, **options):
        return kind(
            MockOptions.from_args(**options),
            MockDriver()
        )

    def test_provides(self):
        cm = self._makeOne()
        assert_that(cm, validly_provides(interfaces.IConnectionManager))

    def test_open_is_abstract(self):
        cm = self._makeOne()
        with self.assertRaises(NotImplementedError):
            cm.open()

    def test_open_calls_hooks_in_order(self):
        cm = self._makeOne(OpeningConnectionManager)
        called = []
        cm.add_on_opened(lambda conn, cur: called.append(('first', conn, cur)))
        cm.add_on_opened(lambda conn, cur: called.append(('second', conn, cur)))

        conn, cur = cm.open()
        self.assertEqual(called, [('first', conn, cur), ('second', conn, cur)])
        self.assertFalse(conn.closed)

    def test_open_closes_when_hook_fails(self):
        cm = self._makeOne(OpeningConnectionManager)
        opened = []
        def hook(conn, cur):
            opened.append((conn, cur))
            raise DisconnectedException

        cm.add_on_opened(hook)
        with self.assertRaises(DisconnectedException):
            cm.open()

        conn, cur = opened[0]
        self.assertTrue(conn.closed)
        self.assertTrue(cur.closed)

    def test_hooks_are_per_instance(self):
        cm1 = self._makeOne(OpeningConnectionManager)
        cm2 = self._makeOne(OpeningConnectionManager)
        cm1.add_on_opened(lambda conn, cur: None)
        self.assertLength(cm1._on_opened, 1)
        self.assertEmpty(cm2._on_opened)

    def test_close_reports_exception(self):
        cm = self._makeOne()

        self.assertTrue(cm.close(MockConnection()))

        o = FailingObject()
        # As a connection
        self.assertFalse(cm.close(o))
        # As a cursor
        self.assertFalse(cm.close(MockConnection(), o))

        # Raising DisconnectedException instead of CloseException
        o.ex = DisconnectedException
        self.assertFalse(cm.close(o))
        self.assertFalse(cm.close(MockConnection(), o))

    def test_rollback_raises_exception(self):
        cm = self._makeOne()

        # With no exceptions, we should get a success report.
        self.assertTrue(cm.rollback(MockConnection(), MockCursor()))

        # The cursor is left alone; only the connection rolls back.
        o = FailingObject()
        conn = MockConnection()
        self.assertTrue(cm.rollback(conn, o))
        self.assertFalse(o.fetched)
        self.assertFalse(o.closed)
        self.assertFalse(conn.closed)
        self.assertTrue(conn.rolled_back)

        # As a connection the error is reraised and everything is closed.
        o = FailingObject()
        cur = MockCursor()
        with self.assertRaises(o.ex):
            cm.rollback(o, cur)

        self.assertTrue(o.closed)
        self.assertTrue(cur.closed)

        o = FailingObject()
        o.ex = DisconnectedException
        cur = MockCursor()
        with self.assertRaises(o.ex):
            cm.rollback(o, cur)

        self.assertTrue(o.closed)
        self.assertTrue(cur.closed)

    def test_rollback_skipped_when_not_needed(self):
        cm = self._makeOne()
        cm.driver.connection_may_need_rollback = lambda conn: False
        o = FailingObject()
        self.assertTrue(cm.rollback(o, MockCursor()))
        self.assertFalse(o.closed)

        self.assertTrue(cm.rollback(None, MockCursor()))

    def test_rollback_and_close_reports_exception(self):
        cm = self._makeOne()

        # With no exceptions, we should get a success report.
        conn = MockConnection()
        cur = MockCursor()
        self.assertTrue(cm.rollback_and_close(conn, cur))
        self.assertTrue(conn.closed)
        self.assertTrue(cur.closed)

        o = FailingObject()
        # As a cursor, it isn't read; closing it fails, so we get a report.
        conn = MockConnection()
        self.assertFalse(cm.rollback_and_close(conn, o))
        self.assertFalse(o.fetched)
        self.assertTrue(o.closed)
        self.assertTrue(conn.closed)

        o = FailingObject()
        # As a connection the error is reported and everything is closed.
        self.assertFalse(cm.rollback_and_close(o, MockCursor()))
        self.assertTrue(o.closed)

        o = FailingObject()
        o.ex = DisconnectedException
        self.assertFalse(cm.rollback_and_close(o, MockCursor()))
        self.assertTrue(o.closed)

    def test_rollback_quietly_reports_exception(self):
        cm = self._makeOne()
        meth = cm.rollback_quietly
        # With no exceptions, we should get a success report.
        self.assertTrue(meth(MockConnection(), MockCursor()))

        o = FailingObject()
        # As a cursor, it is neither read nor closed.
        self.assertTrue(meth(MockConnection(), o))
        self.assertFalse(o.fetched)
        self.assertFalse(o.closed)

        o = FailingObject()
        # As a connection the error is reported and everything is closed.
        cur = MockCursor()
        self.assertFalse(meth(o, cur))
        self.assertTrue(o.closed)
        self.assertTrue(cur.closed)

        o = FailingObject()
        o.ex = DisconnectedException
        self.assertFalse(meth(o, MockCursor()))
        self.assertTrue(o.closed)

    def test_rollback_quietly_raises_unexpected_errors(self):
        cm = self._makeOne()
        o = FailingObject()
        o.ex = ValueError
        cur = MockCursor()
        with self.assertRaises(ValueError):
            cm.rollback_quietly(o, cur)
        self.assertTrue(o.closed)
        self.assertTrue(cur.closed)

    def test_commit(self):
        cm = self._makeOne()
        conn = MockConnection()
        cm.commit(conn, MockCursor())
        self.assertTrue(conn.committed)

    def test_commit_not_needed(self):
        cm = self._makeOne()
        cm.driver.connection_may_need_commit = lambda conn: False
        conn = MockConnection()
        cm.commit(conn)
        self.assertFalse(conn.committed)

        cm.commit(conn, force=True)
        self.assertTrue(conn.committed)

    def test_begin_does_nothing(self):
        cm = self._makeOne()
        cur = MockCursor()
        cm.begin(MockConnection(), cur)
        self.assertEmpty(cur.executed)
