"""relcollections.tests package"""

import os
import shutil
import tempfile
import unittest
from unittest import mock as _mock

from relcollections.options import Options
from relcollections.adapters.adapter import AbstractAdapter
from relcollections.adapters.dialect import DefaultDialect

mock = _mock


class TestCase(unittest.TestCase):
    """
    General tests that may use databases, connections and
    transactions, but don't have any specific requirements or
    framework to do so.

    This class supplies some supporting help for assertions and
    cleanups.
    """

    none = unittest.TestCase.assertIsNone

    def setUp(self):
        super(TestCase, self).setUp()
        name = self.__class__.__name__
        mname = getattr(self, '_testMethodName', '')
        if mname:
            name += '-' + mname
        self.rc_temp_prefix = name

    def _closing(self, o):
        """
        Close the object using its 'close' method *after* invoking
        all of the `tearDown` stack, and even running if `setUp`
        fails.

        Returns the given object.
        """
        self.addCleanup(o.close)
        return o

    def assertIsEmpty(self, container, msg=None):
        self.assertLength(container, 0, msg)

    assertEmpty = assertIsEmpty

    def assertLength(self, container, length, msg=None):
        self.assertEqual(len(container), length,
                         '%s -- %s' % (msg, container) if msg else container)


class StructureTestMixin(object):
    """
    Mixed in to a :class:`TestCase` to run structure tests against
    a real database. Subclasses provide :meth:`make_adapter`.
    """

    driver_name = 'auto'
    #: Keyword arguments for the :class:`Options` of :attr:`adapter`.
    adapter_options = {}

    def make_adapter(self, options):
        raise NotImplementedError

    def _make_adapter(self, **kw):
        options = dict(self.adapter_options)
        options.update(kw)
        options = Options(driver=self.driver_name, **options)
        return self._closing(self.make_adapter(options))

    def _make_peer_adapter(self):
        """
        Another adapter, with its own connection, on the database
        :attr:`adapter` uses.
        """
        return self._make_adapter()

    def setUp(self):
        super(StructureTestMixin, self).setUp()
        self.adapter = self._make_adapter()

    def _remove_on_cleanup(self, structure):
        """
        Empty *structure*, which may be left over from an earlier run,
        and drop its tables when the test ends, if the test didn't.
        """
        structure.clear()
        def remove():
            try:
                structure.remove()
            except Exception: # pylint:disable=broad-except
                pass
        # Cleanups run last in, first out: before the adapter closes.
        self.addCleanup(remove)
        return structure


class MockConnection(object):
    rolled_back = False
    closed = False
    committed = False

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True

    def cursor(self):
        return MockCursor(self)


class MockCursor(object):
    closed = False

    def __init__(self, conn=None):
        self.executed = []
        self.results = []
        self.many_results = None
        self.connection = conn

    def execute(self, stmt, params=None):
        params = tuple(params) if isinstance(params, list) else params
        self.executed.append((stmt, params))

    def fetchone(self):
        return self.results.pop(0) if self.results else None

    def fetchall(self):
        if self.many_results:
            return self.many_results.pop(0)
        r = self.results
        self.results = []
        return r

    def close(self):
        self.closed = True

    def __iter__(self):
        for row in self.results:
            yield row


class MockOptions(Options):

    @classmethod
    def from_args(cls, **kwargs):
        inst = cls()
        for k, v in kwargs.items():
            setattr(inst, k, v)
        return inst

    def __setattr__(self, name, value):
        if name not in Options.valid_option_names():
            raise AttributeError("Invalid option", name) # pragma: no cover
        object.__setattr__(self, name, value)


class DisconnectedException(Exception):
    pass

class CloseException(Exception):
    pass

class DatabaseException(Exception):
    pass


class MockDriver(object):
    __name__ = 'mock'
    cursor_arraysize = 64
    disconnected_exceptions = (DisconnectedException,)
    close_exceptions = (CloseException,)
    database_exceptions = (DatabaseException, DisconnectedException, CloseException)

    dialect = DefaultDialect()

    def connection_may_need_rollback(self, conn): # pylint:disable=unused-argument
        return True
    connection_may_need_commit = connection_may_need_rollback

    def connect(self, *args, **kwargs): # pylint:disable=unused-argument
        return MockConnection()

    def cursor(self, conn):
        return conn.cursor()

    def commit(self, conn, cursor=None): # pylint:disable=unused-argument
        conn.commit()

    def rollback(self, conn):
        conn.rollback()


class MockConnectionManager(object):
    """
    Hands out :class:`MockConnection` objects and records what it
    was asked to do with them.
    """

    clean_rollback = True

    def __init__(self, driver=None, clean_rollback=None):
        self.driver = driver if driver is not None else MockDriver()
        if clean_rollback is not None:
            self.clean_rollback = clean_rollback
        self.opened = []
        self.begun = []

    def open(self):
        conn = MockConnection()
        self.opened.append(conn)
        return conn, conn.cursor()

    def close(self, conn=None, cursor=None):
        for obj in (cursor, conn):
            if obj is not None:
                obj.close()
        return True

    def cursor_for_connection(self, conn):
        return conn.cursor()

    def begin(self, conn, cursor):
        self.begun.append((conn, cursor))

    def commit(self, conn, cursor=None, force=False): # pylint:disable=unused-argument
        self.driver.commit(conn, cursor)

    def rollback(self, conn, cursor): # pylint:disable=unused-argument
        self.driver.rollback(conn)
        return True

    def rollback_quietly(self, conn, cursor):
        if hasattr(conn, 'rollback'):
            conn.rollback()
        if not self.clean_rollback:
            self.close(conn, cursor)
        return self.clean_rollback

    def rollback_and_close(self, conn, cursor):
        self.rollback_quietly(conn, cursor)
        self.close(conn, cursor)
        return True


def pg_dsn():
    """
    The PostgreSQL DSN the integration tests connect to, or None
    when they should be skipped.
    """
    return os.environ.get('RC_TEST_PG_DSN') or None


class MockAdapter(AbstractAdapter):
    """
    An adapter whose connections come from a
    :class:`MockConnectionManager`.
    """

    def __init__(self, connmanager=None, options=None):
        self._mock_connmanager = connmanager or MockConnectionManager()
        super(MockAdapter, self).__init__(options)

    def _select_driver(self, options=None):
        return self._mock_connmanager.driver

    def _create(self):
        self.connmanager = self._mock_connmanager


class Sqlite3AdapterMixin(object):
    """
    Runs the structure tests on a private in-memory SQLite database.
    """

    database_path = ':memory:'

    def make_adapter(self, options):
        from relcollections.adapters.sqlite import Sqlite3Adapter
        return Sqlite3Adapter(self.database_path, options=options)

    def _make_peer_adapter(self):
        if self.database_path == ':memory:':
            self.skipTest("In-memory databases can't be shared")
        return super(Sqlite3AdapterMixin, self)._make_peer_adapter()


class Sqlite3FileAdapterMixin(Sqlite3AdapterMixin):
    """
    Runs the structure tests on a SQLite file in a temporary
    directory, which other adapters can open too.
    """

    def setUp(self):
        tmpdir = tempfile.mkdtemp(prefix='rc-test-')
        self.addCleanup(shutil.rmtree, tmpdir, True)
        self.database_path = os.path.join(tmpdir, 'data.sqlite3')
        super(Sqlite3FileAdapterMixin, self).setUp()
