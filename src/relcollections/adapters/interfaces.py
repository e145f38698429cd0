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
"""Interfaces provided by database adapters"""

from zope.interface import Attribute
from zope.interface import Interface

# pylint:disable=inherit-non-class,no-method-argument,no-self-argument

###
# Abstractions to support multiple databases.
###

class IDBDialect(Interface):
    """
    Handles the parts of SQL that differ between databases.

    All statements use ``%s`` for ordered parameters; drivers that
    use a different style translate.
    """

    STMT_TRUNCATE = Attribute("The statement prefix that empties a table.")
    STMT_IF_NOT_EXISTS = Attribute("Inserted after CREATE TABLE to make it idempotent.")

    def quote_identifier(name):
        """
        Return *name* as a quoted SQL identifier.

        Any string, including ones holding quotes, dashes and spaces,
        produces a valid identifier.
        """

    def datatype(type_name):
        """
        Return the column type to use for the abstract *type_name*
        (``text``, ``serial``).
        """

    def upsert(table, key_column, value_column):
        """
        Return a statement that inserts ``(key, value)`` parameters,
        replacing the value of an existing key.
        """

    def insert_ignore(table, column):
        """
        Return a statement that inserts one parameter into the unique
        *column*, doing nothing if it is already present.
        """


class IDBDriver(Interface):
    """
    An abstraction over the information needed to work
    with an arbitrary DB-API driver.
    """

    __name__ = Attribute("The name of this driver")

    disconnected_exceptions = Attribute(
        "A tuple of exceptions this driver can raise on any operation if it is "
        "disconnected from the database.")

    close_exceptions = Attribute(
        "A tuple of exceptions that we can ignore when we try to "
        "close the connection to the database. Often this is the same "
        "or an extension of `disconnected_exceptions`. "
        "These exceptions may also be ignored on rolling back the connection, "
        "if we are otherwise completely done with it and prepared to drop it.")

    database_exceptions = Attribute(
        "A tuple of exceptions raised when a statement fails. "
        "Usually the DB-API module's ``Error``.")

    dialect = Attribute("The IDBDialect for this driver.")

    cursor_arraysize = Attribute(
        "The value to assign to each new cursor's ``arraysize`` attribute.")

    connect = Attribute("""
    A callable to create and return a new connection object.

    The signature is not specified here because the
    required parameters differ between databases and drivers. The interface
    should be agreed upon between the :class:`IConnectionManager` and
    the drivers for its database.
    """)

    def cursor(connection):
        """
        Create and return a new cursor sharing the state of the given
        *connection*.

        The cursor should be closed when it is no longer needed.
        """

    def commit(connection, cursor=None):
        """
        Commit the connection's current transaction.
        """

    def rollback(connection):
        """
        Roll back the connection's current transaction.
        """


class IDBDriverFactory(Interface):
    """
    Information about, and a way to get, an `IDBDriver`
    implementation.
    """

    driver_name = Attribute("The name of this driver produced by this factory.")

    def check_availability():
        """
        Return a boolean indicating whether a call to this factory
        will return a driver (True) or will raise an error (False).
        """

    def __call__(): # pylint:disable=signature-differs
        """
        Return a new `IDBDriver` as represented by this factory.

        If it is not possible to do this, for example because the
        module cannot be imported, raise an `DriverNotAvailableError`.
        """

class DriverNotAvailableError(Exception):
    """
    Raised when a requested driver isn't available.
    """

    #: The name of the requested driver
    driver_name = None

    #: The `IDBDriverOptions` that was asked for the driver.
    driver_options = None

    #: The underlying reason string, for example, from an import error
    #: if such is available.
    reason = None

    def __init__(self, driver_name, driver_options=None, reason=None):
        super(DriverNotAvailableError, self).__init__(driver_name)
        self.driver_name = driver_name
        self.driver_options = driver_options
        self.reason = reason

    def _format_drivers(self):
        driver_factories = getattr(self.driver_options,
                                   'known_driver_factories',
                                   lambda: ())()
        return ' '.join(
            '%r (Module: %r; Available: %s)' % (
                factory.driver_name,
                # This attribute isn't in the interface,
                # it's an extension from AbstractModuleDriver
                getattr(factory, 'MODULE_NAME', '<unknown>'),
                factory.check_availability()
            )
            for factory in driver_factories
        )

    def __str__(self):
        return '%s: Driver %r is not available%s. Options: %s.' % (
            type(self).__name__, self.driver_name,
            ' (reason=%s)' % (self.reason,) if self.reason is not None else '',
            self._format_drivers()
        )

    __repr__ = __str__


class UnknownDriverError(DriverNotAvailableError):
    """
    Raised when a driver that isn't registered at all is requested.
    """


class NoDriversAvailableError(DriverNotAvailableError):
    """
    Raised when there are no drivers available.
    """

    def __init__(self, driver_name='auto', driver_options=None, reason=None):
        super(NoDriversAvailableError, self).__init__(driver_name, driver_options, reason)


class IDBDriverOptions(Interface):
    """
    Implemented by a module to provide alternative drivers.
    """

    database_type = Attribute("A string naming the type of database. Informational only.")

    def select_driver(driver_name=None):
        """
        Choose and return an `IDBDriver`.

        The *driver_name* of "auto" is equivalent to a *driver_name* of
        `None` and means to choose the highest priority available driver.
        """

    def known_driver_factories():
        """
        Return an iterable of the potential `IDBDriverFactory`
        objects that can be used by `select_driver`.

        Each driver factory may or may not be available.

        The driver factories are returned in priority order, with the highest priority
        driver being first.
        """


###
# Creating and managing DB-API 2.0 connections.
# (https://www.python.org/dev/peps/pep-0249/)
###

class IConnectionManager(Interface):
    """
    Open and close database connections.
    """

    driver = Attribute("The IDBDriver the connections come from.")

    def open():
        """Open a database connection and return (conn, cursor)."""

    def close(conn=None, cursor=None):
        """
        Close a connection and cursor, ignoring certain errors.

        Return a True value if the connection was closed cleanly;
        return a false value if an error was ignored.
        """

    def cursor_for_connection(conn):
        """
        Return a new cursor for *conn*.
        """

    def begin(conn, cursor):
        """
        Start a transaction on *conn*.

        Drivers that begin transactions implicitly do nothing here.
        """

    def commit(conn, cursor=None):
        """
        Commit the current transaction of *conn*.
        """

    def rollback(conn, cursor):
        """
        Roll back the current transaction of *conn*, letting errors pass.

        If an error does happen, then the connection and cursor are closed
        before this method returns.
        """

    def rollback_quietly(conn, cursor):
        """
        Like `rollback`, but ignoring the driver's close and disconnect
        exceptions.

        :return: A true value if the connection was rolled back without ignoring any exceptions;
            if an exception was ignored, returns a false value (and the connection and cursor
            are closed before this method returns).
        """

    def rollback_and_close(conn, cursor):
        """
        Rollback the connection and close it, ignoring certain errors.

        :return: A true value if the connection was closed without ignoring any exceptions;
            if an exception was ignored, returns a false value.
        """


class IRelCollectionsAdapter(Interface):
    """
    The database a group of structures live in.

    An adapter owns a single connection. Statements from different
    threads are serialized; see :meth:`begin`.
    """

    driver = Attribute("The IDBDriver in use.")
    dialect = Attribute("The IDBDialect in use.")
    connmanager = Attribute("The IConnectionManager in use.")
    options = Attribute("The :class:`relcollections.options.Options`.")
    raw_utf8 = Attribute(
        "Can values be stored as they are? If not, structures encode "
        "them with :mod:`relcollections.encoding`.")

    def begin():
        """
        Begin a transaction and return its
        :class:`relcollections.interfaces.ITransaction`.

        Until the transaction ends, other threads calling this method
        block.

        :raises TransactionError: If the database refuses to begin.
        """

    def close():
        """
        Close the connection. The adapter opens a new one if it is used
        again.
        """
