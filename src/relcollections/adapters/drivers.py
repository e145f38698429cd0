##############################################################################
#
# Copyright (c) 2016 Zope Foundation and Contributors.
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
Finding and describing the DB-API modules the adapters use.

Each database package has a ``drivers`` module that lists its
:class:`AbstractModuleDriver` subclasses and calls
:func:`implement_db_driver_options`; that makes the module an
``IDBDriverOptions`` that adapters pick a driver from by name.
"""

import importlib
import sys
from importlib import metadata

from packaging.version import parse as parse_version
from packaging.version import InvalidVersion
from packaging.requirements import Requirement

from zope.interface import directlyProvides
from zope.interface import implementer

from .._compat import PYPY
from .._compat import casefold
from .._util import get_positive_integer_from_environ

from .interfaces import IDBDriver
from .interfaces import IDBDriverFactory
from .interfaces import IDBDriverOptions
from .interfaces import DriverNotAvailableError
from .interfaces import NoDriversAvailableError
from .interfaces import UnknownDriverError

logger = __import__('logging').getLogger(__name__)


def _select_driver(options, driver_options):
    driver = _select_driver_by_name(options.driver, driver_options)
    driver.configure_from_options(options)
    return driver


def _select_driver_by_name(driver_name, driver_options):
    """
    Return the first driver of *driver_options* named *driver_name*
    (in any case), or, for ``auto`` or None, the first that can be
    created at all.

    A driver asked for by name raises its own error when it can't be
    created; ``auto`` only raises once every candidate has failed.
    """
    wanted = casefold(driver_name or 'auto')
    any_driver = wanted == 'auto'
    failures = {}
    for factory in driver_options.known_driver_factories():
        if not any_driver and casefold(factory.driver_name) != wanted:
            continue
        try:
            driver = factory()
        except DriverNotAvailableError as ex:
            if not any_driver:
                ex.driver_options = driver_options
                raise
            failures[factory.driver_name] = str(ex)
        else:
            logger.debug("Driver %s chosen for %r", driver, wanted)
            return driver

    kind = NoDriversAvailableError if any_driver else UnknownDriverError
    raise kind(wanted, driver_options, failures or None)


class DriverNotImportableError(DriverNotAvailableError, ImportError):
    "The driver's module can't be imported."


class _FalseReason(object):
    """
    A false value that explains itself.
    """

    def __init__(self, why):
        self.message = why if isinstance(why, str) else '%s: %s' % (type(why).__name__, why)

    def __bool__(self):
        return False

    def __str__(self):
        return self.message


def _has_requirement(requirement):
    """
    Is the distribution named by the
    ``packaging.requirements.Requirement`` *requirement* installed in
    a version it accepts? Returns True or a :class:`_FalseReason`.
    """
    try:
        version = parse_version(metadata.version(requirement.name))
    except (metadata.PackageNotFoundError, InvalidVersion) as ex:
        return _FalseReason(ex)
    if version not in requirement.specifier:
        return _FalseReason('Requirement %s not met with package: %s' % (requirement, version))
    return True


class AbstractModuleDriver(object):
    """
    A driver backed by an importable DB-API module.

    Subclasses set ``__name__`` (the name used in ``Options.driver``),
    ``MODULE_NAME`` and ``dialect``.
    """

    #: The DB-API module to import.
    MODULE_NAME = None

    #: The name given as ``Options.driver``.
    __name__ = None

    #: False when the subclass knows at import time that it can't work.
    STATIC_AVAILABLE = True

    #: Requirement strings, such as ``("pg8000 >= 1.16",)``, that
    #: must be installed for the driver to be created.
    REQUIREMENTS = ()

    #: Lower is preferred by ``auto``.
    PRIORITY = 100
    #: The same, on PyPy.
    PRIORITY_PYPY = 100

    #: The ``arraysize`` of new cursors; ``RC_CURSOR_ARRAYSIZE``
    #: overrides it.
    cursor_arraysize = get_positive_integer_from_environ(
        'RC_CURSOR_ARRAYSIZE', 1024,
        logger=logger,
    )

    #: Notices sent by the server at commit or rollback are logged
    #: at DEBUG here.
    message_logger = logger

    def __init__(self):
        self.driver_module = module = self._import_checked()
        self.disconnected_exceptions = (module.OperationalError, module.InterfaceError)
        self.close_exceptions = self.disconnected_exceptions + (module.ProgrammingError,)
        self.database_exceptions = (module.Error,)
        self._connect = module.connect

    def _import_checked(self):
        if not self.STATIC_AVAILABLE:
            raise DriverNotAvailableError(self.__name__, reason=self.STATIC_AVAILABLE)
        # The importable name needn't match the distribution name, so
        # this is separate from the requirement checks.
        try:
            module = self.get_driver_module()
        except ImportError as ex:
            logger.debug("Driver %r can't import %r", self.__name__, self.MODULE_NAME,
                         exc_info=True)
            raise DriverNotImportableError(self.__name__, reason=str(ex)) from ex

        for req in self.REQUIREMENTS:
            found = _has_requirement(Requirement(req))
            if not found:
                raise DriverNotAvailableError(self.__name__, reason=found)
        return module

    def get_driver_module(self):
        return importlib.import_module(self.MODULE_NAME)

    def connect(self, *args, **kwargs):
        return self._connect(*args, **kwargs)

    def configure_from_options(self, options): # pylint:disable=unused-argument
        "Nothing to configure by default."

    def cursor(self, conn):
        cursor = conn.cursor()
        cursor.arraysize = self.cursor_arraysize
        return cursor

    def get_messages(self, conn): # pylint:disable=unused-argument
        return ()

    def _end_transaction(self, conn, end):
        end()
        for message in self.get_messages(conn):
            self.message_logger.debug("Message from the server: %s", message.strip())

    def commit(self, conn, cursor=None): # pylint:disable=unused-argument
        self._end_transaction(conn, conn.commit)

    def rollback(self, conn):
        self._end_transaction(conn, conn.rollback)

    def connection_may_need_rollback(self, conn): # pylint:disable=unused-argument
        return True

    connection_may_need_commit = connection_may_need_rollback

    def __str__(self):
        return '%s(%s)' % (type(self).__name__, self.__name__)


@implementer(IDBDriverFactory)
class _ClassDriverFactory(object):
    """
    Creates drivers of one class. Other attributes, such as
    ``PRIORITY`` and ``MODULE_NAME``, come from the class.
    """

    def __init__(self, driver_type):
        self.driver_type = driver_type
        # Driver classes set ``__name__`` in their body, which hides
        # the class name.
        self.driver_name = driver_type.__dict__.get('__name__') or driver_type.__name__

    def check_availability(self):
        try:
            self()
        except DriverNotAvailableError:
            return False
        return True

    def __call__(self):
        return self.driver_type()

    def _key(self):
        return casefold(self.driver_name), self.driver_type

    def __eq__(self, other):
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __getattr__(self, name):
        return getattr(self.driver_type, name)


def implement_db_driver_options(name, *driver_modules):
    """
    Make the module *name* provide ``IDBDriverOptions``.

    Call at module scope with ``__name__``. Each of *driver_modules*
    is imported relative to that module; the ``IDBDriver`` classes
    named in its ``__all__`` are its drivers.
    """
    module = sys.modules[name]

    factories = set()
    for driver_module in driver_modules:
        driver_module = importlib.import_module('.' + driver_module, name)
        for attr in driver_module.__all__:
            kind = getattr(driver_module, attr)
            if IDBDriver.implementedBy(kind): # pylint:disable=no-value-for-parameter
                factories.add(_ClassDriverFactory(kind))

    def priority(factory):
        return factory.PRIORITY_PYPY if PYPY else factory.PRIORITY

    module.known_driver_factories = lambda: sorted(factories, key=priority)
    module.select_driver = lambda driver_name=None: _select_driver_by_name(driver_name, module)
    directlyProvides(module, IDBDriverOptions)
