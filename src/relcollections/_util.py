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
Environment settings, timing logs and metrics shared by the package.
"""

import os

import logging
from logging import DEBUG
from logging import INFO
from logging import WARN
from logging import ERROR

from ZConfig.datatypes import asBoolean
from ZConfig.datatypes import integer
from ZConfig.datatypes import RangeCheckedConversion

from perfmetrics import metricmethod
from perfmetrics import Metric

from relcollections._compat import wraps
from relcollections._compat import perf_counter
from relcollections._compat import IN_TESTRUNNER

_logger = logging.getLogger('relcollections')
perf_logger = _logger.getChild('timing')

#: Below DEBUG; used for each SQL statement.
TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

__all__ = [
    'TRACE',

    'get_positive_integer_from_environ',
    'get_non_negative_float_from_environ',
    'get_boolean_from_environ',

    'log_timed',
    'metricmethod',
    'metricmethod_sampled',
    'parse_boolean',
    'positive_integer',
    'to_utf8',
]

positive_integer = RangeCheckedConversion(integer, min=1)
non_negative_float = RangeCheckedConversion(float, min=0)


def _setting_from_environ(converter, environ_name, default, logger):
    """
    Return ``converter(os.environ[environ_name])``, or *default* if
    the variable is unset or doesn't convert. A bad value is logged.
    """
    if environ_name not in os.environ:
        return default
    raw = os.environ[environ_name]
    try:
        result = converter(raw)
    except (ValueError, TypeError):
        logger.exception("Ignoring environment variable %s=%r; using %r",
                         environ_name, raw, default)
        return default
    logger.debug("Environment variable %s=%r gives %r", environ_name, raw, result)
    return result


def get_positive_integer_from_environ(environ_name, default, logger=_logger):
    return _setting_from_environ(positive_integer, environ_name, default, logger)

def get_non_negative_float_from_environ(environ_name, default, logger=_logger):
    return _setting_from_environ(non_negative_float, environ_name, default, logger)

def parse_boolean(val):
    """
    Like ZConfig's boolean, but also accepting ``0`` and ``1``.

        >>> parse_boolean('1'), parse_boolean('off'), parse_boolean('Yes')
        (True, False, True)
    """
    if val in ('0', '1'):
        return val == '1'
    return asBoolean(val)

def get_boolean_from_environ(environ_name, default, logger=_logger):
    return _setting_from_environ(parse_boolean, environ_name, default, logger)


def _level_threshold(level, seconds):
    env = 'RC_PERF_LOG_%s_MIN' % (logging.getLevelName(level),)
    return level, get_non_negative_float_from_environ(env, seconds, logger=perf_logger)

#: ``(level, seconds)`` pairs, shortest first. A call taking at least
#: *seconds* is logged at *level*. ``RC_PERF_LOG_<LEVEL>_MIN`` changes
#: a threshold; a function's own ``log_levels`` attribute replaces the
#: whole list for that function.
LOG_TIMED_THRESHOLDS = sorted((
    _level_threshold(TRACE, 0.3),
    _level_threshold(DEBUG, 1.2),
    _level_threshold(INFO, 3.0),
    _level_threshold(WARN, 9.0),
    _level_threshold(ERROR, 20.0),
), key=lambda pair: pair[1])

#: Timings logged at this level or above include the arguments.
LOG_TIMED_DETAILS_LEVEL = logging.getLevelName(
    os.environ.get('RC_PERF_LOG_DETAILS_LEVEL', 'WARN')
)

#: Read at import time; when false, :func:`log_timed` leaves
#: functions undecorated.
LOG_TIMED_ENABLED = get_boolean_from_environ('RC_PERF_LOG_ENABLE', True,
                                             logger=perf_logger)


def do_log_duration_info(basic_msg, func, args, kwargs, actual_duration,
                         log=perf_logger):
    if func is None:
        return

    log_level = 0
    for level, minimum in func.log_levels:
        if actual_duration < minimum:
            break
        log_level = level
    if not log.isEnabledFor(log_level):
        return

    msg = basic_msg
    msg_args = (func.__name__, actual_duration)
    if log_level >= func.log_details_threshold and args:
        try:
            load = os.getloadavg()
        except (OSError, AttributeError):
            load = '<unknown load>'
        if kwargs:
            msg += " (load=%s) (args=%r kwargs=%r)"
            msg_args += (load, args, kwargs)
        else:
            msg += " (load=%s) (args=%r)"
            msg_args += (load, args)

    log.log(log_level, msg, *msg_args)


def log_timed(func):
    """
    Log how long each call to *func* takes, on the ``timing`` child
    of its module's logger, at the level :data:`LOG_TIMED_THRESHOLDS`
    gives for the duration.
    """
    func.log_levels = LOG_TIMED_THRESHOLDS
    func.log_details_threshold = LOG_TIMED_DETAILS_LEVEL
    if not LOG_TIMED_ENABLED:
        return func

    func_logger = logging.getLogger(func.__module__).getChild('timing')

    @wraps(func)
    def timed(*args, **kwargs):
        begin = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            do_log_duration_info("Function %s took %.3fs.", func, args, kwargs,
                                 perf_counter() - begin, log=func_logger)

    return timed


METRIC_SAMPLE_RATE = get_non_negative_float_from_environ('RC_PERF_STATSD_SAMPLE_RATE', 0.1,
                                                         logger=perf_logger)

metricmethod_sampled = Metric(method=True, rate=METRIC_SAMPLE_RATE)

if IN_TESTRUNNER and os.environ.get('RC_TEST_DISABLE_METRICS'):
    # Keeps tracebacks and the debugger free of the metric wrappers.
    metricmethod = metricmethod_sampled = lambda f: f


def to_utf8(data):
    if data is None or isinstance(data, bytes):
        return data
    return data.encode("utf-8")
