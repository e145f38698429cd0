# -*- coding: utf-8 -*-
"""
Compatibility shims.
"""

import os
import platform
import sys

from functools import wraps
from time import perf_counter


__all__ = [
    # Constants
    'PYPY',
    'IN_TESTRUNNER',

    'casefold',
    'wraps',

    # Clocks
    'perf_counter',
]

PYPY = platform.python_implementation() == 'PyPy'

casefold = str.casefold

IN_TESTRUNNER = (
    # zope-testrunner --test-path ...
    'zope-testrunner' in sys.argv[0]
    # python -m zope.testrunner --test-path ...
    or os.path.join('zope', 'testrunner') in sys.argv[0]
)
