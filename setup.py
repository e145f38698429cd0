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
import os

from setuptools import setup
from setuptools import find_packages


def read_file(*path):
    base_dir = os.path.dirname(__file__)
    file_path = (base_dir, ) + tuple(path)
    with open(os.path.join(*file_path), 'rt', encoding='utf-8') as f:
        result = f.read()
    return result

VERSION = read_file('version.txt').strip()

tests_require = [
    'zope.testrunner',
    'nti.testing',
    'PyHamcrest',
]

setup(
    name="RelCollections",
    version=VERSION,
    author="Zope Foundation and Contributors",
    keywords="SQL RDBMS PostgreSQL SQLite collections",
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    license="ZPL 2.1",
    platforms=["any"],
    description="Lists, sets, key-value maps and nested maps stored in relational tables.",
    python_requires=">=3.9",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Zope Public License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: Unix",
        "Development Status :: 4 - Beta",
    ],
    long_description=read_file("README.rst"),
    zip_safe=False,
    install_requires=[
        # PyPA standard version and requirement handling.
        'packaging',
        'perfmetrics >= 3.0.0',
        'zope.interface',
        # Datatypes for settings read from the environment.
        'ZConfig',
    ],
    tests_require=tests_require,
    extras_require={
        # See the notes on the drivers; psycopg2 is preferred where
        # it can be built.
        'postgresql: platform_python_implementation == "CPython"' : [
            # 2.8 is needed for conn.info
            'psycopg2 >= 2.8.3',
        ],
        'postgresql: platform_python_implementation == "PyPy"': [
            # This requirement is repeated in the driver class.
            'pg8000 >= 1.16',
        ],
        'sqlite': [],
        'sqlite3': [],
        'test': tests_require,
        'all_tested_drivers': [
            'pg8000 >= 1.16',
            'psycopg2 >= 2.8.3; platform_python_implementation == "CPython"',
        ],
    },
)
