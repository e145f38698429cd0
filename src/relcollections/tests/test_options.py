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

from relcollections.options import Options


class TestOptions(unittest.TestCase):

    def test_defaults(self):
        options = Options()
        self.assertEqual(options.driver, 'auto')
        self.assertIsNone(options.name)
        self.assertEqual(options.commit_lock_timeout, 30)
        self.assertTrue(options.create_tables)

    def test_unknown_keyword(self):
        with self.assertRaises(TypeError):
            Options(no_such_option=1)

    def test_valid_option_names(self):
        self.assertEqual(
            Options.valid_option_names(),
            ['commit_lock_timeout', 'create_tables', 'driver', 'name', 'raw_utf8']
        )

    def test_equality(self):
        self.assertEqual(Options(), Options())
        self.assertEqual(Options(driver='sqlite3'), Options(driver='sqlite3'))
        self.assertNotEqual(Options(driver='sqlite3'), Options())
        self.assertEqual(hash(Options()), hash(Options(name='other')))
        self.assertNotEqual(Options(), object())

    def test_copy(self):
        options = Options(name='first', raw_utf8=False)
        copy = options.copy(name='second')
        self.assertEqual(copy.name, 'second')
        self.assertFalse(copy.raw_utf8)
        self.assertEqual(options.name, 'first')

    def test_copy_valid_options(self):
        class Other(object):
            driver = 'psycopg2'
            commit_lock_timeout = 5
            unrelated = 'ignored'

        options = Options.copy_valid_options(Other())
        self.assertEqual(options.driver, 'psycopg2')
        self.assertEqual(options.commit_lock_timeout, 5)
        self.assertFalse(hasattr(options, 'unrelated'))

    def test_repr(self):
        self.assertEqual(repr(Options(name='n')),
                         "relcollections.options.Options(name='n')")
