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

import doctest
import unittest

from relcollections import encoding


class TestEncoding(unittest.TestCase):

    def test_unicode(self):
        value = 'v\xe4lue ☃'
        encoded = encoding.encode(value)
        self.assertEqual(encoded, '76c3a46c756520e29883')
        self.assertEqual(encoding.decode(encoded), value)

    def test_ascii_only(self):
        encoded = encoding.encode("bob's kitchen-machine ¤")
        self.assertTrue(all(c in '0123456789abcdef' for c in encoded))

    def test_decode_invalid(self):
        with self.assertRaises(ValueError):
            encoding.decode('not hex')
        # Not UTF-8
        with self.assertRaises(ValueError):
            encoding.decode('ff')


def test_suite():
    suite = unittest.defaultTestLoader.loadTestsFromName(__name__)
    suite.addTest(doctest.DocTestSuite(encoding))
    return suite
