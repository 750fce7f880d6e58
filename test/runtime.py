"""
Runtime gate tests.

Scope
- parse_version(): leading numeric components, tolerated prefixes/suffixes.
- check_runtime(): major-only and major/minor minimums, padding, faults.

Conventions
- Test method names follow CamelCase per project convention.
"""
import platform
import unittest
from unittest import TestCase

from runway.faults import FaultCode, MalformedVersionError, RuntimeTooOldError
from runway.runtime import MINIMUM_RUNTIME, check_runtime, parse_version


class TestParseVersion(TestCase):

    def testDottedVersion(self):
        self.assertEqual(parse_version("3.12.1"), (3, 12, 1))

    def testLeadingV(self):
        self.assertEqual(parse_version("v18.19.0"), (18, 19, 0))

    def testPrereleaseSuffixIgnored(self):
        self.assertEqual(parse_version("3.13.0rc1"), (3, 13, 0))

    def testMajorOnly(self):
        self.assertEqual(parse_version("18"), (18,))

    def testMalformedVersion(self):
        with self.assertRaises(MalformedVersionError) as context:
            parse_version("unknown")
        self.assertIs(context.exception.code, FaultCode.MALFORMED_VERSION)

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            parse_version(18)


class TestCheckRuntime(TestCase):

    def testMajorBelowMinimumFails(self):
        with self.assertRaises(RuntimeTooOldError) as context:
            check_runtime("17.9.1", minimum=(18,))
        self.assertIn("17.9.1", context.exception.message)
        self.assertIs(context.exception.code, FaultCode.RUNTIME_TOO_OLD)

    def testMajorAtMinimumPasses(self):
        self.assertEqual(check_runtime("18.0.0", minimum=(18,)), (18, 0, 0))

    def testMajorAboveMinimumPasses(self):
        self.assertEqual(check_runtime("22.3.0", minimum=(18,)), (22, 3, 0))

    def testLowerMajorsAllFail(self):
        for version in ("0.12.18", "10.24.1", "16.20.2", "17.0.0"):
            with self.subTest(version=version):
                with self.assertRaises(RuntimeTooOldError):
                    check_runtime(version, minimum=(18,))

    def testMinorIsComparedWhenRequired(self):
        with self.assertRaises(RuntimeTooOldError):
            check_runtime("3.10.14")
        self.assertEqual(check_runtime("3.11.0"), (3, 11, 0))

    def testMissingComponentsCountAsZero(self):
        self.assertEqual(check_runtime("18", minimum=(18, 0)), (18,))
        with self.assertRaises(RuntimeTooOldError):
            check_runtime("3", minimum=(3, 11))

    def testDefaultsToRunningInterpreter(self):
        self.assertEqual(check_runtime()[:2], tuple(map(int, platform.python_version_tuple()[:2])))

    def testDefaultMinimum(self):
        self.assertEqual(MINIMUM_RUNTIME, (3, 11))

    def testHintNamesRequiredVersion(self):
        with self.assertRaises(RuntimeTooOldError) as context:
            check_runtime("16.0.0", minimum=(18,))
        self.assertIn("18", context.exception.hint)

    def testRejectsEmptyMinimum(self):
        with self.assertRaises(TypeError):
            check_runtime("3.12.0", minimum=())


if __name__ == "__main__":
    unittest.main()
