"""
Flag normalizer tests.

Scope
- Dash stripping, tls renames, negations and the interactive default.
- Pass-through of every other key.
"""
import unittest
from unittest import TestCase

from runway.arguments import parse
from runway.flags import normalize
from runway.schema import resolve_schema


def record(*tokens, interactive=False):
    return normalize(parse(tokens, resolve_schema(tokens)).flags, interactive=interactive)


class TestNormalize(TestCase):

    def testStripsLeadingDashes(self):
        self.assertEqual(record("dev", "--port", "3000", "--manual")["port"], 3000)
        self.assertNotIn("--port", record("dev", "--port", "3000"))

    def testTlsKeysRenamed(self):
        flags = record("dev", "--tls-key", "key.pem", "--tls-cert", "cert.pem")
        self.assertEqual(flags["tlsKey"], "key.pem")
        self.assertEqual(flags["tlsCert"], "cert.pem")
        self.assertFalse(any(key.startswith("tls-") for key in flags))

    def testEmptyTlsValueStillRenamed(self):
        flags = record("dev", "--tls-key=")
        self.assertEqual(flags["tlsKey"], "")
        self.assertNotIn("tls-key", flags)

    def testNoDeleteSetsDeleteFalse(self):
        self.assertIs(record("init", "--no-delete")["delete"], False)

    def testDeleteUnsetByDefault(self):
        self.assertNotIn("delete", record("init"))

    def testNoTypescriptSetsTypescriptFalse(self):
        self.assertIs(record("reveal", "entry.client", "--no-typescript")["typescript"], False)

    def testNoTypescriptWinsOverTypescript(self):
        self.assertIs(record("reveal", "--typescript", "--no-typescript")["typescript"], False)

    def testTypescriptKeptWhenNotNegated(self):
        self.assertIs(record("reveal", "--typescript")["typescript"], True)
        self.assertNotIn("typescript", record("reveal"))

    def testNegationKeysKept(self):
        flags = record("init", "--no-delete")
        self.assertIs(flags["no-delete"], True)

    def testInteractiveDefault(self):
        self.assertIs(record("dev")["interactive"], False)
        self.assertIs(record("dev", interactive=True)["interactive"], True)

    def testInteractiveKeepsExistingValue(self):
        self.assertIs(normalize({"--interactive": False}, interactive=True)["interactive"], False)

    def testInteractiveMustBeBool(self):
        with self.assertRaises(TypeError):
            normalize({}, interactive="yes")

    def testDelegatedKeysPassThrough(self):
        flags = record("vite:dev", "--host", "--logLevel", "info", "--strictPort", "-c", "vite.config.ts")
        self.assertEqual(flags, {
            "host": True,
            "logLevel": "info",
            "strictPort": True,
            "config": "vite.config.ts",
            "interactive": False,
        })

    def testRecordIsReadOnly(self):
        with self.assertRaises(TypeError):
            record("dev")["port"] = 1  # type: ignore[index]


if __name__ == "__main__":
    unittest.main()
