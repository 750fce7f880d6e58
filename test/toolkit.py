"""
Toolkit contract and discovery tests.

Scope
- validate(): complete and incomplete toolkits.
- load_toolkit(): explicit module path, RUNWAY_TOOLKIT, entry points,
  ambiguity warning and the missing/import faults.

Conventions
- Test method names follow CamelCase per project convention.
- Toolkit modules are fabricated with types.ModuleType and registered in
  sys.modules for the duration of a test only.
"""
import sys
import types
import unittest
from unittest import TestCase, mock
from unittest.mock import AsyncMock, MagicMock

from runway.faults import (
    AmbiguousToolkitWarning,
    FaultCode,
    IncompleteToolkitError,
    MissingToolkitError,
    ToolkitImportError,
)
from runway.toolkit import OPERATIONS, Toolkit, load_toolkit, validate


class FakeToolkit:
    def __init__(self):
        for name in OPERATIONS:
            setattr(self, name, MagicMock(name=name) if name == "setup" else AsyncMock(name=name))


class FakeEntryPoint:
    def __init__(self, name, toolkit):
        self.name = name
        self.value = "fake.%s:toolkit" % name
        self._toolkit = toolkit

    def load(self):
        return self._toolkit


class TestValidate(TestCase):

    def testCompleteToolkitReturned(self):
        toolkit = FakeToolkit()
        self.assertIs(validate(toolkit), toolkit)

    def testCompleteToolkitMatchesProtocol(self):
        self.assertIsInstance(FakeToolkit(), Toolkit)

    def testMissingOperationsNamed(self):
        toolkit = FakeToolkit()
        del toolkit.vite_dev
        del toolkit.setup
        with self.assertRaises(IncompleteToolkitError) as context:
            validate(toolkit)
        self.assertEqual(context.exception.options["missing"], ("setup", "vite_dev"))
        self.assertIs(context.exception.code, FaultCode.INCOMPLETE_TOOLKIT)


class TestLoadToolkit(TestCase):

    def setUp(self):
        self.modules = {}

    def tearDown(self):
        for name in self.modules:
            sys.modules.pop(name, None)

    def register(self, name, **attributes):
        module = types.ModuleType(name)
        for key, value in attributes.items():
            setattr(module, key, value)
        self.modules[name] = module
        sys.modules[name] = module
        return module

    def testModuleToolkitAttribute(self):
        toolkit = FakeToolkit()
        self.register("runway_test_toolkit_attribute", toolkit=toolkit)
        self.assertIs(load_toolkit("runway_test_toolkit_attribute"), toolkit)

    def testModuleItselfAsToolkit(self):
        module = self.register("runway_test_toolkit_module", **{
            name: (MagicMock() if name == "setup" else AsyncMock()) for name in OPERATIONS
        })
        self.assertIs(load_toolkit("runway_test_toolkit_module"), module)

    def testEnvironmentVariable(self):
        toolkit = FakeToolkit()
        self.register("runway_test_toolkit_environ", toolkit=toolkit)
        self.assertIs(load_toolkit(environ={"RUNWAY_TOOLKIT": "runway_test_toolkit_environ"}), toolkit)

    def testExplicitSourceBeatsEnvironment(self):
        first, second = FakeToolkit(), FakeToolkit()
        self.register("runway_test_toolkit_first", toolkit=first)
        self.register("runway_test_toolkit_second", toolkit=second)
        loaded = load_toolkit("runway_test_toolkit_first", environ={"RUNWAY_TOOLKIT": "runway_test_toolkit_second"})
        self.assertIs(loaded, first)

    def testImportFailure(self):
        with self.assertRaises(ToolkitImportError) as context:
            load_toolkit("runway_test_toolkit_that_does_not_exist")
        self.assertIs(context.exception.code, FaultCode.TOOLKIT_IMPORT)

    def testIncompleteModule(self):
        self.register("runway_test_toolkit_incomplete", toolkit=object())
        with self.assertRaises(IncompleteToolkitError):
            load_toolkit("runway_test_toolkit_incomplete")

    def testRejectsNonStringSource(self):
        with self.assertRaises(TypeError):
            load_toolkit(42)

    @mock.patch("runway.toolkit.entry_points", return_value=[])
    def testNothingInstalled(self, entry_points):
        with self.assertRaises(MissingToolkitError):
            load_toolkit(environ={})
        entry_points.assert_called_once_with(group="runway.toolkit")

    def testEmptyVariableFallsBackToEntryPoints(self):
        toolkit = FakeToolkit()
        with mock.patch("runway.toolkit.entry_points", return_value=[FakeEntryPoint("default", toolkit)]):
            self.assertIs(load_toolkit(environ={"RUNWAY_TOOLKIT": ""}), toolkit)

    def testSingleEntryPoint(self):
        toolkit = FakeToolkit()
        with mock.patch("runway.toolkit.entry_points", return_value=[FakeEntryPoint("default", toolkit)]):
            self.assertIs(load_toolkit(environ={}), toolkit)

    def testSeveralEntryPointsWarnAndPickFirstByName(self):
        alpha, beta = FakeToolkit(), FakeToolkit()
        candidates = [FakeEntryPoint("beta", beta), FakeEntryPoint("alpha", alpha)]
        with mock.patch("runway.toolkit.entry_points", return_value=candidates):
            with self.assertWarns(AmbiguousToolkitWarning):
                self.assertIs(load_toolkit(environ={}), alpha)


if __name__ == "__main__":
    unittest.main()
