"""
Command handler tests.

Scope
- handler(): picks the right variant for functions, classes and instances.
- FunctionHandler / TypeHandler / InstanceHandler: invocation contract (args, options).
- Registration-time validation of targets and method names.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from commander import (
    Options,
    FunctionHandler,
    TypeHandler,
    InstanceHandler,
    handler,
)


class Recorder:
    """Handler target used in every shape."""

    created = []

    def __init__(self, args=None, options=None):
        self.args = args
        self.options = options
        Recorder.created.append(self)

    def deploy(self, args, options):
        return ("deploy", args, dict(options))


class TestHandlerFactory(TestCase):
    def setUp(self):
        Recorder.created.clear()

    def testFunction(self):
        self.assertIsInstance(handler(lambda args, options: None), FunctionHandler)

    def testClass(self):
        self.assertIsInstance(handler(Recorder), TypeHandler)

    def testClassWithMethod(self):
        self.assertIsInstance(handler(Recorder, "deploy"), TypeHandler)

    def testInstanceWithMethod(self):
        self.assertIsInstance(handler(Recorder(), "deploy"), InstanceHandler)

    def testCallableInstance(self):
        class Callback:
            def __call__(self, args, options):
                return args

        self.assertIsInstance(handler(Callback()), FunctionHandler)

    def testInstanceWithoutMethod(self):
        with self.assertRaises(TypeError):
            handler(object())

    def testUnknownMethod(self):
        with self.assertRaises(TypeError):
            handler(Recorder, "missing")

    def testMethodMustBeAString(self):
        with self.assertRaises(TypeError):
            handler(Recorder(), 42)


class TestInvoke(TestCase):
    def setUp(self):
        Recorder.created.clear()

    def testFunctionReceivesArgsAndOptions(self):
        seen = []
        target = FunctionHandler(lambda args, options: seen.append((args, options)) or "done")
        options = Options(out="x.txt")
        self.assertEqual(target.invoke(["src"], options), "done")
        self.assertEqual(seen, [(["src"], options)])

    def testClassIsConstructedWithArgsAndOptions(self):
        instance = TypeHandler(Recorder).invoke(["src"], Options(jobs=2))
        self.assertIsInstance(instance, Recorder)
        self.assertEqual(instance.args, ["src"])
        self.assertEqual(instance.options, {"jobs": 2})

    def testClassMethodUsesFreshInstance(self):
        result = TypeHandler(Recorder, "deploy").invoke(["prod"], Options(force=True))
        self.assertEqual(result, ("deploy", ["prod"], {"force": True}))
        self.assertEqual(len(Recorder.created), 1)
        self.assertIsNone(Recorder.created[0].args)

    def testInstanceMethod(self):
        target = Recorder()
        result = InstanceHandler(target, "deploy").invoke([], Options())
        self.assertEqual(result, ("deploy", [], {}))
        self.assertEqual(len(Recorder.created), 1)

    def testErrorsPropagate(self):
        def explode(args, options):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            FunctionHandler(explode).invoke([], Options())


if __name__ == "__main__":
    unittest.main()
