import unittest
from dataclasses import FrozenInstanceError

from lcrepl.lang.lexical import parse
from lcrepl.pure.environment import Environment
from lcrepl.pure.term import Abstraction, Application, NamedReference, Variable, fresh_name


class FreshNameTestCase(unittest.TestCase):

    def test_fresh_name(self):
        cases = {
            ("x", ()): "x",
            ("x", ("y", "x1")): "x",
            ("x", ("x",)): "x1",
            ("x", ("x", "x1", "x2")): "x3",
            ("x", ("x", "x2")): "x1",
            ("y", ("y1",)): "y",
            ("f", ("f", "f1", "f10")): "f2",
        }
        for (hint, used), expected in cases.items():
            self.assertEqual(expected, fresh_name(set(used), hint), (hint, used))


class CanonicalTestCase(unittest.TestCase):

    def setUp(self):
        self.env = Environment()

    def test_str(self):
        cases = {
            "x": "x",
            "λx.x": "λx.x",
            "\\x.x": "λx.x",
            "λx.λy.x y": "λx.λy.(x y)",
            "(λx.x) y": "(λx.x y)",
            "a b c": "((a b) c)",
            "a (b c)": "(a (b c))",
            "\\f.\\x.f (f x)": "λf.λx.(f (f x))",
            "(λx.x) (λy.y)": "(λx.x λy.y)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case, self.env)), case)

    def test_pretty(self):
        cases = {
            "\\f.\\x.f (f x)": "Lf.Lx.(f (f x))",
            "(λx.x) y": "(Lx.x y)",
            "a b": "(a b)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case, self.env).pretty(), case)

    def test_named_reference_prints_name(self):
        self.assertEqual("succ", str(NamedReference("succ")))
        self.assertEqual("(succ x)", str(Application(NamedReference("succ"), Variable("x"))))


class EqualityTestCase(unittest.TestCase):

    def test_structural_equality(self):
        self.assertEqual(Variable("x"), Variable("x"))
        self.assertNotEqual(Variable("x"), NamedReference("x"))
        self.assertEqual(Abstraction("x", Variable("x")), Abstraction("x", Variable("x")))
        self.assertNotEqual(Abstraction("x", Variable("x")), Abstraction("y", Variable("y")))
        self.assertEqual(1, len({Application(Variable("a"), Variable("b")), Application(Variable("a"), Variable("b"))}))

    def test_immutable(self):
        term = Abstraction("x", Variable("x"))
        with self.assertRaises(FrozenInstanceError):
            term.param = "y"

    def test_alpha_equals(self):
        env = Environment()
        should_pass = [
            ("λx.x", "λy.y"),
            ("λx.y", "λz.y"),
            ("λx.λy.x", "λa.λb.a"),
            ("λx.(x λx.x)", "λy.(y λz.z)"),
            ("(a b)", "(a b)"),
        ]
        for left, right in should_pass:
            self.assertTrue(parse(left, env).alpha_equals(parse(right, env)), (left, right))

        should_fail = [
            ("λx.y", "λy.y"),
            ("λx.λy.x", "λa.λb.b"),
            ("x", "y"),
            ("(a b)", "(b a)"),
            ("λx.x", "x"),
        ]
        for left, right in should_fail:
            self.assertFalse(parse(left, env).alpha_equals(parse(right, env)), (left, right))

        self.assertFalse(Variable("x").alpha_equals(NamedReference("x")))


class FreeVarsTestCase(unittest.TestCase):

    def setUp(self):
        self.env = Environment()
        self.env.define("foo", parse("λy.x", self.env))

    def test_free_vars(self):
        cases = {
            "x": {"x"},
            "λx.x": set(),
            "λx.(x y)": {"y"},
            "(x λy.y)": {"x"},
            "λx.λy.(x y z)": {"z"},
            "foo": {"x"},
            "λx.foo": set(),
            "bar": {"bar"},
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case, self.env).free_vars(self.env), case)

    def test_undefined_named_reference(self):
        self.assertEqual({"bar"}, NamedReference("bar").free_vars(self.env))


class SubTestCase(unittest.TestCase):

    def setUp(self):
        self.env = Environment()
        self.env.define("foo", parse("λy.x", self.env))

    def sub(self, expr, var, new_expr):
        return parse(expr, self.env).sub(var, parse(new_expr, self.env), self.env)

    def test_sub(self):
        cases = {
            ("x", "x", "y"): "y",
            ("z", "x", "y"): "z",
            ("(x (x y))", "x", "λz.z"): "(λz.z (λz.z y))",
            ("λy.(x y)", "x", "z"): "λy.(z y)",
            ("λz.λy.x", "x", "(a b)"): "λz.λy.(a b)",
        }
        for (expr, var, new_expr), expected in cases.items():
            self.assertEqual(expected, str(self.sub(expr, var, new_expr)), (expr, var, new_expr))

    def test_shadowing(self):
        term = Abstraction("x", Variable("x"))
        self.assertEqual(term, term.sub("x", Variable("y"), self.env))
        self.assertEqual("λx.(x y)", str(self.sub("λx.(x y)", "x", "z")))

    def test_alpha_safety(self):
        result = self.sub("λy.x", "x", "y")
        self.assertIsInstance(result, Abstraction)
        self.assertNotEqual("y", result.param)
        self.assertEqual("λy1.y", str(result))
        self.assertTrue(result.alpha_equals(Abstraction("z", Variable("y"))))

    def test_alpha_safety_avoids_all_free_names(self):
        # y1 is free in the body, so the renamed parameter must skip it
        self.assertEqual("λy2.(y1 y)", str(self.sub("λy.(y1 x)", "x", "y")))

    def test_renamed_parameter_avoids_var(self):
        result = Abstraction("y", Variable("y")).sub("y1", Variable("y"), self.env)
        self.assertTrue(result.alpha_equals(Abstraction("y", Variable("y"))), str(result))
        self.assertEqual("λy2.y2", str(result))

    def test_renamed_parameter_may_reuse_var(self):
        # y doesn't occur in the body, so nothing renamed can be hit by the substitution of y1
        self.assertEqual("λy1.z", str(self.sub("λy.z", "y1", "y")))

    def test_named_reference_is_inlined(self):
        result = NamedReference("foo").sub("x", Variable("y"), self.env)
        self.assertEqual("λy1.y", str(result))

    def test_undefined_named_reference(self):
        self.assertEqual(Variable("z"), NamedReference("x").sub("x", Variable("z"), self.env))
        self.assertEqual(NamedReference("w"), NamedReference("w").sub("x", Variable("z"), self.env))


class SubPropertiesTestCase(unittest.TestCase):
    TERMS = ["x", "y", "λx.x", "λy.x", "λy.(x y)", "(λx.x) y", "λx.λy.(x y z)", "foo", "λy.foo", "λz.(z x y)"]
    REPLACEMENTS = ["y", "x", "λz.z", "(y z)", "foo", "λy.(x y)"]
    NAMES = ["x", "y", "z"]

    def setUp(self):
        self.env = Environment()
        self.env.define("foo", parse("λy.x", self.env))

    def cases(self):
        for expr in SubPropertiesTestCase.TERMS:
            for new_expr in SubPropertiesTestCase.REPLACEMENTS:
                for var in SubPropertiesTestCase.NAMES:
                    yield parse(expr, self.env), var, parse(new_expr, self.env)

    def test_free_vars_soundness(self):
        for term, var, new_term in self.cases():
            result = term.sub(var, new_term, self.env)
            allowed = (term.free_vars(self.env) - {var}) | new_term.free_vars(self.env)
            self.assertLessEqual(result.free_vars(self.env), allowed, (str(term), var, str(new_term)))

    def test_no_capture(self):
        for term, var, new_term in self.cases():
            if var not in term.free_vars(self.env):
                continue
            result = term.sub(var, new_term, self.env)
            self.assertLessEqual(new_term.free_vars(self.env), result.free_vars(self.env),
                                 (str(term), var, str(new_term)))


if __name__ == '__main__':
    unittest.main()
