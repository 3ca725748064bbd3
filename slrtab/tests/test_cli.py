"""Test the slrtab command line"""

import json
import os
import tempfile
import unittest
import unittest.mock
from contextlib import closing, redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path

from slrtab.slrtabc import main


EXPR = str(Path(__file__).parent / "grammar_test" / "expr.g")


def _call(*argv):
    with closing(StringIO()) as out, closing(StringIO()) as err:
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()


class TestCommands(unittest.TestCase):
    def test_check(self):
        code, out, err = _call("check", EXPR)
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "[CHECK OK] states=12 rules=7 terminals=5 non_terminals=3")
        self.assertEqual(err, "")

    def test_check_debug(self):
        code, _, err = _call("check", EXPR, "-D")
        self.assertEqual(code, 0)
        self.assertIn("[DEBUG] LR(0) automaton built | states=12", err)
        self.assertIn("r0: E' -> E", err)

    def test_states(self):
        code, out, _ = _call("states", EXPR)
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("State 0:\n  E' -> · E\n"))
        self.assertIn("State 11:", out)

    def test_table(self):
        code, out, _ = _call("table", EXPR)
        self.assertEqual(code, 0)
        header = [c.strip() for c in out.splitlines()[0].split("|")]
        self.assertEqual(header, ["State", "+", "*", "(", ")", "id", "$", "E", "T", "F"])

    def test_table_json(self):
        code, out, _ = _call("table", EXPR, "--json")
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(len(data["table"]["rows"]), 12)
        self.assertEqual(data["follow"]["E"], ["+", ")", "$"])

    def test_first_follow(self):
        code, out, _ = _call("first-follow", EXPR)
        self.assertEqual(code, 0)
        self.assertIn("(none)", out)
        self.assertIn("         E : {(, id}", out)

    def test_parse_accept(self):
        code, out, _ = _call("parse", EXPR, "--text", "id + id * id")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("[ACCEPT]"))
        self.assertIn("r6: F -> id", out)

    def test_stdin(self):
        with unittest.mock.patch("sys.stdin", StringIO("S -> a S | b\n")):
            code, out, _ = _call("check", "-")
        self.assertEqual(code, 0)
        self.assertIn("rules=3", out)

    def test_parse_reject(self):
        code, _, err = _call("parse", EXPR, "--text", "( id")
        self.assertEqual(code, 1)
        self.assertIn("[REJECT]", err)


class TestErrors(unittest.TestCase):
    def _grammar_file(self, text):
        fd, path = tempfile.mkstemp(suffix=".g")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_malformed(self):
        code, _, err = _call("check", self._grammar_file("S a\n"))
        self.assertEqual(code, 2)
        self.assertIn("[SYNTAX ERROR]", err)

    def test_empty(self):
        code, _, err = _call("check", self._grammar_file("   \n"))
        self.assertEqual(code, 2)
        self.assertIn("EmptyInputError", err)

    def test_missing_file(self):
        code, _, err = _call("check", "no/such/grammar.g")
        self.assertEqual(code, 2)
        self.assertIn("[ERROR]", err)


if __name__ == "__main__":
    unittest.main()
