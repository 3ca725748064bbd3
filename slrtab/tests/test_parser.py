"""Test the rule parser and the symbol classifier"""

import unittest

from slrtab.grammar.ast import EPSILON, Production
from slrtab.grammar.parser import parse_rules, EmptyInputError, GrammarSyntaxError
from slrtab.lalr.symbols import SymbolTable


class TestParseRules(unittest.TestCase):
    def test_single_rule(self):
        parsed = parse_rules("S -> a")
        self.assertEqual(parsed.start, "S'")
        self.assertEqual(parsed.origin_start, "S")
        self.assertEqual(parsed.rules[0], Production("S'", ("S",), augmented=True))
        self.assertEqual(parsed.rules[1], Production("S", ("a",)))
        self.assertEqual(parsed.grammar, {"S": (("a",),)})

    def test_alternatives_keep_order(self):
        parsed = parse_rules("E -> E + T | T\nT -> id")
        self.assertEqual(
            [(r.lhs, r.rhs) for r in parsed.rules],
            [("E'", ("E",)), ("E", ("E", "+", "T")), ("E", ("T",)), ("T", ("id",))],
        )
        self.assertEqual(list(parsed.grammar), ["E", "T"])

    def test_same_lhs_on_two_lines(self):
        parsed = parse_rules("S -> a\nS -> b")
        self.assertEqual(parsed.grammar["S"], (("a",), ("b",)))
        self.assertEqual(len(parsed.rules), 3)

    def test_epsilon_forms(self):
        parsed = parse_rules("A -> \nB -> b |\nC -> ε")
        self.assertEqual(parsed.grammar["A"], ((EPSILON,),))
        self.assertEqual(parsed.grammar["B"], (("b",), (EPSILON,)))
        self.assertEqual(parsed.grammar["C"], ((EPSILON,),))

    def test_missing_rhs_is_epsilon(self):
        parsed = parse_rules("A ->")
        self.assertEqual(parsed.grammar["A"], ((EPSILON,),))

    def test_blank_lines_and_crlf(self):
        parsed = parse_rules("S -> a B\r\n\r\n   \r\nB -> b\r\n")
        self.assertEqual(parsed.grammar, {"S": (("a", "B"),), "B": (("b",),)})

    def test_augmented_name_is_fresh(self):
        parsed = parse_rules("S -> S' a")
        self.assertEqual(parsed.start, "S''")
        self.assertEqual(parsed.rules[0].rhs, ("S",))

    def test_rule_index(self):
        parsed = parse_rules("E -> E + T | T\nT -> id")
        self.assertEqual(parsed.rule_index("T", ("id",)), 3)
        with self.assertRaises(ValueError):
            parsed.rule_index("T", ("x",))

    def test_unicode_whitespace_separates_symbols(self):
        parsed = parse_rules("S -> a\u00a0b\u2003c")
        self.assertEqual(parsed.grammar["S"], (("a", "b", "c"),))

    def test_leading_bom_is_dropped(self):
        parsed = parse_rules("\ufeffS -> a")
        self.assertEqual(parsed.origin_start, "S")
        self.assertEqual(parsed.start, "S'")

    def test_grammar_is_read_only(self):
        parsed = parse_rules("S -> a")
        with self.assertRaises(TypeError):
            parsed.grammar["T"] = (("b",),)
        with self.assertRaises(AttributeError):
            parsed.grammar["S"].append(("b",))
        self.assertEqual(parsed.grammar["S"], (("a",),))


class TestParseErrors(unittest.TestCase):
    def test_empty(self):
        with self.assertRaises(EmptyInputError):
            parse_rules("")

    def test_whitespace_only(self):
        with self.assertRaises(EmptyInputError):
            parse_rules("  \n\t \n")

    def test_empty_input_is_value_error(self):
        self.assertTrue(issubclass(EmptyInputError, ValueError))
        self.assertTrue(issubclass(GrammarSyntaxError, SyntaxError))

    def test_missing_arrow(self):
        with self.assertRaises(GrammarSyntaxError) as cm:
            parse_rules("S -> a\nS a")
        self.assertIn("Missing '->'", str(cm.exception))
        self.assertIn("at 2:", str(cm.exception))

    def test_two_arrows(self):
        with self.assertRaises(GrammarSyntaxError):
            parse_rules("S -> a -> b")

    def test_missing_lhs(self):
        with self.assertRaises(GrammarSyntaxError):
            parse_rules("-> a")

    def test_multi_symbol_lhs(self):
        with self.assertRaises(GrammarSyntaxError):
            parse_rules("S T -> a")

    def test_end_marker_reserved(self):
        with self.assertRaises(GrammarSyntaxError):
            parse_rules("S -> a $")

    def test_epsilon_not_alone(self):
        with self.assertRaises(GrammarSyntaxError):
            parse_rules("S -> a ε")

    def test_caret_snippet(self):
        with self.assertRaises(GrammarSyntaxError) as cm:
            parse_rules("S T -> a")
        lines = str(cm.exception).splitlines()
        self.assertEqual(lines[-2], "S T -> a")
        self.assertEqual(lines[-1], "  ^")


class TestSymbolTable(unittest.TestCase):
    def _freeze(self, text):
        parsed = parse_rules(text)
        return SymbolTable.freeze(parsed.rules, parsed.start)

    def test_expression(self):
        sym = self._freeze("E -> E + T | T\nT -> id")
        self.assertEqual(sym.terms, ("+", "id"))
        self.assertEqual(sym.nonterms, ("E", "T"))
        self.assertEqual(sym.columns, ["+", "id", "$", "E", "T"])

    def test_unknown_symbols_are_terminals(self):
        sym = self._freeze("S -> x y")
        self.assertEqual(sym.terms, ("x", "y"))
        self.assertEqual(sym.nonterms, ("S",))

    def test_augmented_start_is_neither_column(self):
        sym = self._freeze("S -> a")
        self.assertNotIn("S'", sym.terms)
        self.assertNotIn("S'", sym.nonterms)
        self.assertTrue(sym.is_nonterm("S'"))

    def test_epsilon_is_not_a_terminal(self):
        sym = self._freeze("A -> ")
        self.assertEqual(sym.terms, ())
        self.assertEqual(sym.columns, ["$", "A"])

    def test_first_seen_order(self):
        sym = self._freeze("S -> b A a\nA -> c")
        self.assertEqual(sym.terms, ("b", "a", "c"))
        self.assertEqual(sym.column_of("$"), 3)


if __name__ == "__main__":
    unittest.main()
