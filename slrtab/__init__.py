"""SLR(1) parse table generator.

This package provides:
- a line-based rule parser (``LHS -> RHS1 | RHS2``) with an augmented start rule
- LR(0) closure/goto and the canonical state collection
- FIRST/FOLLOW sets scoped to one analysis
- SLR(1) ACTION/GOTO synthesis and a table-driven recognizer

Grammar text goes in; the automaton and the parse table come out.
"""

from .grammar.ast import EPSILON, END_MARKER, Production, ParsedGrammar
from .grammar.parser import parse_rules, EmptyInputError, GrammarSyntaxError
from .lalr.symbols import SymbolTable
from .lalr.items import Item, State, Automaton, closure, goto, build_automaton, format_states
from .lalr.first_follow import FirstFollow, FFResult, compute_first_follow
from .lalr.table import ParseTable, Tables, build_slr_tables, assemble_table, format_table
from .lalr.runtime import recognize
from .pipeline import Analysis, analyze, analyze_file
