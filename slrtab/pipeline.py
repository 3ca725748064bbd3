# slrtab/pipeline.py
"""문법 텍스트 → 규칙 → 심볼 분류 → LR(0) 오토마톤 → FIRST/FOLLOW → SLR(1) 테이블.

바깥(표시 계층)과의 계약은 `analyze(text)` 하나다.
텍스트를 받고, 오토마톤(상태 + 전이)과 파스 테이블(열 + 행)을 돌려준다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .grammar.ast import EPSILON, ParsedGrammar
from .grammar.loader import load_grammar_text
from .grammar.parser import parse_rules
from .lalr.first_follow import FirstFollow
from .lalr.items import Automaton, build_automaton
from .lalr.symbols import SymbolTable
from .lalr.table import ParseTable, Tables, assemble_table, build_slr_tables


@dataclass(frozen=True)
class Analysis:
    """
    analyze() 1회분의 결과 묶음. 만들어진 뒤로는 바뀌지 않는다.

    - parsed      : 규칙 리스트 / grammar 맵 / 증강 시작기호
    - symbols     : 단말/비단말 (첫 등장 순)
    - first_follow: 이 분석 전용 FIRST/FOLLOW 컨텍스트
    - automaton   : LR(0) 상태와 전이
    - tables      : 이름 키 ACTION/GOTO
    - table       : 열/행 형태의 최종 테이블
    """
    parsed: ParsedGrammar
    symbols: SymbolTable
    first_follow: FirstFollow
    automaton: Automaton
    tables: Tables
    table: ParseTable

    def to_dict(self) -> Dict[str, Any]:
        """JSON 으로 바로 내보낼 수 있는 dict. 집합은 정렬된 리스트로."""
        ff = self.first_follow
        sym = self.symbols
        return {
            "start": self.parsed.origin_start,
            "augmented_start": self.parsed.start,
            "rules": [
                {"index": i, "lhs": r.lhs, "rhs": list(r.rhs), "augmented": r.augmented}
                for i, r in enumerate(self.parsed.rules)
            ],
            "terminals": list(sym.terms),
            "non_terminals": list(sym.nonterms),
            "first": {X: _ordered(ff.first(X), sym) for X in sym.nonterms},
            "follow": {A: _ordered(ff.follow(A), sym) for A in sym.nonterms},
            "states": [
                {
                    "id": st.id,
                    "items": [
                        {"lhs": it.lhs, "rhs": list(it.rhs), "dot": it.dot}
                        for it in st.items
                    ],
                    "transitions": dict(st.transitions),
                }
                for st in self.automaton.states
            ],
            "edges": [list(e) for e in self.automaton.edges],
            "table": self.table.to_dict(),
        }


def _ordered(names, sym: SymbolTable) -> List[str]:
    """집합을 테이블 열 순서로 (ε 는 맨 뒤)."""
    order = {c: i for i, c in enumerate(sym.columns)}
    return sorted(names, key=lambda n: (n == EPSILON, order.get(n, len(order)), n))


Progress = Callable[[str], None]


def analyze(text: str, progress: Optional[Progress] = None) -> Analysis:
    """
    문법 텍스트를 분석해 오토마톤과 SLR(1) 테이블을 만든다.
    progress 가 주어지면 단계가 끝날 때마다 한 줄 요약을 넘긴다 (CLI 디버그 출력용).

    Raises
    ------
    EmptyInputError
        입력이 비어 있을 때.
    GrammarSyntaxError
        규칙 줄 형식이 잘못되었을 때.
    """
    report = progress or (lambda msg: None)

    parsed = parse_rules(text)
    report("rules ready | rules=%d start=%s" % (len(parsed.rules), parsed.start))

    sym = SymbolTable.freeze(parsed.rules, parsed.start)
    report("SymbolTable frozen | term=%d nonterm=%d" % (len(sym.terms), len(sym.nonterms)))

    automaton = build_automaton(parsed.rules, parsed.grammar)
    report("LR(0) automaton built | states=%d edges=%d" % (len(automaton), len(automaton.edges)))

    ff = FirstFollow.of(parsed)
    tables = build_slr_tables(parsed, sym, automaton, ff)
    table = assemble_table(tables, sym)
    report("SLR tables built | actions=%d gotos=%d" % (len(tables.action), len(tables.goto)))

    return Analysis(
        parsed=parsed,
        symbols=sym,
        first_follow=ff,
        automaton=automaton,
        tables=tables,
        table=table,
    )


def analyze_file(path: str, progress: Optional[Progress] = None) -> Analysis:
    """문법 파일을 읽어 analyze()."""
    return analyze(load_grammar_text(path), progress)
