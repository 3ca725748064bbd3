# table.py
"""
SLR(1) ACTION/GOTO 테이블 생성과, 바깥에 내보내는 ParseTable(열 머리글 + 상태별 행).

충돌 처리
--------
충돌은 보고하지 않고 조용히 흡수합니다. 상태 안의 아이템을 순서대로 훑으며
- shift / accept 는 무조건 기록
- reduce 는 칸이 비었거나 이미 reduce 일 때만 기록 (나중 reduce 가 이김)
따라서 shift/reduce 에서는 항상 shift, reduce/reduce 에서는 마지막으로 처리된 아이템이 이깁니다.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from ..grammar.ast import END_MARKER, ParsedGrammar
from .first_follow import FirstFollow
from .items import Automaton
from .symbols import SymbolTable

Action = Tuple[str, int]          # ('s', next) | ('r', rule_idx) | ('acc', 0)
Cell = Union[str, int]


def encode_action(act: Optional[Action]) -> str:
    """ACTION 한 칸을 문자열로: '' | 's3' | 'r2' | 'acc'."""
    if act is None:
        return ""
    kind, arg = act
    if kind == "acc":
        return "acc"
    return f"{kind}{arg}"


def decode_action(cell: Cell) -> Optional[Action]:
    """encode_action의 역. 빈 칸이면 None, GOTO 정수 칸이면 ValueError."""
    if cell == "":
        return None
    if isinstance(cell, int):
        raise ValueError(f"GOTO cell {cell} is not an action")
    if cell == "acc":
        return ("acc", 0)
    if cell[:1] in ("s", "r") and cell[1:].isdigit():
        return (cell[0], int(cell[1:]))
    raise ValueError(f"bad action cell {cell!r}")


@dataclass(frozen=True)
class Tables:
    """
    Tables
    ======
    SLR(1) 파서 테이블 (이름 기반 키, 읽기 전용 맵).

    필드
    ----
    - action: (state, term) -> ('s', next_state) | ('r', rule_idx) | ('acc', 0)
        * term 에는 '$' 포함
        * rule_idx 는 평탄화 규칙 리스트(증강 규칙이 0번)의 인덱스
    - goto  : (state, nonterm) -> next_state
    - n_states : 전체 상태 수
    """
    action: Mapping[Tuple[int, str], Action]
    goto: Mapping[Tuple[int, str], int]
    n_states: int


def build_slr_tables(
    parsed: ParsedGrammar,
    sym: SymbolTable,
    automaton: Automaton,
    ff: FirstFollow,
) -> Tables:
    """
    오토마톤 + FOLLOW 로 ACTION/GOTO 를 채운다.
    절차: 상태별 아이템 순회 → shift / accept / reduce → GOTO
    """
    action: Dict[Tuple[int, str], Action] = {}
    goto: Dict[Tuple[int, str], int] = {}

    # --- ACTION ---
    for s, st in enumerate(automaton.states):
        for it in st.items:
            X = it.next_symbol
            if X is not None:
                j = st.transitions.get(X)
                if j is not None and sym.is_term(X):
                    action[(s, X)] = ('s', j)
                continue

            if it.lhs == parsed.start and it.rhs == (parsed.origin_start,):
                action[(s, END_MARKER)] = ('acc', 0)
                continue

            rule_idx = parsed.rule_index(it.lhs, it.rhs)
            lookahead = set(ff.follow(it.lhs)) | {END_MARKER}
            for a in lookahead:
                prev = action.get((s, a))
                if prev is None or prev[0] == 'r':
                    action[(s, a)] = ('r', rule_idx)

    # --- GOTO ---
    for s, st in enumerate(automaton.states):
        for it in st.items:
            X = it.next_symbol
            if X is None or not sym.is_nonterm(X):
                continue
            j = st.transitions.get(X)
            if j is not None:
                goto[(s, X)] = j

    return Tables(
        action=MappingProxyType(action),
        goto=MappingProxyType(goto),
        n_states=len(automaton),
    )


@dataclass(frozen=True)
class ParseTable:
    """
    ParseTable
    ==========
    바깥(표시 계층)에 내보내는 최종 테이블.

    - columns: 단말(첫 등장 순) ++ ['$'] ++ 비단말(첫 등장 순)
    - rows   : 상태 번호 순. 각 행은 columns 에 맞춘 칸 튜플
        * ''     : 에러(동작 없음)
        * 's<N>' : N 번 상태로 shift
        * 'r<N>' : N 번 규칙으로 reduce
        * 'acc'  : accept
        * int    : GOTO 도착 상태 (비단말 열)
    """
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[Cell, ...], ...]

    def cell(self, state: int, column: str) -> Cell:
        return self.rows[state][self.columns.index(column)]

    def action(self, state: int, term: str) -> Optional[Action]:
        """행/열 이름으로 ACTION 칸을 해석. ACTION 열(단말, '$')이 아니면 None."""
        end = self.columns.index(END_MARKER)
        if term not in self.columns[:end + 1]:
            return None
        return decode_action(self.cell(state, term))

    def expected(self, state: int) -> List[str]:
        """상태에서 동작이 정의된 단말('$' 포함) 목록 (열 순서)."""
        end = self.columns.index(END_MARKER)
        return [c for c, v in zip(self.columns[:end + 1], self.rows[state]) if v != ""]

    def to_dict(self) -> Dict[str, list]:
        return {
            "columns": list(self.columns),
            "rows": [list(r) for r in self.rows],
        }


def assemble_table(tables: Tables, sym: SymbolTable) -> ParseTable:
    """Tables(dict) → ParseTable(행렬)."""
    action_cols = [*sym.terms, END_MARKER]
    rows: List[Tuple[Cell, ...]] = []
    for s in range(tables.n_states):
        row: List[Cell] = [encode_action(tables.action.get((s, t))) for t in action_cols]
        row.extend(tables.goto.get((s, N), "") for N in sym.nonterms)
        rows.append(tuple(row))
    return ParseTable(columns=tuple(sym.columns), rows=tuple(rows))


def format_table(table: ParseTable) -> str:
    """열 너비를 맞춘 텍스트 표."""
    header = ["State", *table.columns]
    body = [[str(i), *(str(c) for c in row)] for i, row in enumerate(table.rows)]
    widths = [max(len(r[k]) for r in [header, *body]) for k in range(len(header))]

    def fmt(cells: List[str]) -> str:
        return " | ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    lines = [fmt(header), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(r) for r in body)
    return "\n".join(lines)
