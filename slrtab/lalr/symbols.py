"""규칙 리스트로부터 단말/비단말을 분류합니다."""
from __future__     import annotations
from dataclasses    import dataclass
from typing         import Dict, Iterable, List, Tuple

from ..grammar.ast  import END_MARKER, EPSILON, Production


@dataclass(frozen=True)
class SymbolTable:
    """
    SymbolTable
    ===========
    단말/비단말 이름 목록을 **첫 등장 순서**로 고정한 테이블입니다.
    파스 테이블의 열 순서(단말 ++ '$' ++ 비단말)가 이 순서를 그대로 따릅니다.

    분류 규칙
    --------
    - 어떤 규칙의 좌변(LHS)이면 비단말, 아니면 단말
    - 증강 시작기호(S')는 단말로도, 비단말 열로도 나오지 않습니다.
    - ε 센티넬은 어느 쪽에도 속하지 않습니다.

    주요 속성/메서드
    ----------------
    - terms / nonterms : 순서가 고정된 튜플
    - is_term(name) / is_nonterm(name)
    - columns : 파스 테이블 열 머리글
    - column_of(name) : 열 인덱스
    """
    terms: Tuple[str, ...]
    nonterms: Tuple[str, ...]
    start: str

    @classmethod
    def freeze(cls, rules: Iterable[Production], start: str) -> "SymbolTable":
        """
        규칙 리스트로 심볼 테이블을 '고정'합니다.
        start 는 증강 시작기호입니다.
        """
        rules = list(rules)

        # dict 를 순서 있는 집합으로 사용
        nonterms: Dict[str, None] = {}
        for r in rules:
            nonterms.setdefault(r.lhs, None)

        terms: Dict[str, None] = {}
        for r in rules:
            for X in r.rhs:
                if X not in nonterms and X != EPSILON:
                    terms.setdefault(X, None)

        terms.pop(start, None)
        nonterms.pop(start, None)
        return cls(terms=tuple(terms), nonterms=tuple(nonterms), start=start)

    # ----- 조회 / 유틸 -----
    def is_term(self, name: str) -> bool:
        """단말 여부 ('$'는 포함하지 않음)."""
        return name in self.terms

    def is_nonterm(self, name: str) -> bool:
        """비단말 여부. 증강 시작기호도 비단말로 본다."""
        return name == self.start or name in self.nonterms

    @property
    def columns(self) -> List[str]:
        """테이블 열 머리글: 단말 ++ ['$'] ++ 비단말."""
        return [*self.terms, END_MARKER, *self.nonterms]

    def column_of(self, name: str) -> int:
        """열 인덱스. 없는 심볼이면 ValueError."""
        return self.columns.index(name)

    def __repr__(self) -> str:
        return f"SymbolTable(terms={list(self.terms)}, nonterms={list(self.nonterms)}, start={self.start})"
