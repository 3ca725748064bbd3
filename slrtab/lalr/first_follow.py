from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Sequence, Set

from ..grammar.ast import END_MARKER, EPSILON, Grammar, ParsedGrammar, Production, is_epsilon
from .symbols import SymbolTable


@dataclass
class FirstFollow:
    """
    FirstFollow
    ===========
    분석 1회분의 FIRST/FOLLOW 계산 컨텍스트입니다.
    캐시는 이 객체에만 붙어 있으므로 분석 호출끼리 결과가 섞이지 않습니다.

    - first(X): 단말이면 {X}. 비단말이면 각 프로덕션에 대해
        * ε-프로덕션 → ε 추가
        * 그 외 → FIRST(첫 심볼) 합집합
      프로덕션의 **첫 심볼만** 본다(앞 심볼이 nullable이어도 뒤로 전파하지 않음).
    - follow(A): A가 시작기호면 '$'. 모든 규칙 B -> α 의 각 A 위치 i에 대해
        * 마지막 심볼이고 B != A → FOLLOW(B)
        * 아니면 FIRST(α[i+1]) - {ε}, 그 FIRST에 ε가 있고 B != A 이면 FOLLOW(B)도
    - 재귀 가드: 계산 중인 심볼을 다시 요청하면 ∅ 을 돌려준다(좌/상호 재귀 종료 보장).
      진행 중 집합은 호출마다 인자로 넘긴다.
    - 최상위 요청의 결과만 컨텍스트에 메모한다. 중첩 결과는 그 요청 안에서만 재사용.
    """
    grammar: Grammar
    rules: Sequence[Production]
    start: str
    _first: Dict[str, FrozenSet[str]] = field(default_factory=dict, repr=False)
    _follow: Dict[str, FrozenSet[str]] = field(default_factory=dict, repr=False)

    @classmethod
    def of(cls, parsed: ParsedGrammar) -> "FirstFollow":
        return cls(grammar=parsed.grammar, rules=parsed.rules, start=parsed.start)

    # ---------- FIRST ----------
    def first(self, X: str) -> FrozenSet[str]:
        cached = self._first.get(X)
        if cached is None:
            cached = frozenset(self._first_of(X, set(), {}))
            self._first[X] = cached
        return cached

    def _first_of(self, X: str, in_progress: Set[str], memo: Dict[str, Set[str]]) -> Set[str]:
        if X in in_progress:
            return set()
        if X in memo:
            return memo[X]
        if X not in self.grammar:
            return {X}

        in_progress.add(X)
        out: Set[str] = set()
        for prod in self.grammar[X]:
            if is_epsilon(prod):
                out.add(EPSILON)
            else:
                out |= self._first_of(prod[0], in_progress, memo)
        in_progress.discard(X)
        memo[X] = out
        return out

    # ---------- FOLLOW ----------
    def follow(self, A: str) -> FrozenSet[str]:
        cached = self._follow.get(A)
        if cached is None:
            cached = frozenset(self._follow_of(A, set(), {}))
            self._follow[A] = cached
        return cached

    def _follow_of(self, A: str, in_progress: Set[str], memo: Dict[str, Set[str]]) -> Set[str]:
        if A in in_progress:
            return set()
        if A in memo:
            return memo[A]

        in_progress.add(A)
        out: Set[str] = set()
        if A == self.start:
            out.add(END_MARKER)

        for r in self.rules:
            alpha = r.rhs
            for i, X in enumerate(alpha):
                if X != A:
                    continue
                if i == len(alpha) - 1:
                    if r.lhs != A:
                        out |= self._follow_of(r.lhs, in_progress, memo)
                else:
                    f_next = self.first(alpha[i + 1])
                    out |= f_next - {EPSILON}
                    if EPSILON in f_next and r.lhs != A:
                        out |= self._follow_of(r.lhs, in_progress, memo)

        in_progress.discard(A)
        memo[A] = out
        return out


@dataclass(frozen=True)
class FFResult:
    """
    FFResult
    ========
    FIRST/FOLLOW 계산 결과를 담는 단순 컨테이너입니다. (이름 기반)

    - nullable: FIRST에 ε가 들어 있는 비단말 집합
    - first: 각 심볼 이름 → FIRST 집합 (단말 a: {a})
    - follow: 각 비단말 이름 → FOLLOW 집합
    """
    nullable: FrozenSet[str]
    first: Dict[str, FrozenSet[str]]
    follow: Dict[str, FrozenSet[str]]


def compute_first_follow(parsed: ParsedGrammar, sym: SymbolTable) -> FFResult:
    """
    모든 단말/비단말에 대한 FIRST와 모든 비단말에 대한 FOLLOW를 계산합니다.
    키 순서는 SymbolTable의 첫 등장 순서를 따릅니다.
    """
    ff = FirstFollow.of(parsed)
    first = {X: ff.first(X) for X in (*sym.terms, *sym.nonterms)}
    follow = {A: ff.follow(A) for A in sym.nonterms}
    nullable = frozenset(A for A in sym.nonterms if EPSILON in first[A])
    return FFResult(nullable=nullable, first=first, follow=follow)
