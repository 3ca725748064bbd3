# slrtab/grammar/ast.py
"""Grammar 데이터 모델
- Production: 평탄화된 규칙 한 줄 (LHS -> RHS 대안 1개)
- Grammar: 비단말 -> 프로덕션(심볼 튜플) 튜플, 삽입 순서 유지. 읽기 전용 뷰
- ParsedGrammar: 규칙 파서의 최종 산출물
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Mapping, Optional, Tuple

# ε-프로덕션을 나타내는 단일 센티넬 심볼
EPSILON = "ε"
# 입력 끝(EOF) 표지
END_MARKER = "$"

Body = Tuple[str, ...]
Grammar = Mapping[str, Tuple[Body, ...]]


def is_epsilon(rhs: Body) -> bool:
    """rhs가 ε-프로덕션(('ε',))인지 여부."""
    return rhs == (EPSILON,)


def body_of(rhs: Body) -> Body:
    """아이템/리듀스에서 실제로 소비하는 심볼 열. ε-프로덕션이면 빈 튜플."""
    return () if is_epsilon(rhs) else rhs


@dataclass(frozen=True)
class Span:
    """원문에서 규칙 한 줄의 위치(1-based line)."""
    line: int
    text: str


@dataclass(frozen=True)
class Production:
    """
    평탄화된 규칙 1개.
    - lhs: 좌변 비단말 이름
    - rhs: 우변 심볼 튜플 (ε는 ('ε',)로 표현)
    - augmented: 증강 시작 규칙(S' -> S) 여부. 항상 규칙 리스트의 0번.
    - span: 원문 위치(증강 규칙은 None)
    """
    lhs: str
    rhs: Body
    augmented: bool = False
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.lhs} -> {' '.join(self.rhs)}"


@dataclass(frozen=True)
class ParsedGrammar:
    """
    ParsedGrammar
    =============
    규칙 파서(parse_rules)의 결과.

    - rules : 평탄화된 규칙 리스트. rules[0]은 증강 규칙 S' -> S
              reduce(N)의 N은 이 리스트의 인덱스
    - grammar: 비단말 -> 프로덕션 튜플 (첫 등장 순서, MappingProxyType)
    - start : **증강** 시작기호 (예: "S'")
    """
    rules: Tuple[Production, ...]
    grammar: Grammar
    start: str

    @property
    def origin_start(self) -> str:
        """증강 전 원래 시작기호 (증강 규칙의 우변)."""
        return self.rules[0].rhs[0]

    def rule_index(self, lhs: str, rhs: Body) -> int:
        """(lhs, rhs)가 처음 일치하는 규칙 인덱스. 없으면 ValueError."""
        for i, r in enumerate(self.rules):
            if r.lhs == lhs and r.rhs == rhs:
                return i
        raise ValueError(f"no rule {lhs} -> {' '.join(rhs)}")
