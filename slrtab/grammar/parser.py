"""slrtab 규칙 파서
- 한 줄에 규칙 하나: LHS -> RHS1 | RHS2 | ...
- RHS 대안은 공백으로 나눈 심볼 열
- 비어 있는 대안(RHS 없음, 'a |' 의 뒤쪽, 단독 'ε')은 ε-프로덕션
- 빈 줄은 무시. 맨 앞 BOM 은 버림
- 공백은 유니코드 공백 전부 (줄바꿈 제외)
- 첫 규칙의 LHS가 시작기호. 증강 규칙 S' -> S를 0번에 삽입
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Tuple

from .ast import END_MARKER, EPSILON, Body, ParsedGrammar, Production, Span


class EmptyInputError(ValueError):
    """공백을 제거한 입력이 비어 있을 때."""


class GrammarSyntaxError(SyntaxError):
    """규칙 줄 형식이 잘못되었을 때 (-> 누락, LHS 불량 등)."""


# ---- 규칙 줄 토큰 ----
_TOKEN_SPEC = [
    ("WS",     r"[^\S\n]+"),
    ("ARROW",  r"->"),
    ("OR",     r"\|"),
    ("SYMBOL", r"(?:(?!->)[^\s|])+"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))


@dataclass
class Tok:
    kind: str
    lexeme: str
    col: int


def _snippet_caret_at(line_text: str, col: int) -> str:
    """1-based 칼럼 col에 캐럿(^)을 찍은 스니펫."""
    caret = " " * (col - 1) + "^"
    return f"{line_text}\n{caret}"


def _error(msg: str, span: Span, col: int) -> GrammarSyntaxError:
    snippet = _snippet_caret_at(span.text, col)
    return GrammarSyntaxError(f"{msg} at {span.line}:{col}\n{snippet}")


def _scan_line(span: Span) -> List[Tok]:
    """규칙 한 줄을 토큰 리스트로. 공백은 배출하지 않는다."""
    toks: List[Tok] = []
    src = span.text
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise _error(f"Unexpected char {src[i]!r}", span, i + 1)
        if m.lastgroup != "WS":
            toks.append(Tok(m.lastgroup, m.group(0), i + 1))
        i = m.end()
    return toks


def _parse_line(span: Span) -> Tuple[str, List[Body]]:
    """
    규칙 한 줄 → (LHS, 대안 리스트).
    형식: SYMBOL ARROW (SYMBOL | OR)*
    """
    toks = _scan_line(span)

    arrows = [t for t in toks if t.kind == "ARROW"]
    if not arrows:
        end_col = len(span.text.rstrip()) + 1
        raise _error("Missing '->' in rule", span, end_col)
    if len(arrows) > 1:
        raise _error("More than one '->' in rule", span, arrows[1].col)

    arrow_at = toks.index(arrows[0])
    lhs_toks = toks[:arrow_at]
    if not lhs_toks:
        raise _error("Missing left-hand side before '->'", span, arrows[0].col)
    if len(lhs_toks) > 1 or lhs_toks[0].kind != "SYMBOL":
        bad = lhs_toks[1] if len(lhs_toks) > 1 else lhs_toks[0]
        raise _error("Left-hand side must be a single symbol", span, bad.col)
    lhs = lhs_toks[0].lexeme
    if lhs == EPSILON:
        raise _error(f"'{EPSILON}' cannot be a left-hand side", span, lhs_toks[0].col)

    for t in toks:
        if t.lexeme == END_MARKER:
            raise _error(f"'{END_MARKER}' is reserved for the end marker", span, t.col)

    # OR 기준으로 대안 분리
    alts: List[Body] = []
    cur: List[Tok] = []
    for t in toks[arrow_at + 1:] + [Tok("OR", "|", 0)]:
        if t.kind == "OR":
            syms = [x.lexeme for x in cur]
            if not syms or syms == [EPSILON]:
                alts.append((EPSILON,))
            elif EPSILON in syms:
                eps = next(x for x in cur if x.lexeme == EPSILON)
                raise _error(f"'{EPSILON}' must stand alone in an alternative", span, eps.col)
            else:
                alts.append(tuple(syms))
            cur = []
        else:
            cur.append(t)
    return lhs, alts


def _fresh_start(start: str, taken: set[str]) -> str:
    """start' 가 이미 쓰이는 이름이면 ' 를 더 붙인다."""
    aug = f"{start}'"
    while aug in taken:
        aug += "'"
    return aug


def parse_rules(src: str) -> ParsedGrammar:
    """
    문법 텍스트를 ParsedGrammar로 변환합니다.

    Raises
    ------
    EmptyInputError
        공백 제거 후 입력이 비어 있을 때.
    GrammarSyntaxError
        규칙 줄 형식이 잘못되었을 때.
    """
    src = src.lstrip("\ufeff")
    if not src.strip():
        raise EmptyInputError("Input cannot be empty.")

    text = src.replace("\r\n", "\n").replace("\r", "\n")
    lines: List[Tuple[str, List[Body], Span]] = []
    for no, line_text in enumerate(text.split("\n"), start=1):
        if not line_text.strip():
            continue
        span = Span(no, line_text)
        lhs, alts = _parse_line(span)
        lines.append((lhs, alts, span))

    taken: set[str] = set()
    for lhs, alts, _ in lines:
        taken.add(lhs)
        for alt in alts:
            taken.update(alt)

    start = lines[0][0]
    aug_start = _fresh_start(start, taken)

    rules: List[Production] = [Production(aug_start, (start,), augmented=True)]
    bnf: Dict[str, List[Body]] = {}
    for lhs, alts, span in lines:
        # 처음 보는 비단말은 빈 리스트로 등록
        prods = bnf.setdefault(lhs, [])
        for alt in alts:
            prods.append(alt)
            rules.append(Production(lhs, alt, span=span))

    # 결과는 읽기 전용: 프로덕션은 튜플, 맵은 프록시
    grammar = MappingProxyType({A: tuple(ps) for A, ps in bnf.items()})
    return ParsedGrammar(rules=tuple(rules), grammar=grammar, start=aug_start)

