# slrtab/lalr/runtime.py
"""SLR(1) 파서 런타임(스택 머신).

- `ParseTable`(ACTION/GOTO)과 평탄화 규칙 리스트를 받아
  단말 토큰 열을 **accept/reject** 판정합니다.
- 에러 시, 해당 상태에서 가능한 단말(expected set)을 제시하는
  `SyntaxError` 메시지를 던집니다. 오류 복구는 하지 않습니다.
"""

from __future__ import annotations
from typing import Iterable, List, Sequence, Set, Tuple

from ..grammar.ast import END_MARKER, Production, body_of
from .table import ParseTable


def recognize(tokens: Iterable[str], table: ParseTable, rules: Sequence[Production]) -> List[int]:
    """SLR(1) 테이블로 토큰 열을 파싱합니다.

    Parameters
    ----------
    tokens : Iterable[str]
        단말 이름의 열. 끝 표지('$')는 넣지 않습니다.
    table : ParseTable
        analyze()가 만든 테이블.
    rules : Sequence[Production]
        테이블의 reduce 번호가 가리키는 평탄화 규칙 리스트.

    Returns
    -------
    List[int]
        적용한 reduce 규칙 번호들(우측 유도의 역순). 실패 시 `SyntaxError`.
    """
    toks = [t for t in tokens if t != END_MARKER] + [END_MARKER]
    state_stack: List[int] = [0]
    reductions: List[int] = []
    pos = 0
    # 마지막 shift 이후 본 스택들. 같은 스택이 다시 나오면 reduce 순환
    seen: Set[Tuple[int, ...]] = set()

    while True:
        s = state_stack[-1]
        look = toks[pos]
        act = table.action(s, look)

        if act is None:
            expected = ", ".join(table.expected(s))
            where = "EOF" if look == END_MARKER else f"token {pos + 1} {look!r}"
            raise SyntaxError(
                f"Parse error at {where} in state {s}: expected one of {{{expected}}}"
            )

        kind, arg = act

        if kind == 's':  # shift
            state_stack.append(arg)
            pos += 1
            seen.clear()
            continue

        if kind == 'r':  # reduce by rule #arg
            rule = rules[arg]
            for _ in range(len(body_of(rule.rhs))):
                state_stack.pop()
            t = state_stack[-1]
            goto_state = table.cell(t, rule.lhs)
            if goto_state == "":
                # 구조적 오류(테이블 일관성 문제)
                raise RuntimeError(f"GOTO missing for state={t}, lhs={rule.lhs}")
            state_stack.append(int(goto_state))
            reductions.append(arg)
            snapshot = tuple(state_stack)
            if snapshot in seen:
                raise RuntimeError(f"Reduce cycle on rule {arg} ({rule}) in state {t}")
            seen.add(snapshot)
            continue

        if kind == 'acc':
            return reductions

        raise RuntimeError(f"Unknown ACTION kind: {kind}")
