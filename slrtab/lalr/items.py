# slrtab/lalr/items.py
"""LR(0) 아이템/클로저/고토와 정규 상태 집합(오토마톤) 구성.

이 모듈은 규칙 파서가 만든 평탄화 규칙 리스트와 grammar 맵을 입력으로 받아
- LR(0) 아이템과 closure / goto
- 너비 우선(BFS) 상태 DFA 구성
- 상태/전이의 디버그 문자열
을 담당한다.

주의:
- 상태 동일성은 아이템 집합의 **구조적 동일성**이다. 정렬된 정규 키를
  인덱스 맵의 키로 써서 중복 상태를 만들지 않는다.
- 상태 번호는 BFS 발견 순서 그대로다. 같은 입력이면 번호도 항상 같다.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Deque, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..grammar.ast import Body, Grammar, Production, body_of


# ---------- LR(0) 아이템 ----------
@dataclass(frozen=True)
class Item:
    """LR(0) 아이템: [A -> α · β]"""
    lhs: str
    rhs: Body
    dot: int = 0

    @property
    def body(self) -> Body:
        """ε를 뺀 실제 심볼 열."""
        return body_of(self.rhs)

    @property
    def at_end(self) -> bool:
        return self.dot >= len(self.body)

    @property
    def next_symbol(self) -> Optional[str]:
        """점 바로 뒤 심볼. 점이 끝에 있으면 None."""
        body = self.body
        if self.dot < len(body):
            return body[self.dot]
        return None

    def advance(self) -> "Item":
        return Item(self.lhs, self.rhs, self.dot + 1)

    def __str__(self) -> str:
        rhs = list(self.body)
        rhs.insert(self.dot, "·")
        return f"{self.lhs} -> {' '.join(rhs)}"


ItemSet = Tuple[Item, ...]
ItemSetKey = Tuple[Tuple[str, Body, int], ...]


def item_set_key(items: Iterable[Item]) -> ItemSetKey:
    """아이템 순서와 무관한 정규 키 (정렬된 필드 튜플)."""
    return tuple(sorted({(it.lhs, it.rhs, it.dot) for it in items}))


def closure(items: Iterable[Item], grammar: Grammar) -> ItemSet:
    """
    고정점 closure.
    한 바퀴 동안 점 뒤 비단말 B의 모든 프로덕션에 대해 [B -> · γ]를 모아 두었다가
    바퀴가 끝나면 뒤에 붙인다. 한 바퀴 동안 새 아이템이 없으면 끝.
    """
    I: List[Item] = list(dict.fromkeys(items))
    seen = set(I)
    changed = True
    while changed:
        changed = False
        staged: List[Item] = []
        for it in I:
            B = it.next_symbol
            if B is None or B not in grammar:
                continue
            for prod in grammar[B]:
                new_item = Item(B, prod, 0)
                if new_item not in seen:
                    seen.add(new_item)
                    staged.append(new_item)
                    changed = True
        I.extend(staged)
    return tuple(I)


def goto(state: Sequence[Item], X: str, grammar: Grammar) -> Optional[ItemSet]:
    """점 뒤가 X인 아이템을 전진시킨 뒤 closure. 해당 아이템이 없으면 None."""
    J = [it.advance() for it in state if it.next_symbol == X]
    if not J:
        return None
    return closure(J, grammar)


def symbols_after_dot(items: Iterable[Item]) -> List[str]:
    """점 바로 뒤 심볼들 (첫 등장 순서, 중복 제거)."""
    out: Dict[str, None] = {}
    for it in items:
        X = it.next_symbol
        if X is not None:
            out.setdefault(X, None)
    return list(out)


# ---------- 상태 / 오토마톤 ----------
@dataclass(frozen=True)
class State:
    """정규 집합의 상태 하나: closure 된 아이템들과 심볼 -> 다음 상태 번호(읽기 전용).
    해시는 아이템과 번호로만 정한다."""
    id: int
    items: ItemSet
    transitions: Mapping[str, int] = field(hash=False)

    @property
    def key(self) -> ItemSetKey:
        return item_set_key(self.items)


Edge = Tuple[int, str, int]


@dataclass(frozen=True)
class Automaton:
    """
    Automaton
    =========
    LR(0) 정규 상태 집합.

    - states: 상태 번호 순 (번호 == 인덱스)
    - edges : (from, symbol, to) 전이 목록. 그래프를 그리는 쪽은 이것만 보면 된다.
    """
    states: Tuple[State, ...]
    edges: Tuple[Edge, ...]

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, i: int) -> State:
        return self.states[i]

    def target(self, s: int, X: str) -> Optional[int]:
        """상태 s에서 X로 가는 전이의 도착 상태. 없으면 None."""
        return self.states[s].transitions.get(X)

    def state_items(self) -> List[List[str]]:
        """디버깅용. 상태별 아이템 문자열."""
        return [[str(it) for it in st.items] for st in self.states]


def build_automaton(rules: Sequence[Production], grammar: Grammar) -> Automaton:
    """
    증강 규칙(rules[0])에서 시작해 LR(0) 정규 집합을 BFS로 만든다.

    절차
    ----
    1) I0 = closure({[S' -> · S]})로 큐를 시작
    2) 큐에서 꺼낸 아이템 집합이 이미 등록된 상태와 같으면 건너뜀(재방문)
    3) 아니면 다음 번호로 새 상태 등록
    4) 점 뒤 심볼들을 첫 등장 순서로 모아 goto 계산
    5) goto 결과마다 (현재 상태, 심볼, 결과 키)를 보류 전이로 기록하고,
       아직 등록되지 않았으면 큐에 넣음
    6) 큐가 빌 때까지 반복 후, 보류 전이의 키를 상태 번호로 치환
    """
    aug = rules[0]
    I0 = closure([Item(aug.lhs, aug.rhs, 0)], grammar)

    item_sets: List[ItemSet] = []
    state_index: Dict[ItemSetKey, int] = {}
    pending: List[Tuple[int, str, ItemSetKey]] = []
    queue: Deque[ItemSet] = deque([I0])

    while queue:
        I = queue.popleft()
        key = item_set_key(I)
        if key in state_index:
            continue
        s = len(item_sets)
        state_index[key] = s
        item_sets.append(I)

        for X in symbols_after_dot(I):
            J = goto(I, X, grammar)
            if J is None:
                continue
            j_key = item_set_key(J)
            pending.append((s, X, j_key))
            if j_key not in state_index:
                queue.append(J)

    # 보류 전이 해소
    transitions: List[Dict[str, int]] = [{} for _ in item_sets]
    edges: List[Edge] = []
    for s, X, j_key in pending:
        t = state_index[j_key]
        transitions[s][X] = t
        edges.append((s, X, t))

    states = tuple(
        State(id=i, items=I, transitions=MappingProxyType(transitions[i]))
        for i, I in enumerate(item_sets)
    )
    return Automaton(states=states, edges=tuple(edges))


def format_states(automaton: Automaton) -> str:
    """상태별 아이템과 전이를 사람이 읽기 좋은 문자열로."""
    blocks: List[str] = []
    for st in automaton.states:
        lines = [f"State {st.id}:"]
        lines.extend(f"  {it}" for it in st.items)
        lines.append("Transitions:")
        if st.transitions:
            lines.extend(f"  on {X} -> {t}" for X, t in st.transitions.items())
        else:
            lines.append("  (none)")
        blocks.append("\n".join(lines))
    return "\n---\n".join(blocks)
