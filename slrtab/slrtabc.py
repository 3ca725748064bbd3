# slrtab/slrtabc.py
"""slrtabc – slrtab CLI

사용 예)
    $ python -m slrtab.slrtabc check  tests/grammar_test/expr.g -D
    $ python -m slrtab.slrtabc states tests/grammar_test/expr.g
    $ python -m slrtab.slrtabc table  tests/grammar_test/expr.g --json
    $ python -m slrtab.slrtabc parse  tests/grammar_test/expr.g --text "id + id"

기능
----
- check        : 문법을 읽어 파이프라인(규칙→심볼→LR(0)→FIRST/FOLLOW→SLR) 검증 및 요약 출력
- states       : LR(0) 상태와 전이 출력
- table        : ACTION/GOTO 테이블 출력 (--json 이면 분석 결과 전체를 JSON 으로)
- first-follow : 비단말별 FIRST/FOLLOW 출력
- parse        : 공백으로 나눈 토큰 열을 테이블로 파싱

디버그 모드(-D/--debug)를 켜면 파이프라인 진행 상황을 stderr 로 출력합니다.
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _fmt_set(names) -> str:
    return "{" + ", ".join(names) + "}"

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(grammar_path: str, debug: bool):
    """
    문법 파일을 읽어 규칙→심볼→LR(0)→FIRST/FOLLOW→SLR(1) 테이블까지 생성.
    debug 이면 단계마다 [DEBUG] 한 줄을 stderr 로 남긴다.
    """
    from .pipeline import analyze_file

    progress = (lambda msg: _eprint("[DEBUG] " + msg)) if debug else None
    return analyze_file(grammar_path, progress=progress)


def _run(args, body) -> int:
    """공통 에러 처리: 문법 오류/입력 오류는 종료코드 2."""
    try:
        an = _load_pipeline(args.file, debug=args.debug)
        return body(an)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except (ValueError, OSError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    def body(an) -> int:
        if args.debug:
            _eprint("\n[Rules]")
            for i, r in enumerate(an.parsed.rules):
                _eprint(f"  r{i}: {r}")
            _eprint("\n[State 0 items]")
            for line in an.automaton.state_items()[0]:
                _eprint("  " + line)
        print(f"[CHECK OK] states={len(an.automaton)} rules={len(an.parsed.rules)} "
              f"terminals={len(an.symbols.terms)} non_terminals={len(an.symbols.nonterms)}")
        return 0
    return _run(args, body)


def cmd_states(args) -> int:
    from .lalr.items import format_states

    def body(an) -> int:
        print(format_states(an.automaton))
        return 0
    return _run(args, body)


def cmd_table(args) -> int:
    from .lalr.table import format_table

    def body(an) -> int:
        if args.json:
            print(json.dumps(an.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(format_table(an.table))
        return 0
    return _run(args, body)


def cmd_first_follow(args) -> int:
    from .lalr.first_follow import compute_first_follow

    def body(an) -> int:
        ff = compute_first_follow(an.parsed, an.symbols)
        print("[NULLABLE]")
        print(", ".join(A for A in an.symbols.nonterms if A in ff.nullable) or "(none)")
        print("\n[FIRST(nonterminals)]")
        for A in an.symbols.nonterms:
            print(f"{A:>10} : {_fmt_set(sorted(ff.first[A]))}")
        print("\n[FOLLOW(nonterminals)]")
        for A in an.symbols.nonterms:
            print(f"{A:>10} : {_fmt_set(sorted(ff.follow[A]))}")
        return 0
    return _run(args, body)


def cmd_parse(args) -> int:
    from .lalr.runtime import recognize

    def body(an) -> int:
        tokens = args.text.split()
        try:
            reductions = recognize(tokens, an.table, an.parsed.rules)
        except SyntaxError as e:
            _eprint("[REJECT]")
            _eprint(str(e))
            return 1
        print("[ACCEPT]")
        for k in reductions:
            print(f"  r{k}: {an.parsed.rules[k]}")
        return 0
    return _run(args, body)

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="slrtab", description="SLR(1) parse table generator")
    sub = ap.add_subparsers(dest="cmd", required=True)

    def add(name: str, help_: str, func):
        p = sub.add_parser(name, help=help_)
        p.add_argument("file", help="문법 파일 (한 줄에 LHS -> RHS1 | RHS2 ...), - 이면 표준입력")
        p.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
        p.set_defaults(func=func)
        return p

    add("check", "문법을 검사하고 테이블 요약을 출력합니다", cmd_check)
    add("states", "LR(0) 상태와 전이를 출력합니다", cmd_states)
    p_table = add("table", "ACTION/GOTO 테이블을 출력합니다", cmd_table)
    p_table.add_argument("--json", action="store_true", help="분석 결과 전체를 JSON 으로 출력")
    add("first-follow", "FIRST/FOLLOW 집합을 출력합니다", cmd_first_follow)
    p_parse = add("parse", "토큰 열을 테이블로 파싱합니다", cmd_parse)
    p_parse.add_argument("--text", required=True, help="공백으로 구분한 단말 토큰 열")

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
