"""문법 파일 로더. 경로가 '-' 이면 표준입력에서 읽는다."""

from __future__ import annotations
import sys
from pathlib    import Path
from typing     import Union


def load_grammar_text(path: Union[str, Path]) -> str:
    """
    문법 텍스트를 읽습니다.
    - 파일은 UTF-8(BOM 허용)로 읽음
    - '\\r\\n', '\\r' 줄바꿈은 '\\n'으로 통일
    """
    if str(path) == "-":
        text = sys.stdin.read().lstrip("\ufeff")
    else:
        text = Path(path).read_text(encoding="utf-8-sig")
    return text.replace("\r\n", "\n").replace("\r", "\n")
