"""규칙 텍스트 파싱과 문법 데이터 모델."""
