"""LR(0) 오토마톤, FIRST/FOLLOW, SLR(1) 테이블."""
