import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkcircuit.linear.combination import LinearComb
from zkcircuit.linear.example import build_chain


# ── 테스트 상수 (mod 17 시나리오) ──
MODULUS = 17
A_TERMS = {1: 3, 2: 2, 3: 1}
B_TERMS = {1: 9, 2: 5, 3: 3}


@pytest.fixture
def a():
    return LinearComb.from_terms(MODULUS, A_TERMS)


@pytest.fixture
def b():
    return LinearComb.from_terms(MODULUS, B_TERMS)


@pytest.fixture
def one():
    return LinearComb.one(MODULUS)


@pytest.fixture
def chain():
    """데모 체인 a, b → c, d, e, f, g."""
    return build_chain(MODULUS)
