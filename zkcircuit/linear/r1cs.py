"""
R1CS 누적기 (Rank-1 Constraint System)
======================================

연산 체인을 평탄화(flatten)하면서 제약과 변수 인덱스를 모은다.

  - constraints: 삽입 순서를 유지하는 제약 리스트 (중복 허용)
  - variables:   참조된 변수 인덱스 집합 (중복 제거, 순서 무관)

제거 연산은 없다. 누적기는 커지기만 한다.

**행렬 표현 (to_matrices)**:
  QAP 변환기가 받는 형태의 밀집 행렬 A, B, C를 만든다.
  행 = 제약, 열 = 배선 0..max_index (0번 열은 상수 배선)

    >>> A, B, C = r1cs.to_matrices()
    >>> A[0]   # 첫 번째 제약의 A 벡터, 예: [0, 12, 7, 4]
"""

from zkcircuit.linear.constraint import Constraint


class R1CS:
    """제약 리스트와 변수 인덱스 집합."""

    def __init__(self):
        self._constraints = []
        self._variables = set()

    def add_constraint(self, constraint):
        """제약을 끝에 추가한다 (중복 검사 없음)."""
        if not isinstance(constraint, Constraint):
            raise TypeError(f"Constraint가 아닙니다: {type(constraint).__name__}")
        self._constraints.append(constraint)

    def extend_constraints(self, constraints):
        """여러 제약을 순서대로 추가한다.

        lpow의 전개된 곱셈 제약(sub_constraints)을 합칠 때 사용한다.
        """
        constraints = list(constraints)
        for constraint in constraints:
            if not isinstance(constraint, Constraint):
                raise TypeError(f"Constraint가 아닙니다: {type(constraint).__name__}")
        self._constraints.extend(constraints)

    def add_variable(self, index):
        """변수 인덱스를 추가한다. 이미 있으면 무시한다."""
        self.extend_variables([index])

    def extend_variables(self, indexes):
        indexes = list(indexes)
        for index in indexes:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"잘못된 변수 인덱스: {index!r}")
        self._variables.update(indexes)

    @property
    def constraints(self):
        return tuple(self._constraints)

    @property
    def variables(self):
        """변수 인덱스 (오름차순 튜플)."""
        return tuple(sorted(self._variables))

    @property
    def num_variables(self):
        return len(self._variables)

    def __len__(self):
        return len(self._constraints)

    def __iter__(self):
        return iter(self._constraints)

    def to_matrices(self):
        """밀집 행렬 (A, B, C)를 반환한다.

        열의 개수는 변수 집합과 제약에 등장하는 인덱스 중 최댓값 + 1이다.

        Returns:
            tuple: (A, B, C), 각각 list[list[int]]
        """
        wires = set(self._variables)
        for constraint in self._constraints:
            wires.update(constraint.indexes)
        width = max(wires) + 1 if wires else 0

        A, B, C = [], [], []
        for constraint in self._constraints:
            for matrix, lc in zip((A, B, C), constraint):
                row = [0] * width
                for index, scalar in lc.terms.items():
                    row[index] = scalar
                matrix.append(row)
        return A, B, C

    def __str__(self):
        lines = [f"R1CS: {len(self._constraints)} constraints, variables {list(self.variables)}"]
        for i, constraint in enumerate(self._constraints):
            lines.append(f"  [{i}] {constraint}")
        return "\n".join(lines)

    def __repr__(self):
        return f"R1CS(constraints={len(self._constraints)}, variables={list(self.variables)})"
