"""
R1CS 제약 빌더 데모 (mod 17)
============================

실행:
    python -m zkcircuit.linear.example

흐름:
    1. 기저 선형 결합 a, b 생성
    2. c = a + b, d = 9·c, e = d - c, f = e / 123
    3. g = f^13 (13번의 순차 곱셈으로 전개)
    4. g를 R1CS로 평탄화
"""

from zkcircuit.linear.combination import LinearComb


MODULUS = 17


def build_chain(modulus=MODULUS):
    """데모 체인을 만들고 단계별 핸들을 반환한다."""
    a = LinearComb(modulus, [1, 2, 3], [3, 2, 1])
    b = LinearComb(modulus, [1, 2, 3], [9, 5, 3])
    c = a.ladd(b)
    d = c.wmul(9)
    e = d.lsub(c)
    f = e.ldiv(123)
    g = f.lpow(13)
    return {"a": a, "b": b, "c": c, "d": d, "e": e, "f": f, "g": g}


def main():
    print("=" * 60)
    print(f"  R1CS Constraint Builder Demo (mod {MODULUS})")
    print("=" * 60)

    steps = build_chain()

    print("\n[1] 단계별 선형 결합")
    for name, handle in steps.items():
        print(f"    {name} (depth {handle.depth}): {handle.linear_comb}")

    g = steps["g"]
    print(f"\n[2] g = f^13: 곱셈 제약 {len(g.sub_constraints)}개")
    for i, constraint in enumerate(g.sub_constraints):
        print(f"      [{i}] {constraint}")

    r1cs = g.r1cs()
    print(f"\n[3] R1CS 평탄화 (depth {g.depth} → 제약 {len(r1cs)}개)")
    print(r1cs)

    print("\n" + "=" * 60)
    return r1cs


if __name__ == "__main__":
    main()
