"""
선형 결합 Flask Blueprint — R1CS 제약 빌더 엔드포인트
======================================================

  GET  /linear/          엔드포인트 안내 및 기본 설정
  GET  /linear/example   mod 17 데모 체인 결과
  POST /linear/chain     요청으로 받은 연산 체인을 만들고 R1CS로 평탄화

POST /linear/chain 요청 형식:
    {
      "modulus": 17,
      "base": {"1": 3, "2": 2, "3": 1},
      "ops": [
        {"op": "ladd", "rhs": {"1": 9, "2": 5, "3": 3}},
        {"op": "wmul", "scalar": 9},
        {"op": "lsub", "ref": 1},
        {"op": "ldiv", "scalar": 123},
        {"op": "lpow", "exp": 13}
      ]
    }

  - rhs: 새 기저 선형 결합 {인덱스: 계수}
  - ref: 앞 단계의 핸들 (0 = base, k = k번째 연산 결과)
  - 계수와 스칼라는 정수 또는 10진수 문자열
"""

from flask import Blueprint, current_app, jsonify, request

from zkcircuit.linear.combination import LinearComb
from zkcircuit.linear.errors import LinearCombError
from zkcircuit.linear.example import build_chain
from zkcircuit.linear.ops import PowLC

linear_bp = Blueprint('linear', __name__, url_prefix='/linear')

BINARY_OPS = ("ladd", "lsub", "scalar_mul")
SCALE_OPS = ("wmul", "wdiv", "ldiv")


class ChainRequestError(ValueError):
    """요청 본문이 체인 형식에 맞지 않는다."""


# ─── 요청 파싱 ───

def parse_int(value, name):
    """정수 또는 10진수 문자열 → int"""
    if isinstance(value, bool):
        raise ChainRequestError(f"{name}: 정수가 아닙니다: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            pass
    raise ChainRequestError(f"{name}: 정수가 아닙니다: {value!r}")


def parse_terms(modulus, data, name):
    """{"인덱스": 계수} → LinearComb"""
    if not isinstance(data, dict) or not data:
        raise ChainRequestError(f"{name}: 비어 있지 않은 {{인덱스: 계수}} 객체가 필요합니다")
    terms = {}
    for key, scalar in data.items():
        index = parse_int(key, f"{name} 인덱스")
        if index in terms:
            raise ChainRequestError(f"{name}: 중복된 인덱스입니다: {key!r} → {index}")
        terms[index] = parse_int(scalar, f"{name}[{key}]")
    negative = [index for index in terms if index < 0]
    if negative:
        raise ChainRequestError(f"{name}: 인덱스는 0 이상이어야 합니다: {negative}")
    return LinearComb.from_terms(modulus, terms)


def resolve_rhs(modulus, op, handles, step):
    if "ref" in op:
        ref = parse_int(op["ref"], f"ops[{step}].ref")
        if not 0 <= ref < len(handles):
            raise ChainRequestError(f"ops[{step}].ref: 존재하지 않는 단계입니다: {ref}")
        return handles[ref]
    return parse_terms(modulus, op.get("rhs"), f"ops[{step}].rhs")


def apply_op(modulus, handles, op, step):
    """ops[step]을 마지막 핸들에 적용한다."""
    if not isinstance(op, dict):
        raise ChainRequestError(f"ops[{step}]: 객체가 아닙니다")
    name = op.get("op")
    current = handles[-1]

    if name in BINARY_OPS:
        rhs = resolve_rhs(modulus, op, handles, step)
        return getattr(current, name)(rhs)
    if name in SCALE_OPS:
        return getattr(current, name)(parse_int(op.get("scalar"), f"ops[{step}].scalar"))
    if name == "lpow":
        exponent = parse_int(op.get("exp"), f"ops[{step}].exp")
        max_exponent = current_app.config["MAX_EXPONENT"]
        if not 0 <= exponent <= max_exponent:
            raise ChainRequestError(
                f"ops[{step}].exp: 지수는 0 이상 {max_exponent} 이하여야 합니다: {exponent}"
            )
        return current.lpow(exponent)
    raise ChainRequestError(f"ops[{step}].op: 알 수 없는 연산입니다: {name!r}")


# ─── 응답 구성 ───

def describe_handle(handle):
    return {
        "type": type(handle).__name__,
        "depth": handle.depth,
        "linear_comb": str(handle.linear_comb),
    }


def describe_chain(handles):
    last = handles[-1]
    r1cs = last.r1cs()
    result = {
        "steps": [describe_handle(h) for h in handles],
        "depth": last.depth,
        "linear_comb": str(last.linear_comb),
        "r1cs": {
            "constraints": [str(c) for c in r1cs.constraints],
            "variables": list(r1cs.variables),
        },
    }
    if isinstance(last, PowLC):
        result["sub_constraints"] = [str(c) for c in last.sub_constraints]
    return result


# ─── 에러 핸들러 ───

@linear_bp.errorhandler(ChainRequestError)
@linear_bp.errorhandler(LinearCombError)
def handle_chain_error(error):
    current_app.logger.info("chain request rejected: %s", error)
    return jsonify({"error": type(error).__name__, "message": str(error)}), 400


# ──────────────────────────────────────────────────────────────
# 엔드포인트
# ──────────────────────────────────────────────────────────────

@linear_bp.route("/")
def index():
    """엔드포인트 안내."""
    return jsonify({
        "endpoints": {
            "GET /linear/example": "mod 17 데모 체인",
            "POST /linear/chain": "연산 체인 생성 및 R1CS 평탄화",
        },
        "ops": list(BINARY_OPS) + list(SCALE_OPS) + ["lpow"],
        "default_modulus": str(current_app.config["DEFAULT_MODULUS"]),
        "max_exponent": current_app.config["MAX_EXPONENT"],
    })


@linear_bp.route("/example")
def example():
    """데모 체인 (a, b → c, d, e, f, g)."""
    steps = build_chain()
    result = describe_chain([steps[name] for name in ("a", "c", "d", "e", "f", "g")])
    result["names"] = ["a", "c", "d", "e", "f", "g"]
    return jsonify(result)


@linear_bp.route("/chain", methods=["POST"])
def chain():
    """요청 본문의 연산 체인을 만들어 R1CS로 평탄화한다."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ChainRequestError("JSON 객체 본문이 필요합니다")

    modulus = parse_int(data.get("modulus", current_app.config["DEFAULT_MODULUS"]), "modulus")
    if modulus < 2:
        raise ChainRequestError(f"modulus: 2 이상이어야 합니다: {modulus}")
    ops = data.get("ops", [])
    if not isinstance(ops, list):
        raise ChainRequestError("ops: 리스트가 필요합니다")

    handles = [parse_terms(modulus, data.get("base"), "base")]
    for step, op in enumerate(ops):
        handles.append(apply_op(modulus, handles, op, step))

    current_app.logger.debug("built chain of depth %d", handles[-1].depth)
    return jsonify(describe_chain(handles))
