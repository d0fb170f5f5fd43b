"""Allow-listed functions, constants and variables for math channel expressions."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Callable


MATH_FUNCTION_NAMES: tuple[str, ...] = (
    "abs",
    "acos",
    "acosh",
    "asin",
    "asinh",
    "atan",
    "atan2",
    "atanh",
    "cbrt",
    "ceil",
    "clz32",
    "cos",
    "cosh",
    "exp",
    "expm1",
    "floor",
    "fround",
    "hypot",
    "imul",
    "log",
    "log1p",
    "log2",
    "log10",
    "max",
    "min",
    "pow",
    "round",
    "sign",
    "sin",
    "sinh",
    "sqrt",
    "tan",
    "tanh",
    "trunc",
)

MATH_CONSTANT_NAMES: tuple[str, ...] = (
    "E",
    "LN2",
    "LN10",
    "LOG2E",
    "LOG10E",
    "PI",
    "SQRT1_2",
    "SQRT2",
)

MATH_VARIABLES: tuple[str, ...] = ("a", "b", "c", "d", "e", "f", "g", "h")

MATH_FUNCTION_LABEL = ", ".join(MATH_FUNCTION_NAMES)
MATH_CONSTANT_LABEL = ", ".join(MATH_CONSTANT_NAMES)

MATH_NAMESPACE = "Math"

ALLOWED_MATH_IDENTIFIERS: frozenset[str] = frozenset(
    (MATH_NAMESPACE, *MATH_FUNCTION_NAMES, *MATH_CONSTANT_NAMES)
)

CONSTANT_VALUES: dict[str, float] = {
    "E": math.e,
    "LN2": math.log(2),
    "LN10": math.log(10),
    "LOG2E": 1 / math.log(2),
    "LOG10E": 1 / math.log(10),
    "PI": math.pi,
    "SQRT1_2": math.sqrt(0.5),
    "SQRT2": math.sqrt(2),
}


def _to_int32(value: float) -> int:
    if not math.isfinite(value):
        return 0
    n = int(value) & 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _round(x: float) -> float:
    # Half-way values round towards positive infinity.
    r = math.floor(x)
    return float(r + 1 if x - r >= 0.5 else r)


def _sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return x


def _fround(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


def _imul(a: float, b: float) -> float:
    return float(_to_int32(_to_int32(a) * _to_int32(b)))


def _clz32(x: float) -> float:
    return float(32 - (_to_int32(x) & 0xFFFFFFFF).bit_length())


def _max(*args: float) -> float:
    return float(max(args))


def _min(*args: float) -> float:
    return float(min(args))


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    """Allow-listed function metadata shared by evaluation and rendering."""

    name: str
    arity: int | None
    impl: Callable[..., float]
    latex: str
    min_args: int = 0

    def accepts(self, count: int) -> bool:
        """Return True when ``count`` arguments satisfy this function's arity."""

        if self.arity is None:
            return count >= self.min_args
        return count == self.arity


class FunctionRegistry:
    """Deterministic lookup table for allow-listed functions."""

    def __init__(self, specs: list[FunctionSpec]) -> None:
        self._specs: tuple[FunctionSpec, ...] = tuple(specs)
        self._by_name: dict[str, FunctionSpec] = {}
        for spec in self._specs:
            if spec.name not in self._by_name:
                self._by_name[spec.name] = spec

    def lookup(self, name: str) -> FunctionSpec | None:
        """Lookup a function spec by its bare name (e.g. \"sin\")."""

        return self._by_name.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered names in registration order."""

        return tuple(spec.name for spec in self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name


DEFAULT_FUNCTIONS = FunctionRegistry(
    [
        FunctionSpec("abs", 1, math.fabs, r"\operatorname{abs}"),
        FunctionSpec("acos", 1, math.acos, r"\arccos"),
        FunctionSpec("acosh", 1, math.acosh, r"\operatorname{arcosh}"),
        FunctionSpec("asin", 1, math.asin, r"\arcsin"),
        FunctionSpec("asinh", 1, math.asinh, r"\operatorname{arsinh}"),
        FunctionSpec("atan", 1, math.atan, r"\arctan"),
        FunctionSpec("atan2", 2, math.atan2, r"\operatorname{atan2}"),
        FunctionSpec("atanh", 1, math.atanh, r"\operatorname{artanh}"),
        FunctionSpec("cbrt", 1, math.cbrt, r"\sqrt[3]"),
        FunctionSpec("ceil", 1, lambda x: float(math.ceil(x)), r"\lceil"),
        FunctionSpec("clz32", 1, _clz32, r"\operatorname{clz32}"),
        FunctionSpec("cos", 1, math.cos, r"\cos"),
        FunctionSpec("cosh", 1, math.cosh, r"\cosh"),
        FunctionSpec("exp", 1, math.exp, r"\exp"),
        FunctionSpec("expm1", 1, math.expm1, r"\operatorname{expm1}"),
        FunctionSpec("floor", 1, lambda x: float(math.floor(x)), r"\lfloor"),
        FunctionSpec("fround", 1, _fround, r"\operatorname{fround}"),
        FunctionSpec("hypot", None, math.hypot, r"\operatorname{hypot}"),
        FunctionSpec("imul", 2, _imul, r"\operatorname{imul}"),
        FunctionSpec("log", 1, math.log, r"\ln"),
        FunctionSpec("log1p", 1, math.log1p, r"\operatorname{log1p}"),
        FunctionSpec("log2", 1, math.log2, r"\log_{2}"),
        FunctionSpec("log10", 1, math.log10, r"\log_{10}"),
        FunctionSpec("max", None, _max, r"\max", min_args=1),
        FunctionSpec("min", None, _min, r"\min", min_args=1),
        FunctionSpec("pow", 2, math.pow, r"\operatorname{pow}"),
        FunctionSpec("round", 1, _round, r"\operatorname{round}"),
        FunctionSpec("sign", 1, _sign, r"\operatorname{sign}"),
        FunctionSpec("sin", 1, math.sin, r"\sin"),
        FunctionSpec("sinh", 1, math.sinh, r"\sinh"),
        FunctionSpec("sqrt", 1, math.sqrt, r"\sqrt"),
        FunctionSpec("tan", 1, math.tan, r"\tan"),
        FunctionSpec("tanh", 1, math.tanh, r"\tanh"),
        FunctionSpec("trunc", 1, lambda x: float(math.trunc(x)), r"\operatorname{trunc}"),
    ]
)


def is_allowed_identifier(name: str) -> bool:
    """Return True for ``Math`` and every allow-listed function or constant name."""

    return name in ALLOWED_MATH_IDENTIFIERS
