"""Formal contract for the BigInt arithmetic engine.

Each public operation is described as a collection of:
- postconditions: what the output must satisfy for valid inputs
- error conditions: what inputs must cause specific exceptions
- algebraic properties: relationships that must hold between operations

Postconditions use Python's built-in ``int`` as the reference oracle.
The contract is machine-readable: validation tools iterate over it to
drive conformance tests and search for counterexamples.

Layers
------
OperationContract    per-operation contract (post/error/properties)
BranchSpec           every decision point that white-box tests must cover
ArithmeticContract   the full contract for a set of parse options
build_contract()     constructs an ArithmeticContract
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from bigint import (
    DEFAULT_PARSE_OPTIONS,
    BigInt,
    InvalidArgumentError,
    InvalidDigitError,
    ParseOptions,
    SignOnlyMode,
    add,
    parse,
    render,
    subtract,
)

CANONICAL_DECIMAL = re.compile(r"^(0|-?[1-9][0-9]*)$")


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[[str], bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many BigInt operands the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation this belongs to


@dataclass(frozen=True)
class ArithmeticContract:
    """Complete contract for the engine under one set of parse options."""

    options: ParseOptions
    operations: dict[str, OperationContract]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    def branch_ids(self, operation: str | None = None) -> list[str]:
        return [
            b.id for b in self.branches
            if operation is None or b.operation == operation
        ]


# ---------------------------------------------------------------------------
# Helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def to_int(value: BigInt) -> int:
    """Reference conversion through the rendered text."""
    return int(render(value))


def is_canonical(text: str) -> bool:
    """True for decimal text with no redundant zeros and no '-0'."""
    return CANONICAL_DECIMAL.match(text) is not None


def expected_int(text: str) -> int:
    """Oracle value of accepted text; a bare '-' counts as zero."""
    return 0 if text == "-" else int(text)


def _has_bad_char(text: str) -> bool:
    body = text[1:] if text.startswith("-") else text
    return any(c not in "0123456789" for c in body)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract(options: ParseOptions = DEFAULT_PARSE_OPTIONS) -> ArithmeticContract:
    """Construct the full engine contract for the given parse options."""

    sign_only_rejected = options.sign_only is SignOnlyMode.REJECT

    # ---------------------------------------------------------------- parse
    parse_contract = OperationContract(
        name="parse",
        postconditions=[
            Postcondition(
                "value_correct",
                "Parsed value equals int(text)",
                lambda text, result: to_int(result) == expected_int(text),
            ),
            Postcondition(
                "digits_in_range",
                "Every stored digit is in [0, 9]",
                lambda text, result: all(0 <= d <= 9 for d in result.digits),
            ),
            Postcondition(
                "normalized",
                "No high-order zero digit is stored",
                lambda text, result: not result.digits or result.digits[-1] != 0,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "empty_input",
                "InvalidArgumentError for the empty string",
                lambda text: text == "",
                InvalidArgumentError,
            ),
            ErrorCondition(
                "sign_only",
                "InvalidArgumentError for a bare '-' when sign-only input is rejected",
                lambda text: sign_only_rejected and text == "-",
                InvalidArgumentError,
            ),
            ErrorCondition(
                "invalid_digit",
                "InvalidDigitError when a digit-bearing character is not 0-9",
                lambda text: text not in ("", "-") and _has_bad_char(text),
                InvalidDigitError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse(render(a)) == a", 1,
                lambda a: parse(render(a), options) == a,
            ),
        ],
    )

    # --------------------------------------------------------------- render
    render_contract = OperationContract(
        name="render",
        postconditions=[
            Postcondition(
                "canonical",
                "Rendered text is canonical decimal",
                lambda value, result: is_canonical(result),
            ),
            Postcondition(
                "zero_unsigned",
                "Zero renders as '0' regardless of its sign tag",
                lambda value, result: not value.is_zero or result == "0",
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "render(parse(s)) == s for canonical s", 1,
                lambda a: render(parse(render(a), options)) == render(a),
            ),
        ],
    )

    # ------------------------------------------------------------------ add
    add_contract = OperationContract(
        name="add",
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the integer sum",
                lambda a, b, result: to_int(result) == to_int(a) + to_int(b),
            ),
            Postcondition(
                "length_bound",
                "Result has at most max(len) + 1 digits",
                lambda a, b, result: (
                    len(result.digits) <= max(len(a.digits), len(b.digits)) + 1
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda a, b: add(a, b) == add(b, a),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda a: add(a, BigInt.zero()) == a,
            ),
            AlgebraicProperty(
                "additive_inverse", "add(a, -a) renders as '0'", 1,
                lambda a: render(add(a, -a)) == "0",
            ),
            AlgebraicProperty(
                "associativity", "add(add(a, b), c) == add(a, add(b, c))", 3,
                lambda a, b, c: add(add(a, b), c) == add(a, add(b, c)),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract_contract = OperationContract(
        name="subtract",
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the integer difference",
                lambda a, b, result: to_int(result) == to_int(a) - to_int(b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "identity", "subtract(a, 0) == a", 1,
                lambda a: subtract(a, BigInt.zero()) == a,
            ),
            AlgebraicProperty(
                "self_inverse", "subtract(a, a) renders as '0'", 1,
                lambda a: render(subtract(a, a)) == "0",
            ),
            AlgebraicProperty(
                "add_inverse", "subtract(add(a, b), b) == a", 2,
                lambda a, b: subtract(add(a, b), b) == a,
            ),
            AlgebraicProperty(
                "anticommutativity", "subtract(a, b) == -subtract(b, a)", 2,
                lambda a, b: subtract(a, b) == -subtract(b, a),
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Parsing
        BranchSpec("PARSE-EMPTY", "Empty input rejected", "text == ''", "parse"),
        BranchSpec(
            "PARSE-SIGN-ONLY-REJECT",
            "Bare sign rejected",
            "text == '-' and sign_only == REJECT",
            "parse",
        ),
        BranchSpec(
            "PARSE-SIGN-ONLY-ZERO",
            "Bare sign accepted as negative-tagged zero",
            "text == '-' and sign_only == ZERO",
            "parse",
        ),
        BranchSpec(
            "PARSE-INVALID-DIGIT",
            "Non-digit character rejected",
            "c not in '0123456789' for some digit-bearing c",
            "parse",
        ),
        BranchSpec("PARSE-VALID", "Digits reversed and normalized", "otherwise", "parse"),
        # Rendering
        BranchSpec("RENDER-ZERO", "Zero renders as '0'", "not digits", "render"),
        BranchSpec("RENDER-POSITIVE", "No sign prefix", "sign == POSITIVE", "render"),
        BranchSpec("RENDER-NEGATIVE", "'-' prefix", "sign == NEGATIVE", "render"),
        # Addition dispatch
        BranchSpec("ADD-PP", "Magnitude add, positive", "(+, +)", "add"),
        BranchSpec("ADD-NN", "Magnitude add, negative", "(-, -)", "add"),
        BranchSpec("ADD-PN", "subtract(a, |b|)", "(+, -)", "add"),
        BranchSpec("ADD-NP", "subtract(b, |a|)", "(-, +)", "add"),
        # Subtraction dispatch
        BranchSpec("SUB-PP-GT", "sub_abs(a, b), positive", "(+, +) and |a| > |b|", "subtract"),
        BranchSpec("SUB-PP-EQ", "Canonical zero", "(+, +) and |a| == |b|", "subtract"),
        BranchSpec("SUB-PP-LT", "sub_abs(b, a), negative", "(+, +) and |a| < |b|", "subtract"),
        BranchSpec("SUB-PN", "add(a, |b|)", "(+, -)", "subtract"),
        BranchSpec("SUB-NP", "add(a, -|b|), sign forced negative", "(-, +)", "subtract"),
        BranchSpec("SUB-NN-GT", "sub_abs(a, b), negative", "(-, -) and |a| > |b|", "subtract"),
        BranchSpec("SUB-NN-EQ", "Canonical zero", "(-, -) and |a| == |b|", "subtract"),
        BranchSpec("SUB-NN-LT", "sub_abs(b, a), positive", "(-, -) and |a| < |b|", "subtract"),
    ]

    return ArithmeticContract(
        options=options,
        operations={
            "parse": parse_contract,
            "render": render_contract,
            "add": add_contract,
            "subtract": subtract_contract,
        },
        branches=branches,
    )
