"""Counterexample search -- discovers gaps in implementation or tests.

This module runs independently of the test suite.  It checks the
arithmetic contract against a deterministic sample of operands chosen
to stress carry and borrow propagation:

1. Postcondition violations: inputs where the engine disagrees with
   Python's ``int``.
2. Error condition violations: texts that should be rejected but parse
   (or are rejected with the wrong exception).
3. Property violations: algebraic relationships that fail for some
   operand combination.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import random
import sys
from dataclasses import dataclass, field

from bigint import (
    ParseOptions,
    SignOnlyMode,
    add,
    parse,
    render,
    subtract,
)
from contract import ArithmeticContract, build_contract


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Sample generation
# ---------------------------------------------------------------------------

EDGE_TEXTS = [
    "0", "1", "-1", "9", "-9", "10", "-10", "99", "-99", "100",
    "999999999999", "-999999999999", "1000000000000", "-1000000000000",
    "1145141919810", "-1145141919810",
]

BAD_TEXTS = [
    "", "-", "--1", "+1", "12a", "a12", "1 2", " 1", "1.0", "1_000",
    "١٢",  # Arabic-Indic digits
    "-x", "0x10",
]


def sample_texts(count: int, max_digits: int = 40, seed: int = 0) -> list[str]:
    """Edge texts plus random canonical decimal texts."""
    rng = random.Random(seed)
    texts = list(EDGE_TEXTS)
    while len(texts) < count:
        length = rng.randint(1, max_digits)
        body = str(rng.randint(1, 9)) + "".join(
            str(rng.randint(0, 9)) for _ in range(length - 1)
        )
        texts.append(body if rng.random() < 0.5 else "-" + body)
    return texts


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

_BINARY_OPS = {"add": add, "subtract": subtract}


def search_postcondition_violations(
    contract: ArithmeticContract,
    texts: list[str],
) -> tuple[list[Counterexample], int]:
    """Verify parse, render, add and subtract postconditions."""
    cxs: list[Counterexample] = []
    checks = 0
    values = [parse(t, contract.options) for t in texts]

    for text, value in zip(texts, values):
        for post in contract.operations["parse"].postconditions:
            checks += 1
            if not post.check(text, value):
                cxs.append(Counterexample(
                    category="postcondition_violation",
                    operation="parse",
                    inputs=(text,),
                    expected=post.description,
                    actual=f"result={value!r}",
                    description=f"Postcondition '{post.name}' violated",
                ))
        rendered = render(value)
        for post in contract.operations["render"].postconditions:
            checks += 1
            if not post.check(value, rendered):
                cxs.append(Counterexample(
                    category="postcondition_violation",
                    operation="render",
                    inputs=(text,),
                    expected=post.description,
                    actual=f"result={rendered!r}",
                    description=f"Postcondition '{post.name}' violated",
                ))

    for op_name, op in _BINARY_OPS.items():
        op_contract = contract.operations[op_name]
        for a, b in itertools.product(values, repeat=2):
            result = op(a, b)
            for post in op_contract.postconditions:
                checks += 1
                if not post.check(a, b, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(render(a), render(b)),
                        expected=post.description,
                        actual=f"result={render(result)}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    contract: ArithmeticContract,
    texts: list[str],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition raises the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for text in texts:
        for ec in contract.operations["parse"].error_conditions:
            if not ec.trigger(text):
                continue
            checks += 1
            try:
                result = parse(text, contract.options)
                cxs.append(Counterexample(
                    category="missing_error",
                    operation="parse",
                    inputs=(text,),
                    expected=ec.exception.__name__,
                    actual=f"result={result!r}",
                    description=(
                        f"Error condition '{ec.name}' should have "
                        f"triggered but didn't"
                    ),
                ))
            except ec.exception:
                pass  # expected
            except Exception as e:
                cxs.append(Counterexample(
                    category="wrong_error",
                    operation="parse",
                    inputs=(text,),
                    expected=ec.exception.__name__,
                    actual=f"{type(e).__name__}: {e}",
                    description=f"Wrong exception type for '{ec.name}'",
                ))

    return cxs, checks


def search_property_violations(
    contract: ArithmeticContract,
    texts: list[str],
    triple_limit: int = 12,
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over the sampled operands.

    Three-operand properties only use the first ``triple_limit`` values.
    """
    cxs: list[Counterexample] = []
    checks = 0
    values = [parse(t, contract.options) for t in texts]

    for op_name, prop in contract.all_properties:
        pool = values[:triple_limit] if prop.arity == 3 else values
        for combo in itertools.product(pool, repeat=prop.arity):
            checks += 1
            if not prop.check(*combo):
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=tuple(render(v) for v in combo),
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    options: ParseOptions = ParseOptions(),
    sample_size: int = 40,
    seed: int = 0,
) -> SearchReport:
    """Run the complete counterexample search for one configuration."""
    contract = build_contract(options)
    texts = sample_texts(sample_size, seed=seed)
    report = SearchReport()

    for search_fn, inputs in (
        (search_postcondition_violations, texts),
        (search_error_condition_violations, texts + BAD_TEXTS),
        (search_property_violations, texts),
    ):
        cxs, checks = search_fn(contract, inputs)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run the counterexample search for each parse configuration."""
    configs = [
        ("sign-only REJECT", ParseOptions(SignOnlyMode.REJECT)),
        ("sign-only ZERO", ParseOptions(SignOnlyMode.ZERO)),
    ]

    all_passed = True
    for name, options in configs:
        print(f"\n--- Configuration: {name} ---")
        report = run_search(options)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL CONFIGURATIONS PASSED")
    else:
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
