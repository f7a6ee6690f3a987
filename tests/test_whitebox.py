"""White-box tests for the BigInt engine.

Each test class targets specific decision branches documented in the
contract (see ``BranchSpec`` ids).  A coverage matrix at the bottom of
this file records which test covers which branch, and a final test
checks that matrix against the contract.

Naming convention
-----------------
test_<branch_id_lowercase>_<scenario>
"""
from __future__ import annotations

import pytest

from bigint import (
    BigInt,
    InvalidArgumentError,
    InvalidDigitError,
    Ordering,
    ParseOptions,
    Sign,
    SignOnlyMode,
    add,
    add_abs,
    cmp_abs,
    normalize,
    parse,
    render,
    sub_abs,
    subtract,
)
from contract import build_contract


def _add(a: str, b: str) -> str:
    return render(add(parse(a), parse(b)))


def _sub(a: str, b: str) -> str:
    return render(subtract(parse(a), parse(b)))


# ===================================================================
# PARSING  (PARSE-*)
# ===================================================================

class TestParse:

    def test_parse_empty(self):
        """Branch: PARSE-EMPTY"""
        with pytest.raises(InvalidArgumentError):
            parse("")

    def test_parse_sign_only_reject(self):
        """Branch: PARSE-SIGN-ONLY-REJECT"""
        with pytest.raises(InvalidArgumentError):
            parse("-")

    def test_parse_sign_only_zero(self, lenient_options):
        """Branch: PARSE-SIGN-ONLY-ZERO"""
        value = parse("-", lenient_options)
        assert value.digits == ()
        assert value.sign is Sign.NEGATIVE
        assert render(value) == "0"

    def test_parse_invalid_digit_letter(self):
        """Branch: PARSE-INVALID-DIGIT"""
        with pytest.raises(InvalidDigitError) as exc_info:
            parse("12a")
        assert exc_info.value.char == "a"
        assert exc_info.value.index == 2
        assert exc_info.value.text == "12a"

    def test_parse_invalid_digit_after_sign(self):
        with pytest.raises(InvalidDigitError) as exc_info:
            parse("-1x3")
        assert exc_info.value.index == 2

    @pytest.mark.parametrize("text", ["+1", "--1", " 1", "1 ", "1.0", "1_000", "١٢"])
    def test_parse_invalid_digit_variants(self, text):
        with pytest.raises(InvalidDigitError):
            parse(text)

    def test_parse_valid_reverses_digits(self):
        """Branch: PARSE-VALID"""
        value = parse("120")
        assert value.digits == (0, 2, 1)
        assert value.sign is Sign.POSITIVE

    def test_parse_valid_negative(self):
        value = parse("-45")
        assert value.digits == (5, 4)
        assert value.sign is Sign.NEGATIVE

    def test_parse_valid_strips_leading_zeros(self):
        assert parse("007").digits == (7,)
        assert parse("000").digits == ()

    def test_parse_negative_zero_is_zero(self, negative_zero, zero):
        assert negative_zero.is_zero
        assert negative_zero == zero
        assert render(negative_zero) == "0"

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse("")
        with pytest.raises(ValueError):
            parse("x")

    def test_from_str_accepts_options(self, lenient_options):
        assert BigInt.from_str("42") == parse("42")
        assert BigInt.from_str("-", lenient_options).is_zero


# ===================================================================
# RENDERING  (RENDER-*)
# ===================================================================

class TestRender:

    def test_render_zero(self, zero):
        """Branch: RENDER-ZERO"""
        assert render(zero) == "0"

    def test_render_zero_ignores_negative_tag(self):
        assert render(BigInt((), Sign.NEGATIVE)) == "0"

    def test_render_positive(self):
        """Branch: RENDER-POSITIVE"""
        assert render(BigInt((3, 2, 1))) == "123"

    def test_render_negative(self):
        """Branch: RENDER-NEGATIVE"""
        assert render(BigInt((3, 2, 1), Sign.NEGATIVE)) == "-123"

    def test_str_and_repr(self):
        value = parse("-42")
        assert str(value) == "-42"
        assert repr(value) == "BigInt('-42')"


# ===================================================================
# PRIMITIVES  (normalize, cmp_abs, add_abs, sub_abs)
# ===================================================================

class TestNormalize:

    def test_strips_high_order_zeros(self):
        assert normalize([1, 0, 0]) == (1,)

    def test_all_zeros_become_empty(self):
        assert normalize([0, 0, 0]) == ()

    def test_keeps_low_order_zeros(self):
        assert normalize([0, 0, 5]) == (0, 0, 5)

    def test_idempotent(self):
        once = normalize([4, 0, 2, 0])
        assert normalize(once) == once

    @pytest.mark.parametrize(
        "digits", [(7, 0), [7, 0], bytes([7, 0])], ids=["tuple", "list", "bytes"]
    )
    def test_accepts_any_int_sequence(self, digits):
        assert normalize(digits) == (7,)

    def test_empty_range(self):
        assert normalize(range(0)) == ()


class TestCmpAbs:

    def test_longer_wins(self):
        assert cmp_abs(parse("100"), parse("99")) is Ordering.GREATER
        assert cmp_abs(parse("99"), parse("100")) is Ordering.LESS

    def test_sign_ignored(self):
        assert cmp_abs(parse("-5"), parse("3")) is Ordering.GREATER
        assert cmp_abs(parse("-7"), parse("7")) is Ordering.EQUAL

    def test_most_significant_digit_decides(self):
        assert cmp_abs(parse("123"), parse("124")) is Ordering.LESS
        assert cmp_abs(parse("923"), parse("124")) is Ordering.GREATER

    def test_zero_vs_zero(self, zero, negative_zero):
        assert cmp_abs(zero, negative_zero) is Ordering.EQUAL


class TestMagnitudePrimitives:

    def test_add_abs_carry_extends(self):
        assert add_abs(parse("999"), parse("1")) == (0, 0, 0, 1)

    def test_add_abs_ignores_sign(self):
        assert add_abs(parse("-12"), parse("30")) == (2, 4)

    def test_add_abs_length_bound(self):
        a, b = parse("99999"), parse("99999")
        assert len(add_abs(a, b)) == max(len(a.digits), len(b.digits)) + 1

    def test_sub_abs_borrow_chain(self):
        assert sub_abs(parse("1000"), parse("1")) == (9, 9, 9)

    def test_sub_abs_strips_zeros(self):
        assert sub_abs(parse("1005"), parse("1000")) == (5,)
        assert sub_abs(parse("42"), parse("42")) == ()


# ===================================================================
# ADDITION DISPATCH  (ADD-*)
# ===================================================================

class TestAddDispatch:

    def test_add_pp(self):
        """Branch: ADD-PP"""
        assert _add("123", "456") == "579"

    def test_add_pp_carry(self):
        assert _add("999", "1") == "1000"

    def test_add_pp_large(self):
        assert _add("1145141919810", "1145141919810") == "2290283839620"

    def test_add_nn(self):
        """Branch: ADD-NN"""
        assert _add("-123", "-456") == "-579"

    def test_add_pn(self):
        """Branch: ADD-PN"""
        assert _add("123", "-456") == "-333"

    def test_add_pn_positive_result(self):
        assert _add("456", "-123") == "333"

    def test_add_np(self):
        """Branch: ADD-NP"""
        assert _add("-123", "456") == "333"

    def test_add_np_negative_result(self):
        assert _add("-456", "123") == "-333"

    def test_add_opposites_is_canonical_zero(self):
        result = add(parse("-98765"), parse("98765"))
        assert result.is_zero
        assert result.sign is Sign.POSITIVE
        assert render(result) == "0"


# ===================================================================
# SUBTRACTION DISPATCH  (SUB-*)
# ===================================================================

class TestSubtractDispatch:

    def test_sub_pp_gt(self):
        """Branch: SUB-PP-GT"""
        assert _sub("1000", "1") == "999"

    def test_sub_pp_eq(self):
        """Branch: SUB-PP-EQ"""
        result = subtract(parse("5"), parse("5"))
        assert result.is_zero
        assert result.sign is Sign.POSITIVE

    def test_sub_pp_lt(self):
        """Branch: SUB-PP-LT"""
        assert _sub("1", "1000") == "-999"

    def test_sub_pn(self):
        """Branch: SUB-PN"""
        assert _sub("5", "-7") == "12"

    def test_sub_np(self):
        """Branch: SUB-NP"""
        assert _sub("-5", "7") == "-12"

    def test_sub_np_negative_zero_operands(self, negative_zero, zero):
        result = subtract(negative_zero, zero)
        assert result.is_zero
        assert render(result) == "0"
        assert result == zero

    def test_sub_nn_gt(self):
        """Branch: SUB-NN-GT"""
        assert _sub("-10", "-3") == "-7"

    def test_sub_nn_eq(self):
        """Branch: SUB-NN-EQ"""
        result = subtract(parse("-5"), parse("-5"))
        assert result.is_zero
        assert result.sign is Sign.POSITIVE

    def test_sub_nn_lt(self):
        """Branch: SUB-NN-LT"""
        assert _sub("-3", "-10") == "7"


# ===================================================================
# VALUE SEMANTICS
# ===================================================================

class TestValueSemantics:

    def test_digits_coerced_to_tuple(self):
        assert BigInt([1, 2]).digits == (1, 2)

    def test_rejects_out_of_range_digit(self):
        with pytest.raises(ValueError):
            BigInt((10,))

    def test_rejects_unnormalized_digits(self):
        with pytest.raises(ValueError):
            BigInt((1, 0))

    def test_operands_not_mutated(self):
        a, b = parse("999"), parse("-1")
        add(a, b)
        subtract(a, b)
        assert a.digits == (9, 9, 9) and a.sign is Sign.POSITIVE
        assert b.digits == (1,) and b.sign is Sign.NEGATIVE

    def test_zero_tags_equal_and_hash_alike(self, zero, negative_zero):
        assert zero == negative_zero
        assert hash(zero) == hash(negative_zero)
        assert len({zero, negative_zero}) == 1

    def test_sign_matters_for_nonzero(self):
        assert parse("5") != parse("-5")

    def test_not_equal_to_int(self):
        assert parse("5") != 5

    def test_operators(self):
        a, b = parse("20"), parse("-3")
        assert a + b == add(a, b)
        assert a - b == subtract(a, b)
        assert -b == parse("3")
        assert abs(b) == parse("3")

    def test_operators_reject_foreign_types(self):
        with pytest.raises(TypeError):
            parse("1") + 1
        with pytest.raises(TypeError):
            parse("1") - 1

    def test_is_negative_false_for_zero(self, negative_zero):
        assert not negative_zero.is_negative
        assert parse("-1").is_negative


# ===================================================================
# BRANCH COVERAGE MATRIX
# ===================================================================
# Maps each contract branch-ID to the test(s) that exercise it.

BRANCH_COVERAGE = {
    "PARSE-EMPTY": ["TestParse::test_parse_empty"],
    "PARSE-SIGN-ONLY-REJECT": ["TestParse::test_parse_sign_only_reject"],
    "PARSE-SIGN-ONLY-ZERO": ["TestParse::test_parse_sign_only_zero"],
    "PARSE-INVALID-DIGIT": [
        "TestParse::test_parse_invalid_digit_letter",
        "TestParse::test_parse_invalid_digit_variants",
    ],
    "PARSE-VALID": ["TestParse::test_parse_valid_reverses_digits"],
    "RENDER-ZERO": ["TestRender::test_render_zero"],
    "RENDER-POSITIVE": ["TestRender::test_render_positive"],
    "RENDER-NEGATIVE": ["TestRender::test_render_negative"],
    "ADD-PP": ["TestAddDispatch::test_add_pp"],
    "ADD-NN": ["TestAddDispatch::test_add_nn"],
    "ADD-PN": ["TestAddDispatch::test_add_pn"],
    "ADD-NP": ["TestAddDispatch::test_add_np"],
    "SUB-PP-GT": ["TestSubtractDispatch::test_sub_pp_gt"],
    "SUB-PP-EQ": ["TestSubtractDispatch::test_sub_pp_eq"],
    "SUB-PP-LT": ["TestSubtractDispatch::test_sub_pp_lt"],
    "SUB-PN": ["TestSubtractDispatch::test_sub_pn"],
    "SUB-NP": ["TestSubtractDispatch::test_sub_np"],
    "SUB-NN-GT": ["TestSubtractDispatch::test_sub_nn_gt"],
    "SUB-NN-EQ": ["TestSubtractDispatch::test_sub_nn_eq"],
    "SUB-NN-LT": ["TestSubtractDispatch::test_sub_nn_lt"],
}


def test_coverage_matrix_matches_contract():
    assert set(BRANCH_COVERAGE) == set(build_contract().branch_ids())


def test_coverage_matrix_names_real_tests():
    for tests in BRANCH_COVERAGE.values():
        for ref in tests:
            cls_name, test_name = ref.split("::")
            assert hasattr(globals()[cls_name], test_name), ref
