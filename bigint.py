"""Arbitrary-precision signed integers stored as base-10 digit tuples.

A ``BigInt`` keeps its magnitude as a tuple of decimal digits, least
significant first, plus a sign tag.  Only two primitives touch digits
directly -- magnitude addition with carry and magnitude subtraction with
borrow -- and every signed ``add`` / ``subtract`` is reduced to one of
them by a small dispatch over the operand signs.

Decision branches are annotated with their branch-IDs (see
``contract.py`` BranchSpec) so white-box tests can trace coverage back
to the contract.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence


# ---------------------------------------------------------------------------
# Configuration enums
# ---------------------------------------------------------------------------

class Sign(Enum):
    POSITIVE = auto()
    NEGATIVE = auto()

    def flipped(self) -> Sign:
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class SignOnlyMode(Enum):
    """How ``parse`` treats a sign marker with no digits after it ("-")."""

    REJECT = auto()     # raise InvalidArgumentError
    ZERO = auto()       # accept as a negative-tagged zero


@dataclass(frozen=True)
class ParseOptions:
    sign_only: SignOnlyMode = SignOnlyMode.REJECT


DEFAULT_PARSE_OPTIONS = ParseOptions()

_DIGIT_VALUES = {c: i for i, c in enumerate("0123456789")}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BigIntError(ValueError):
    """Base class for every error raised while building a BigInt."""


class InvalidArgumentError(BigIntError):
    """Raised when the input carries no digits at all."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid argument {text!r}: {reason}")


class InvalidDigitError(BigIntError):
    """Raised when a digit-bearing character is not in '0'..'9'."""

    def __init__(self, text: str, char: str, index: int) -> None:
        self.text = text
        self.char = char
        self.index = index
        super().__init__(
            f"Invalid digit {char!r} at index {index} in {text!r}"
        )


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class BigInt:
    """Immutable signed integer of unbounded magnitude.

    ``digits`` is least-significant first with no high-order zeros; the
    empty tuple is zero.  Zero may be tagged with either sign, but it
    renders, compares and hashes as unsigned zero.
    """

    digits: tuple[int, ...] = ()
    sign: Sign = Sign.POSITIVE

    def __post_init__(self) -> None:
        digits = tuple(self.digits)
        if any(not 0 <= d <= 9 for d in digits):
            raise ValueError(f"digits must be in [0, 9], got {digits}")
        if digits and digits[-1] == 0:
            raise ValueError(f"digits must be normalized, got {digits}")
        object.__setattr__(self, "digits", digits)

    # -- constructors -------------------------------------------------------

    @classmethod
    def zero(cls) -> BigInt:
        return cls()

    @classmethod
    def from_str(
        cls, text: str, options: ParseOptions = DEFAULT_PARSE_OPTIONS
    ) -> BigInt:
        return parse(text, options)

    # -- inspection ---------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return not self.digits

    @property
    def is_negative(self) -> bool:
        """True for negative non-zero values only."""
        return self.sign is Sign.NEGATIVE and not self.is_zero

    def with_sign(self, sign: Sign) -> BigInt:
        return BigInt(self.digits, sign)

    # -- protocol -----------------------------------------------------------

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"BigInt({render(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        if self.digits != other.digits:
            return False
        return self.is_zero or self.sign is other.sign

    def __hash__(self) -> int:
        if self.is_zero:
            return hash(())
        return hash((self.digits, self.sign))

    def __add__(self, other: BigInt) -> BigInt:
        if not isinstance(other, BigInt):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: BigInt) -> BigInt:
        if not isinstance(other, BigInt):
            return NotImplemented
        return subtract(self, other)

    def __neg__(self) -> BigInt:
        return self.with_sign(self.sign.flipped())

    def __abs__(self) -> BigInt:
        return self.with_sign(Sign.POSITIVE)


# ---------------------------------------------------------------------------
# Parsing and rendering
# ---------------------------------------------------------------------------

def parse(text: str, options: ParseOptions = DEFAULT_PARSE_OPTIONS) -> BigInt:
    """Parse optionally negative decimal text into a BigInt.

    Branches: PARSE-EMPTY, PARSE-SIGN-ONLY-REJECT, PARSE-SIGN-ONLY-ZERO,
              PARSE-INVALID-DIGIT, PARSE-VALID
    """
    if not text:                                                # PARSE-EMPTY
        raise InvalidArgumentError(text, "empty string")

    sign = Sign.POSITIVE
    start = 0
    if text[0] == "-":
        sign = Sign.NEGATIVE
        start = 1

    if start == len(text):
        if options.sign_only is SignOnlyMode.REJECT:            # PARSE-SIGN-ONLY-REJECT
            raise InvalidArgumentError(text, "sign without digits")
        return BigInt((), sign)                                 # PARSE-SIGN-ONLY-ZERO

    digits = []
    for index in range(len(text) - 1, start - 1, -1):
        char = text[index]
        value = _DIGIT_VALUES.get(char)
        if value is None:                                       # PARSE-INVALID-DIGIT
            raise InvalidDigitError(text, char, index)
        digits.append(value)

    # "000" and "-0" become the empty zero tuple here.          # PARSE-VALID
    return BigInt(normalize(digits), sign)


def render(value: BigInt) -> str:
    """Canonical decimal text: optional '-', no leading zeros, zero is "0".

    Branches: RENDER-ZERO, RENDER-POSITIVE, RENDER-NEGATIVE
    """
    if value.is_zero:                                           # RENDER-ZERO
        return "0"
    body = "".join(str(d) for d in reversed(value.digits))
    if value.sign is Sign.NEGATIVE:                             # RENDER-NEGATIVE
        return "-" + body
    return body                                                 # RENDER-POSITIVE


# ---------------------------------------------------------------------------
# Magnitude primitives
# ---------------------------------------------------------------------------

def normalize(digits: Sequence[int]) -> tuple[int, ...]:
    """Drop high-order zero digits.  Idempotent."""
    end = len(digits)
    while end and digits[end - 1] == 0:
        end -= 1
    return tuple(digits[:end])


def cmp_abs(a: BigInt, b: BigInt) -> Ordering:
    """Compare magnitudes, ignoring sign."""
    if len(a.digits) != len(b.digits):
        return Ordering.GREATER if len(a.digits) > len(b.digits) else Ordering.LESS
    for x, y in zip(reversed(a.digits), reversed(b.digits)):
        if x != y:
            return Ordering.GREATER if x > y else Ordering.LESS
    return Ordering.EQUAL


def add_abs(a: BigInt, b: BigInt) -> tuple[int, ...]:
    """Digits of |a| + |b| using schoolbook addition with carry."""
    out = []
    carry = 0
    for i in range(max(len(a.digits), len(b.digits))):
        x = a.digits[i] if i < len(a.digits) else 0
        y = b.digits[i] if i < len(b.digits) else 0
        total = x + y + carry
        if total >= 10:
            out.append(total - 10)
            carry = 1
        else:
            out.append(total)
            carry = 0
    if carry:
        out.append(carry)
    return normalize(out)


def sub_abs(a: BigInt, b: BigInt) -> tuple[int, ...]:
    """Digits of |a| - |b| using schoolbook subtraction with borrow.

    The caller must guarantee |a| >= |b|; otherwise the final borrow is
    lost and the digits are meaningless.
    """
    out = []
    borrow = 0
    for i, x in enumerate(a.digits):
        y = (b.digits[i] if i < len(b.digits) else 0) + borrow
        if x < y:
            out.append(x + 10 - y)
            borrow = 1
        else:
            out.append(x - y)
            borrow = 0
    return normalize(out)


# ---------------------------------------------------------------------------
# Signed arithmetic
# ---------------------------------------------------------------------------

_POS = Sign.POSITIVE
_NEG = Sign.NEGATIVE


def add(a: BigInt, b: BigInt) -> BigInt:
    """Signed addition.

    Branches: ADD-PP, ADD-NN, ADD-PN, ADD-NP
    """
    signs = (a.sign, b.sign)

    if signs == (_POS, _POS):                                   # ADD-PP
        return BigInt(add_abs(a, b), _POS)

    if signs == (_NEG, _NEG):                                   # ADD-NN
        return BigInt(add_abs(a, b), _NEG)

    if signs == (_POS, _NEG):                                   # ADD-PN
        return subtract(a, b.with_sign(_POS))

    # (_NEG, _POS)                                              # ADD-NP
    return subtract(b, a.with_sign(_POS))


def subtract(a: BigInt, b: BigInt) -> BigInt:
    """Signed subtraction.

    Branches: SUB-PP-GT, SUB-PP-EQ, SUB-PP-LT, SUB-PN, SUB-NP,
              SUB-NN-GT, SUB-NN-EQ, SUB-NN-LT
    """
    signs = (a.sign, b.sign)

    if signs == (_POS, _POS):
        order = cmp_abs(a, b)
        if order is Ordering.GREATER:                           # SUB-PP-GT
            return BigInt(sub_abs(a, b), _POS)
        if order is Ordering.EQUAL:                             # SUB-PP-EQ
            return BigInt.zero()
        return BigInt(sub_abs(b, a), _NEG)                      # SUB-PP-LT

    if signs == (_POS, _NEG):                                   # SUB-PN
        return add(a, b.with_sign(_POS))

    if signs == (_NEG, _POS):                                   # SUB-NP
        # -|a| - |b| is never positive; the sign is forced.
        return add(a, b.with_sign(_NEG)).with_sign(_NEG)

    # (_NEG, _NEG)
    order = cmp_abs(a, b)
    if order is Ordering.GREATER:                               # SUB-NN-GT
        return BigInt(sub_abs(a, b), _NEG)
    if order is Ordering.EQUAL:                                 # SUB-NN-EQ
        return BigInt.zero()
    return BigInt(sub_abs(b, a), _POS)                          # SUB-NN-LT
