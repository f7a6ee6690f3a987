"""Request and response models for the BigInt HTTP service.

Numbers travel as decimal strings so that magnitudes beyond any JSON
number type survive the round trip.  These models only shape the wire
format; digit validation happens in ``bigint.parse`` so that the error
kinds stay the engine's own.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Default and ceiling for the per-app digit limit (see api.ServiceSettings).
MAX_TEXT_LENGTH = 100_000

# One extra character for a leading sign.
_MAX_FIELD_LENGTH = MAX_TEXT_LENGTH + 1


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ParseRequest(BaseModel):
    """A single decimal string to parse and canonicalize."""

    text: str = Field(..., max_length=_MAX_FIELD_LENGTH)


class BinaryOperationRequest(BaseModel):
    """Two decimal operands for add / subtract."""

    a: str = Field(..., max_length=_MAX_FIELD_LENGTH, description="Left operand")
    b: str = Field(..., max_length=_MAX_FIELD_LENGTH, description="Right operand")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ParseResponse(BaseModel):
    value: str = Field(..., description="Canonical decimal rendering")
    negative: bool
    digit_count: int = Field(..., ge=0)


class OperationResponse(BaseModel):
    operation: str
    a: str
    b: str
    result: str


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_DIGIT = "invalid_digit"
    TOO_MANY_DIGITS = "too_many_digits"


class ErrorDetail(BaseModel):
    kind: ErrorKind
    message: str
    field: str | None = None
    index: int | None = None
