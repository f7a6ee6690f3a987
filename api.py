"""FastAPI REST endpoints for BigInt arithmetic.

Routes
------
POST   /bigint/parse       Parse and canonicalize one decimal string
POST   /bigint/add         Add two decimal strings
POST   /bigint/subtract    Subtract two decimal strings
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import APIRouter, Depends, HTTPException, Request

from bigint import (
    DEFAULT_PARSE_OPTIONS,
    BigInt,
    BigIntError,
    InvalidDigitError,
    ParseOptions,
    add,
    parse,
    render,
    subtract,
)
from models import (
    MAX_TEXT_LENGTH,
    BinaryOperationRequest,
    ErrorDetail,
    ErrorKind,
    OperationResponse,
    ParseRequest,
    ParseResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bigint", tags=["bigint"])


@dataclass(frozen=True)
class ServiceSettings:
    """Per-app configuration, stored on ``app.state.settings``."""

    options: ParseOptions = DEFAULT_PARSE_OPTIONS
    max_digits: int = MAX_TEXT_LENGTH

    def __post_init__(self) -> None:
        if not 1 <= self.max_digits <= MAX_TEXT_LENGTH:
            raise ValueError(
                f"max_digits must be in [1, {MAX_TEXT_LENGTH}], got {self.max_digits}"
            )


def get_settings(request: Request) -> ServiceSettings:
    return request.app.state.settings


# ---------------------------------------------------------------------------
# Error helpers
# ---------------------------------------------------------------------------

def _invalid_number(field: str, e: BigIntError) -> HTTPException:
    if isinstance(e, InvalidDigitError):
        detail = ErrorDetail(
            kind=ErrorKind.INVALID_DIGIT, message=str(e), field=field, index=e.index
        )
    else:
        detail = ErrorDetail(
            kind=ErrorKind.INVALID_ARGUMENT, message=str(e), field=field
        )
    return HTTPException(status_code=422, detail=detail.model_dump(mode="json"))


def _too_many_digits(field: str, count: int, limit: int) -> HTTPException:
    detail = ErrorDetail(
        kind=ErrorKind.TOO_MANY_DIGITS,
        message=f"{count} digits exceeds the limit of {limit}",
        field=field,
    )
    return HTTPException(status_code=422, detail=detail.model_dump(mode="json"))


def _parse_field(field: str, text: str, settings: ServiceSettings) -> BigInt:
    count = len(text) - 1 if text.startswith("-") else len(text)
    if count > settings.max_digits:
        logger.info("Rejected %s: %d digits over limit %d",
                    field, count, settings.max_digits)
        raise _too_many_digits(field, count, settings.max_digits)
    try:
        return parse(text, settings.options)
    except BigIntError as e:
        logger.info("Rejected %s=%r: %s", field, text[:64], e)
        raise _invalid_number(field, e) from e


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/parse", response_model=ParseResponse)
def parse_number(
    payload: ParseRequest,
    settings: ServiceSettings = Depends(get_settings),
) -> ParseResponse:
    """Parse a decimal string and return its canonical form."""
    value = _parse_field("text", payload.text, settings)
    return ParseResponse(
        value=render(value),
        negative=value.is_negative,
        digit_count=max(len(value.digits), 1),
    )


@router.post("/add", response_model=OperationResponse)
def add_numbers(
    payload: BinaryOperationRequest,
    settings: ServiceSettings = Depends(get_settings),
) -> OperationResponse:
    """Return a + b."""
    a = _parse_field("a", payload.a, settings)
    b = _parse_field("b", payload.b, settings)
    result = add(a, b)
    logger.debug("add: %d + %d digits -> %d digits",
                 len(a.digits), len(b.digits), len(result.digits))
    return OperationResponse(
        operation="add", a=render(a), b=render(b), result=render(result)
    )


@router.post("/subtract", response_model=OperationResponse)
def subtract_numbers(
    payload: BinaryOperationRequest,
    settings: ServiceSettings = Depends(get_settings),
) -> OperationResponse:
    """Return a - b."""
    a = _parse_field("a", payload.a, settings)
    b = _parse_field("b", payload.b, settings)
    result = subtract(a, b)
    logger.debug("subtract: %d - %d digits -> %d digits",
                 len(a.digits), len(b.digits), len(result.digits))
    return OperationResponse(
        operation="subtract", a=render(a), b=render(b), result=render(result)
    )
