"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import ServiceSettings, router
from bigint import DEFAULT_PARSE_OPTIONS, ParseOptions
from models import MAX_TEXT_LENGTH


def create_app(
    options: ParseOptions | None = None,
    max_digits: int = MAX_TEXT_LENGTH,
) -> FastAPI:
    """Build and return the FastAPI application.

    Each app keeps its own parse options and digit limit on ``app.state``,
    so apps built side by side (e.g. in tests) never share configuration.
    """
    settings = ServiceSettings(
        options=options if options is not None else DEFAULT_PARSE_OPTIONS,
        max_digits=max_digits,
    )

    app = FastAPI(
        title="BigInt Arithmetic API",
        description=(
            "Arbitrary-precision signed integer addition and subtraction. "
            "Operands and results are exchanged as decimal strings so that "
            "values of any magnitude survive the round trip."
        ),
        version="0.1.0",
    )
    app.state.settings = settings
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
