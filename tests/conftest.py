"""Shared fixtures and strategies for BigInt tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from hypothesis import strategies as st

from app import create_app
from bigint import BigInt, ParseOptions, SignOnlyMode, parse

# Wide enough to cross many carry/borrow chains, small enough to stay fast.
LIMIT = 10**60

wide_ints = st.integers(min_value=-LIMIT, max_value=LIMIT)
bigints = wide_ints.map(lambda n: parse(str(n)))


@pytest.fixture
def zero() -> BigInt:
    return BigInt.zero()


@pytest.fixture
def negative_zero() -> BigInt:
    return parse("-0")


@pytest.fixture
def lenient_options() -> ParseOptions:
    return ParseOptions(sign_only=SignOnlyMode.ZERO)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def lenient_client(lenient_options) -> TestClient:
    return TestClient(create_app(options=lenient_options))
