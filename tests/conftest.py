"""Shared fixtures and hypothesis profile for the qbar test suite.

Property tests under tests/property are marked 'property' automatically so they
can be selected (or skipped) with `-m property`.
"""

import os
from pathlib import Path

import pytest
from hypothesis import settings

from qbar import AlgebraicNum, sqrt


settings.register_profile("qbar", max_examples=int(os.environ.get("QBAR_MAX_EXAMPLES", "10")), deadline=None)
settings.load_profile("qbar")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "property: hypothesis based property tests")


def pytest_collection_modifyitems(session: pytest.Session, config: pytest.Config, items: list) -> None:
    """Auto-mark tests under tests/property with the 'property' marker."""
    for item in items:
        p = Path(str(item.fspath))
        if "property" in p.parts and "tests" in p.parts:
            item.add_marker(pytest.mark.property)


@pytest.fixture
def sqrt2() -> AlgebraicNum:
    return sqrt(2)


@pytest.fixture
def sqrt3() -> AlgebraicNum:
    return sqrt(3)


@pytest.fixture
def i() -> AlgebraicNum:
    return AlgebraicNum(1j)
