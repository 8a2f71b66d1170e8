"""Pytest configuration and shared fixtures for the test suite."""

from typing import Iterator

import pytest

from simplecontext import SimpleContext, create_simple_context
from simplecontext.tracking import ROOT_CHAIN, enter_chain, exit_chain


@pytest.fixture(autouse=True)
def root_chain() -> Iterator[None]:
    """Start every test on the root chain and undo in-place forks afterwards."""
    token = enter_chain(ROOT_CHAIN)
    yield
    exit_chain(token)


@pytest.fixture
def context() -> SimpleContext:
    """Create a fresh, empty context."""
    return create_simple_context()
