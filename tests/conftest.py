"""Shared pytest fixtures for the blockcheck test suite."""

from __future__ import annotations

import pytest

from blockcheck.errors import DiagnosticRenderer
from tests.helpers import FakeBlockFactory


@pytest.fixture
def renderer():
    return DiagnosticRenderer(color=False)


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run the test from inside a fresh temp dir."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_fake_errors():
    FakeBlockFactory.ERRORS = {}
    yield
    FakeBlockFactory.ERRORS = {}
