"""Pytest configuration and fixtures for pugtail tests."""

import pytest

from pugtail import ComponentRegistry, ErrorReporter, ExpansionConfig, Transformer
from pugtail.config import ScopeIsolation


@pytest.fixture
def reporter():
    """ErrorReporter attributing errors to page.pug."""
    return ErrorReporter("page.pug")


@pytest.fixture
def registry(reporter):
    """Empty ComponentRegistry."""
    return ComponentRegistry(reporter)


@pytest.fixture
def transformer():
    """Transformer with default options, reporting against page.pug."""
    return Transformer(config=ExpansionConfig(filename="page.pug"))


@pytest.fixture
def lenient_transformer():
    """Transformer with scope isolation turned off."""
    return Transformer(
        config=ExpansionConfig(scope_isolation=ScopeIsolation.OFF, filename="page.pug")
    )
