"""
Pytest configuration and shared fixtures for Correlate tests.
"""

import logging
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from correlate.core.correlation import accessor as accessor_module
from correlate.core.correlation import (
    CorrelationContextAccessor,
    CorrelationContextFactory,
    CorrelationManager,
    DiagnosticListener,
    set_correlation_manager,
)
from correlate.logging import scope as scope_module


@pytest.fixture(autouse=True)
def reset_ambient_state():
    """Give every test an empty correlation context and no open log scopes."""
    holder_token = accessor_module._current_holder.set(None)
    scopes_token = scope_module._open_scopes.set(())
    yield
    accessor_module._current_holder.reset(holder_token)
    scope_module._open_scopes.reset(scopes_token)
    set_correlation_manager(None)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def accessor():
    return CorrelationContextAccessor()


@pytest.fixture
def context_factory(accessor):
    return CorrelationContextFactory(accessor)


@pytest.fixture
def id_factory():
    """Id factory handing out predictable ids."""
    factory = Mock()
    factory.create.side_effect = (f"generated-{i}" for i in range(1, 1000))
    return factory


@pytest.fixture
def test_logger():
    """Logger enabled for every level, isolated from the root handlers."""
    logger = logging.getLogger("correlate.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def disabled_logger():
    """Logger that reports every level as disabled."""
    logger = Mock(spec=logging.Logger)
    logger.isEnabledFor.return_value = False
    return logger


@pytest.fixture
def diagnostic_listener():
    return DiagnosticListener()


@pytest.fixture
def manager(context_factory, id_factory, accessor, test_logger, diagnostic_listener):
    """A correlation manager wired with predictable ids."""
    return CorrelationManager(
        context_factory,
        id_factory,
        accessor,
        logger=test_logger,
        diagnostic_listener=diagnostic_listener,
    )
