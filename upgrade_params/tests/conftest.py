"""
Pytest configuration and fixtures for upgrade_params tests.

Usage:
    # In test files, fixtures are automatically injected:

    def test_something(initialize_signature, token_address):
        call = CallEncoder.encode(initialize_signature, [ArgumentValue.address(token_address)])
"""

import logging

import pytest

from ..utils.call_encoder import FunctionSignature
from ..utils.config_manager import ENV_PREFIX, EX1_TOKEN, NEW_IMPLEMENTATION


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove config overrides inherited from the caller's environment"""
    for key in ("NEW_IMPLEMENTATION", "INITIALIZER_ARG"):
        monkeypatch.delenv(f"{ENV_PREFIX}{key}", raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def initialize_signature():
    return FunctionSignature("initialize", ("address",))


@pytest.fixture
def token_address():
    return EX1_TOKEN


@pytest.fixture
def implementation_address():
    return NEW_IMPLEMENTATION
