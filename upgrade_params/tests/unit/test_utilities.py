"""
Unit tests for configuration, exceptions and hex helpers
"""

import pytest

from upgrade_params.utils.common import hex_to_bytes, normalize_address
from upgrade_params.utils.config_manager import (
    EX1_TOKEN,
    NEW_IMPLEMENTATION,
    UpgradeConfig,
    load_config,
)
from upgrade_params.utils.exceptions import (
    ArityMismatchError,
    ConfigurationError,
    ErrorCodes,
    InvalidValueError,
    UpgradeParamsError,
)


class TestExceptions:
    """Test custom exceptions"""

    def test_base_exception(self):
        error = UpgradeParamsError("Test error", code=1001)

        assert error.message == "Test error"
        assert error.code == 1001
        assert str(error) == "[1001] Test error"

        error_dict = error.to_dict()
        assert error_dict["error"] == "UpgradeParamsError"
        assert error_dict["message"] == "Test error"
        assert error_dict["code"] == 1001

    def test_without_code(self):
        assert str(UpgradeParamsError("plain")) == "plain"

    def test_arity_details(self):
        error = ArityMismatchError("bad arity", expected=1, actual=2)

        assert error.code == ErrorCodes.ARITY_MISMATCH
        assert error.to_dict()["details"] == {"expected": 1, "actual": 2}
        assert isinstance(error, UpgradeParamsError)

    def test_configuration_error(self):
        error = ConfigurationError("Invalid config", field="new_implementation")
        assert error.details["field"] == "new_implementation"
        assert error.code == ErrorCodes.CONFIG_INVALID_VALUE


class TestConfig:
    """Test configuration loading"""

    def test_defaults(self):
        config = load_config(env={})

        assert config.new_implementation == NEW_IMPLEMENTATION
        assert config.initializer_arg == EX1_TOKEN
        assert config == UpgradeConfig()

    def test_env_overrides(self):
        config = load_config(env={
            "UPGRADE_PARAMS_NEW_IMPLEMENTATION": " 0x1111111111111111111111111111111111111111 ",
            "UNRELATED": "ignored",
        })

        assert config.new_implementation == "0x1111111111111111111111111111111111111111"
        assert config.initializer_arg == EX1_TOKEN

    def test_empty_override(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(env={"UPGRADE_PARAMS_INITIALIZER_ARG": ""})
        assert exc_info.value.code == ErrorCodes.CONFIG_MISSING_VALUE

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("UPGRADE_PARAMS_INITIALIZER_ARG", "0x2222222222222222222222222222222222222222")
        assert load_config().initializer_arg == "0x2222222222222222222222222222222222222222"

    def test_to_dict(self):
        assert UpgradeConfig().to_dict() == {
            "new_implementation": NEW_IMPLEMENTATION,
            "initializer_arg": EX1_TOKEN
        }


class TestHexHelpers:
    """Test hex and address normalization"""

    def test_hex_to_bytes(self):
        assert hex_to_bytes("0xdeadbeef") == b"\xde\xad\xbe\xef"
        assert hex_to_bytes("DEADBEEF") == b"\xde\xad\xbe\xef"
        assert hex_to_bytes("0x") == b""
        assert hex_to_bytes(bytearray(b"\x01")) == b"\x01"

    @pytest.mark.parametrize("value", ["0xabc", "0xgg", None])
    def test_hex_to_bytes_invalid(self, value):
        with pytest.raises(InvalidValueError):
            hex_to_bytes(value)

    def test_normalize_address(self):
        raw = normalize_address(EX1_TOKEN)
        assert len(raw) == 20
        assert raw.hex() == EX1_TOKEN[2:].lower()

    def test_normalize_address_wrong_length(self):
        with pytest.raises(InvalidValueError):
            normalize_address("0x" + "11" * 19)
