"""
Exception hierarchy for the upgrade parameter tool

All errors raised by the encoder and the driver derive from
UpgradeParamsError, so the entry point can catch a single type and map it
to a non-zero exit status.
"""

from typing import Any, Dict, Optional


class ErrorCodes:
    """Numeric error codes attached to UpgradeParamsError instances"""
    # Encoding errors (1xxx)
    ARITY_MISMATCH = 1001
    TYPE_MISMATCH = 1002
    INVALID_VALUE = 1003

    # Signature errors (2xxx)
    INVALID_SIGNATURE = 2001
    UNSUPPORTED_TYPE = 2002

    # Configuration errors (3xxx)
    CONFIG_MISSING_VALUE = 3001
    CONFIG_INVALID_VALUE = 3002


class UpgradeParamsError(Exception):
    """Base exception class for the upgrade parameter tool"""

    def __init__(self, message: str, code: int = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details
        }


class EncodingError(UpgradeParamsError):
    """Function call could not be encoded"""
    pass


class ArityMismatchError(EncodingError):
    """Argument count differs from the signature's parameter count"""

    def __init__(self, message: str, expected: int = None, actual: int = None):
        super().__init__(
            message,
            code=ErrorCodes.ARITY_MISMATCH,
            details={"expected": expected, "actual": actual}
        )


class TypeMismatchError(EncodingError):
    """Argument tag differs from the declared parameter type"""

    def __init__(self, message: str, index: int = None, expected: str = None, actual: str = None):
        super().__init__(
            message,
            code=ErrorCodes.TYPE_MISMATCH,
            details={"index": index, "expected": expected, "actual": actual}
        )


class InvalidValueError(EncodingError):
    """Argument value is not representable in its ABI type"""

    def __init__(self, message: str, abi_type: str = None, value: Any = None):
        super().__init__(
            message,
            code=ErrorCodes.INVALID_VALUE,
            details={"abi_type": abi_type, "value": value}
        )


class SignatureError(UpgradeParamsError):
    """Malformed function signature or unsupported parameter type"""

    def __init__(self, message: str, signature: str = None, code: int = ErrorCodes.INVALID_SIGNATURE):
        super().__init__(message, code=code, details={"signature": signature})


class ConfigurationError(UpgradeParamsError):
    """Invalid or missing configuration value"""

    def __init__(self, message: str, field: str = None, code: int = ErrorCodes.CONFIG_INVALID_VALUE):
        super().__init__(message, code=code, details={"field": field})
