"""
ABI function call encoding

Builds calldata for a contract function: a 4-byte selector taken from the
Keccak-256 hash of the canonical signature text, followed by the ABI-encoded
arguments. Static parameters occupy one 32-byte slot each.

Design Notes:
- Signatures and argument values are immutable; the encoder keeps no state
- Values are validated here before being handed to eth_abi, so callers get
  ArityMismatchError / TypeMismatchError / InvalidValueError instead of the
  library's generic encoding errors
- Addresses are passed to eth_abi as raw bytes, which skips checksum checks
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import encode_hex, to_checksum_address
from web3 import Web3

from .common import hex_to_bytes, normalize_address
from .exceptions import (
    ArityMismatchError,
    ErrorCodes,
    InvalidValueError,
    SignatureError,
    TypeMismatchError,
)

LOG = logging.getLogger(__name__)

SELECTOR_LENGTH = 4

DYNAMIC_TYPES = ("bytes", "string")
SIMPLE_TYPES = ("address", "bool") + DYNAMIC_TYPES

_INTEGER_TYPE = re.compile(r"(u?int)([1-9]\d*)?")
_FIXED_BYTES_TYPE = re.compile(r"bytes([1-9]\d*)")
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_FRAGMENT = re.compile(r"\s*(?:function\s+)?([A-Za-z_$][A-Za-z0-9_$]*)\s*\(([^()]*)\)")


def canonical_type(abi_type: str) -> str:
    """Return the canonical name of a supported parameter type

    Aliases are expanded (uint -> uint256, int -> int256, byte -> bytes1).
    Arrays and tuples are not supported.
    """
    if not isinstance(abi_type, str):
        raise SignatureError(f"Parameter type must be a string, got {type(abi_type).__name__}",
                             code=ErrorCodes.UNSUPPORTED_TYPE)

    abi_type = abi_type.strip()
    if abi_type in SIMPLE_TYPES:
        return abi_type
    if abi_type == "byte":
        return "bytes1"

    match = _INTEGER_TYPE.fullmatch(abi_type)
    if match:
        base, bits = match.groups()
        size = int(bits) if bits else 256
        if size < 8 or size > 256 or size % 8:
            raise SignatureError(f"Invalid integer width: {abi_type}", code=ErrorCodes.UNSUPPORTED_TYPE)
        return f"{base}{size}"

    match = _FIXED_BYTES_TYPE.fullmatch(abi_type)
    if match:
        size = int(match.group(1))
        if size < 1 or size > 32:
            raise SignatureError(f"Invalid fixed bytes width: {abi_type}", code=ErrorCodes.UNSUPPORTED_TYPE)
        return f"bytes{size}"

    raise SignatureError(f"Unsupported parameter type: {abi_type!r}", code=ErrorCodes.UNSUPPORTED_TYPE)


@dataclass(frozen=True)
class FunctionSignature:
    """Function name plus ordered parameter types"""
    name: str
    parameter_types: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not _IDENTIFIER.fullmatch(self.name):
            raise SignatureError(f"Invalid function name: {self.name!r}", signature=str(self.name))
        if isinstance(self.parameter_types, str):
            raise SignatureError(
                "parameter_types must be a sequence of type names, not a string",
                signature=self.name
            )
        object.__setattr__(
            self, "parameter_types", tuple(canonical_type(t) for t in self.parameter_types)
        )

    @classmethod
    def parse(cls, text: str) -> "FunctionSignature":
        """Parse canonical text or a human-readable ABI fragment

        Both "initialize(address)" and "function initialize(address _token)"
        are accepted. Parameter names and anything after the closing
        parenthesis are ignored.
        """
        match = _FRAGMENT.match(text)
        if not match:
            raise SignatureError(f"Cannot parse function signature: {text!r}", signature=text)

        name, params = match.groups()
        parameter_types = []
        if params.strip():
            for param in params.split(","):
                tokens = param.split()
                if not tokens:
                    raise SignatureError(f"Empty parameter in signature: {text!r}", signature=text)
                parameter_types.append(tokens[0])
        return cls(name, tuple(parameter_types))

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(self.parameter_types)})"

    def __str__(self) -> str:
        return self.canonical


@dataclass(frozen=True)
class ArgumentValue:
    """A value tagged with the ABI type it is meant to fill"""
    abi_type: str
    value: Any

    def __post_init__(self):
        object.__setattr__(self, "abi_type", canonical_type(self.abi_type))

    @classmethod
    def address(cls, value: Union[str, bytes]) -> "ArgumentValue":
        return cls("address", value)


@dataclass(frozen=True)
class EncodedCall:
    """Selector followed by the encoded argument block"""
    selector: bytes
    arguments: bytes = b""

    @property
    def data(self) -> bytes:
        return self.selector + self.arguments

    def hex(self) -> str:
        """0x-prefixed lowercase hex of the full calldata"""
        return encode_hex(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


def _normalize_value(abi_type: str, value: Any) -> Any:
    """Validate a value for its type and convert it to what eth_abi expects"""
    if abi_type == "address":
        return normalize_address(value)

    if abi_type == "bool":
        if not isinstance(value, bool):
            raise InvalidValueError(f"Expected bool, got {type(value).__name__}", abi_type=abi_type, value=value)
        return value

    if abi_type == "string":
        if not isinstance(value, str):
            raise InvalidValueError(f"Expected str, got {type(value).__name__}", abi_type=abi_type, value=value)
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidValueError(f"String is not valid UTF-8: {e}", abi_type=abi_type, value=value) from e
        return value

    if abi_type == "bytes":
        return hex_to_bytes(value, abi_type=abi_type)

    match = _FIXED_BYTES_TYPE.fullmatch(abi_type)
    if match:
        raw = hex_to_bytes(value, abi_type=abi_type)
        size = int(match.group(1))
        if len(raw) > size:
            raise InvalidValueError(
                f"{abi_type} holds at most {size} bytes, got {len(raw)}", abi_type=abi_type, value=value
            )
        return raw

    base, bits = _INTEGER_TYPE.fullmatch(abi_type).groups()
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"Expected int for {abi_type}, got {type(value).__name__}",
                                abi_type=abi_type, value=value)
    size = int(bits)
    if base == "uint":
        low, high = 0, 2 ** size - 1
    else:
        low, high = -(2 ** (size - 1)), 2 ** (size - 1) - 1
    if not low <= value <= high:
        raise InvalidValueError(f"Value {value} out of range for {abi_type}", abi_type=abi_type, value=value)
    return value


class CallEncoder:
    """Encodes and decodes contract function calls"""

    @staticmethod
    def selector(signature: FunctionSignature) -> bytes:
        """First 4 bytes of keccak256 over the canonical signature text"""
        return bytes(Web3.keccak(text=signature.canonical)[:SELECTOR_LENGTH])

    @staticmethod
    def encode(signature: FunctionSignature, args: Sequence[ArgumentValue]) -> EncodedCall:
        """Encode a function call

        Args:
            signature: Target function signature
            args: One tagged value per parameter, in order

        Returns:
            EncodedCall holding selector and argument block

        Raises:
            ArityMismatchError: argument count differs from parameter count
            TypeMismatchError: an argument tag differs from its parameter type
            InvalidValueError: a value cannot be represented in its type
        """
        args = tuple(args)
        expected = len(signature.parameter_types)
        if len(args) != expected:
            raise ArityMismatchError(
                f"{signature.canonical} takes {expected} argument(s), got {len(args)}",
                expected=expected,
                actual=len(args)
            )

        values = []
        for index, (param_type, arg) in enumerate(zip(signature.parameter_types, args)):
            if not isinstance(arg, ArgumentValue):
                raise TypeMismatchError(
                    f"Argument {index} must be an ArgumentValue, got {type(arg).__name__}",
                    index=index,
                    expected=param_type,
                    actual=type(arg).__name__
                )
            if arg.abi_type != param_type:
                raise TypeMismatchError(
                    f"Argument {index} of {signature.canonical} is {arg.abi_type}, expected {param_type}",
                    index=index,
                    expected=param_type,
                    actual=arg.abi_type
                )
            values.append(_normalize_value(param_type, arg.value))

        try:
            arguments = abi_encode(list(signature.parameter_types), values)
        except AbiEncodingError as e:
            raise InvalidValueError(f"Failed to encode arguments for {signature.canonical}: {e}") from e

        call = EncodedCall(selector=CallEncoder.selector(signature), arguments=arguments)
        LOG.debug(f"Encoded {signature.canonical}: {call.hex()}")
        return call

    @staticmethod
    def decode(signature: FunctionSignature, data: Union[str, bytes, EncodedCall]) -> Tuple[ArgumentValue, ...]:
        """Decode calldata produced for the given signature

        Addresses come back as checksummed strings.
        """
        if isinstance(data, EncodedCall):
            raw = data.data
        else:
            raw = hex_to_bytes(data, abi_type="calldata")

        if len(raw) < SELECTOR_LENGTH:
            raise InvalidValueError(f"Calldata shorter than a selector: {len(raw)} bytes", abi_type="calldata")

        selector = CallEncoder.selector(signature)
        if raw[:SELECTOR_LENGTH] != selector:
            raise InvalidValueError(
                f"Selector {encode_hex(raw[:SELECTOR_LENGTH])} does not match "
                f"{signature.canonical} ({encode_hex(selector)})",
                abi_type="calldata"
            )

        try:
            values = abi_decode(list(signature.parameter_types), raw[SELECTOR_LENGTH:])
        except AbiDecodingError as e:
            raise InvalidValueError(f"Failed to decode arguments for {signature.canonical}: {e}",
                                    abi_type="calldata") from e

        decoded = []
        for param_type, value in zip(signature.parameter_types, values):
            if param_type == "address":
                value = to_checksum_address(value)
            decoded.append(ArgumentValue(param_type, value))
        return tuple(decoded)
