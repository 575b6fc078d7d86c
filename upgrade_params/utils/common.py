import re
from typing import Union

from eth_utils import decode_hex, remove_0x_prefix

from .exceptions import InvalidValueError

ADDRESS_LENGTH = 20

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def hex_to_bytes(value: Union[str, bytes, bytearray], abi_type: str = "bytes") -> bytes:
    """Convert 0x-prefixed or bare hex text (or raw bytes) to bytes"""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InvalidValueError(
            f"Expected hex string or bytes for {abi_type}, got {type(value).__name__}",
            abi_type=abi_type,
            value=value
        )
    digits = remove_0x_prefix(value)
    if len(digits) % 2 or not _HEX_DIGITS.fullmatch(digits):
        raise InvalidValueError(f"Invalid hex string for {abi_type}: {value!r}", abi_type=abi_type, value=value)
    return decode_hex(digits)


def normalize_address(value: Union[str, bytes, bytearray]) -> bytes:
    """Normalize an address to its 20 raw bytes

    Mixed-case text is accepted as-is; the checksum is not verified.
    """
    if isinstance(value, str) and len(remove_0x_prefix(value)) != ADDRESS_LENGTH * 2:
        raise InvalidValueError(
            f"Address must be {ADDRESS_LENGTH * 2} hex digits: {value!r}",
            abi_type="address",
            value=value
        )
    raw = hex_to_bytes(value, abi_type="address")
    if len(raw) != ADDRESS_LENGTH:
        raise InvalidValueError(
            f"Address must be {ADDRESS_LENGTH} bytes, got {len(raw)}",
            abi_type="address",
            value=value
        )
    return raw
