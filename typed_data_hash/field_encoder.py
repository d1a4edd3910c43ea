"""
Field Encoder

Turns one typed value into its canonical 32-byte word:
atomic values are ABI-encoded into a single word, dynamic values (bytes,
string, arrays) are replaced by their keccak256 hash and nested structs by
their struct hash.
"""

from typing import Any, Mapping, Optional

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError
from eth_utils import is_0x_prefixed, keccak, to_bytes

from .config import WORD_SIZE
from .descriptors import (
    NATIVE_WORD_TYPES,
    FieldValue,
    is_array_type,
    is_fixed_bytes_type,
    is_int_type,
    is_uint_type,
    split_array_type,
)

ADDRESS_SIZE = 20


def to_byte_value(value: Any) -> bytes:
    """Accept raw bytes or a 0x-prefixed hex string"""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        if not is_0x_prefixed(value):
            raise ValueError(f"Expected 0x-prefixed hex string, got {value!r}")
        return to_bytes(hexstr=value)
    raise TypeError(f"Unsupported byte value: {type(value)}")


def to_int_value(value: Any) -> Any:
    """Integers from JSON documents may arrive as decimal or 0x hex strings"""
    if isinstance(value, str):
        return int(value, 16) if is_0x_prefixed(value) else int(value)
    return value


def encode_address(value: Any) -> bytes:
    """32-byte native addresses pass through; 20-byte account addresses are left-padded"""
    raw = to_byte_value(value)
    if len(raw) == WORD_SIZE:
        return raw
    if len(raw) == ADDRESS_SIZE:
        return raw.rjust(WORD_SIZE, b"\x00")
    raise ValueError(f"Address must be {ADDRESS_SIZE} or {WORD_SIZE} bytes, got {len(raw)}")


def encode_word(value: Any) -> bytes:
    """bytes32 / b256 / contractId: exactly one word, passed through"""
    raw = to_byte_value(value)
    if len(raw) != WORD_SIZE:
        raise ValueError(f"Expected {WORD_SIZE} bytes, got {len(raw)}")
    return raw


def abi_word(type_name: str, value: Any) -> bytes:
    """Static ABI types encode to exactly one word"""
    try:
        return abi_encode([type_name], [value])
    except EncodingError as e:
        raise ValueError(f"Cannot encode {value!r} as {type_name}: {e}") from e


def hash_dynamic(type_name: str, value: Any) -> bytes:
    """bytes / string are replaced by the hash of their raw bytes, no length prefix"""
    if type_name == "string":
        if not isinstance(value, str):
            raise TypeError(f"string field expects str, got {type(value)}")
        return keccak(value.encode("utf-8"))
    return keccak(to_byte_value(value))


def encode_array(type_name: str, value: Any, registry=None) -> bytes:
    element_type, length = split_array_type(type_name)
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not hasattr(value, "__len__"):
        raise TypeError(f"{type_name} expects a sequence, got {type(value)}")
    if length is not None and len(value) != length:
        raise ValueError(f"{type_name} expects {length} elements, got {len(value)}")

    buffer = bytearray(WORD_SIZE * len(value))
    for index, element in enumerate(value):
        offset = index * WORD_SIZE
        buffer[offset:offset + WORD_SIZE] = encode_field(element_type, element, registry)
    return keccak(bytes(buffer))


def encode_field(type_name: str, value: Any, registry=None) -> bytes:
    """Encode a value of the given canonical type into one 32-byte word"""
    if type_name in ("string", "bytes"):
        return hash_dynamic(type_name, value)
    if type_name == "bool":
        return abi_word("bool", value)
    if type_name == "address":
        return encode_address(value)
    if type_name in NATIVE_WORD_TYPES:
        return encode_word(value)
    if is_uint_type(type_name) or is_int_type(type_name):
        return abi_word(type_name, to_int_value(value))
    if is_fixed_bytes_type(type_name):
        return abi_word(type_name, to_byte_value(value))
    if is_array_type(type_name):
        return encode_array(type_name, value, registry)

    if registry is None or type_name not in registry:
        raise ValueError(f"Unknown type: {type_name}")
    from .struct_hasher import struct_hash
    return struct_hash(registry.get(type_name), value, registry)


def encode(value: FieldValue, registry: Optional[Any] = None) -> bytes:
    """Encode a tagged FieldValue"""
    return encode_field(value.type_name, value.value, registry)
