"""
Struct Hasher

struct_hash = keccak256(typeHash || encode(field_1) || ... || encode(field_n))

Field words are written in declaration order into a buffer sized from the
descriptor.
"""

from typing import Any, Mapping, Optional, Sequence, Union

from eth_utils import keccak

from .config import WORD_SIZE
from .descriptors import StructDescriptor
from .field_encoder import encode_field
from .registry import TypeRegistry, compute_type_hash

StructValues = Union[Sequence[Any], Mapping[str, Any]]


def encoded_length(descriptor: StructDescriptor) -> int:
    """Size of the pre-hash buffer: the type hash word plus one word per field"""
    return WORD_SIZE * (1 + len(descriptor.fields))


def type_hash(descriptor: StructDescriptor, registry: Optional[TypeRegistry] = None) -> bytes:
    """
    Type hash of a descriptor.

    Structs referencing other structs need the registry that declares them,
    since their encode-type string includes every referenced signature.
    """
    if registry is not None and descriptor.name in registry:
        if registry.get(descriptor.name) != descriptor:
            raise ValueError(f"Descriptor {descriptor.name} differs from the registered one")
        return registry.type_hash(descriptor.name)
    if descriptor.referenced_structs():
        raise ValueError(f"{descriptor.name} references struct types; register it in a TypeRegistry")
    return compute_type_hash(descriptor.signature)


def _ordered_values(descriptor: StructDescriptor, values: StructValues) -> Sequence[Any]:
    if isinstance(values, Mapping):
        missing = [name for name in descriptor.field_names if name not in values]
        if missing:
            raise ValueError(f"{descriptor.name} is missing fields: {', '.join(missing)}")
        extra = [name for name in values if name not in descriptor.field_names]
        if extra:
            raise ValueError(f"{descriptor.name} has no fields named: {', '.join(extra)}")
        return [values[name] for name in descriptor.field_names]

    if isinstance(values, (str, bytes)):
        raise TypeError(f"{descriptor.name} values must be a sequence or a mapping")
    if len(values) != len(descriptor.fields):
        raise ValueError(
            f"{descriptor.name} expects {len(descriptor.fields)} values, got {len(values)}"
        )
    return values


def encode_data(descriptor: StructDescriptor, values: StructValues,
                registry: Optional[TypeRegistry] = None) -> bytes:
    """The bytes hashed into the struct hash"""
    ordered = _ordered_values(descriptor, values)

    buffer = bytearray(encoded_length(descriptor))
    buffer[0:WORD_SIZE] = type_hash(descriptor, registry)
    for index, ((_, type_name), value) in enumerate(zip(descriptor.fields, ordered), start=1):
        offset = index * WORD_SIZE
        buffer[offset:offset + WORD_SIZE] = encode_field(type_name, value, registry)
    return bytes(buffer)


def struct_hash(descriptor: StructDescriptor, values: StructValues,
                registry: Optional[TypeRegistry] = None) -> bytes:
    """Compute the 32-byte struct hash of `values` laid out by `descriptor`"""
    return keccak(encode_data(descriptor, values, registry))
