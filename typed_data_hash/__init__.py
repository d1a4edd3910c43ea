"""Structured typed-data hashing with domain separation."""

from .descriptors import FieldValue, StructDescriptor
from .digest import TypedDataHashes, final_digest, hash_typed_message, typed_data_digest
from .domain import (
    EIP712_PROFILE,
    NATIVE_PROFILE,
    DomainProfile,
    DomainRecord,
    Eip712DomainProfile,
    NativeDomainProfile,
    domain_hash,
    eip712_domain_hash,
)
from .field_encoder import encode, encode_field
from .registry import TypeRegistry, compute_type_hash
from .struct_hasher import encode_data, encoded_length, struct_hash, type_hash

__version__ = "0.1.0"

__all__ = [
    "DomainProfile",
    "DomainRecord",
    "EIP712_PROFILE",
    "Eip712DomainProfile",
    "FieldValue",
    "NATIVE_PROFILE",
    "NativeDomainProfile",
    "StructDescriptor",
    "TypeRegistry",
    "TypedDataHashes",
    "compute_type_hash",
    "domain_hash",
    "eip712_domain_hash",
    "encode",
    "encode_data",
    "encode_field",
    "encoded_length",
    "final_digest",
    "hash_typed_message",
    "struct_hash",
    "type_hash",
    "typed_data_digest",
]
