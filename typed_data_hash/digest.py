"""
Digest Composer

digest = keccak256(0x19 0x01 || domainSeparator || structHash)

This is the value a signer signs and a verifier recomputes.
"""

from typing import Any, Mapping, NamedTuple, Optional

from eth_utils import keccak

from .config import EIP191_PREFIX, WORD_SIZE
from .descriptors import StructDescriptor
from .domain import EIP712_PROFILE, NATIVE_PROFILE, DomainProfile, DomainRecord
from .field_encoder import to_int_value
from .registry import TypeRegistry
from .struct_hasher import StructValues, struct_hash

PROFILES_BY_DOMAIN_TYPE = {
    profile.descriptor.name: profile for profile in (NATIVE_PROFILE, EIP712_PROFILE)
}


class TypedDataHashes(NamedTuple):
    domain_hash: bytes
    struct_hash: bytes
    digest: bytes


def final_digest(domain_hash: bytes, message_struct_hash: bytes) -> bytes:
    """Compute the signing digest from a domain hash and a message struct hash"""
    if len(domain_hash) != WORD_SIZE:
        raise ValueError(f"Domain hash must be {WORD_SIZE} bytes, got {len(domain_hash)}")
    if len(message_struct_hash) != WORD_SIZE:
        raise ValueError(f"Struct hash must be {WORD_SIZE} bytes, got {len(message_struct_hash)}")
    return keccak(EIP191_PREFIX + bytes(domain_hash) + bytes(message_struct_hash))


def typed_data_digest(domain: DomainRecord, descriptor: StructDescriptor, values: StructValues,
                      registry: Optional[TypeRegistry] = None,
                      profile: DomainProfile = NATIVE_PROFILE) -> bytes:
    """Domain hash, struct hash and final digest in one call"""
    return final_digest(profile.domain_hash(domain), struct_hash(descriptor, values, registry))


def _select_profile(types: Mapping[str, Any], profile: Optional[DomainProfile]) -> DomainProfile:
    declared = [name for name in PROFILES_BY_DOMAIN_TYPE if name in types]

    if profile is None:
        if len(declared) != 1:
            raise ValueError(
                "Cannot choose a domain profile: declare exactly one of "
                f"{', '.join(PROFILES_BY_DOMAIN_TYPE)} in types or pass a profile"
            )
        profile = PROFILES_BY_DOMAIN_TYPE[declared[0]]

    for name in declared:
        if name != profile.descriptor.name:
            raise ValueError(f"types declare {name} but the {type(profile).__name__} was requested")
        given = StructDescriptor.from_eip712_fields(name, types[name])
        if given != profile.descriptor:
            raise ValueError(f"{name} must be declared as {profile.type_string}, got {given.signature}")
    return profile


def hash_typed_message(full_message: Mapping[str, Any],
                       profile: Optional[DomainProfile] = None) -> TypedDataHashes:
    """
    Hash a JSON typed-data document: {"types", "primaryType", "domain", "message"}.

    The domain profile comes from `profile`, or else from the single domain
    type declared in `types`. Anything ambiguous is rejected.
    """
    for key in ("types", "primaryType", "domain", "message"):
        if key not in full_message:
            raise ValueError(f"Typed data is missing {key!r}")

    types = full_message["types"]
    profile = _select_profile(types, profile)
    registry = TypeRegistry.from_eip712_types(types)

    domain_fields = full_message["domain"]
    missing = [name for name in profile.descriptor.field_names if name not in domain_fields]
    if missing:
        raise ValueError(f"Domain is missing fields: {', '.join(missing)}")
    domain = DomainRecord(
        name=domain_fields["name"],
        version=domain_fields["version"],
        chain_id=to_int_value(domain_fields["chainId"]),
        verifying_contract=domain_fields["verifyingContract"],
    )

    primary = registry.get(full_message["primaryType"])
    domain_separator = profile.domain_hash(domain)
    message_hash = struct_hash(primary, full_message["message"], registry)
    return TypedDataHashes(domain_separator, message_hash, final_digest(domain_separator, message_hash))
