"""
Domain Separator Builder

The domain hash binds a digest to one protocol instance:
name, version, chain and verifying contract. Two profiles exist and both are
plain applications of the generic struct hasher to a fixed 4-field descriptor:

- NativeDomainProfile (default): SRC16Domain, 64-bit chain id, 32-byte
  contract id passed through.
- Eip712DomainProfile (opt-in): EIP712Domain, 256-bit chain id, low 20 bytes of
  the verifying contract as an address. Digests match the EIP-712 scheme used
  by account-based chains.
"""

from dataclasses import dataclass
from typing import Any, List, Union

from .config import EIP712_DOMAIN_TYPE, NATIVE_DOMAIN_TYPE, WORD_SIZE
from .descriptors import StructDescriptor
from .field_encoder import ADDRESS_SIZE, to_byte_value
from .registry import TypeRegistry
from .struct_hasher import struct_hash


@dataclass(frozen=True)
class DomainRecord:
    name: str
    version: str
    chain_id: int
    verifying_contract: Union[bytes, str]

    def __post_init__(self):
        if isinstance(self.chain_id, bool) or not isinstance(self.chain_id, int):
            raise TypeError(f"chain_id must be an int, got {type(self.chain_id)}")
        if self.chain_id < 0:
            raise ValueError(f"chain_id must be non-negative, got {self.chain_id}")
        object.__setattr__(self, "verifying_contract", to_byte_value(self.verifying_contract))


class DomainProfile:
    """Shared domain hashing: subclasses only fix widths and the verifying contract encoding"""

    type_string = ""
    chain_id_bits = 256

    def __init__(self):
        self.descriptor = StructDescriptor.parse(self.type_string)
        self.registry = TypeRegistry([self.descriptor])

    def verifying_contract(self, raw: bytes) -> bytes:
        raise NotImplementedError

    def values(self, domain: DomainRecord) -> List[Any]:
        if domain.chain_id >= 1 << self.chain_id_bits:
            raise ValueError(
                f"chain_id {domain.chain_id} does not fit in {self.chain_id_bits} bits "
                f"({type(self).__name__})"
            )
        return [domain.name, domain.version, domain.chain_id, self.verifying_contract(domain.verifying_contract)]

    def domain_hash(self, domain: DomainRecord) -> bytes:
        return struct_hash(self.descriptor, self.values(domain), self.registry)

    def __repr__(self):
        return f"{type(self).__name__}({self.type_string!r})"


class NativeDomainProfile(DomainProfile):
    type_string = NATIVE_DOMAIN_TYPE
    chain_id_bits = 64

    def verifying_contract(self, raw: bytes) -> bytes:
        if len(raw) != WORD_SIZE:
            raise ValueError(f"Native verifying contract must be {WORD_SIZE} bytes, got {len(raw)}")
        return raw


class Eip712DomainProfile(DomainProfile):
    type_string = EIP712_DOMAIN_TYPE
    chain_id_bits = 256

    def verifying_contract(self, raw: bytes) -> bytes:
        # 20-byte account addresses are used as is, 32-byte ids keep their low 20 bytes
        if len(raw) not in (ADDRESS_SIZE, WORD_SIZE):
            raise ValueError(f"Verifying contract must be {ADDRESS_SIZE} or {WORD_SIZE} bytes, got {len(raw)}")
        return raw[-ADDRESS_SIZE:]


NATIVE_PROFILE = NativeDomainProfile()
EIP712_PROFILE = Eip712DomainProfile()


def domain_hash(domain: DomainRecord, profile: DomainProfile = NATIVE_PROFILE) -> bytes:
    """Domain separator under `profile` (native unless asked otherwise)"""
    return profile.domain_hash(domain)


def eip712_domain_hash(domain: DomainRecord) -> bytes:
    """Domain separator compatible with the EIP-712 `EIP712Domain` encoding"""
    return EIP712_PROFILE.domain_hash(domain)
