# Typed-data hashing configuration
# Constants shared by the hashing engine, the command-line tools and the tests

import os
from typing import NamedTuple, Optional

from dotenv import find_dotenv, load_dotenv

# Prefix of every signing digest: EIP-191 version byte 0x01
EIP191_PREFIX = b"\x19\x01"

WORD_SIZE = 32

# Domain type strings for the two profiles
NATIVE_DOMAIN_TYPE = "SRC16Domain(string name,string version,uint256 chainId,contractId verifyingContract)"
EIP712_DOMAIN_TYPE = "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"

# keccak256(EIP712_DOMAIN_TYPE)
EIP712_DOMAIN_TYPE_HASH = "0x8b73c3c69bb8fe3d512ecc4cf759cc79239f7b179b0ffacaa9a75d522b39400f"

# keccak256(b"")
EMPTY_HASH = "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

# Hardcoded type hashes, verified by `compute-type-hashes --check` and the tests
KNOWN_TYPE_HASHES = {
    EIP712_DOMAIN_TYPE: EIP712_DOMAIN_TYPE_HASH,
    "Mail(Person from,Person to,string contents)Person(string name,address wallet)":
        "0xa0cedeb2dc280ba39b857546d74f5549c3a1d7bdc2dd96bf881f76108e23dac2",
}

# Profiles selectable from the command line / environment
PROFILE_NATIVE = "native"
PROFILE_EIP712 = "eip712"
PROFILES = (PROFILE_NATIVE, PROFILE_EIP712)

# Environment variables read by load_domain_defaults()
ENV_DOMAIN_NAME = "TYPED_DATA_DOMAIN_NAME"
ENV_DOMAIN_VERSION = "TYPED_DATA_DOMAIN_VERSION"
ENV_CHAIN_ID = "TYPED_DATA_CHAIN_ID"
ENV_VERIFYING_CONTRACT = "TYPED_DATA_VERIFYING_CONTRACT"
ENV_PROFILE = "TYPED_DATA_PROFILE"


class DomainDefaults(NamedTuple):
    name: Optional[str]
    version: Optional[str]
    chain_id: Optional[int]
    verifying_contract: Optional[str]
    profile: str


def load_domain_defaults(dotenv_path: Optional[str] = None) -> DomainDefaults:
    """Load domain defaults from a .env file and the environment"""
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    chain_id = os.getenv(ENV_CHAIN_ID)
    profile = os.getenv(ENV_PROFILE, PROFILE_NATIVE)
    if profile not in PROFILES:
        raise ValueError(f"{ENV_PROFILE} must be one of {', '.join(PROFILES)}, got {profile!r}")

    return DomainDefaults(
        name=os.getenv(ENV_DOMAIN_NAME),
        version=os.getenv(ENV_DOMAIN_VERSION),
        chain_id=int(chain_id, 0) if chain_id else None,
        verifying_contract=os.getenv(ENV_VERIFYING_CONTRACT),
        profile=profile,
    )
