#!/usr/bin/env python3
"""
Compute the domain separator for a verifying contract

Defaults come from the environment (or a .env file):
TYPED_DATA_DOMAIN_NAME, TYPED_DATA_DOMAIN_VERSION, TYPED_DATA_CHAIN_ID,
TYPED_DATA_VERIFYING_CONTRACT, TYPED_DATA_PROFILE
"""

import argparse
import sys
from typing import List, Optional

from .config import PROFILE_EIP712, PROFILES, load_domain_defaults
from .domain import EIP712_PROFILE, NATIVE_PROFILE, DomainRecord


def main(argv: Optional[List[str]] = None) -> int:
    try:
        defaults = load_domain_defaults()
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(description="Compute a typed-data domain separator")
    parser.add_argument("--name", default=defaults.name, help="Domain name")
    parser.add_argument("--version", default=defaults.version, help="Domain version")
    parser.add_argument("--chain-id", type=lambda value: int(value, 0), default=defaults.chain_id,
                        help="Chain id (decimal or 0x hex)")
    parser.add_argument("--verifying-contract", default=defaults.verifying_contract,
                        help="Verifying contract id, 0x-prefixed hex")
    parser.add_argument("--profile", choices=PROFILES, default=defaults.profile,
                        help="native: SRC16Domain (default); eip712: EIP712Domain compatible")

    args = parser.parse_args(argv)

    missing = [option for option, value in (
        ("--name", args.name),
        ("--version", args.version),
        ("--chain-id", args.chain_id),
        ("--verifying-contract", args.verifying_contract),
    ) if value is None]
    if missing:
        parser.error(f"missing {', '.join(missing)} (no environment default)")

    profile = EIP712_PROFILE if args.profile == PROFILE_EIP712 else NATIVE_PROFILE

    print("Computing domain separator...")
    print(f"Profile: {args.profile} ({profile.type_string})")
    print(f"Verifying contract: {args.verifying_contract}")
    print(f"Chain ID: {args.chain_id}")

    try:
        domain = DomainRecord(args.name, args.version, args.chain_id, args.verifying_contract)
        separator = profile.domain_hash(domain)
    except (ValueError, TypeError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f"\nDomain Separator: 0x{separator.hex()}")
    print(f'DOMAIN_SEPARATOR = "0x{separator.hex()}"')
    return 0


if __name__ == "__main__":
    sys.exit(main())
