#!/usr/bin/env python3
"""
Hash a JSON typed-data document

Prints the domain separator, the struct hash of the primary type and the
final signing digest. The document must declare its domain type
(SRC16Domain or EIP712Domain) unless --profile is given.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import PROFILE_EIP712, PROFILES
from .digest import hash_typed_message
from .domain import EIP712_PROFILE, NATIVE_PROFILE


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute the signing digest of a typed-data document")
    parser.add_argument("typed_data", help="Path to the typed-data JSON document")
    parser.add_argument("--profile", choices=PROFILES, help="Force a domain profile")
    parser.add_argument("--output", help="Write the hashes to this JSON file")

    args = parser.parse_args(argv)

    profile = None
    if args.profile:
        profile = EIP712_PROFILE if args.profile == PROFILE_EIP712 else NATIVE_PROFILE

    try:
        with open(args.typed_data, "r") as f:
            document = json.load(f)
        hashes = hash_typed_message(document, profile)
    except (OSError, KeyError, ValueError, TypeError) as e:
        print(f"❌ Failed to hash {args.typed_data}: {e}", file=sys.stderr)
        return 1

    result = {
        "primary_type": document["primaryType"],
        "domain_separator": "0x" + hashes.domain_hash.hex(),
        "struct_hash": "0x" + hashes.struct_hash.hex(),
        "digest": "0x" + hashes.digest.hex(),
    }

    print(f"✅ {result['primary_type']}")
    print(f"Domain separator: {result['domain_separator']}")
    print(f"Struct hash: {result['struct_hash']}")
    print(f"Digest: {result['digest']}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(result, f, indent=2)
        print(f"📁 Hashes saved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
