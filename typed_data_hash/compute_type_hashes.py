#!/usr/bin/env python3
"""
Compute typed-data type hashes offline

Examples:
    compute-type-hashes "Mail(bytes32 from,bytes32 to,string contents)"
    compute-type-hashes --types-file mail.json --expected mail_type_hashes.json
    compute-type-hashes --check
"""

import argparse
import json
import re
import sys
from typing import List, Optional

from .config import KNOWN_TYPE_HASHES
from .registry import TypeRegistry, compute_type_hash

CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def constant_name(struct_name: str) -> str:
    """ChangeETHAddressIntent -> CHANGE_ETH_ADDRESS_INTENT_TYPE_HASH"""
    return CAMEL_BOUNDARY_RE.sub("_", struct_name).upper() + "_TYPE_HASH"


def struct_name_of(type_string: str) -> str:
    return type_string.split("(", 1)[0].strip()


def load_types(path: str):
    """Accept either a bare `types` table or a whole typed-data document"""
    with open(path, "r") as f:
        data = json.load(f)
    return data.get("types", data) if isinstance(data, dict) else data


def check_known_type_hashes() -> bool:
    ok = True
    for type_string, literal in KNOWN_TYPE_HASHES.items():
        actual = "0x" + compute_type_hash(type_string).hex()
        if actual == literal.lower():
            print(f"✅ {struct_name_of(type_string)}: {actual}")
        else:
            print(f"❌ {struct_name_of(type_string)}: expected {literal}, computed {actual}")
            ok = False
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute typed-data type hashes")
    parser.add_argument("type_strings", nargs="*",
                        help="Full encode-type strings, e.g. 'Mail(bytes32 from,bytes32 to,string contents)'")
    parser.add_argument("--types-file", help="JSON file with a typed-data `types` table")
    parser.add_argument("--expected", help="JSON file mapping struct names to hardcoded type hashes")
    parser.add_argument("--check", action="store_true", help="Verify the built-in known type hashes")

    args = parser.parse_args(argv)

    if not (args.type_strings or args.types_file or args.check):
        parser.error("nothing to do: give type strings, --types-file or --check")
    if args.expected and not args.types_file:
        parser.error("--expected needs --types-file")

    ok = True
    try:
        if args.type_strings:
            print("Type Hashes:")
            print("=" * 50)
            for type_string in args.type_strings:
                type_hash = compute_type_hash(type_string)
                print(f'{constant_name(struct_name_of(type_string))} = "0x{type_hash.hex()}"')

        if args.types_file:
            registry = TypeRegistry.from_eip712_types(load_types(args.types_file))
            print(f"\nType Hashes from {args.types_file}:")
            print("=" * 50)
            for name in sorted(registry):
                print(f"# {registry.encode_type(name)}")
                print(f'{constant_name(name)} = "0x{registry.type_hash(name).hex()}"')

            if args.expected:
                with open(args.expected, "r") as f:
                    expected = json.load(f)
                mismatches = registry.verify_type_hashes(expected)
                for name, (wanted, actual) in sorted(mismatches.items()):
                    computed = "0x" + actual.hex() if actual else "<undeclared>"
                    print(f"❌ {name}: expected 0x{wanted.hex()}, computed {computed}")
                if mismatches:
                    ok = False
                else:
                    print(f"✅ All {len(expected)} expected type hashes match")

        if args.check:
            print("\nKnown type hashes:")
            ok = check_known_type_hashes() and ok
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
