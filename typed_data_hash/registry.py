"""
Type Registry

A table of StructDescriptors keyed by struct name. The whole type graph is
validated when the registry is built (undeclared references, cycles), and the
encode-type string and type hash of every struct are computed once.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from eth_utils import keccak

from .config import EIP712_DOMAIN_TYPE, NATIVE_DOMAIN_TYPE
from .descriptors import StructDescriptor
from .field_encoder import to_byte_value

# Domain entries in a JSON `types` table are not message types
DOMAIN_TYPE_NAMES = (
    StructDescriptor.parse(EIP712_DOMAIN_TYPE).name,
    StructDescriptor.parse(NATIVE_DOMAIN_TYPE).name,
)


def compute_type_hash(type_string: str) -> bytes:
    """keccak256 of the ASCII type string"""
    return keccak(type_string.encode("ascii"))


class TypeRegistry:
    """Immutable descriptor table with precomputed type hashes."""

    def __init__(self, descriptors: Iterable[StructDescriptor] = ()):
        table: Dict[str, StructDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise ValueError(f"Duplicate struct type: {descriptor.name}")
            table[descriptor.name] = descriptor
        self._descriptors = MappingProxyType(table)

        self._check_references()
        self._check_acyclic()

        self._dependencies = MappingProxyType({name: self._collect_dependencies(name) for name in table})
        encode_types = {}
        type_hashes = {}
        for name in table:
            encoded = table[name].signature + "".join(table[dep].signature for dep in self._dependencies[name])
            encode_types[name] = encoded
            type_hashes[name] = compute_type_hash(encoded)
        self._encode_types = MappingProxyType(encode_types)
        self._type_hashes = MappingProxyType(type_hashes)

    @classmethod
    def from_eip712_types(cls, types: Mapping[str, Iterable[Mapping[str, str]]]) -> "TypeRegistry":
        """Build from a JSON typed-data `types` table, skipping the domain entries"""
        return cls(
            StructDescriptor.from_eip712_fields(name, members)
            for name, members in types.items()
            if name not in DOMAIN_TYPE_NAMES
        )

    def _check_references(self):
        for descriptor in self._descriptors.values():
            for name in descriptor.referenced_structs():
                if name not in self._descriptors:
                    raise ValueError(f"{descriptor.name} references undeclared type {name}")

    def _check_acyclic(self):
        # Depth-first search; a struct met again while still on the path closes a cycle
        done = set()

        def visit(name: str, path: List[str]):
            if name in path:
                cycle = path[path.index(name):] + [name]
                raise ValueError(f"Cyclic struct reference: {' -> '.join(cycle)}")
            if name in done:
                return
            for child in self._descriptors[name].referenced_structs():
                visit(child, path + [name])
            done.add(name)

        for name in self._descriptors:
            visit(name, [])

    def _collect_dependencies(self, name: str) -> Tuple[str, ...]:
        found = set()
        pending = list(self._descriptors[name].referenced_structs())
        while pending:
            child = pending.pop()
            if child in found:
                continue
            found.add(child)
            pending.extend(self._descriptors[child].referenced_structs())
        return tuple(sorted(found))

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def get(self, name: str) -> StructDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise ValueError(f"Unknown struct type: {name}") from None

    def dependencies(self, name: str) -> Tuple[str, ...]:
        """Struct types referenced by `name`, directly or transitively, sorted by name"""
        self.get(name)
        return self._dependencies[name]

    def encode_type(self, name: str) -> str:
        """Own signature followed by the signatures of every dependency"""
        self.get(name)
        return self._encode_types[name]

    def type_hash(self, name: str) -> bytes:
        self.get(name)
        return self._type_hashes[name]

    def type_hashes(self) -> Mapping[str, bytes]:
        return self._type_hashes

    def verify_type_hashes(self, expected: Mapping[str, Union[str, bytes]]) -> Dict[str, Tuple[bytes, bytes]]:
        """
        Compare hardcoded type hash literals against the computed ones.

        Returns {struct name: (expected, actual)} for every mismatch; a name the
        registry does not declare is reported with an empty actual value.
        """
        mismatches = {}
        for name, literal in expected.items():
            wanted = to_byte_value(literal)
            actual = self._type_hashes.get(name, b"")
            if actual != wanted:
                mismatches[name] = (wanted, actual)
        return mismatches
