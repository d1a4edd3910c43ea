"""
Typed-data descriptors

StructDescriptor describes one struct type: its name and the ordered list
of (field name, type name) pairs. FieldValue tags a Python value with the
canonical type name it is encoded as.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
ARRAY_SUFFIX_RE = re.compile(r"^(.+)\[(\d*)\]$")
SIGNATURE_RE = re.compile(r"^([A-Za-z_$][A-Za-z0-9_$]*)\((.*)\)$")

# 32-byte identifiers native to the signing chain
NATIVE_WORD_TYPES = ("bytes32", "b256", "contractId")


class FieldValue(NamedTuple):
    type_name: str
    value: Any


def is_array_type(type_name: str) -> bool:
    return ARRAY_SUFFIX_RE.match(type_name) is not None


def split_array_type(type_name: str) -> Tuple[str, Optional[int]]:
    """Split 'T[k]' into ('T', k) and 'T[]' into ('T', None)."""
    match = ARRAY_SUFFIX_RE.match(type_name)
    if match is None:
        raise ValueError(f"Not an array type: {type_name}")
    element_type, length = match.groups()
    return element_type, (int(length) if length else None)


def base_type(type_name: str) -> str:
    """Strip every array suffix: 'Person[2][]' -> 'Person'."""
    while is_array_type(type_name):
        type_name, _ = split_array_type(type_name)
    return type_name


def _sized(type_name: str, prefix: str, low: int, high: int, step: int) -> bool:
    if not type_name.startswith(prefix):
        return False
    suffix = type_name[len(prefix):]
    if not suffix.isdigit():
        return False
    size = int(suffix)
    return low <= size <= high and size % step == 0


def is_uint_type(type_name: str) -> bool:
    return _sized(type_name, "uint", 8, 256, 8)


def is_int_type(type_name: str) -> bool:
    return _sized(type_name, "int", 8, 256, 8)


def is_fixed_bytes_type(type_name: str) -> bool:
    return _sized(type_name, "bytes", 1, 32, 1)


def is_atomic_type(type_name: str) -> bool:
    """Types encoded without consulting a registry (everything but structs and arrays)."""
    return (
        type_name in ("bool", "address", "bytes", "string")
        or type_name in NATIVE_WORD_TYPES
        or is_uint_type(type_name)
        or is_int_type(type_name)
        or is_fixed_bytes_type(type_name)
    )


def _check_type_name(type_name: str) -> None:
    base = type_name
    while is_array_type(base):
        base, length = split_array_type(base)
        if length == 0:
            raise ValueError(f"Fixed-size array must have at least one element: {type_name}")
    if not IDENTIFIER_RE.match(base):
        raise ValueError(f"Invalid type name: {type_name!r}")


@dataclass(frozen=True)
class StructDescriptor:
    """A struct type: name plus ordered (field name, type name) pairs."""

    name: str
    fields: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        if not IDENTIFIER_RE.match(self.name):
            raise ValueError(f"Invalid struct name: {self.name!r}")
        if is_atomic_type(self.name):
            raise ValueError(f"Struct name {self.name!r} shadows an atomic type")
        fields = tuple((str(field_name), str(type_name)) for field_name, type_name in self.fields)
        seen = set()
        for field_name, type_name in fields:
            if not IDENTIFIER_RE.match(field_name):
                raise ValueError(f"Invalid field name in {self.name}: {field_name!r}")
            if field_name in seen:
                raise ValueError(f"Duplicate field {field_name!r} in {self.name}")
            seen.add(field_name)
            _check_type_name(type_name)
        object.__setattr__(self, "fields", fields)

    @property
    def field_names(self) -> List[str]:
        return [field_name for field_name, _ in self.fields]

    @property
    def field_types(self) -> List[str]:
        return [type_name for _, type_name in self.fields]

    @property
    def signature(self) -> str:
        """The struct's own type signature, e.g. 'Mail(bytes32 from,bytes32 to,string contents)'."""
        members = ",".join(f"{type_name} {field_name}" for field_name, type_name in self.fields)
        return f"{self.name}({members})"

    def referenced_structs(self) -> List[str]:
        """Base types of fields that are not atomic, in declaration order, without duplicates."""
        names = []
        for type_name in self.field_types:
            name = base_type(type_name)
            if not is_atomic_type(name) and name not in names:
                names.append(name)
        return names

    @classmethod
    def parse(cls, signature: str) -> "StructDescriptor":
        """Parse a single 'Name(type1 name1,type2 name2)' signature."""
        match = SIGNATURE_RE.match(signature.strip())
        if match is None:
            raise ValueError(f"Malformed type signature: {signature!r}")
        name, body = match.groups()
        fields = []
        if body:
            for member in body.split(","):
                parts = member.split(" ")
                if len(parts) != 2 or not all(parts):
                    raise ValueError(f"Malformed member {member!r} in {signature!r}")
                type_name, field_name = parts
                fields.append((field_name, type_name))
        return cls(name, tuple(fields))

    @classmethod
    def from_eip712_fields(cls, name: str, members: Sequence[Dict[str, str]]) -> "StructDescriptor":
        """Build from a JSON field list: [{"name": "from", "type": "Person"}, ...]."""
        return cls(name, tuple((member["name"], member["type"]) for member in members))
