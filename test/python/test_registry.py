import pytest
from eth_utils import keccak

from typed_data_hash import StructDescriptor, TypeRegistry, compute_type_hash
from typed_data_hash.config import EIP712_DOMAIN_TYPE, EIP712_DOMAIN_TYPE_HASH, KNOWN_TYPE_HASHES


def test_known_type_hash_literals():
    for type_string, literal in KNOWN_TYPE_HASHES.items():
        assert "0x" + compute_type_hash(type_string).hex() == literal


def test_domain_type_hash():
    assert compute_type_hash(EIP712_DOMAIN_TYPE).hex() == EIP712_DOMAIN_TYPE_HASH[2:]


def test_encode_type_appends_sorted_dependencies(person_registry, ether_mail):
    assert person_registry.encode_type("Mail") == (
        "Mail(Person from,Person to,string contents)Person(string name,address wallet)"
    )
    assert person_registry.encode_type("Person") == "Person(string name,address wallet)"
    assert person_registry.type_hash("Mail").hex() == ether_mail["expected"]["type_hash"][2:]


def test_dependencies_are_transitive_and_sorted():
    registry = TypeRegistry([
        StructDescriptor.parse("Order(Item[] items,Zone zone,Account buyer)"),
        StructDescriptor.parse("Item(Asset asset,uint256 amount)"),
        StructDescriptor.parse("Asset(bytes32 id)"),
        StructDescriptor.parse("Zone(string code)"),
        StructDescriptor.parse("Account(address owner)"),
    ])
    assert registry.dependencies("Order") == ("Account", "Asset", "Item", "Zone")
    assert registry.encode_type("Order") == (
        "Order(Item[] items,Zone zone,Account buyer)"
        "Account(address owner)Asset(bytes32 id)Item(Asset asset,uint256 amount)Zone(string code)"
    )
    assert registry.type_hash("Order") == keccak(registry.encode_type("Order").encode())


def test_flat_struct_type_hash_is_its_signature():
    registry = TypeRegistry([StructDescriptor.parse("Mail(bytes32 from,bytes32 to,string contents)")])
    assert registry.type_hash("Mail") == keccak(b"Mail(bytes32 from,bytes32 to,string contents)")
    assert registry.dependencies("Mail") == ()


def test_cycle_is_rejected_at_construction():
    with pytest.raises(ValueError, match="Cyclic"):
        TypeRegistry([
            StructDescriptor.parse("A(B b)"),
            StructDescriptor.parse("B(C[] c)"),
            StructDescriptor.parse("C(A a)"),
        ])


def test_self_reference_is_rejected():
    with pytest.raises(ValueError, match="Node -> Node"):
        TypeRegistry([StructDescriptor.parse("Node(uint256 value,Node[] children)")])


def test_undeclared_reference_is_rejected():
    with pytest.raises(ValueError, match="undeclared"):
        TypeRegistry([StructDescriptor.parse("Mail(Person from,string contents)")])


def test_duplicate_struct_is_rejected():
    with pytest.raises(ValueError):
        TypeRegistry([StructDescriptor.parse("A(uint8 x)"), StructDescriptor.parse("A(uint16 x)")])


def test_unknown_lookup(person_registry):
    assert "Person" in person_registry
    assert "Order" not in person_registry
    with pytest.raises(ValueError):
        person_registry.type_hash("Order")


def test_from_eip712_types_skips_domain(ether_mail):
    registry = TypeRegistry.from_eip712_types(ether_mail["types"])
    assert sorted(registry) == ["Mail", "Person"]


def test_verify_type_hashes(person_registry, ether_mail):
    good = {"Mail": ether_mail["expected"]["type_hash"]}
    assert person_registry.verify_type_hashes(good) == {}

    bad = {"Person": "0x" + "00" * 32, "Order": bytes(32)}
    mismatches = person_registry.verify_type_hashes(bad)
    assert set(mismatches) == {"Person", "Order"}
    assert mismatches["Person"] == (bytes(32), person_registry.type_hash("Person"))
    assert mismatches["Order"] == (bytes(32), b"")


def test_type_hashes_view_is_read_only(person_registry):
    with pytest.raises(TypeError):
        person_registry.type_hashes()["Mail"] = bytes(32)


def test_descriptor_parse_round_trip():
    signature = "Transfer(address to,uint256 amount,bytes32[] refs,bool final)"
    descriptor = StructDescriptor.parse(signature)
    assert descriptor.signature == signature
    assert descriptor.field_names == ["to", "amount", "refs", "final"]
    assert descriptor.field_types == ["address", "uint256", "bytes32[]", "bool"]


@pytest.mark.parametrize("signature", [
    "Mail(bytes32 from, bytes32 to)",
    "Mail(bytes32 from,bytes32 from)",
    "Mail(bytes32)",
    "Mail",
    "1Mail(bool ok)",
    "Mail(uint256[0] nothing)",
    "address(bytes32 id)",
    "uint256(bool ok)",
    "bytes32()",
])
def test_malformed_descriptors(signature):
    with pytest.raises(ValueError):
        StructDescriptor.parse(signature)


def test_struct_named_like_an_atomic_type_is_rejected():
    with pytest.raises(ValueError, match="atomic"):
        TypeRegistry([
            StructDescriptor("address", (("id", "bytes32"),)),
            StructDescriptor("Holder", (("a", "address"),)),
        ])
