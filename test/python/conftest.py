import json
from pathlib import Path

import pytest

from typed_data_hash import DomainRecord, StructDescriptor, TypeRegistry

VECTORS_DIR = Path(__file__).resolve().parents[1] / "test_vectors" / "typed_data"

MAIL_FROM = bytes.fromhex("ab" * 32)
MAIL_TO = bytes.fromhex("cd" * 32)
MAIL_CONTENTS = "A message from Alice to Bob."
VERIFYING_CONTRACT = bytes(31) + b"\x01"


def load_vector(name: str) -> dict:
    with open(VECTORS_DIR / name, "r") as f:
        return json.load(f)


@pytest.fixture
def mail_descriptor():
    return StructDescriptor.parse("Mail(bytes32 from,bytes32 to,string contents)")


@pytest.fixture
def mail_values():
    return [MAIL_FROM, MAIL_TO, MAIL_CONTENTS]


@pytest.fixture
def my_domain():
    return DomainRecord(name="MyDomain", version="1", chain_id=9889, verifying_contract=VERIFYING_CONTRACT)


@pytest.fixture
def person_registry():
    return TypeRegistry([
        StructDescriptor("Person", (("name", "string"), ("wallet", "address"))),
        StructDescriptor("Mail", (("from", "Person"), ("to", "Person"), ("contents", "string"))),
    ])


@pytest.fixture
def ether_mail():
    return load_vector("ether_mail.json")


@pytest.fixture
def native_mail():
    return load_vector("native_mail.json")
