import pytest

from corgi_token.address import Address
from corgi_token.ledger import Ledger
from corgi_token.project_constants import INITIAL_SUPPLY


def _address(n: int) -> Address:
    return Address(n.to_bytes(20, "big"))


@pytest.fixture
def make_address():
    """Deterministic non-zero test addresses: make_address(1) -> 0x00..01."""
    return _address


@pytest.fixture
def owner() -> Address:
    return Address.from_hex("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")


@pytest.fixture
def addr1() -> Address:
    return _address(1)


@pytest.fixture
def addr2() -> Address:
    return _address(2)


@pytest.fixture
def ledger(owner: Address) -> Ledger:
    """A freshly deployed CorgiCoin with the whole supply on `owner`."""
    return Ledger("CorgiCoin", "CORGI", INITIAL_SUPPLY, owner)
