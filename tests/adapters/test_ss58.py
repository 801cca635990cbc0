from __future__ import annotations

import pytest

from genproxy.adapters.ss58 import decode_address, encode_address

ALICE_SS58 = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
ALICE_HEX = "d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"


def test_decode_ss58_address() -> None:
    account = decode_address(ALICE_SS58)

    assert account.raw == bytes.fromhex(ALICE_HEX)
    assert account.address == ALICE_SS58
    assert str(account) == ALICE_SS58


def test_encode_generic_substrate_address() -> None:
    assert encode_address(bytes.fromhex(ALICE_HEX)) == ALICE_SS58


def test_same_key_under_different_prefixes_is_one_account() -> None:
    polkadot_form = encode_address(bytes.fromhex(ALICE_HEX), prefix=0)

    assert polkadot_form != ALICE_SS58
    assert decode_address(polkadot_form) == decode_address(ALICE_SS58)


def test_two_byte_prefix_round_trips() -> None:
    address = encode_address(bytes.fromhex(ALICE_HEX), prefix=1337)

    assert decode_address(address).raw == bytes.fromhex(ALICE_HEX)


@pytest.mark.parametrize("text", [f"0x{ALICE_HEX}", f"0X{ALICE_HEX.upper()}", f"  0x{ALICE_HEX} "])
def test_decode_hex_address(text: str) -> None:
    assert decode_address(text) == decode_address(ALICE_SS58)


def test_checksum_mismatch_is_rejected() -> None:
    tampered = ALICE_SS58[:-1] + "Z"

    with pytest.raises(ValueError, match="checksum"):
        decode_address(tampered)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "0x1234",
        "0x" + "zz" * 32,
        "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQ0",
    ],
)
def test_malformed_addresses_raise_value_error(text: str) -> None:
    with pytest.raises(ValueError):
        decode_address(text)

