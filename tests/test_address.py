"""
Tests for TON address derivation, parsing and rendering.
"""

from __future__ import annotations

import base64
import binascii

import pytest

from conftest import (
    TEST_MAINNET_ADDRESS,
    TEST_PUBLIC_KEY,
    TEST_RAW_ADDRESS,
    TEST_TESTNET_ADDRESS,
)
from wallet_chain_account.chain.ton.address import (
    Address,
    Network,
    decode_public_key,
    derive_address,
    validate_address,
    wallet_v5r1_id,
)
from wallet_chain_account.core.exceptions import InvalidAddress, InvalidPublicKey

MAINNET_BOUNCEABLE = "EQAHVc9OI1kqgh68auUYhe2YziHXDjw8fgla5sqw4kOszbkP"
TESTNET_BOUNCEABLE = "kQAHVc9OI1kqgh68auUYhe2YziHXDjw8fgla5sqw4kOszQKF"
RAW_HEX = TEST_RAW_ADDRESS.split(":")[1]


def test_derive_mainnet_known_vector():
    assert derive_address(TEST_PUBLIC_KEY, Network.MAINNET).to_str() == TEST_MAINNET_ADDRESS


def test_derive_testnet_known_vector():
    assert derive_address(TEST_PUBLIC_KEY, "testnet").to_str() == TEST_TESTNET_ADDRESS


def test_derive_is_deterministic():
    first = derive_address(TEST_PUBLIC_KEY)
    second = derive_address(bytes.fromhex(TEST_PUBLIC_KEY))
    assert first == second


def test_network_changes_rendering_only():
    main = derive_address(TEST_PUBLIC_KEY, Network.MAINNET)
    test = derive_address(TEST_PUBLIC_KEY, Network.TESTNET)
    assert main.same_account(test)
    assert main.to_str() != test.to_str()


def test_derived_address_is_non_bounceable_workchain_zero():
    addr = derive_address(TEST_PUBLIC_KEY)
    assert addr.workchain == 0
    assert addr.bounceable is False
    assert addr.to_raw() == TEST_RAW_ADDRESS


def test_0x_prefix_and_uppercase_hex_accepted():
    addr = derive_address("0x" + TEST_PUBLIC_KEY.upper())
    assert addr.to_str() == TEST_MAINNET_ADDRESS


def test_wallet_id_for_mainnet_default():
    assert wallet_v5r1_id() == 0x7FFFFF11


@pytest.mark.parametrize("key", ["", "abcd", "zz" * 32, TEST_PUBLIC_KEY + "00", TEST_PUBLIC_KEY[:-2]])
def test_invalid_public_key_rejected(key):
    with pytest.raises(InvalidPublicKey):
        decode_public_key(key)


def test_invalid_public_key_bytes_length():
    with pytest.raises(InvalidPublicKey) as exc_info:
        derive_address(b"\x01" * 31)
    assert "31" in exc_info.value.message


def test_parse_user_friendly_flags():
    addr = Address.parse(TEST_TESTNET_ADDRESS)
    assert addr.testnet is True
    assert addr.bounceable is False
    assert addr.to_raw() == TEST_RAW_ADDRESS


def test_parse_bounceable_forms():
    main = Address.parse(MAINNET_BOUNCEABLE)
    test = Address.parse(TESTNET_BOUNCEABLE)
    assert main.bounceable and not main.testnet
    assert test.bounceable and test.testnet
    assert main.same_account(test)


def test_parse_raw_form():
    addr = Address.parse(TEST_RAW_ADDRESS)
    assert addr.workchain == 0
    assert addr.to_str(bounceable=False) == TEST_MAINNET_ADDRESS
    assert addr.to_str() == MAINNET_BOUNCEABLE


def test_parse_raw_masterchain():
    addr = Address.parse("-1:" + "00" * 32)
    assert addr.workchain == -1
    assert addr.to_raw() == "-1:" + "00" * 32


def test_render_roundtrip_keeps_flags():
    for text in (TEST_MAINNET_ADDRESS, TEST_TESTNET_ADDRESS, MAINNET_BOUNCEABLE, TESTNET_BOUNCEABLE):
        assert Address.parse(text).to_str() == text


def test_standard_base64_alphabet_accepted():
    # no '-' or '_' in these vectors, so both alphabets spell them the same
    addr = Address.parse(TEST_MAINNET_ADDRESS)
    assert addr.to_str(url_safe=False) == TEST_MAINNET_ADDRESS


def test_checksum_tamper_rejected():
    tampered = TEST_MAINNET_ADDRESS[:-1] + ("L" if TEST_MAINNET_ADDRESS[-1] != "L" else "M")
    with pytest.raises(InvalidAddress):
        Address.parse(tampered)
    assert validate_address(tampered) is False


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not-an-address",
        TEST_MAINNET_ADDRESS[:-1],
        "0:" + "ab" * 31,
        "x:" + "ab" * 32,
        "0:" + "zz" * 32,
        "999:" + "ab" * 32,
        "00:" + RAW_HEX,
        "0_0:" + RAW_HEX,
        "+0:" + RAW_HEX,
        " 0:" + RAW_HEX,
        "\u0660:" + RAW_HEX,
        "0:" + RAW_HEX + "\n",
        "0:0x" + RAW_HEX[2:],
        " " + TEST_MAINNET_ADDRESS,
        TEST_MAINNET_ADDRESS + " ",
        TEST_MAINNET_ADDRESS[:-1] + "=",
    ],
)
def test_validate_address_rejects(text):
    assert validate_address(text) is False


@pytest.mark.parametrize(
    "text",
    [TEST_MAINNET_ADDRESS, TEST_TESTNET_ADDRESS, MAINNET_BOUNCEABLE, TEST_RAW_ADDRESS],
)
def test_validate_address_accepts(text):
    assert validate_address(text) is True


def test_validate_address_never_raises_on_non_string():
    assert validate_address(None) is False  # type: ignore[arg-type]


def test_unknown_tag_rejected():
    # 0x22 tag with a correct checksum
    body = bytes([0x22, 0x00]) + bytes.fromhex(TEST_RAW_ADDRESS.split(":")[1])
    data = body + binascii.crc_hqx(body, 0).to_bytes(2, "big")
    text = base64.urlsafe_b64encode(data).decode()
    with pytest.raises(InvalidAddress, match="tag"):
        Address.parse(text)


def test_network_from_value():
    assert Network.from_value("TESTNET") is Network.TESTNET
    assert Network.from_value("") is Network.MAINNET
    assert Network.from_value(None) is Network.MAINNET
    assert Network.from_value("mainnet") is Network.MAINNET


@pytest.mark.parametrize("workchain", ["00", "-0", "0_0", "+0", "\u0660", "-01"])
def test_raw_workchain_must_be_plain_ascii_integer(workchain):
    with pytest.raises(InvalidAddress, match="workchain"):
        Address.parse(f"{workchain}:{RAW_HEX}")


def test_raw_upper_case_hex_accepted():
    assert Address.parse("0:" + RAW_HEX.upper()).to_raw() == TEST_RAW_ADDRESS
