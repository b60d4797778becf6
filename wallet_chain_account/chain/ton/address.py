"""
TON address codec — public key to wallet address, address parsing/rendering.

Handles the two textual forms TON uses:
- user-friendly: 36 bytes (tag, workchain, 32-byte account id, CRC16/XMODEM)
  rendered as 48 chars of base64 (URL-safe alphabet on output, both accepted);
- raw: "<workchain>:<64 hex>", as returned by indexers.

Wallet derivation builds the default wallet V5R1 StateInit for a public key
and hashes it the way the TVM hashes cells. The V5R1 code cell never needs
to be materialized: a parent cell's hash only depends on each child's depth
and representation hash, both of which are fixed for the published code.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import re
from dataclasses import dataclass
from enum import Enum

from wallet_chain_account.core.exceptions import InvalidAddress, InvalidPublicKey

CHAIN_NAME = "Ton"

PUBLIC_KEY_LEN = 32
ACCOUNT_ID_LEN = 32
USER_FRIENDLY_LEN = 48

# canonical ASCII decimal: no leading zeros, "+", "-0" or digit separators
_RAW_WORKCHAIN = re.compile(r"0|-?[1-9][0-9]*")
_RAW_ACCOUNT_ID = re.compile(r"[0-9a-fA-F]{64}")
_USER_FRIENDLY_CHARS = re.compile(r"[A-Za-z0-9+/_-]{48}")

TAG_BOUNCEABLE = 0x11
TAG_NON_BOUNCEABLE = 0x51
TAG_TEST_ONLY = 0x80

# Representation hash and depth of the wallet_v5_r1 (final) code cell
WALLET_V5R1_CODE_HASH = base64.b64decode("IINLe3KxEhR+Gy+0V7hOdNGjDwT3N9T2KmaOlVLSty8=")
WALLET_V5R1_CODE_DEPTH = 6

MAINNET_GLOBAL_ID = -239
DEFAULT_WORKCHAIN = 0
DEFAULT_SUBWALLET = 0
WALLET_V5R1_VERSION = 0


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def from_value(cls, value: "Network | str | None") -> "Network":
        """Map request network strings to a Network; anything but testnet is mainnet."""
        if isinstance(value, Network):
            return value
        raw = (value or "").strip().lower()
        if raw in ("testnet", "test"):
            return cls.TESTNET
        return cls.MAINNET

    @property
    def is_testnet(self) -> bool:
        return self is Network.TESTNET


@dataclass(frozen=True)
class Address:
    """
    TON account address.

    workchain and account_id identify the account; bounceable and testnet
    only affect the user-friendly rendering.
    """

    workchain: int
    account_id: bytes
    bounceable: bool = True
    testnet: bool = False

    def __post_init__(self) -> None:
        if len(self.account_id) != ACCOUNT_ID_LEN:
            raise InvalidAddress(
                f"account id must be {ACCOUNT_ID_LEN} bytes, got {len(self.account_id)}",
                chain=CHAIN_NAME,
            )
        if not -128 <= self.workchain <= 127:
            raise InvalidAddress(f"workchain out of range: {self.workchain}", chain=CHAIN_NAME)

    @classmethod
    def parse(cls, text: str) -> "Address":
        """Parse a user-friendly or raw address; raise InvalidAddress on any defect."""
        if not isinstance(text, str):
            raise InvalidAddress("address must be a string", chain=CHAIN_NAME)
        if ":" in text:
            return cls._parse_raw(text)
        return cls._parse_user_friendly(text)

    @classmethod
    def _parse_raw(cls, text: str) -> "Address":
        wc_part, _, hex_part = text.partition(":")
        if not _RAW_WORKCHAIN.fullmatch(wc_part):
            raise InvalidAddress(f"invalid workchain in raw address: {wc_part!r}", chain=CHAIN_NAME)
        if not _RAW_ACCOUNT_ID.fullmatch(hex_part):
            raise InvalidAddress("raw address must carry 64 hex chars", chain=CHAIN_NAME)
        return cls(workchain=int(wc_part), account_id=bytes.fromhex(hex_part))

    @classmethod
    def _parse_user_friendly(cls, text: str) -> "Address":
        if len(text) != USER_FRIENDLY_LEN:
            raise InvalidAddress(
                f"user-friendly address must be {USER_FRIENDLY_LEN} chars, got {len(text)}",
                chain=CHAIN_NAME,
            )
        if not _USER_FRIENDLY_CHARS.fullmatch(text):
            raise InvalidAddress("address has characters outside the base64 alphabet", chain=CHAIN_NAME)
        try:
            data = base64.urlsafe_b64decode(text.replace("+", "-").replace("/", "_"))
        except (binascii.Error, ValueError) as e:
            raise InvalidAddress("address is not valid base64", chain=CHAIN_NAME) from e
        if len(data) != 36:
            raise InvalidAddress("decoded address must be 36 bytes", chain=CHAIN_NAME)
        if _crc16(data[:34]) != data[34:]:
            raise InvalidAddress("address checksum mismatch", chain=CHAIN_NAME)

        tag = data[0]
        testnet = bool(tag & TAG_TEST_ONLY)
        tag &= ~TAG_TEST_ONLY
        if tag == TAG_BOUNCEABLE:
            bounceable = True
        elif tag == TAG_NON_BOUNCEABLE:
            bounceable = False
        else:
            raise InvalidAddress(f"unknown address tag: 0x{data[0]:02x}", chain=CHAIN_NAME)

        workchain = int.from_bytes(data[1:2], "big", signed=True)
        return cls(
            workchain=workchain,
            account_id=bytes(data[2:34]),
            bounceable=bounceable,
            testnet=testnet,
        )

    def to_str(
        self,
        *,
        bounceable: bool | None = None,
        testnet: bool | None = None,
        url_safe: bool = True,
    ) -> str:
        """Render the user-friendly form; flags default to the address's own."""
        bounce = self.bounceable if bounceable is None else bounceable
        test_only = self.testnet if testnet is None else testnet

        tag = TAG_BOUNCEABLE if bounce else TAG_NON_BOUNCEABLE
        if test_only:
            tag |= TAG_TEST_ONLY
        body = bytes([tag, self.workchain & 0xFF]) + self.account_id
        data = body + _crc16(body)
        if url_safe:
            return base64.urlsafe_b64encode(data).decode("ascii")
        return base64.b64encode(data).decode("ascii")

    def to_raw(self) -> str:
        """Render "<workchain>:<hex>" (lowercase hex)."""
        return f"{self.workchain}:{self.account_id.hex()}"

    def same_account(self, other: "Address") -> bool:
        """True when both point at the same account, regardless of rendering flags."""
        return self.workchain == other.workchain and self.account_id == other.account_id

    def __str__(self) -> str:
        return self.to_str()


def _crc16(data: bytes) -> bytes:
    # binascii.crc_hqx with init 0 is CRC-16/XMODEM
    return binascii.crc_hqx(data, 0).to_bytes(2, "big")


# -----------------------------------------------------------------------------
# Cell hashing (only what a StateInit of two reference cells needs)
# -----------------------------------------------------------------------------

def _cell_repr_hash(
    bits: int,
    bit_len: int,
    refs: list[tuple[bytes, int]] | None = None,
) -> bytes:
    """
    Representation hash of an ordinary level-0 cell.

    bits holds the data bits MSB-first in an integer of bit_len bits;
    refs are (repr_hash, depth) of the children in order.
    """
    refs = refs or []
    d1 = len(refs)
    d2 = (bit_len + 7) // 8 + bit_len // 8
    data_len = (bit_len + 7) // 8
    if bit_len % 8:
        pad = data_len * 8 - bit_len
        bits = (bits << pad) | (1 << (pad - 1))
    payload = bytes([d1, d2]) + (bits.to_bytes(data_len, "big") if data_len else b"")
    for _, depth in refs:
        payload += depth.to_bytes(2, "big")
    for ref_hash, _ in refs:
        payload += ref_hash
    return hashlib.sha256(payload).digest()


def wallet_v5r1_id(
    network_global_id: int = MAINNET_GLOBAL_ID,
    workchain: int = DEFAULT_WORKCHAIN,
    subwallet: int = DEFAULT_SUBWALLET,
) -> int:
    """wallet_id for a client V5R1 wallet: global id XOR packed client context."""
    context = (
        (1 << 31)
        | ((workchain & 0xFF) << 23)
        | ((WALLET_V5R1_VERSION & 0xFF) << 15)
        | (subwallet & 0x7FFF)
    )
    return (network_global_id & 0xFFFFFFFF) ^ context


def _wallet_v5r1_data_hash(public_key: bytes, wallet_id: int) -> bytes:
    # is_signature_allowed:1 seqno:32 wallet_id:32 public_key:256 extensions:(HashmapE)=0
    bits = 1
    bits = (bits << 32) | 0
    bits = (bits << 32) | (wallet_id & 0xFFFFFFFF)
    bits = (bits << 256) | int.from_bytes(public_key, "big")
    bits = bits << 1
    return _cell_repr_hash(bits, 1 + 32 + 32 + 256 + 1)


def _state_init_hash(code: tuple[bytes, int], data: tuple[bytes, int]) -> bytes:
    # split_depth:Maybe=0 special:Maybe=0 code:Maybe=1 data:Maybe=1 library:HashmapE=0
    return _cell_repr_hash(0b00110, 5, [code, data])


def decode_public_key(public_key: bytes | str) -> bytes:
    """Decode a hex (optionally 0x-prefixed) public key; raise InvalidPublicKey."""
    if isinstance(public_key, str):
        text = public_key.strip()
        if text[:2].lower() == "0x":
            text = text[2:]
        try:
            key = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidPublicKey("public key is not valid hex", chain=CHAIN_NAME) from e
    else:
        key = bytes(public_key)
    if len(key) != PUBLIC_KEY_LEN:
        raise InvalidPublicKey(
            f"invalid public key length: expected {PUBLIC_KEY_LEN} bytes, got {len(key)}",
            chain=CHAIN_NAME,
        )
    return key


def derive_address(public_key: bytes | str, network: Network | str = Network.MAINNET) -> Address:
    """
    Derive the default wallet V5R1 address for an ed25519 public key.

    Workchain 0, subwallet 0, mainnet global id. The returned Address is
    non-bounceable and flagged for the requested network.
    """
    key = decode_public_key(public_key)
    net = Network.from_value(network)
    data_hash = _wallet_v5r1_data_hash(key, wallet_v5r1_id())
    state_hash = _state_init_hash(
        (WALLET_V5R1_CODE_HASH, WALLET_V5R1_CODE_DEPTH),
        (data_hash, 0),
    )
    return Address(
        workchain=DEFAULT_WORKCHAIN,
        account_id=state_hash,
        bounceable=False,
        testnet=net.is_testnet,
    )


def validate_address(address: str) -> bool:
    """True iff address parses as a TON address; never raises."""
    try:
        Address.parse(address)
    except InvalidAddress:
        return False
    return True
