"""Address decoding for 32-byte account ids, backed by ``scalecodec``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from scalecodec.utils.ss58 import ss58_decode, ss58_encode

from genproxy.domain.types import ACCOUNT_ID_LENGTH, AccountId

if TYPE_CHECKING:
    from genproxy.domain.ports import AddressDecoder

GENERIC_SUBSTRATE_PREFIX: Final[int] = 42


def decode_hex_account(text: str) -> bytes:
    body = text[2:]
    if len(body) != ACCOUNT_ID_LENGTH * 2:
        raise ValueError(f"hex account id must be {ACCOUNT_ID_LENGTH} bytes")
    return bytes.fromhex(body)


def decode_ss58_account(text: str) -> bytes:
    """Decode SS58 text under any network prefix; only account ids are accepted."""

    raw = bytes.fromhex(ss58_decode(text))
    if len(raw) != ACCOUNT_ID_LENGTH:
        raise ValueError(f"SS58 payload is not a {ACCOUNT_ID_LENGTH}-byte account id")
    return raw


def decode_address(text: str) -> AccountId:
    """Decode SS58 or ``0x``-prefixed hex text; raise ``ValueError`` otherwise."""

    stripped = text.strip()
    if not stripped:
        raise ValueError("empty address")
    if stripped[:2].lower() == "0x":
        raw = decode_hex_account(stripped)
    else:
        raw = decode_ss58_account(stripped)
    return AccountId(raw=raw, address=stripped)


def encode_address(raw: bytes, *, prefix: int = GENERIC_SUBSTRATE_PREFIX) -> str:
    if len(raw) != ACCOUNT_ID_LENGTH:
        raise ValueError(f"account id must be {ACCOUNT_ID_LENGTH} bytes")
    return ss58_encode(raw, ss58_format=prefix)


if TYPE_CHECKING:
    _decoder_check: AddressDecoder = decode_address
