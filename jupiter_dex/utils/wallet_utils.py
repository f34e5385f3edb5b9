"""Address encoding utilities."""

from solders.pubkey import Pubkey

PUBKEY_LEN = 32


def to_address(value: str | bytes | bytearray) -> str:
    """
    Render a 32-byte address as base58; strings pass through unchanged.

    Raises ValueError for raw values of any other length.
    """
    if isinstance(value, str):
        return value
    raw = bytes(value)
    if len(raw) != PUBKEY_LEN:
        raise ValueError(f"expected {PUBKEY_LEN} address bytes, got {len(raw)}")
    return str(Pubkey.from_bytes(raw))
