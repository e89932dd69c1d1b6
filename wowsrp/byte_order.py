"""
wowsrp/byte_order.py
-------
Conversions between API buffers and Python integers.

Every conversion is a separate function on purpose: the protocol mixes
conventions from call site to call site and each one has to stay visible.
- reverse: flips a buffer into the layout the peer hashes
- import_msb_first / export_msb_first: the default arithmetic convention
- import_reversed_lsw_first: only used for the client private key
- export_lsw_first: only used for the client proof constant
"""


def reverse(data: bytes) -> bytes:
    return bytes(data[::-1])


def import_msb_first(data: bytes) -> int:
    """
    Read an integer whose first byte is the most significant one.

    Args:
        data: Buffer to read.

    Returns:
        Non-negative integer.
    """
    return int.from_bytes(data, "big")


def import_reversed_lsw_first(data: bytes) -> int:
    """
    Reverse the buffer, then read it least significant word (byte) first.

    Args:
        data: Buffer to read.

    Returns:
        Non-negative integer.
    """
    return int.from_bytes(reverse(data), "little")


def export_msb_first(value: int, length: int) -> bytes:
    """
    Write a non-negative integer most significant byte first, zero padded to `length`.

    Args:
        value: Integer to write, must fit in `length` bytes.
        length: Output size in bytes.

    Returns:
        Buffer of exactly `length` bytes.
    """
    return value.to_bytes(length, "big")


def export_lsw_first(value: int, length: int) -> bytes:
    return value.to_bytes(length, "little")
