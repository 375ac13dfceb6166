"""Conversion from one's and two's complement numbers to Python ints."""


def ones(b: int) -> int:
    """Parse an 8-bit one's complement number, giving -127 through 127."""
    if b & 0x80:
        b = (b + 1) & 0xFF
    return b - 0x100 if b & 0x80 else b


def twos(big_endian: bytes, bits: int) -> int:
    """Parse a two's complement number of up to 16 bits.

    ``big_endian`` holds two bytes, most significant first; ``bits`` is the
    width of the number (0 through 16). Bits above that width must be 0.
    """
    if len(big_endian) != 2:
        raise ValueError(f"expected 2 bytes, got {len(big_endian)}")
    numerical = int.from_bytes(bytes(big_endian), "big")
    mask = 1 << (bits - 1) if bits > 0 else 0
    numerical = ((numerical ^ mask) - mask) & 0xFFFF
    return numerical - 0x10000 if numerical & 0x8000 else numerical