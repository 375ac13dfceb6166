"""Binary-coded decimal decoding, e.g. 0x10 is 10 and 0x99 is 99."""


def decode(b: int) -> int:
    """Decode a single packed or unpacked BCD byte.

    Valid input gives 0 through 99; the result is unspecified for nibbles
    above 0x9.
    """
    return ((b & 0xF0) >> 4) * 10 + (b & 0x0F)