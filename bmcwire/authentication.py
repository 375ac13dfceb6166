"""RMCP+ authentication algorithms and Open Session authentication payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .errors import DecodeError


class AuthenticationAlgorithm(IntEnum):
    """Authentication algorithms used during RMCP+ session establishment."""

    NONE = 0
    HMAC_SHA1 = 1
    HMAC_MD5 = 2
    HMAC_SHA256 = 3

    def __str__(self) -> str:
        return algorithm_name(self.value)


_NAMES = {
    AuthenticationAlgorithm.NONE: "None",
    AuthenticationAlgorithm.HMAC_SHA1: "RAKP-HMAC-SHA1",
    AuthenticationAlgorithm.HMAC_MD5: "RAKP-HMAC-MD5",
    AuthenticationAlgorithm.HMAC_SHA256: "RAKP-HMAC-SHA256",
}


def algorithm_name(value: int) -> str:
    """Human-readable name of any authentication algorithm number."""
    name = _NAMES.get(value)
    if name is not None:
        return name
    if 0xC0 <= value <= 0xFF:
        return "OEM"
    return "Unknown"


def _to_algorithm(value: int) -> int:
    try:
        return AuthenticationAlgorithm(value)
    except ValueError:
        return value


@dataclass
class AuthenticationPayload:
    """A single authentication algorithm preference in an Open Session Request.

    When ``wildcard`` is true the BMC chooses, and ``algorithm`` is NONE.
    """

    wildcard: bool = False
    algorithm: int = AuthenticationAlgorithm.NONE

    def serialise(self) -> bytes:
        """Encode the payload as its 8 wire bytes."""
        if self.wildcard:
            # wildcard is a 0-length payload
            length, algorithm = 0x00, 0x00
        else:
            length, algorithm = 0x08, int(self.algorithm)
        return bytes([0x00, 0x00, 0x00, length, algorithm, 0x00, 0x00, 0x00])

    @classmethod
    def deserialise(cls, data: bytes) -> tuple[AuthenticationPayload, bytes]:
        """Decode a payload, returning it with the unconsumed bytes."""
        data = bytes(data)
        if len(data) < 8:
            raise DecodeError(
                f"authentication payloads are 8 bytes, only {len(data)} remaining",
                truncated=True,
            )
        if data[0] != 0x00:
            raise DecodeError("data does not represent an authentication payload")
        wildcard = data[3] == 0x00
        algorithm = _to_algorithm(data[4] & 0x3F)
        if wildcard and algorithm != AuthenticationAlgorithm.NONE:
            raise DecodeError(
                "if authentication algorithm is wildcard, concrete algorithm must be None"
            )
        return cls(wildcard=wildcard, algorithm=algorithm), data[8:]