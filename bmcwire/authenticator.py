"""Key derivation and authentication codes for RAKP session establishment."""

from __future__ import annotations

import hashlib
import hmac
import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .authentication import AuthenticationAlgorithm, algorithm_name


class Mac(Protocol):
    """The parts of a keyed hash object used here (as hmac.HMAC provides)."""

    digest_size: int

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...

    def copy(self) -> Mac: ...


class TruncatedMac:
    """A MAC whose output is cut to its first ``length`` bytes.

    This implements algorithms such as HMAC-SHA1-96 and HMAC-SHA256-128.
    """

    def __init__(self, mac: Mac, length: int) -> None:
        if not 0 < length <= mac.digest_size:
            raise ValueError(
                f"truncation length must be 1 through {mac.digest_size}, got {length}"
            )
        self._mac = mac
        self._length = length

    @property
    def digest_size(self) -> int:
        return self._length

    def update(self, data: bytes) -> None:
        self._mac.update(data)

    def digest(self) -> bytes:
        return self._mac.digest()[: self._length]

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> TruncatedMac:
        return TruncatedMac(self._mac.copy(), self._length)


@dataclass(frozen=True)
class AuthenticationParams:
    """Configurable parameters of a session establishment authentication algorithm.

    ``icv_length`` is the length the RAKP Message 4 ICV is truncated to; 0
    means no truncation.
    """

    digestmod: Callable[..., Any]
    icv_length: int = 0

    def auth_code(self, kuid: bytes) -> Mac:
        """MAC for the AuthCodes in RAKP messages 2 and 3."""
        return hmac.new(bytes(kuid), digestmod=self.digestmod)

    def sik(self, kg: bytes) -> Mac:
        """MAC for producing the Session Integrity Key."""
        return hmac.new(bytes(kg), digestmod=self.digestmod)

    def k(self, sik: bytes) -> Mac:
        """MAC for creating additional key material (K_N)."""
        return hmac.new(bytes(sik), digestmod=self.digestmod)

    def icv(self, sik: bytes) -> Mac:
        """MAC for the ICV field of RAKP Message 4."""
        if self.icv_length == 0:
            return self.k(sik)
        return TruncatedMac(self.k(sik), self.icv_length)


def params_for_algorithm(algorithm: int) -> AuthenticationParams:
    """Parameters for an authentication algorithm; ValueError if unsupported."""
    if algorithm == AuthenticationAlgorithm.HMAC_SHA1:
        return AuthenticationParams(hashlib.sha1, 12)
    if algorithm == AuthenticationAlgorithm.HMAC_SHA256:
        return AuthenticationParams(hashlib.sha256, 16)
    if algorithm == AuthenticationAlgorithm.HMAC_MD5:
        return AuthenticationParams(hashlib.md5)  # ICV not truncated
    raise ValueError(
        f"unknown authentication algorithm: {algorithm_name(int(algorithm))}"
    )


def _execute(mac: Mac, *parts: bytes) -> bytes:
    # work on a copy so the caller's MAC stays in its initial state
    working = mac.copy()
    for part in parts:
        working.update(part)
    return working.digest()


class AdditionalKeyMaterialGenerator:
    """Produces key material K_N derived from the Session Integrity Key.

    ``mac`` is the negotiated authentication algorithm's MAC loaded with
    the SIK. In practice only K_1 and K_2 are used.
    """

    def __init__(self, mac: Mac) -> None:
        self._mac = mac

    def k(self, n: int) -> bytes:
        """Compute K_N; N is defined for 1 through 255."""
        # "block size" in the spec means the size of the output tag
        constant = bytes([n & 0xFF]) * self._mac.digest_size
        return _execute(self._mac, constant)


@dataclass(frozen=True)
class RAKPExchange:
    """The fields of RAKP messages 1 and 2 that feed key derivation."""

    remote_console_random: bytes
    managed_system_random: bytes
    managed_system_guid: bytes
    remote_console_session_id: int
    managed_system_session_id: int
    max_privilege_level: int
    privilege_level_lookup: bool
    username: str

    def __post_init__(self) -> None:
        for name in ("remote_console_random", "managed_system_random", "managed_system_guid"):
            value = bytes(getattr(self, name))
            if len(value) != 16:
                raise ValueError(f"{name} must be 16 bytes, got {len(value)}")
            object.__setattr__(self, name, value)

    @property
    def role(self) -> int:
        """The entire role byte from the RAKP Message 1 wire format."""
        role = self.max_privilege_level & 0xFF
        if not self.privilege_level_lookup:
            role |= 1 << 4
        return role

    def _role_and_username(self) -> bytes:
        name = self.username.encode("utf-8")
        return bytes([self.role, len(name) & 0xFF]) + name


def _session_id(value: int) -> bytes:
    return struct.pack("<I", value & 0xFFFFFFFF)


def calculate_sik(mac: Mac, exchange: RAKPExchange) -> bytes:
    """Compute the Session Integrity Key."""
    return _execute(
        mac,
        exchange.remote_console_random,
        exchange.managed_system_random,
        exchange._role_and_username(),
    )


def calculate_rakp2_auth_code(mac: Mac, exchange: RAKPExchange) -> bytes:
    """Compute the AuthCode the BMC should send in RAKP Message 2."""
    return _execute(
        mac,
        _session_id(exchange.remote_console_session_id),
        _session_id(exchange.managed_system_session_id),
        exchange.remote_console_random,
        exchange.managed_system_random,
        exchange.managed_system_guid,
        exchange._role_and_username(),
    )


def calculate_rakp3_auth_code(mac: Mac, exchange: RAKPExchange) -> bytes:
    """Compute the AuthCode the remote console sends in RAKP Message 3."""
    return _execute(
        mac,
        exchange.managed_system_random,
        _session_id(exchange.remote_console_session_id),
        exchange._role_and_username(),
    )


def calculate_rakp4_icv(mac: Mac, exchange: RAKPExchange) -> bytes:
    """Compute the ICV the BMC should send in RAKP Message 4."""
    return _execute(
        mac,
        exchange.remote_console_random,
        _session_id(exchange.managed_system_session_id),
        exchange.managed_system_guid,
    )